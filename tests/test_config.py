"""Tests for configuration models."""

import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from placesync.core.service import ShortcutService
from placesync.core.store import MemoryStore
from placesync.models.config import (
    DEFAULT_LABEL,
    PlacesSettings,
    ShortcutConfig,
    dialogs_key_path,
)
from placesync.models.places import PlaceEntry, WritePlan


class TestPlacesSettings:
    """Tests for PlacesSettings model."""

    def test_defaults(self) -> None:
        settings = PlacesSettings()

        assert settings.label == DEFAULT_LABEL
        assert settings.store == "json"
        assert settings.create_directories is True

    def test_load_empty_config(self) -> None:
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write("")
            config_path = Path(f.name)

        try:
            settings = PlacesSettings.load(config_path)
            assert settings.label == DEFAULT_LABEL
        finally:
            config_path.unlink()

    def test_load_with_values(self) -> None:
        yaml_content = r"""
label: "Job Folder"
store: registry
registry_key: 'Software\Host\R24.0\Profiles\Default\Dialogs\AllAnavDialogs'
create_directories: false
"""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write(yaml_content)
            config_path = Path(f.name)

        try:
            settings = PlacesSettings.load(config_path)
            assert settings.label == "Job Folder"
            assert settings.store == "registry"
            assert settings.registry_key.endswith(r"\AllAnavDialogs")
            assert settings.create_directories is False
        finally:
            config_path.unlink()

    def test_unknown_store_kind(self) -> None:
        with pytest.raises(ValueError, match="Unknown store kind"):
            PlacesSettings.from_dict({"store": "sqlite"})

    def test_numeric_label_read_as_text(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "placesync.yaml"
            config_path.write_text("label: 2024\n")

            settings = PlacesSettings.load(config_path)

        assert settings.label == "2024"

    def test_numeric_label_sync_is_idempotent(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "placesync.yaml"
            config_path.write_text("label: 2024\ncreate_directories: false\n")
            settings = PlacesSettings.load(config_path)
            store = MemoryStore({"Google Drive": tmpdir, "Google Drive Depth": 0})
            service = ShortcutService(store, settings)

            service.synchronize("")
            first = dict(store.values)
            service.synchronize("")

        assert store.values == first
        assert first["PlacesOrder0Display"] == "2024"
        assert first["PlacesOrder1"] == ""

    def test_empty_label(self) -> None:
        with pytest.raises(ValueError, match="label must not be empty"):
            PlacesSettings.from_dict({"label": ""})

    def test_create_directories_must_be_bool(self) -> None:
        with pytest.raises(ValueError, match="create_directories must be true or false"):
            PlacesSettings.from_dict({"create_directories": "no"})

    def test_registry_key_from_profile(self) -> None:
        settings = PlacesSettings.from_dict({
            "store": "registry",
            "product_root": "Software\\Host\\R24.0\\ACAD-1001:409",
            "profile": "Default",
        })

        assert settings.resolved_registry_key == dialogs_key_path(
            "Software\\Host\\R24.0\\ACAD-1001:409", "Default"
        )

    def test_explicit_registry_key_wins(self) -> None:
        settings = PlacesSettings(registry_key="K", product_root="Software\\Host", profile="Default")

        assert settings.resolved_registry_key == "K"

    def test_save_and_load(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "placesync.yaml"
            PlacesSettings(label="Shared", store_path="places.json").save(config_path)

            settings = PlacesSettings.load(config_path)

            assert settings.label == "Shared"
            assert settings.store_path == "places.json"
            assert settings.registry_key is None

    def test_from_environment(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "custom.yaml"
            PlacesSettings(label="From Env", store="registry", registry_key="K").save(config_path)
            env = {
                "PLACESYNC_CONFIG": str(config_path),
                "PLACESYNC_STORE": str(Path(tmpdir) / "store.json"),
            }

            with patch.dict(os.environ, env, clear=True):
                settings = PlacesSettings.from_environment()

            assert settings.label == "From Env"
            assert settings.store == "json"
            assert settings.resolved_store_path == Path(tmpdir) / "store.json"

    def test_explicit_arguments_win(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            env = {"PLACESYNC_STORE": "env.json", "PLACESYNC_CONFIG": "missing.yaml"}

            with patch.dict(os.environ, env, clear=True):
                settings = PlacesSettings.from_environment(
                    config_path=Path(tmpdir) / "none.yaml",
                    store_path="explicit.json",
                )

            assert settings.label == DEFAULT_LABEL
            assert settings.store_path == "explicit.json"


class TestShortcutConfig:
    """Tests for ShortcutConfig model."""

    def test_to_dict(self) -> None:
        config = ShortcutConfig(base_path=r"C:\Shortcuts", depth=2)

        assert config.to_dict() == {
            "Google Drive": r"C:\Shortcuts",
            "Google Drive Depth": 2,
        }


class TestDialogsKeyPath:
    """Tests for dialogs_key_path."""

    def test_builds_path(self) -> None:
        path = dialogs_key_path("Software\\Host\\R24.0\\ACAD-1001:409\\", "<<Unnamed Profile>>")

        assert path == r"Software\Host\R24.0\ACAD-1001:409\Profiles\<<Unnamed Profile>>\Dialogs\AllAnavDialogs"


class TestPlaceModels:
    """Tests for PlaceEntry and WritePlan."""

    def test_entry_to_dict(self) -> None:
        entry = PlaceEntry(position=1, path=r"C:\A", display="A")

        assert entry.to_dict() == {"position": 1, "path": r"C:\A", "display": "A", "extension": ""}

    def test_plan_length(self) -> None:
        plan = WritePlan(deletes=["a", "b"], writes=[("c", "1")])

        assert len(plan) == 3
        assert plan.count == 0
