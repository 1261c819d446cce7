"""Tests for target directory resolution."""

import tempfile
from pathlib import Path, PurePosixPath, PureWindowsPath

import pytest

from placesync.core.errors import InvalidPath
from placesync.core.paths import ensure_directory, path_flavour, resolve_target_directory

DOCUMENT = r"C:\Projects\Acme\Job42\drawing.dwg"


class TestResolveTargetDirectory:
    """Tests for resolve_target_directory."""

    def test_depth_two(self) -> None:
        result = resolve_target_directory(r"C:\Shortcuts", DOCUMENT, 2, PureWindowsPath)

        assert result == "C:\\Shortcuts\\Acme\\Job42\\"

    def test_depth_one(self) -> None:
        result = resolve_target_directory(r"C:\Shortcuts", DOCUMENT, 1, PureWindowsPath)

        assert result == "C:\\Shortcuts\\Job42\\"

    def test_depth_zero_returns_base_unchanged(self) -> None:
        assert resolve_target_directory(r"C:\Shortcuts", DOCUMENT, 0) == r"C:\Shortcuts"

    def test_depth_zero_ignores_unsaved_document(self) -> None:
        assert resolve_target_directory(r"C:\Shortcuts", "", 0) == r"C:\Shortcuts"

    def test_deepest_valid_depth(self) -> None:
        result = resolve_target_directory(r"C:\Shortcuts", DOCUMENT, 3, PureWindowsPath)

        assert result == "C:\\Shortcuts\\Projects\\Acme\\Job42\\"

    def test_depth_past_root(self) -> None:
        with pytest.raises(InvalidPath, match="past the root"):
            resolve_target_directory(r"C:\Shortcuts", DOCUMENT, 4, PureWindowsPath)

    def test_guesses_windows_flavour(self) -> None:
        result = resolve_target_directory(r"C:\Shortcuts", DOCUMENT, 2)

        assert result == "C:\\Shortcuts\\Acme\\Job42\\"

    def test_posix_paths(self) -> None:
        result = resolve_target_directory(
            "/srv/shortcuts", "/home/me/jobs/job42/drawing.dwg", 2, PurePosixPath
        )

        assert result == "/srv/shortcuts/jobs/job42/"

    def test_posix_base_with_windows_document(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("placesync.core.paths.os.name", "posix")

        result = resolve_target_directory("/srv/shortcuts", DOCUMENT, 2)

        assert result == "/srv/shortcuts/Acme/Job42/"

    def test_posix_depth_past_root(self) -> None:
        with pytest.raises(InvalidPath):
            resolve_target_directory("/srv/shortcuts", "/job42/drawing.dwg", 2, PurePosixPath)

    def test_empty_base_path(self) -> None:
        with pytest.raises(InvalidPath, match="base path is empty"):
            resolve_target_directory("  ", DOCUMENT, 1)

    def test_negative_depth(self) -> None:
        with pytest.raises(InvalidPath, match="negative"):
            resolve_target_directory(r"C:\Shortcuts", DOCUMENT, -1)

    def test_unsaved_document(self) -> None:
        with pytest.raises(InvalidPath, match="save it first"):
            resolve_target_directory(r"C:\Shortcuts", "", 1)


class TestPathFlavour:
    """Tests for path_flavour."""

    def test_windows_paths(self) -> None:
        assert path_flavour(r"C:\Shortcuts") is PureWindowsPath
        assert path_flavour(r"\\server\share\x.dwg") is PureWindowsPath

    def test_posix_paths(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("placesync.core.paths.os.name", "posix")

        assert path_flavour("/srv/shortcuts") is PurePosixPath


class TestEnsureDirectory:
    """Tests for ensure_directory."""

    def test_creates_missing_parents(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            target = Path(tmpdir) / "a" / "b" / "c"

            result = ensure_directory(str(target) + "/")

            assert result.is_dir()
            assert target.is_dir()

    def test_existing_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            assert ensure_directory(tmpdir) == Path(tmpdir)

    def test_blocked_by_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            blocker = Path(tmpdir) / "file.txt"
            blocker.write_text("x")

            with pytest.raises(InvalidPath, match="Cannot create directory"):
                ensure_directory(str(blocker / "sub"))
