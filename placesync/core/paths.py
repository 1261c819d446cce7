"""Resolve the shortcut directory for the active drawing."""

import os
import re
from pathlib import Path, PurePath, PurePosixPath, PureWindowsPath

from .errors import InvalidPath

_WINDOWS_PATH = re.compile(r"^(?:[A-Za-z]:|\\\\)")


def path_flavour(path: str) -> type[PurePath]:
    """Pick the pure path class able to parse a path.

    Windows-style paths (drive letter, UNC prefix or backslashes) resolve
    the same way on any OS.
    """
    if os.name == "nt":
        return PureWindowsPath
    if path and (_WINDOWS_PATH.match(path) or "\\" in path):
        return PureWindowsPath
    return PurePosixPath


def resolve_target_directory(
    base_path: str,
    document_path: str,
    depth: int,
    flavour: type[PurePath] | None = None,
) -> str:
    """Build the shortcut directory for a document.

    Walks ``depth`` directories up from the document's folder, collecting
    their names, and appends them to ``base_path`` from the furthest
    ancestor down. For ``C:\\Shortcuts``, depth 2 and
    ``C:\\Projects\\Acme\\Job42\\drawing.dwg`` this gives
    ``C:\\Shortcuts\\Acme\\Job42\\``.

    Args:
        base_path: Configured shortcut base path
        document_path: Full path of the active document
        depth: Number of directory levels to carry over
        flavour: Pure path class for both paths (each guessed separately if
            not provided); the result always takes the base path's flavour

    Returns:
        Target directory; ``base_path`` unchanged for depth 0, otherwise
        terminated with a path separator

    Raises:
        InvalidPath: If the base path is empty, the depth is negative, or
            the walk would go past the filesystem root
    """
    if not base_path or not base_path.strip():
        raise InvalidPath("Shortcut base path is empty", path=base_path)
    if depth < 0:
        raise InvalidPath(f"Depth must not be negative, got {depth}", path=document_path)
    if depth == 0:
        return base_path
    if not document_path:
        raise InvalidPath("Active document has no path; save it first", path=document_path)

    base_flavour = flavour or path_flavour(base_path)
    document_flavour = flavour or path_flavour(document_path)
    current = document_flavour(document_path).parent
    names: list[str] = []

    for _ in range(depth):
        if not current.name:
            raise InvalidPath(
                f"Depth {depth} walks past the root of {document_path}",
                path=document_path,
            )
        names.insert(0, current.name)
        current = current.parent

    separator = "\\" if issubclass(base_flavour, PureWindowsPath) else "/"
    return str(base_flavour(base_path).joinpath(*names)) + separator


def ensure_directory(directory: str) -> Path:
    """Create a directory and any missing parents.

    Raises:
        InvalidPath: If the directory cannot be created
    """
    path = Path(directory)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise InvalidPath(f"Cannot create directory {directory}: {e}", path=directory) from e
    return path
