"""Project path normalisation and safety checks."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path, PurePath, PureWindowsPath


class PathError(Exception):
    """Raised for unusable or unsafe project paths."""

    def __init__(self, path: str | Path, message: str, cause: BaseException | None = None):
        self.path = str(path)
        self.message = message
        self.cause = cause
        text = f"path error for '{self.path}': {message}"
        if cause is not None:
            text += f" (cause: {cause})"
        super().__init__(text)


FORBIDDEN_PATHS: tuple[str, ...] = (
    "/",
    "/bin",
    "/boot",
    "/dev",
    "/etc",
    "/lib",
    "/lib64",
    "/proc",
    "/root",
    "/sbin",
    "/sys",
    "/usr",
    "/var",
    "/System",
    "/Library",
    "/Applications",
    "C:\\Windows",
    "C:\\Program Files",
)


def _is_within(path: PurePath, parent: PurePath) -> bool:
    return path == parent or parent in path.parents


def validate_path_safety(path: str | Path) -> None:
    """Refuse system directories; anything under the temp dir is always allowed.

    Raises:
        PathError: If *path* is, or lies inside, a protected system directory.
    """
    normalized = Path(os.path.normpath(os.fspath(path)))

    temp_dir = Path(os.path.normpath(tempfile.gettempdir()))
    if _is_within(normalized, temp_dir):
        return

    for forbidden in FORBIDDEN_PATHS:
        if "\\" in forbidden:
            if os.name != "nt":
                continue
            target: PurePath = PureWindowsPath(forbidden)
            candidate: PurePath = PureWindowsPath(normalized)
        else:
            target = Path(forbidden)
            candidate = normalized
        # "/" only guards the root itself; everything lives under it.
        if forbidden == "/":
            if candidate == target:
                raise PathError(path, f"cannot create project in system directory: {forbidden}")
            continue
        if _is_within(candidate, target):
            raise PathError(path, f"cannot create project in system directory: {forbidden}")


def normalize_path(user_path: str, cwd: str | Path | None = None) -> Path:
    """Resolve *user_path* against *cwd* into a clean absolute path.

    Raises:
        PathError: If the path is empty or points into a system directory.
    """
    if not user_path:
        raise PathError("", "path cannot be empty")

    base = Path(cwd) if cwd is not None else Path.cwd()
    candidate = Path(user_path).expanduser()
    if not candidate.is_absolute():
        candidate = base / candidate
    absolute = Path(os.path.normpath(os.path.abspath(candidate)))

    validate_path_safety(absolute)
    return absolute


def validate_project_path(path: str | Path) -> None:
    """Check that *path* is safe and is either missing or an empty directory.

    Raises:
        PathError: For unsafe paths, non-directories and non-empty directories.
    """
    validate_path_safety(path)
    target = Path(path)
    if not target.exists():
        return
    if not target.is_dir():
        raise PathError(path, "path exists but is not a directory")
    try:
        entries = list(target.iterdir())
    except OSError as exc:
        raise PathError(path, "cannot read directory", exc) from exc
    if entries:
        raise PathError(path, f"directory is not empty ({len(entries)} file(s) found)")


def project_name_from_path(path: str | Path) -> str:
    """The last path component, used as the default project name."""
    return Path(path).name
