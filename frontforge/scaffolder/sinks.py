"""Write-or-record targets for the generation engine.

The orchestrator emits every file and directory through a sink:

* :class:`FilesystemSink` writes to disk and remembers what it created so a
  failed run can be rolled back.
* :class:`DryRunSink` records into a :class:`DryRunManifest` and never touches
  the filesystem.
"""

from __future__ import annotations

import shutil
from abc import ABC, abstractmethod
from pathlib import Path

from frontforge.scaffolder.dryrun import DryRunManifest


class Sink(ABC):
    """Destination for generated artefacts."""

    @abstractmethod
    def write_file(self, path: Path, content: str) -> None:
        """Write *content* to *path* (absolute)."""

    @abstractmethod
    def write_dir(self, path: Path) -> None:
        """Create directory *path* (absolute) and any missing parents."""

    @property
    @abstractmethod
    def files_written(self) -> int:
        """Number of files emitted so far."""


class FilesystemSink(Sink):
    """Writes to disk and tracks created paths for rollback.

    Tracking is only enabled when the project directory is new; into a
    pre-existing directory nothing is recorded and :meth:`rollback` is a no-op.
    """

    def __init__(self, root: Path, track: bool = True):
        self.root = Path(root)
        self.track = track
        self.created: list[Path] = []
        self._files = 0

    def record(self, path: Path) -> None:
        if self.track:
            self.created.append(Path(path))

    def _ensure_parents(self, path: Path) -> None:
        missing: list[Path] = []
        parent = path.parent
        while not parent.exists():
            missing.append(parent)
            parent = parent.parent
        for directory in reversed(missing):
            directory.mkdir()
            self.record(directory)

    def write_file(self, path: Path, content: str) -> None:
        path = Path(path)
        self._ensure_parents(path)
        existed = path.exists()
        path.write_text(content, encoding="utf-8")
        self._files += 1
        if not existed:
            self.record(path)

    def write_dir(self, path: Path) -> None:
        path = Path(path)
        if path.is_dir():
            return
        self._ensure_parents(path)
        path.mkdir()
        self.record(path)

    @property
    def files_written(self) -> int:
        return self._files

    def rollback(self) -> list[Path]:
        """Delete every tracked path in reverse creation order.

        Best effort: a path that cannot be removed is skipped so the rest of
        the cleanup still happens.  Returns the paths that were removed.
        """
        removed: list[Path] = []
        for path in reversed(self.created):
            try:
                if path.is_dir() and not path.is_symlink():
                    shutil.rmtree(path)
                elif path.exists() or path.is_symlink():
                    path.unlink()
                else:
                    continue
            except OSError:
                continue
            removed.append(path)
        self.created.clear()
        return removed


class DryRunSink(Sink):
    """Records every write into a :class:`DryRunManifest`."""

    def __init__(self, manifest: DryRunManifest):
        self.manifest = manifest

    def write_file(self, path: Path, content: str) -> None:
        self.manifest.add_file(path, content)

    def write_dir(self, path: Path) -> None:
        self.manifest.add_dir(path)

    @property
    def files_written(self) -> int:
        return self.manifest.file_count
