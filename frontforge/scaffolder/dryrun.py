"""Dry-run manifest: records would-be writes and renders them as a tree."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path, PurePath

from rich.markup import escape

from frontforge.utils import console


@dataclass
class DryRunEntry:
    """One file or directory that a real run would create."""

    path: str
    is_dir: bool = False
    size: int = 0
    content: str = ""


@dataclass
class _TreeNode:
    name: str
    is_dir: bool
    children: dict[str, "_TreeNode"] = field(default_factory=dict)


class DryRunManifest:
    """Collects every file and directory a generation run would produce.

    Paths handed to :meth:`add_file` / :meth:`add_dir` are absolute; entries
    store them relative to *project_path*.  The project root itself is never
    recorded as an entry.
    """

    def __init__(self, project_path: str | Path, project_name: str):
        self.project_path = Path(project_path)
        self.project_name = project_name
        self.entries: list[DryRunEntry] = []

    def _relative(self, path: str | Path) -> str:
        return os.path.relpath(os.fspath(path), os.fspath(self.project_path))

    def add_file(self, path: str | Path, content: str) -> None:
        self.entries.append(
            DryRunEntry(
                path=self._relative(path),
                is_dir=False,
                size=len(content.encode("utf-8")),
                content=content,
            )
        )

    def add_dir(self, path: str | Path) -> None:
        rel = self._relative(path)
        if rel == ".":
            return
        self.entries.append(DryRunEntry(path=rel, is_dir=True))

    @property
    def file_count(self) -> int:
        return sum(1 for entry in self.entries if not entry.is_dir)

    @property
    def files(self) -> list[str]:
        return [entry.path for entry in self.entries if not entry.is_dir]

    # -- Rendering ---------------------------------------------------------

    def _build_tree(self) -> _TreeNode:
        root = _TreeNode(name="", is_dir=True)
        for entry in self.entries:
            parts = [p for p in PurePath(entry.path).parts if p not in ("", ".")]
            current = root
            for index, part in enumerate(parts):
                child = current.children.get(part)
                if child is None:
                    # Every segment but the last is a directory.
                    is_dir = index < len(parts) - 1 or entry.is_dir
                    child = _TreeNode(name=part, is_dir=is_dir)
                    current.children[part] = child
                current = child
        return root

    @staticmethod
    def _render_node(node: _TreeNode, prefix: str, lines: list[str]) -> None:
        children = sorted(
            node.children.values(), key=lambda child: (not child.is_dir, child.name)
        )
        for index, child in enumerate(children):
            last = index == len(children) - 1
            connector = "└──" if last else "├──"
            suffix = "/" if child.is_dir else ""
            lines.append(f"{prefix}{connector} {child.name}{suffix}")
            DryRunManifest._render_node(
                child, prefix + ("    " if last else "│   "), lines
            )

    def render(self) -> str:
        """Return the manifest as a box-drawing tree rooted at the project name.

        Directories sort before files, then alphabetically; the output ends
        with ``"<n> files would be created"``.
        """
        lines = [f"{self.project_name}/"]
        self._render_node(self._build_tree(), "", lines)
        lines.append("")
        lines.append(f"{self.file_count} files would be created")
        return "\n".join(lines)

    def print(self) -> None:
        console.print()
        console.print("[bold cyan]Dry run - files that would be generated:[/bold cyan]")
        console.print()
        console.print(escape(self.render()))
        console.print()
