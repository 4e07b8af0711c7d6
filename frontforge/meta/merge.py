"""Post-scaffold helpers shared by the meta-framework generators.

* :func:`merge_package_json` adds dependencies and scripts to the
  ``package.json`` an upstream CLI produced, never overwriting existing keys.
* :func:`scaffold_vitest` adds a Vitest setup.
* :func:`scaffold_feature_structure` creates feature-based directories.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from frontforge.scaffolder.configs import render_vitest_config, render_vitest_setup
from frontforge.scaffolder.templates import TemplateRenderer
from frontforge.utils import ensure_dir, load_json, save_json


class ManifestMergeError(Exception):
    """Raised when ``package.json`` is missing or cannot be parsed."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot merge into {path}: {reason}")


_SECTIONS = ("dependencies", "devDependencies", "scripts")


def merge_package_json(
    directory: str | Path,
    deps: Mapping[str, str] | None = None,
    dev_deps: Mapping[str, str] | None = None,
    scripts: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Merge *deps*, *dev_deps* and *scripts* into ``<directory>/package.json``.

    Keys already present keep their value.  Empty inputs leave their section
    untouched (a missing section is only created when there is something to
    put in it).  The merged document is written back once and returned.

    Raises:
        ManifestMergeError: If the file is missing or is not a JSON object.
            Nothing is written in that case.
    """
    path = Path(directory) / "package.json"
    try:
        manifest = load_json(path)
    except FileNotFoundError as exc:
        raise ManifestMergeError(path, "file not found") from exc
    except (json.JSONDecodeError, ValueError) as exc:
        raise ManifestMergeError(path, f"invalid JSON ({exc})") from exc

    for section, additions in zip(_SECTIONS, (deps, dev_deps, scripts)):
        if not additions:
            continue
        existing = manifest.get(section)
        if not isinstance(existing, dict):
            existing = {}
        for key, value in additions.items():
            existing.setdefault(key, value)
        manifest[section] = existing

    save_json(manifest, path)
    return manifest


def add_npm_scripts(directory: str | Path, scripts: Mapping[str, str]) -> dict[str, Any]:
    """Add *scripts* to ``package.json`` without overwriting existing ones."""
    return merge_package_json(directory, scripts=scripts)


# ---------------------------------------------------------------------------
# Vitest
# ---------------------------------------------------------------------------

VITEST_DEV_DEPS: dict[str, str] = {
    "vitest": "^4.0.18",
    "@testing-library/jest-dom": "^6.9.1",
    "jsdom": "^28.1.0",
}

_VITEST_FLAVOR_DEV_DEPS: dict[str, dict[str, str]] = {
    "nextjs": {
        "@testing-library/react": "^16.3.2",
        "@vitejs/plugin-react": "^5.1.4",
    },
    "sveltekit": {"@testing-library/svelte": "^5.3.1"},
}


def scaffold_vitest(
    directory: str | Path,
    flavor: str,
    renderer: TemplateRenderer | None = None,
) -> list[Path]:
    """Add Vitest to an upstream-generated project.

    Writes ``vitest.config.ts`` and ``src/test/setup.ts`` and merges the test
    devDependencies and the ``test`` script.  *flavor* is ``nextjs``,
    ``sveltekit`` or ``astro``.
    """
    renderer = renderer or TemplateRenderer()
    root = Path(directory)

    config_path = root / "vitest.config.ts"
    config_path.write_text(
        render_vitest_config(renderer, None, flavor, "ts"), encoding="utf-8"
    )

    setup_path = root / "src" / "test" / "setup.ts"
    ensure_dir(setup_path.parent)
    setup_path.write_text(render_vitest_setup(renderer), encoding="utf-8")

    dev_deps = {**VITEST_DEV_DEPS, **_VITEST_FLAVOR_DEV_DEPS.get(flavor, {})}
    merge_package_json(root, dev_deps=dev_deps, scripts={"test": "vitest"})
    return [config_path, setup_path]


# ---------------------------------------------------------------------------
# Feature-based structure
# ---------------------------------------------------------------------------

FEATURE_DIRECTORIES: dict[str, tuple[str, ...]] = {
    "nextjs": ("app/features", "app/components", "lib", "hooks"),
    "sveltekit": ("src/lib/features", "src/lib/components", "src/lib/stores"),
    "astro": ("src/components", "src/layouts", "src/styles"),
}


def scaffold_feature_structure(directory: str | Path, flavor: str) -> list[Path]:
    """Create the feature-based directories for *flavor*; unknown flavors are a no-op."""
    root = Path(directory)
    created: list[Path] = []
    for rel in FEATURE_DIRECTORIES.get(flavor, ()):
        created.append(ensure_dir(root / rel))
    return created
