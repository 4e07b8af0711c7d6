"""Build-tool and language configuration files.

Produces ``vite.config.*``, the three TypeScript configs and the Vitest
config/setup pair for non-meta projects.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from frontforge.config import Config, Framework, Styling
from frontforge.scaffolder.templates import TemplateRenderer, script_extension

_VITE_PLUGINS: dict[str, str] = {
    Framework.REACT.value: "react()",
    Framework.VUE.value: "vue()",
    Framework.SVELTE.value: "svelte()",
    Framework.SOLID.value: "solid()",
}

_VITEST_FLAVORS: dict[str, str] = {
    Framework.REACT.value: "react",
    Framework.VUE.value: "vue",
    Framework.SVELTE.value: "svelte",
    Framework.SOLID.value: "solid",
}


def vite_plugins(config: Config) -> list[str]:
    """Return the plugin calls listed in ``vite.config``."""
    plugins: list[str] = []
    if config.framework in _VITE_PLUGINS:
        plugins.append(_VITE_PLUGINS[config.framework])
    if config.styling == Styling.TAILWIND.value:
        plugins.append("tailwindcss()")
    return plugins


def render_vite_config(renderer: TemplateRenderer, config: Config) -> str:
    return renderer.render_for("vite.config.j2", config, plugins=vite_plugins(config))


def vite_config_name(config: Config) -> str:
    return f"vite.config.{script_extension(config)}"


# ---------------------------------------------------------------------------
# TypeScript
# ---------------------------------------------------------------------------


@dataclass
class TSConfigSet:
    """The solution-style ``tsconfig.json`` and its two project references."""

    base: dict[str, Any]
    app: dict[str, Any]
    node: dict[str, Any]

    def files(self) -> list[tuple[str, dict[str, Any]]]:
        """``(filename, document)`` pairs in write order."""
        return [
            ("tsconfig.json", self.base),
            ("tsconfig.app.json", self.app),
            ("tsconfig.node.json", self.node),
        ]


_STRICT_OPTIONS: dict[str, Any] = {
    "skipLibCheck": True,
    "moduleResolution": "bundler",
    "allowImportingTsExtensions": True,
    "isolatedModules": True,
    "moduleDetection": "force",
    "noEmit": True,
}

_LINT_OPTIONS: dict[str, Any] = {
    "strict": True,
    "noUnusedLocals": True,
    "noUnusedParameters": True,
    "noFallthroughCasesInSwitch": True,
}


def generate_tsconfig(config: Config) -> TSConfigSet:
    """Build the TypeScript configuration documents for *config*."""
    jsx = "react-jsx" if config.framework == Framework.REACT.value else "preserve"

    base = {
        "files": [],
        "references": [
            {"path": "./tsconfig.app.json"},
            {"path": "./tsconfig.node.json"},
        ],
    }
    app = {
        "compilerOptions": {
            "target": "ES2020",
            "useDefineForClassFields": True,
            "lib": ["ES2020", "DOM", "DOM.Iterable"],
            "module": "ESNext",
            **_STRICT_OPTIONS,
            "jsx": jsx,
            **_LINT_OPTIONS,
        },
        "include": ["src"],
    }
    node = {
        "compilerOptions": {
            "target": "ES2022",
            "lib": ["ES2023"],
            "module": "ESNext",
            **_STRICT_OPTIONS,
            **_LINT_OPTIONS,
        },
        "include": ["vite.config.ts"],
    }
    return TSConfigSet(base=base, app=app, node=node)


# ---------------------------------------------------------------------------
# Vitest
# ---------------------------------------------------------------------------


def render_vitest_config(
    renderer: TemplateRenderer, config: Config | None, flavor: str, ext: str
) -> str:
    """Render ``vitest.config.<ext>`` for *flavor*.

    *flavor* is a framework key (``react``, ``vue``, ``nextjs``, ``sveltekit``
    and so on); unknown flavors get a plugin-less config.
    """
    context = renderer.context_for(config) if config is not None else {}
    context.update(flavor=flavor, setup_ext=ext)
    return renderer.render("vitest/config.j2", context)


def vitest_flavor(config: Config) -> str:
    return _VITEST_FLAVORS.get(config.framework, "default")


def render_vitest_setup(renderer: TemplateRenderer) -> str:
    return renderer.render("vitest/setup.j2", {})
