"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``frontforge/scaffolder/templates/`` directory and renders them with a context
derived from the project :class:`~frontforge.config.Config`.  Every generated
text file (entry points, components, HTML shell, lint and test configs) comes
from a template here; JSON files are built as dictionaries elsewhere.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from frontforge.config import Config, Framework, Styling


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# File extension rules
# ---------------------------------------------------------------------------


def script_extension(config: Config) -> str:
    """``ts`` or ``js`` depending on the selected language."""
    return "ts" if config.is_typescript else "js"


def main_extension(config: Config) -> str:
    """Extension of ``src/main.*``.

    JSX frameworks (React, Solid) get ``tsx``/``jsx``; Angular always uses
    ``ts``; Vue, Svelte and Vanilla use plain ``ts``/``js``.
    """
    if config.framework == Framework.ANGULAR.value:
        return "ts"
    if config.framework in (Framework.REACT.value, Framework.SOLID.value):
        return "tsx" if config.is_typescript else "jsx"
    return script_extension(config)


def app_extension(config: Config) -> str:
    """Extension of the root App component."""
    if config.framework == Framework.VUE.value:
        return "vue"
    if config.framework == Framework.SVELTE.value:
        return "svelte"
    if config.framework in (Framework.ANGULAR.value, Framework.VANILLA.value):
        return script_extension(config)
    return "tsx" if config.is_typescript else "jsx"


def app_path(config: Config) -> str:
    """Project-relative path of the root App component."""
    if config.framework == Framework.ANGULAR.value:
        return "src/app/app.component.ts"
    return f"src/App.{app_extension(config)}"


def mount_id(config: Config) -> str:
    """DOM id the application mounts onto."""
    return "app" if config.framework == Framework.VUE.value else "root"


# ---------------------------------------------------------------------------
# Styling class helpers
# ---------------------------------------------------------------------------

_CLASSES: dict[str, dict[str, str]] = {
    Styling.TAILWIND.value: {
        "container": "min-h-screen flex items-center justify-center bg-gray-100",
        "center": "text-center",
        "title": "text-4xl font-bold mb-4",
        "space": "space-y-4",
        "button": "px-4 py-2 bg-blue-500 text-white rounded hover:bg-blue-600",
        "button_alt": "px-4 py-2 bg-green-500 text-white rounded hover:bg-green-600",
    },
    Styling.CSS_MODULES.value: {
        "container": "styles.app",
        "center": "",
        "title": "styles.title",
        "space": "",
        "button": "styles.button",
        "button_alt": "styles.button",
    },
    Styling.SASS.value: {
        "container": "app",
        "center": "",
        "title": "title",
        "space": "",
        "button": "button",
        "button_alt": "button",
    },
}

_DEFAULT_CLASSES: dict[str, str] = {
    "container": "app",
    "center": "",
    "title": "",
    "space": "",
    "button": "",
    "button_alt": "",
}


def style_classes(config: Config) -> dict[str, str]:
    """Return the class names used by the sample App for the chosen styling."""
    return _CLASSES.get(config.styling, _DEFAULT_CLASSES)


def class_attr(value: str, attribute: str = "className") -> str:
    """Render a JSX/HTML class attribute.

    CSS Modules references (``styles.x``) become expressions; empty values
    produce no attribute at all.
    """
    if not value:
        return ""
    if value.startswith("styles."):
        return f" {attribute}={{{value}}}"
    return f' {attribute}="{value}"'


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    The renderer loads ``.j2`` template files from a configurable template
    directory.  :meth:`context_for` turns a ``Config`` into the
    variables every template can rely on.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["class_attr"] = class_attr

    # -- Context -----------------------------------------------------------

    @staticmethod
    def context_for(config: Config) -> dict[str, Any]:
        """Build the template context for *config*."""
        return {
            "config": config,
            "project_name": config.project_name,
            "framework": config.framework,
            "language": config.language,
            "styling": config.styling,
            "testing": config.testing,
            "routing": config.routing,
            "state_management": config.state_management,
            "data_fetching": config.data_fetching,
            "package_manager": config.package_manager,
            "structure": config.structure,
            "is_typescript": config.is_typescript,
            "script_ext": script_extension(config),
            "main_ext": main_extension(config),
            "app_ext": app_extension(config),
            "mount_id": mount_id(config),
            "classes": style_classes(config),
        }

    # -- Rendering ---------------------------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"main/react.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_for(self, template_path: str, config: Config, **extra: Any) -> str:
        """Render *template_path* with :meth:`context_for` plus *extra*."""
        context = self.context_for(config)
        context.update(extra)
        return self.render(template_path, context)

