"""FrontForge configuration.

Typed, immutable description of the project to generate plus the engine's
tuning knobs.  All settings use Pydantic v2 models so they are validated at
construction time and can be serialised to/from JSON or environment variables
without boiler-plate.
"""

from __future__ import annotations

import os
import re
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Option enumerations
# ---------------------------------------------------------------------------

class Language(str, Enum):
    TYPESCRIPT = "TypeScript"
    JAVASCRIPT = "JavaScript"


class Framework(str, Enum):
    """Supported frameworks.  The last three are meta-frameworks."""
    REACT = "React"
    VUE = "Vue"
    ANGULAR = "Angular"
    SVELTE = "Svelte"
    SOLID = "Solid"
    VANILLA = "Vanilla"
    NEXTJS = "Next.js"
    ASTRO = "Astro"
    SVELTEKIT = "SvelteKit"


class PackageManager(str, Enum):
    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"
    BUN = "bun"


class Styling(str, Enum):
    TAILWIND = "Tailwind CSS"
    BOOTSTRAP = "Bootstrap"
    CSS_MODULES = "CSS Modules"
    SASS = "Sass/SCSS"
    STYLED = "Styled Components"
    VANILLA = "Vanilla CSS"


class Routing(str, Enum):
    REACT_ROUTER = "React Router"
    TANSTACK_ROUTER = "TanStack Router"
    FILE_BASED = "File-based routing"
    VUE_ROUTER = "Vue Router"
    ANGULAR_ROUTER = "Angular Router"
    SVELTEKIT = "SvelteKit"
    SOLID_ROUTER = "Solid Router"
    NEXTJS_APP_ROUTER = "Next.js App Router"
    ASTRO_PAGES = "Astro Pages"
    NONE = "None"


class Testing(str, Enum):
    VITEST = "Vitest"
    JEST = "Jest"
    PLAYWRIGHT = "Playwright"
    NONE = "None"


class StateManagement(str, Enum):
    ZUSTAND = "Zustand"
    REDUX_TOOLKIT = "Redux Toolkit"
    CONTEXT_API = "Context API"
    PINIA = "Pinia"
    VUEX = "Vuex"
    SVELTE_STORES = "Svelte Stores"
    SOLID_STORES = "Solid Stores"
    NGRX = "NgRx"
    NONE = "None"


class DataFetching(str, Enum):
    TANSTACK_QUERY = "TanStack Query"
    FETCH_API = "Fetch API"
    AXIOS = "Axios"
    SWR = "SWR"
    NONE = "None"


class Structure(str, Enum):
    FEATURE_BASED = "Feature-based"
    LAYER_BASED = "Layer-based"


class UILibrary(str, Enum):
    SHADCN = "Shadcn/ui"
    MUI = "Material-UI (MUI)"
    CHAKRA = "Chakra UI"
    ANT_DESIGN = "Ant Design"
    HEADLESS = "Headless UI"
    VUETIFY = "Vuetify"
    PRIMEVUE = "PrimeVue"
    ELEMENT_PLUS = "Element Plus"
    NAIVE_UI = "Naive UI"
    ANGULAR_MATERIAL = "Angular Material"
    PRIMENG = "PrimeNG"
    NG_ZORRO = "NG-ZORRO"
    NONE = "None"


class FormManagement(str, Enum):
    REACT_HOOK_FORM = "React Hook Form"
    FORMIK = "Formik"
    TANSTACK_FORM = "TanStack Form"
    VEE_VALIDATE = "VeeValidate"
    ZOD = "Zod (validation)"
    YUP = "Yup (validation)"
    NONE = "None"


class Animation(str, Enum):
    FRAMER_MOTION = "Framer Motion"
    GSAP = "GSAP"
    AUTO_ANIMATE = "Auto Animate"
    REACT_SPRING = "React Spring"
    NONE = "None"


class Icons(str, Enum):
    REACT_ICONS = "React Icons"
    VUE_ICONS = "Vue Icons"
    HEROICONS = "Heroicons"
    LUCIDE = "Lucide"
    FONT_AWESOME = "Font Awesome"
    NONE = "None"


class DataViz(str, Enum):
    RECHARTS = "Recharts"
    CHARTJS = "Chart.js"
    ECHARTS = "Apache ECharts"
    NIVO = "Nivo"
    NONE = "None"


class Utilities(str, Enum):
    DATE_FNS = "date-fns"
    DAYJS = "Day.js"
    LODASH = "Lodash-es"
    NONE = "None"


class I18n(str, Enum):
    REACT_I18NEXT = "react-i18next"
    VUE_I18N = "vue-i18n"
    NONE = "None"


META_FRAMEWORKS: frozenset[str] = frozenset(
    {Framework.NEXTJS.value, Framework.ASTRO.value, Framework.SVELTEKIT.value}
)

PROJECT_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def is_meta_framework(framework: str) -> bool:
    """Return ``True`` when *framework* delegates to an upstream scaffolding CLI."""
    return str(getattr(framework, "value", framework)) in META_FRAMEWORKS


# ---------------------------------------------------------------------------
# Project configuration
# ---------------------------------------------------------------------------


class Config(BaseModel):
    """Everything needed to generate one project.

    Instances are created once per run by the caller (usually the CLI) and are
    frozen afterwards; use ``model_copy(update=...)`` to derive a variant.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    project_name: str = Field(..., description="Directory / package name")
    project_path: Path | None = Field(
        default=None, description="Absolute path where the project is created"
    )
    language: Language = Field(default=Language.TYPESCRIPT)
    framework: Framework = Field(default=Framework.REACT)
    package_manager: PackageManager = Field(default=PackageManager.NPM)
    styling: Styling = Field(default=Styling.TAILWIND)
    ui_library: UILibrary = Field(default=UILibrary.NONE)
    routing: Routing = Field(default=Routing.NONE)
    testing: Testing = Field(default=Testing.NONE)
    state_management: StateManagement = Field(default=StateManagement.NONE)
    form_management: FormManagement = Field(default=FormManagement.NONE)
    data_fetching: DataFetching = Field(default=DataFetching.NONE)
    animation: Animation = Field(default=Animation.NONE)
    icons: Icons = Field(default=Icons.NONE)
    data_viz: DataViz = Field(default=DataViz.NONE)
    utilities: Utilities = Field(default=Utilities.NONE)
    i18n: I18n = Field(default=I18n.NONE)
    structure: Structure = Field(default=Structure.LAYER_BASED)

    dry_run: bool = Field(default=False, description="Preview without writing files")
    no_scaffold: bool = Field(
        default=False,
        description="Skip the upstream CLI for meta-frameworks (debugging aid)",
    )
    auto_install: bool = Field(
        default=False, description="Run '<pm> install' after generation"
    )

    @field_validator("project_name")
    @classmethod
    def _check_project_name(cls, value: str) -> str:
        if not PROJECT_NAME_PATTERN.match(value):
            raise ValueError(
                "project name may only contain letters, numbers, hyphens and underscores"
            )
        return value

    @field_validator("project_path")
    @classmethod
    def _check_project_path(cls, value: Path | None) -> Path | None:
        if value is not None and not Path(value).is_absolute():
            raise ValueError(f"project path must be absolute: {value}")
        return value

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def is_typescript(self) -> bool:
        return self.language == Language.TYPESCRIPT.value

    @property
    def is_meta(self) -> bool:
        return is_meta_framework(self.framework)

    def resolved_path(self, cwd: Path | None = None) -> Path:
        """Return ``project_path`` or ``<cwd>/<project_name>`` when unset."""
        if self.project_path is not None:
            return Path(self.project_path)
        return (cwd or Path.cwd()) / self.project_name

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)


# ---------------------------------------------------------------------------
# Engine settings
# ---------------------------------------------------------------------------


class Settings(BaseModel):
    """Tuning knobs for the generation engine."""

    process_timeout: float = Field(
        default=120.0, gt=0, description="Upstream CLI timeout in seconds"
    )
    probe_timeout: float = Field(
        default=10.0, gt=0, description="Version probe timeout in seconds"
    )
    stderr_tail_lines: int = Field(
        default=50, ge=1, description="Stderr lines kept in a ScaffoldError"
    )
    min_disk_space_mb: int = Field(
        default=500, ge=0, description="Free space required by the preflight check"
    )

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            FRONTFORGE_PROCESS_TIMEOUT, FRONTFORGE_PROBE_TIMEOUT,
            FRONTFORGE_STDERR_TAIL_LINES, FRONTFORGE_MIN_DISK_SPACE_MB.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("FRONTFORGE_PROCESS_TIMEOUT"):
            kwargs["process_timeout"] = float(os.environ["FRONTFORGE_PROCESS_TIMEOUT"])
        if os.environ.get("FRONTFORGE_PROBE_TIMEOUT"):
            kwargs["probe_timeout"] = float(os.environ["FRONTFORGE_PROBE_TIMEOUT"])
        if os.environ.get("FRONTFORGE_STDERR_TAIL_LINES"):
            kwargs["stderr_tail_lines"] = int(os.environ["FRONTFORGE_STDERR_TAIL_LINES"])
        if os.environ.get("FRONTFORGE_MIN_DISK_SPACE_MB"):
            kwargs["min_disk_space_mb"] = int(os.environ["FRONTFORGE_MIN_DISK_SPACE_MB"])
        return cls(**kwargs)


# ---------------------------------------------------------------------------
# Presets, defaults and compatibility
# ---------------------------------------------------------------------------


class CompatibilityError(ValueError):
    """Raised when the selected libraries do not fit the selected framework."""


def quick_preset(project_name: str, **overrides: Any) -> Config:
    """Return the opinionated default configuration."""
    values: dict[str, Any] = {
        "project_name": project_name,
        "language": Language.TYPESCRIPT,
        "framework": Framework.REACT,
        "package_manager": PackageManager.NPM,
        "styling": Styling.TAILWIND,
        "ui_library": UILibrary.SHADCN,
        "routing": Routing.REACT_ROUTER,
        "testing": Testing.VITEST,
        "state_management": StateManagement.ZUSTAND,
        "form_management": FormManagement.REACT_HOOK_FORM,
        "data_fetching": DataFetching.TANSTACK_QUERY,
        "animation": Animation.FRAMER_MOTION,
        "icons": Icons.HEROICONS,
        "data_viz": DataViz.NONE,
        "utilities": Utilities.DATE_FNS,
        "i18n": I18n.NONE,
        "structure": Structure.FEATURE_BASED,
    }
    values.update(overrides)
    return Config(**values)


_FRAMEWORK_DEFAULTS: dict[str, dict[str, Any]] = {
    Framework.VUE.value: {
        "routing": Routing.VUE_ROUTER,
        "state_management": StateManagement.PINIA,
        "ui_library": UILibrary.VUETIFY,
        "form_management": FormManagement.VEE_VALIDATE,
        "data_fetching": DataFetching.AXIOS,
        "icons": Icons.VUE_ICONS,
        "i18n": I18n.VUE_I18N,
        "animation": Animation.AUTO_ANIMATE,
    },
    Framework.ANGULAR.value: {
        "routing": Routing.ANGULAR_ROUTER,
        "state_management": StateManagement.NGRX,
        "ui_library": UILibrary.ANGULAR_MATERIAL,
        "form_management": FormManagement.NONE,
        "data_fetching": DataFetching.FETCH_API,
        "animation": Animation.NONE,
        "icons": Icons.NONE,
        "i18n": I18n.NONE,
    },
    Framework.SVELTE.value: {
        "routing": Routing.SVELTEKIT,
        "state_management": StateManagement.SVELTE_STORES,
        "ui_library": UILibrary.NONE,
        "form_management": FormManagement.NONE,
        "data_fetching": DataFetching.FETCH_API,
        "animation": Animation.AUTO_ANIMATE,
        "icons": Icons.LUCIDE,
        "i18n": I18n.NONE,
    },
    Framework.SOLID.value: {
        "routing": Routing.SOLID_ROUTER,
        "state_management": StateManagement.SOLID_STORES,
        "ui_library": UILibrary.NONE,
        "form_management": FormManagement.NONE,
        "data_fetching": DataFetching.FETCH_API,
        "animation": Animation.FRAMER_MOTION,
        "icons": Icons.LUCIDE,
        "i18n": I18n.NONE,
    },
    Framework.VANILLA.value: {
        "routing": Routing.NONE,
        "state_management": StateManagement.NONE,
        "ui_library": UILibrary.NONE,
        "form_management": FormManagement.NONE,
        "data_fetching": DataFetching.FETCH_API,
        "animation": Animation.NONE,
        "icons": Icons.NONE,
        "i18n": I18n.NONE,
    },
    Framework.NEXTJS.value: {
        "routing": Routing.NEXTJS_APP_ROUTER,
        "state_management": StateManagement.NONE,
        "ui_library": UILibrary.NONE,
        "form_management": FormManagement.NONE,
        "data_fetching": DataFetching.FETCH_API,
        "animation": Animation.NONE,
        "icons": Icons.LUCIDE,
        "i18n": I18n.NONE,
    },
    Framework.ASTRO.value: {
        "routing": Routing.ASTRO_PAGES,
        "state_management": StateManagement.NONE,
        "ui_library": UILibrary.NONE,
        "form_management": FormManagement.NONE,
        "data_fetching": DataFetching.FETCH_API,
        "animation": Animation.NONE,
        "icons": Icons.NONE,
        "i18n": I18n.NONE,
    },
    Framework.SVELTEKIT.value: {
        "routing": Routing.SVELTEKIT,
        "state_management": StateManagement.SVELTE_STORES,
        "ui_library": UILibrary.NONE,
        "form_management": FormManagement.NONE,
        "data_fetching": DataFetching.FETCH_API,
        "animation": Animation.NONE,
        "icons": Icons.LUCIDE,
        "i18n": I18n.NONE,
    },
}


def apply_framework_defaults(config: Config) -> Config:
    """Return a copy of *config* with sensible selections for its framework.

    React keeps the preset values unchanged.
    """
    defaults = _FRAMEWORK_DEFAULTS.get(config.framework)
    if not defaults:
        return config
    return config.model_copy(update={k: v.value for k, v in defaults.items()})


_COMPATIBLE_ROUTING: dict[str, set[str]] = {
    Framework.REACT.value: {
        Routing.REACT_ROUTER.value,
        Routing.TANSTACK_ROUTER.value,
        Routing.FILE_BASED.value,
        Routing.NONE.value,
    },
    Framework.VUE.value: {Routing.VUE_ROUTER.value, Routing.NONE.value},
    Framework.SVELTE.value: {Routing.SVELTEKIT.value, Routing.NONE.value},
    Framework.SOLID.value: {Routing.SOLID_ROUTER.value, Routing.NONE.value},
}

_COMPATIBLE_STATE: dict[str, set[str]] = {
    Framework.REACT.value: {
        StateManagement.ZUSTAND.value,
        StateManagement.REDUX_TOOLKIT.value,
        StateManagement.CONTEXT_API.value,
        StateManagement.NONE.value,
    },
    Framework.VUE.value: {
        StateManagement.PINIA.value,
        StateManagement.VUEX.value,
        StateManagement.NONE.value,
    },
    Framework.SVELTE.value: {StateManagement.SVELTE_STORES.value, StateManagement.NONE.value},
    Framework.SOLID.value: {StateManagement.SOLID_STORES.value, StateManagement.NONE.value},
}

_UI_LIBRARY_OWNERS: dict[str, str] = {
    UILibrary.SHADCN.value: Framework.REACT.value,
    UILibrary.MUI.value: Framework.REACT.value,
    UILibrary.CHAKRA.value: Framework.REACT.value,
    UILibrary.ANT_DESIGN.value: Framework.REACT.value,
    UILibrary.HEADLESS.value: Framework.REACT.value,
    UILibrary.VUETIFY.value: Framework.VUE.value,
    UILibrary.PRIMEVUE.value: Framework.VUE.value,
    UILibrary.ELEMENT_PLUS.value: Framework.VUE.value,
    UILibrary.NAIVE_UI.value: Framework.VUE.value,
    UILibrary.ANGULAR_MATERIAL.value: Framework.ANGULAR.value,
    UILibrary.PRIMENG.value: Framework.ANGULAR.value,
    UILibrary.NG_ZORRO.value: Framework.ANGULAR.value,
}

_FORM_LIBRARY_OWNERS: dict[str, str] = {
    FormManagement.REACT_HOOK_FORM.value: Framework.REACT.value,
    FormManagement.FORMIK.value: Framework.REACT.value,
    FormManagement.TANSTACK_FORM.value: Framework.REACT.value,
    FormManagement.VEE_VALIDATE.value: Framework.VUE.value,
}


def validate_compatibility(config: Config) -> None:
    """Raise ``CompatibilityError`` for incompatible framework/library picks.

    Meta-frameworks bring their own routing and are not checked.
    """
    if config.is_meta:
        return

    framework = config.framework

    allowed_routing = _COMPATIBLE_ROUTING.get(framework)
    if allowed_routing is not None and config.routing not in allowed_routing:
        raise CompatibilityError(
            f"routing '{config.routing}' is not compatible with {framework}"
        )

    allowed_state = _COMPATIBLE_STATE.get(framework)
    if allowed_state is not None and config.state_management not in allowed_state:
        raise CompatibilityError(
            f"state management '{config.state_management}' is not compatible with {framework}"
        )

    owner = _UI_LIBRARY_OWNERS.get(config.ui_library)
    if owner is not None and owner != framework:
        raise CompatibilityError(
            f"UI library '{config.ui_library}' is only compatible with {owner}"
        )

    owner = _FORM_LIBRARY_OWNERS.get(config.form_management)
    if owner is not None and owner != framework:
        raise CompatibilityError(
            f"form management '{config.form_management}' is only compatible with {owner}"
        )
