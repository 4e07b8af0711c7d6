"""``package.json`` generation.

Builds the dependency manifest for a non-meta project from static version
tables.  Versions are pinned data shipped with FrontForge; nothing is resolved
over the network.
"""

from __future__ import annotations

from typing import Any

from frontforge.config import (
    Animation,
    Config,
    DataFetching,
    DataViz,
    FormManagement,
    Framework,
    I18n,
    Icons,
    Routing,
    StateManagement,
    Styling,
    Testing,
    UILibrary,
    Utilities,
)

# Each table maps an option label to ``(dependencies, devDependencies)``.
VersionTable = dict[str, tuple[dict[str, str], dict[str, str]]]

VITE_VERSION = "^7.2.7"
TYPESCRIPT_VERSION = "^5.9.3"

ESLINT_DEV_DEPS: dict[str, str] = {
    "eslint": "^9.39.1",
    "@eslint/js": "^9.39.1",
    "globals": "^15.15.0",
}

FRAMEWORK_DEPS: VersionTable = {
    Framework.REACT.value: (
        {"react": "^19.2.1", "react-dom": "^19.2.1"},
        {
            "@vitejs/plugin-react": "^5.1.2",
            "@types/react": "^19.2.7",
            "@types/react-dom": "^19.2.3",
        },
    ),
    Framework.VUE.value: (
        {"vue": "^3.5.13"},
        {"@vitejs/plugin-vue": "^6.0.2"},
    ),
    Framework.SVELTE.value: (
        {"svelte": "^5.30.0"},
        {"@sveltejs/vite-plugin-svelte": "^6.2.1"},
    ),
    Framework.SOLID.value: (
        {"solid-js": "^1.9.10"},
        {"vite-plugin-solid": "^2.11.10"},
    ),
    Framework.ANGULAR.value: (
        {
            "@angular/common": "^19.2.0",
            "@angular/compiler": "^19.2.0",
            "@angular/core": "^19.2.0",
            "@angular/platform-browser": "^19.2.0",
            "rxjs": "^7.8.2",
            "zone.js": "^0.15.0",
        },
        {"@angular/cli": "^19.2.0", "@angular/build": "^19.2.0"},
    ),
    Framework.VANILLA.value: ({}, {}),
}

ROUTING_DEPS: VersionTable = {
    Routing.REACT_ROUTER.value: ({"react-router": "^7.10.1"}, {}),
    Routing.TANSTACK_ROUTER.value: ({"@tanstack/react-router": "^1.140.2"}, {}),
    Routing.VUE_ROUTER.value: ({"vue-router": "^4.6.3"}, {}),
    Routing.SOLID_ROUTER.value: ({"@solidjs/router": "^0.15.3"}, {}),
}

STYLING_DEPS: VersionTable = {
    Styling.TAILWIND.value: (
        {},
        {"tailwindcss": "^4.1.18", "@tailwindcss/vite": "^4.1.18"},
    ),
    Styling.BOOTSTRAP.value: ({"bootstrap": "^5.3.3"}, {}),
    Styling.SASS.value: ({}, {"sass": "^1.95.0"}),
    Styling.STYLED.value: ({"styled-components": "^6.1.15"}, {}),
}

STATE_DEPS: VersionTable = {
    StateManagement.ZUSTAND.value: ({"zustand": "^5.0.9"}, {}),
    StateManagement.REDUX_TOOLKIT.value: (
        {"@reduxjs/toolkit": "^2.11.1", "react-redux": "^9.2.0"},
        {},
    ),
    StateManagement.PINIA.value: ({"pinia": "^3.0.4"}, {}),
}

DATA_FETCHING_DEPS: VersionTable = {
    DataFetching.TANSTACK_QUERY.value: (
        {"@tanstack/react-query": "^5.90.12"},
        {"@tanstack/react-query-devtools": "^5.91.1"},
    ),
    DataFetching.AXIOS.value: ({"axios": "^1.7.9"}, {}),
    DataFetching.SWR.value: ({"swr": "^2.3.2"}, {}),
}

TESTING_DEPS: VersionTable = {
    Testing.VITEST.value: (
        {},
        {
            "vitest": "^4.0.15",
            "@testing-library/react": "^16.3.0",
            "@testing-library/jest-dom": "^6.9.1",
            "jsdom": "^25.0.1",
        },
    ),
    Testing.JEST.value: (
        {},
        {
            "jest": "^30.2.0",
            "@testing-library/react": "^16.3.0",
            "@testing-library/jest-dom": "^6.9.1",
        },
    ),
}

UI_LIBRARY_DEPS: VersionTable = {
    UILibrary.SHADCN.value: (
        {
            "class-variance-authority": "^0.7.1",
            "clsx": "^2.1.1",
            "tailwind-merge": "^3.4.0",
            "@radix-ui/react-slot": "^1.1.1",
        },
        {},
    ),
    UILibrary.MUI.value: (
        {
            "@mui/material": "^7.4.0",
            "@emotion/react": "^11.14.0",
            "@emotion/styled": "^11.14.0",
        },
        {},
    ),
    UILibrary.CHAKRA.value: (
        {
            "@chakra-ui/react": "^3.4.0",
            "@emotion/react": "^11.14.0",
            "@emotion/styled": "^11.14.0",
        },
        {},
    ),
    UILibrary.ANT_DESIGN.value: ({"antd": "^6.0.0"}, {}),
    UILibrary.HEADLESS.value: ({"@headlessui/react": "^2.2.9"}, {}),
    UILibrary.VUETIFY.value: ({"vuetify": "^3.7.7"}, {}),
    UILibrary.PRIMEVUE.value: ({"primevue": "^4.3.0"}, {}),
    UILibrary.ELEMENT_PLUS.value: ({"element-plus": "^2.9.4"}, {}),
    UILibrary.NAIVE_UI.value: ({"naive-ui": "^2.41.0"}, {}),
    UILibrary.ANGULAR_MATERIAL.value: ({"@angular/material": "^19.2.0"}, {}),
    UILibrary.PRIMENG.value: ({"primeng": "^21.0.1"}, {}),
    UILibrary.NG_ZORRO.value: ({"ng-zorro-antd": "^19.2.0"}, {}),
}

FORM_DEPS: VersionTable = {
    FormManagement.REACT_HOOK_FORM.value: (
        {
            "react-hook-form": "^7.68.0",
            "@hookform/resolvers": "^3.11.2",
            "zod": "^4.1.13",
        },
        {},
    ),
    FormManagement.FORMIK.value: ({"formik": "^2.4.9", "yup": "^1.7.1"}, {}),
    FormManagement.TANSTACK_FORM.value: ({"@tanstack/react-form": "^0.42.0"}, {}),
    FormManagement.VEE_VALIDATE.value: ({"vee-validate": "^4.15.1", "yup": "^1.7.1"}, {}),
    FormManagement.ZOD.value: ({"zod": "^4.1.13"}, {}),
    FormManagement.YUP.value: ({"yup": "^1.7.1"}, {}),
}

ANIMATION_DEPS: VersionTable = {
    Animation.FRAMER_MOTION.value: ({"motion": "^12.34.0"}, {}),
    Animation.GSAP.value: ({"gsap": "^3.14.1"}, {}),
    Animation.AUTO_ANIMATE.value: ({"@formkit/auto-animate": "^0.9.2"}, {}),
    Animation.REACT_SPRING.value: ({"@react-spring/web": "^9.8.2"}, {}),
}

ICON_DEPS: VersionTable = {
    Icons.REACT_ICONS.value: ({"react-icons": "^5.4.0"}, {}),
    Icons.VUE_ICONS.value: ({"@vicons/ionicons5": "^0.12.0"}, {}),
    Icons.HEROICONS.value: ({"@heroicons/react": "^2.2.0"}, {}),
    Icons.LUCIDE.value: ({"lucide-react": "^0.469.0"}, {}),
    Icons.FONT_AWESOME.value: (
        {
            "@fortawesome/fontawesome-svg-core": "^6.7.2",
            "@fortawesome/free-solid-svg-icons": "^6.7.2",
            "@fortawesome/react-fontawesome": "^0.2.3",
        },
        {},
    ),
}

DATA_VIZ_DEPS: VersionTable = {
    DataViz.RECHARTS.value: ({"recharts": "^3.5.1"}, {}),
    DataViz.CHARTJS.value: ({"chart.js": "^4.5.0", "react-chartjs-2": "^5.3.0"}, {}),
    DataViz.ECHARTS.value: ({"echarts": "^6.0.0", "echarts-for-react": "^3.0.2"}, {}),
    DataViz.NIVO.value: (
        {"@nivo/core": "^0.89.0", "@nivo/line": "^0.89.0", "@nivo/bar": "^0.89.0"},
        {},
    ),
}

UTILITY_DEPS: VersionTable = {
    Utilities.DATE_FNS.value: ({"date-fns": "^4.1.0"}, {}),
    Utilities.DAYJS.value: ({"dayjs": "^1.11.14"}, {}),
    Utilities.LODASH.value: ({"lodash-es": "^4.17.21"}, {"@types/lodash-es": "^4.17.12"}),
}

I18N_DEPS: VersionTable = {
    I18n.REACT_I18NEXT.value: ({"react-i18next": "^16.4.1", "i18next": "^25.7.2"}, {}),
    I18n.VUE_I18N.value: ({"vue-i18n": "^10.0.8"}, {}),
}

_VITE_FRAMEWORKS = frozenset(
    {
        Framework.REACT.value,
        Framework.VUE.value,
        Framework.SVELTE.value,
        Framework.SOLID.value,
        Framework.VANILLA.value,
    }
)


def build_scripts(config: Config) -> dict[str, str]:
    """Return the npm scripts for *config*."""
    scripts: dict[str, str] = {}
    if config.framework == Framework.ANGULAR.value:
        scripts["dev"] = "ng serve"
        scripts["build"] = "ng build"
        scripts["test"] = "ng test"
    else:
        scripts["dev"] = "vite"
        scripts["build"] = "vite build"
        scripts["preview"] = "vite preview"

    scripts["lint"] = "eslint ."

    if config.testing == Testing.VITEST.value:
        scripts["test"] = "vitest"
    elif config.testing == Testing.JEST.value:
        scripts["test"] = "jest"
    return scripts


def generate_package_json(config: Config) -> dict[str, Any]:
    """Build the ``package.json`` document for a non-meta project."""
    dependencies: dict[str, str] = {}
    dev_dependencies: dict[str, str] = {}

    def add(table: VersionTable, option: str) -> None:
        deps, dev_deps = table.get(option, ({}, {}))
        dependencies.update(deps)
        dev_dependencies.update(dev_deps)

    add(FRAMEWORK_DEPS, config.framework)
    if config.framework in _VITE_FRAMEWORKS:
        dev_dependencies["vite"] = VITE_VERSION

    if config.is_typescript:
        dev_dependencies["typescript"] = TYPESCRIPT_VERSION
        dev_dependencies["typescript-eslint"] = "^8.49.0"

    add(ROUTING_DEPS, config.routing)
    add(STYLING_DEPS, config.styling)
    add(STATE_DEPS, config.state_management)
    add(DATA_FETCHING_DEPS, config.data_fetching)
    add(TESTING_DEPS, config.testing)

    dev_dependencies.update(ESLINT_DEV_DEPS)
    if config.framework == Framework.REACT.value:
        dev_dependencies["eslint-plugin-react-hooks"] = "^7.0.1"
        dev_dependencies["eslint-plugin-react-refresh"] = "^0.4.24"

    add(UI_LIBRARY_DEPS, config.ui_library)
    add(FORM_DEPS, config.form_management)
    add(ANIMATION_DEPS, config.animation)
    add(ICON_DEPS, config.icons)
    add(DATA_VIZ_DEPS, config.data_viz)
    add(UTILITY_DEPS, config.utilities)
    add(I18N_DEPS, config.i18n)

    return {
        "name": config.project_name,
        "private": True,
        "version": "0.0.0",
        "type": "module",
        "scripts": build_scripts(config),
        "dependencies": dict(sorted(dependencies.items())),
        "devDependencies": dict(sorted(dev_dependencies.items())),
    }
