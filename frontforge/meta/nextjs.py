"""Next.js support via ``create-next-app``."""

from __future__ import annotations

from frontforge.config import (
    Config,
    DataFetching,
    Framework,
    Language,
    PackageManager,
    StateManagement,
    Structure,
    Styling,
    Testing,
)
from frontforge.meta.merge import (
    merge_package_json,
    scaffold_feature_structure,
    scaffold_vitest,
)
from frontforge.meta.registry import MetaGenerator, OptionMatrix
from frontforge.meta.runner import ProcessRunner
from frontforge.scaffolder.templates import TemplateRenderer

_PM_FLAGS: dict[str, str] = {
    PackageManager.YARN.value: "--use-yarn",
    PackageManager.PNPM.value: "--use-pnpm",
    PackageManager.BUN.value: "--use-bun",
}


def build_scaffold_args(config: Config) -> list[str]:
    """Arguments for ``npx`` that create the project without prompting."""
    args = ["create-next-app@latest", str(config.resolved_path())]
    args.append("--js" if config.language == Language.JAVASCRIPT.value else "--ts")
    args.append("--tailwind" if config.styling == Styling.TAILWIND.value else "--no-tailwind")
    args += ["--eslint", "--app", "--src-dir", "--import-alias", "@/*", "--turbopack"]
    args.append(_PM_FLAGS.get(config.package_manager, "--use-npm"))
    args.append("--yes")
    return args


class NextJSGenerator(MetaGenerator):
    """Creates Next.js projects with create-next-app, then adds FrontForge tooling."""

    framework = Framework.NEXTJS.value

    def __init__(self, runner: ProcessRunner, renderer: TemplateRenderer | None = None):
        self.runner = runner
        self.renderer = renderer or TemplateRenderer()

    async def scaffold(self, config: Config) -> None:
        await self.runner.run(
            "npx",
            build_scaffold_args(config),
            framework=self.framework,
            dry_run=config.dry_run,
        )

    async def post_scaffold(self, config: Config) -> None:
        directory = config.resolved_path()

        deps: dict[str, str] = {}
        dev_deps: dict[str, str] = {
            "eslint": "^9.39.1",
            "@eslint/js": "^9.39.1",
            "globals": "^15.15.0",
            "typescript-eslint": "^8.56.1",
            "eslint-plugin-react-hooks": "^7.0.1",
            "eslint-plugin-react-refresh": "^0.5.2",
        }
        scripts = {"lint": "eslint ."}

        if config.state_management == StateManagement.ZUSTAND.value:
            deps["zustand"] = "^5.0.11"
        elif config.state_management == StateManagement.REDUX_TOOLKIT.value:
            deps["@reduxjs/toolkit"] = "^2.11.2"
            deps["react-redux"] = "^9.2.0"

        if config.data_fetching == DataFetching.TANSTACK_QUERY.value:
            deps["@tanstack/react-query"] = "^5.90.21"
            dev_deps["@tanstack/react-query-devtools"] = "^5.91.3"
        elif config.data_fetching == DataFetching.AXIOS.value:
            deps["axios"] = "^1.13.5"
        elif config.data_fetching == DataFetching.SWR.value:
            deps["swr"] = "^2.4.0"

        merge_package_json(directory, deps, dev_deps, scripts)

        if config.testing == Testing.VITEST.value:
            scaffold_vitest(directory, "nextjs", self.renderer)

        if config.structure == Structure.FEATURE_BASED.value:
            scaffold_feature_structure(directory, "nextjs")

    def supported_options(self) -> OptionMatrix:
        return OptionMatrix(
            styling=("Tailwind CSS", "CSS Modules", "Sass/SCSS", "Vanilla CSS"),
            testing=("Vitest", "Jest", "None"),
            state_management=("Zustand", "Redux Toolkit", "Context API", "None"),
            data_fetching=("TanStack Query", "SWR", "Axios", "Fetch API", "None"),
        )

    async def probe_version(self) -> str | None:
        return await self.runner.probe_version("npx", "create-next-app", "--version")
