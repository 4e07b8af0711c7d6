"""SvelteKit support via the ``sv`` CLI.

Scaffolding is two commands: ``sv create`` for the bare project, then
``sv add`` inside it for the selected add-ons.  Post-scaffold ends with a
package-manager install because the merged dependencies are not installed yet.
"""

from __future__ import annotations

from frontforge.config import (
    Config,
    DataFetching,
    Framework,
    Language,
    Structure,
    Styling,
    Testing,
)
from frontforge.meta.merge import merge_package_json, scaffold_feature_structure
from frontforge.meta.registry import MetaGenerator, OptionMatrix
from frontforge.meta.runner import ProcessRunner


def build_create_args(config: Config) -> list[str]:
    args = ["sv", "create", str(config.resolved_path()), "--template", "minimal"]
    if config.language == Language.JAVASCRIPT.value:
        args.append("--no-types")
    else:
        args += ["--types", "ts"]
    args.append("--no-add-ons")
    return args


def build_add_ons(config: Config) -> list[str]:
    add_ons: list[str] = []
    if config.styling == Styling.TAILWIND.value:
        add_ons.append("tailwindcss")
    if config.testing == Testing.VITEST.value:
        add_ons.append("vitest")
    elif config.testing == Testing.PLAYWRIGHT.value:
        add_ons.append("playwright")
    add_ons += ["eslint", "prettier"]
    return add_ons


class SvelteKitGenerator(MetaGenerator):
    """Creates SvelteKit projects with the sv CLI and installs the selected add-ons."""

    framework = Framework.SVELTEKIT.value

    def __init__(self, runner: ProcessRunner):
        self.runner = runner

    async def scaffold(self, config: Config) -> None:
        await self.runner.run(
            "npx",
            build_create_args(config),
            framework=self.framework,
            dry_run=config.dry_run,
        )

        add_ons = build_add_ons(config)
        if add_ons:
            await self.runner.run(
                "npx",
                ["sv", "add", *add_ons],
                framework=self.framework,
                cwd=config.resolved_path(),
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
        }
        scripts = {"lint": "eslint ."}

        # Svelte stores are built in; nothing to add for state management.
        if config.data_fetching == DataFetching.TANSTACK_QUERY.value:
            deps["@tanstack/svelte-query"] = "^6.0.18"
        elif config.data_fetching == DataFetching.AXIOS.value:
            deps["axios"] = "^1.13.5"

        merge_package_json(directory, deps, dev_deps, scripts)

        if config.structure == Structure.FEATURE_BASED.value:
            scaffold_feature_structure(directory, "sveltekit")

        await self.runner.run(
            config.package_manager or "npm",
            ["install"],
            framework=self.framework,
            cwd=directory,
            dry_run=config.dry_run,
        )

    def supported_options(self) -> OptionMatrix:
        return OptionMatrix(
            styling=("Tailwind CSS", "CSS Modules", "Sass/SCSS", "Vanilla CSS"),
            testing=("Vitest", "Playwright", "None"),
            state_management=("Svelte Stores", "None"),
            data_fetching=("TanStack Query", "Fetch API", "None"),
        )

    async def probe_version(self) -> str | None:
        return await self.runner.probe_version("npx", "sv", "--version")
