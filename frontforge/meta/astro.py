"""Astro support via ``npm create astro``."""

from __future__ import annotations

from frontforge.config import Config, Framework, Language, Structure, Styling, Testing
from frontforge.meta.merge import (
    merge_package_json,
    scaffold_feature_structure,
    scaffold_vitest,
)
from frontforge.meta.registry import MetaGenerator, OptionMatrix
from frontforge.meta.runner import ProcessRunner
from frontforge.scaffolder.templates import TemplateRenderer


def build_scaffold_args(config: Config) -> list[str]:
    """Arguments for ``npm`` that create a minimal Astro project."""
    typescript = "relaxed" if config.language == Language.JAVASCRIPT.value else "strict"
    return [
        "create",
        "astro@latest",
        str(config.resolved_path()),
        "--",
        "--template",
        "minimal",
        "--typescript",
        typescript,
        "--install",
        "--git",
        "--skip-houston",
    ]


class AstroGenerator(MetaGenerator):
    """Creates Astro projects with create-astro, then adds FrontForge tooling."""

    framework = Framework.ASTRO.value

    def __init__(self, runner: ProcessRunner, renderer: TemplateRenderer | None = None):
        self.runner = runner
        self.renderer = renderer or TemplateRenderer()

    async def scaffold(self, config: Config) -> None:
        await self.runner.run(
            "npm",
            build_scaffold_args(config),
            framework=self.framework,
            dry_run=config.dry_run,
        )

    async def post_scaffold(self, config: Config) -> None:
        directory = config.resolved_path()

        dev_deps: dict[str, str] = {
            "eslint": "^9.39.1",
            "@eslint/js": "^9.39.1",
            "globals": "^15.15.0",
            "typescript-eslint": "^8.56.1",
        }
        scripts = {"lint": "eslint ."}

        # Astro 5.2+ wires Tailwind through the Vite plugin, not @astrojs/tailwind.
        if config.styling == Styling.TAILWIND.value:
            dev_deps["tailwindcss"] = "^4.2.1"
            dev_deps["@tailwindcss/vite"] = "^4.2.1"

            styles_dir = directory / "src" / "styles"
            styles_dir.mkdir(parents=True, exist_ok=True)
            (styles_dir / "global.css").write_text(
                self.renderer.render("meta/astro_global.css.j2", {}), encoding="utf-8"
            )
            (directory / "astro.config.mjs").write_text(
                self.renderer.render("meta/astro.config.mjs.j2", {}), encoding="utf-8"
            )

        merge_package_json(directory, dev_deps=dev_deps, scripts=scripts)

        if config.testing == Testing.VITEST.value:
            scaffold_vitest(directory, "astro", self.renderer)

        if config.structure == Structure.FEATURE_BASED.value:
            scaffold_feature_structure(directory, "astro")

    def supported_options(self) -> OptionMatrix:
        return OptionMatrix(
            styling=("Tailwind CSS", "CSS Modules", "Sass/SCSS", "Vanilla CSS"),
            testing=("Vitest", "None"),
        )

    async def probe_version(self) -> str | None:
        return await self.runner.probe_version(
            "npm", "create", "astro@latest", "--", "--version"
        )
