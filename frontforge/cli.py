"""Command-line entry point: ``frontforge`` / ``python -m frontforge``.

Builds a :class:`~frontforge.config.Config` from the quick preset plus flag
overrides, runs preflight, then hands off to the generation engine.
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from frontforge.config import (
    CompatibilityError,
    Config,
    DataFetching,
    Framework,
    Language,
    PackageManager,
    Settings,
    StateManagement,
    Styling,
    Testing,
    apply_framework_defaults,
    quick_preset,
    validate_compatibility,
)
from frontforge.meta.merge import ManifestMergeError
from frontforge.meta.registry import default_registry
from frontforge.meta.runner import ProcessRunner, ScaffoldError
from frontforge.preflight import print_results, run_all_checks
from frontforge.scaffolder.generator import GenerationError, GenerationResult, ProjectGenerator
from frontforge.scaffolder.install import InstallError, run_install
from frontforge.scaffolder.paths import PathError, normalize_path
from frontforge.utils import (
    console,
    print_error,
    print_header,
    print_info,
    print_success,
    print_summary_table,
    print_warning,
)

# ---------------------------------------------------------------------------
# Flag value aliases
# ---------------------------------------------------------------------------

FRAMEWORK_ALIASES: dict[str, Framework] = {
    "react": Framework.REACT,
    "vue": Framework.VUE,
    "angular": Framework.ANGULAR,
    "svelte": Framework.SVELTE,
    "solid": Framework.SOLID,
    "vanilla": Framework.VANILLA,
    "nextjs": Framework.NEXTJS,
    "next": Framework.NEXTJS,
    "next.js": Framework.NEXTJS,
    "astro": Framework.ASTRO,
    "sveltekit": Framework.SVELTEKIT,
    "svelte-kit": Framework.SVELTEKIT,
}

LANGUAGE_ALIASES: dict[str, Language] = {
    "ts": Language.TYPESCRIPT,
    "typescript": Language.TYPESCRIPT,
    "js": Language.JAVASCRIPT,
    "javascript": Language.JAVASCRIPT,
}

PACKAGE_MANAGER_ALIASES: dict[str, PackageManager] = {pm.value: pm for pm in PackageManager}

STYLING_ALIASES: dict[str, Styling] = {
    "tailwind": Styling.TAILWIND,
    "tailwindcss": Styling.TAILWIND,
    "bootstrap": Styling.BOOTSTRAP,
    "css-modules": Styling.CSS_MODULES,
    "cssmodules": Styling.CSS_MODULES,
    "sass": Styling.SASS,
    "scss": Styling.SASS,
    "styled": Styling.STYLED,
    "styled-components": Styling.STYLED,
    "vanilla": Styling.VANILLA,
    "css": Styling.VANILLA,
}

TESTING_ALIASES: dict[str, Testing] = {
    "vitest": Testing.VITEST,
    "jest": Testing.JEST,
    "playwright": Testing.PLAYWRIGHT,
    "none": Testing.NONE,
}

STATE_ALIASES: dict[str, StateManagement] = {
    "zustand": StateManagement.ZUSTAND,
    "redux": StateManagement.REDUX_TOOLKIT,
    "redux-toolkit": StateManagement.REDUX_TOOLKIT,
    "pinia": StateManagement.PINIA,
    "svelte-stores": StateManagement.SVELTE_STORES,
    "svelte": StateManagement.SVELTE_STORES,
    "context": StateManagement.CONTEXT_API,
    "context-api": StateManagement.CONTEXT_API,
    "none": StateManagement.NONE,
}

DATA_FETCHING_ALIASES: dict[str, DataFetching] = {
    "tanstack-query": DataFetching.TANSTACK_QUERY,
    "tanstack": DataFetching.TANSTACK_QUERY,
    "react-query": DataFetching.TANSTACK_QUERY,
    "swr": DataFetching.SWR,
    "axios": DataFetching.AXIOS,
    "fetch": DataFetching.FETCH_API,
    "fetch-api": DataFetching.FETCH_API,
    "none": DataFetching.NONE,
}

# flag dest -> (Config field, aliases, valid options shown in errors)
_OVERRIDES: tuple[tuple[str, str, dict[str, Any], str], ...] = (
    ("lang", "language", LANGUAGE_ALIASES, "ts, js"),
    ("pm", "package_manager", PACKAGE_MANAGER_ALIASES, "npm, yarn, pnpm, bun"),
    ("styling", "styling", STYLING_ALIASES, "tailwind, bootstrap, css-modules, sass, styled, vanilla"),
    ("testing", "testing", TESTING_ALIASES, "vitest, jest, playwright, none"),
    ("state", "state_management", STATE_ALIASES, "zustand, redux, pinia, svelte-stores, context, none"),
    ("data", "data_fetching", DATA_FETCHING_ALIASES, "tanstack-query, swr, axios, fetch, none"),
)


class UsageError(Exception):
    """Bad command-line input."""


def parse_choice(value: str, aliases: dict[str, Any], label: str, valid: str) -> Any:
    """Map a case-insensitive short name onto its option value."""
    try:
        return aliases[value.lower()]
    except KeyError:
        raise UsageError(f"Invalid {label} '{value}'. Valid options: {valid}") from None


def resolve_project_path(path_arg: str, project_name: str, cwd: Path | None = None) -> Path:
    """Turn the ``--path`` flag into an absolute project directory.

    Empty means ``<cwd>/<project_name>``, ``.`` means the current directory and
    anything else is taken relative to *cwd* unless already absolute.
    """
    base = Path(cwd) if cwd is not None else Path.cwd()
    if not path_arg:
        return normalize_path(project_name, base)
    if path_arg == ".":
        return normalize_path(str(base), base)
    return normalize_path(path_arg, base)


def build_config(args: argparse.Namespace, cwd: Path | None = None) -> Config:
    """Assemble the run configuration from parsed flags.

    Raises:
        UsageError: Missing name or an unknown option value.
        CompatibilityError: Incompatible framework/library selection.
        PathError: Unusable ``--path``.
    """
    if not args.name:
        raise UsageError("--name is required (usage: frontforge --quick --name my-project)")

    try:
        config = quick_preset(
            args.name,
            dry_run=args.dry_run,
            auto_install=args.install,
            no_scaffold=args.no_scaffold,
        )
    except ValidationError:
        raise UsageError(
            "Invalid project name. Use only letters, numbers, hyphens, and underscores."
        ) from None

    if args.framework:
        framework = parse_choice(
            args.framework,
            FRAMEWORK_ALIASES,
            "framework",
            "react, vue, angular, svelte, solid, vanilla, nextjs, astro, sveltekit",
        )
        config = apply_framework_defaults(config.model_copy(update={"framework": framework.value}))

    updates: dict[str, str] = {}
    for dest, field_name, aliases, valid in _OVERRIDES:
        raw = getattr(args, dest)
        if raw:
            label = field_name.replace("_", " ")
            updates[field_name] = parse_choice(raw, aliases, label, valid).value
    updates["project_path"] = resolve_project_path(args.path, args.name, cwd)
    config = config.model_copy(update=updates)

    validate_compatibility(config)
    return config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="frontforge",
        description="FrontForge -- frontend project generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  frontforge --quick --name my-app\n"
            "  frontforge --name my-app --framework vue --lang js --pm pnpm\n"
            "  frontforge --name site --framework astro --path ./sites/site --dry-run\n"
        ),
    )
    parser.add_argument("--name", default="", help="Project name (letters, numbers, '-' and '_')")
    parser.add_argument(
        "--quick",
        action="store_true",
        help="Use the quick preset (React + TypeScript + Tailwind); overrides still apply",
    )
    parser.add_argument(
        "--path",
        default="",
        help="Project path ('.' for the current directory; default: ./<name>)",
    )
    parser.add_argument(
        "--framework",
        default="",
        help="react, vue, angular, svelte, solid, vanilla, nextjs, astro, sveltekit",
    )
    parser.add_argument("--lang", default="", help="ts, js")
    parser.add_argument("--pm", default="", help="npm, yarn, pnpm, bun")
    parser.add_argument(
        "--styling", default="", help="tailwind, bootstrap, css-modules, sass, styled, vanilla"
    )
    parser.add_argument("--testing", default="", help="vitest, jest, playwright, none")
    parser.add_argument(
        "--state", default="", help="zustand, redux, pinia, svelte-stores, context, none"
    )
    parser.add_argument("--data", default="", help="tanstack-query, swr, axios, fetch, none")
    parser.add_argument(
        "--dry-run", action="store_true", help="Show what would be generated without writing"
    )
    parser.add_argument(
        "--install", action="store_true", help="Run '<pm> install' after generation"
    )
    parser.add_argument(
        "--no-scaffold",
        action="store_true",
        help="Skip the upstream CLI scaffold (meta-frameworks only, for debugging)",
    )
    return parser


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------


def _print_summary(config: Config) -> None:
    print_header("FrontForge")
    print_summary_table(
        {
            "Project": config.project_name,
            "Path": str(config.project_path),
            "Framework": config.framework,
            "Language": config.language,
            "Styling": config.styling,
            "Package manager": config.package_manager,
            "Mode": "dry run" if config.dry_run else "generate",
        },
        title="Configuration",
    )


def _print_next_steps(config: Config, cwd: Path) -> None:
    console.print()
    console.print("[bold]Next steps:[/bold]")
    if Path(config.project_path) != cwd:
        console.print(f"  cd {config.project_name}")
    if not config.auto_install or config.dry_run:
        console.print(f"  {config.package_manager} install")
    console.print(f"  {config.package_manager} run dev")
    console.print()


async def run(config: Config, settings: Settings | None = None) -> GenerationResult | None:
    """Preflight, generate and optionally install.

    Returns ``None`` when a fatal preflight check stops the run.
    """
    settings = settings or Settings.from_env()
    runner = ProcessRunner(settings)

    if not config.dry_run:
        results = await run_all_checks(config, settings, runner)
        print_results(results)
        if results.fatal_error:
            console.print()
            print_error("Pre-flight checks failed. Please resolve the issues above.")
            return None

    console.print()
    if config.dry_run:
        print_info("Dry run: nothing will be written to disk.")
    console.print("[bold]Generating project...[/bold]")
    generator = ProjectGenerator(default_registry(runner))
    result = await generator.generate(config)

    if config.auto_install and not config.dry_run:
        console.print()
        console.print(f"[bold]Running {config.package_manager} install...[/bold]")
        try:
            await run_install(result.project_path, config)
        except InstallError as exc:
            print_warning(f"Install failed: {exc}")
            console.print("You can run the install manually with:")
            console.print(f"  cd {config.project_name}")
            console.print(f"  {config.package_manager} install")
        else:
            print_success("Dependencies installed successfully!")
    return result


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``frontforge``."""
    args = build_parser().parse_args(argv)
    cwd = Path(os.getcwd())

    try:
        config = build_config(args, cwd)
    except (UsageError, CompatibilityError, PathError) as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    _print_summary(config)

    try:
        result = asyncio.run(run(config))
    except (GenerationError, ScaffoldError, ManifestMergeError, PathError, ValueError) as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    if result is None:
        sys.exit(1)

    console.print()
    if config.dry_run:
        print_success("Dry run complete. No files were written.")
    else:
        print_success("Project created successfully!")
    _print_next_steps(config, cwd)


if __name__ == "__main__":
    main()
