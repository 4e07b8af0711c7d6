"""Main scaffolding orchestrator.

Turns a :class:`~frontforge.config.Config` into a project directory.  Every
file and directory goes through a :class:`~frontforge.scaffolder.sinks.Sink`
so the same sequence serves real runs and dry runs.  A real run into a new
directory is all-or-nothing: if any step fails, everything created so far is
removed in reverse order.  Meta-frameworks are handed to the registered
:class:`~frontforge.meta.registry.MetaGenerator`.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

from jinja2 import TemplateError
from rich.markup import escape

from frontforge.config import Config, Framework, Structure, Styling, Testing
from frontforge.meta.registry import Registry, run_meta_scaffold
from frontforge.scaffolder.configs import (
    generate_tsconfig,
    render_vite_config,
    render_vitest_config,
    render_vitest_setup,
    vite_config_name,
    vitest_flavor,
)
from frontforge.scaffolder.dryrun import DryRunManifest
from frontforge.scaffolder.package import generate_package_json
from frontforge.scaffolder.sinks import DryRunSink, FilesystemSink, Sink
from frontforge.scaffolder.templates import (
    TemplateRenderer,
    app_path,
    main_extension,
    script_extension,
)
from frontforge.scaffolder.validate import ValidationResult, failed, validate_project
from frontforge.utils import console, dump_json, print_warning


class GenerationError(Exception):
    """Raised when a generation step fails; triggers rollback."""

    def __init__(self, stage: str, message: str, cause: BaseException | None = None):
        self.stage = stage
        self.message = message
        self.cause = cause
        text = f"generation failed at {stage}: {message}"
        if cause is not None:
            text += f" (cause: {cause})"
        super().__init__(text)


@dataclass
class GenerationResult:
    """Outcome of one :meth:`ProjectGenerator.generate` call."""

    project_path: Path
    dry_run: bool
    files_written: int = 0
    warnings: list[ValidationResult] = field(default_factory=list)
    manifest: DryRunManifest | None = None


_FEATURE_DIRS = (
    "src/features",
    "src/features/auth",
    "src/features/dashboard",
    "src/components",
    "src/lib",
    "src/hooks",
)

_LAYER_DIRS = (
    "src/components",
    "src/pages",
    "src/services",
    "src/utils",
    "src/hooks",
    "src/types",
    "src/lib",
)

_STYLE_EXTRAS: dict[str, tuple[str, str]] = {
    Styling.TAILWIND.value: ("index.css.j2", "src/index.css"),
    Styling.CSS_MODULES.value: ("App.module.css.j2", "src/App.module.css"),
    Styling.SASS.value: ("styles.scss.j2", "src/styles.scss"),
}

_TEMPLATE_KEYS: dict[str, str] = {
    Framework.REACT.value: "react",
    Framework.VUE.value: "vue",
    Framework.ANGULAR.value: "angular",
    Framework.SVELTE.value: "svelte",
    Framework.SOLID.value: "solid",
    Framework.VANILLA.value: "vanilla",
}


@contextmanager
def _stage(name: str) -> Iterator[None]:
    """Translate filesystem and template failures into ``GenerationError``."""
    try:
        yield
    except GenerationError:
        raise
    except (OSError, TemplateError) as exc:
        raise GenerationError(name, f"failed to write {name}", exc) from exc


class ProjectGenerator:
    """Generation engine.

    Given a :class:`Registry` of meta-framework plugins, :meth:`generate`
    produces either:
    - a Vite-based project (React, Vue, Angular, Svelte, Solid, Vanilla)
      written file by file, or
    - a meta-framework project created by its upstream CLI and then extended.
    """

    def __init__(
        self,
        registry: Registry,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.registry = registry
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    async def generate(self, config: Config, cwd: Path | None = None) -> GenerationResult:
        """Generate the project described by *config*.

        Args:
            config: What to build.  ``project_path`` defaults to
                ``<cwd>/<project_name>``.
            cwd: Base directory for the default path (``Path.cwd()`` if unset).

        Returns:
            A :class:`GenerationResult`; for dry runs ``manifest`` holds every
            would-be entry.

        Raises:
            GenerationError: A write failed (already rolled back).
            ScaffoldError: A meta-framework upstream command failed.
        """
        project_path = config.resolved_path(cwd)
        config = config.model_copy(update={"project_path": project_path})

        manifest: DryRunManifest | None = None
        fs_sink: FilesystemSink | None = None
        sink: Sink
        if config.dry_run:
            manifest = DryRunManifest(project_path, config.project_name)
            sink = DryRunSink(manifest)
        else:
            dir_existed = project_path.exists()
            fs_sink = FilesystemSink(project_path, track=not dir_existed)
            sink = fs_sink

        result = GenerationResult(project_path=project_path, dry_run=config.dry_run, manifest=manifest)

        success = False
        try:
            # 1. Project directory
            if fs_sink is not None:
                with _stage("project directory"):
                    fs_sink.write_dir(project_path)

            # 2. Meta-frameworks delegate to their upstream CLI
            if config.is_meta:
                await run_meta_scaffold(self.registry, config)
            else:
                self._write_project(sink, project_path, config)

            # 3. Advisory validation
            if not config.dry_run:
                result.warnings = failed(validate_project(project_path, config))
                self._report_warnings(result.warnings)

            result.files_written = sink.files_written
            success = True
        finally:
            if not success and fs_sink is not None:
                removed = fs_sink.rollback()
                if removed:
                    console.print(
                        f"[yellow]Rolled back {len(removed)} created path(s) "
                        f"under {escape(str(project_path))}[/yellow]"
                    )

        if manifest is not None and not config.is_meta:
            manifest.print()
        return result

    # -- Write sequence ----------------------------------------------------

    def _write_project(self, sink: Sink, root: Path, config: Config) -> None:
        """Emit every artefact of a non-meta project, in a fixed order."""
        renderer = self.renderer
        template_key = _TEMPLATE_KEYS[config.framework]
        ext = script_extension(config)

        with _stage("package.json"):
            sink.write_file(root / "package.json", dump_json(generate_package_json(config)))

        with _stage("vite.config"):
            sink.write_file(root / vite_config_name(config), render_vite_config(renderer, config))

        if config.is_typescript:
            for name, document in generate_tsconfig(config).files():
                with _stage(name):
                    sink.write_file(root / name, dump_json(document))

        with _stage("project structure"):
            self._write_structure(sink, root, config)

        with _stage("index.html"):
            sink.write_file(root / "index.html", renderer.render_for("index.html.j2", config))

        with _stage("vite.svg"):
            sink.write_file(root / "public" / "vite.svg", renderer.render_for("vite.svg.j2", config))

        with _stage("main file"):
            sink.write_file(
                root / "src" / f"main.{main_extension(config)}",
                renderer.render_for(f"main/{template_key}.j2", config),
            )

        with _stage("App component"):
            sink.write_file(root / app_path(config), renderer.render_for(f"app/{template_key}.j2", config))

        with _stage(".gitignore"):
            sink.write_file(root / ".gitignore", renderer.render_for("gitignore.j2", config))

        with _stage("README.md"):
            sink.write_file(root / "README.md", renderer.render_for("README.md.j2", config))

        extra = _STYLE_EXTRAS.get(config.styling)
        if extra is not None:
            template, rel = extra
            with _stage(rel):
                sink.write_file(root / rel, renderer.render_for(template, config))

        if config.testing == Testing.VITEST.value:
            with _stage("Vitest config"):
                sink.write_file(
                    root / f"vitest.config.{ext}",
                    render_vitest_config(renderer, config, vitest_flavor(config), ext),
                )
                sink.write_dir(root / "src" / "test")
                sink.write_file(root / "src" / "test" / f"setup.{ext}", render_vitest_setup(renderer))

        with _stage("eslint.config.js"):
            sink.write_file(root / "eslint.config.js", renderer.render_for("eslint.config.js.j2", config))

    def _write_structure(self, sink: Sink, root: Path, config: Config) -> None:
        sink.write_dir(root / "src")
        sink.write_dir(root / "public")

        feature_based = config.structure == Structure.FEATURE_BASED.value
        for rel in _FEATURE_DIRS if feature_based else _LAYER_DIRS:
            sink.write_dir(root / rel)

        if feature_based:
            sink.write_file(
                root / "src" / "features" / "README.md",
                self.renderer.render_for("features_README.md.j2", config),
            )

        sink.write_file(
            root / "src" / "lib" / f"utils.{script_extension(config)}",
            self.renderer.render_for("lib_utils.j2", config),
        )

    # -- Reporting ---------------------------------------------------------

    @staticmethod
    def _report_warnings(warnings: list[ValidationResult]) -> None:
        if not warnings:
            return
        for warning in warnings:
            print_warning(f"  Warning: {warning.check} - {warning.message}")
        console.print()
        print_warning(
            f"Validation completed with {len(warnings)} warning(s). "
            "Project may not work correctly."
        )
