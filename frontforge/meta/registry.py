"""Meta-framework generator contract and registry.

A meta-framework (Next.js, Astro, SvelteKit) ships its own project generator.
FrontForge drives that upstream CLI through a :class:`MetaGenerator` plugin
and then layers its own additions on top of the result.

The :class:`Registry` is an explicit object built once by the entry point
(usually via :func:`default_registry`) and handed to the
:class:`~frontforge.scaffolder.generator.ProjectGenerator`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from frontforge.config import Config
from frontforge.meta.runner import ScaffoldError

if TYPE_CHECKING:
    from frontforge.meta.runner import ProcessRunner


@dataclass(frozen=True)
class OptionMatrix:
    """Option labels a meta-framework supports.

    ``None`` means the axis does not apply and should be hidden from the user.
    """

    styling: tuple[str, ...] | None
    testing: tuple[str, ...] | None
    state_management: tuple[str, ...] | None = None
    data_fetching: tuple[str, ...] | None = None

    def allows(self, axis: str, value: str) -> bool:
        """Return ``True`` if *value* is offered on *axis* (hidden axes allow anything)."""
        options = getattr(self, axis)
        return options is None or value in options


class MetaGenerator(ABC):
    """Two-phase contract implemented by every meta-framework plugin."""

    #: Framework label this plugin handles (``Framework`` value).
    framework: str = ""

    @abstractmethod
    async def scaffold(self, config: Config) -> None:
        """Run the upstream CLI non-interactively."""

    @abstractmethod
    async def post_scaffold(self, config: Config) -> None:
        """Apply FrontForge additions to the generated project."""

    @abstractmethod
    def supported_options(self) -> OptionMatrix:
        """Describe which options make sense for this framework."""

    @abstractmethod
    async def probe_version(self) -> str | None:
        """Return the installed upstream CLI version, or ``None`` if unavailable."""


class Registry:
    """Maps framework labels to :class:`MetaGenerator` instances."""

    def __init__(self) -> None:
        self._generators: dict[str, MetaGenerator] = {}

    def register(self, name: str, generator: MetaGenerator) -> None:
        """Register *generator* for *name*, replacing any previous entry."""
        self._generators[name] = generator

    def get(self, name: str) -> MetaGenerator | None:
        return self._generators.get(name)

    def names(self) -> list[str]:
        return sorted(self._generators)

    def __contains__(self, name: object) -> bool:
        return name in self._generators

    def __len__(self) -> int:
        return len(self._generators)


async def run_meta_scaffold(registry: Registry, config: Config) -> None:
    """Drive the registered plugin for ``config.framework``.

    ``scaffold`` runs unless ``config.no_scaffold`` is set; ``post_scaffold``
    runs afterwards unless this is a dry run (there is no project directory to
    modify in that case).

    Raises:
        ScaffoldError: If no plugin is registered (empty ``command``,
            ``exit_code == -1``) or an upstream command fails.
    """
    generator = registry.get(config.framework)
    if generator is None:
        raise ScaffoldError(
            config.framework,
            command="",
            exit_code=-1,
            stderr="no generator registered for framework",
        )

    if not config.no_scaffold:
        await generator.scaffold(config)

    if config.dry_run:
        return

    await generator.post_scaffold(config)


def default_registry(runner: ProcessRunner | None = None) -> Registry:
    """Build a registry holding the built-in Next.js, Astro and SvelteKit plugins.

    All plugins share *runner*, so its ``commands`` log covers the whole run.
    """
    from frontforge.meta.astro import AstroGenerator
    from frontforge.meta.nextjs import NextJSGenerator
    from frontforge.meta.runner import ProcessRunner
    from frontforge.meta.sveltekit import SvelteKitGenerator

    runner = runner or ProcessRunner()
    registry = Registry()
    for generator in (
        NextJSGenerator(runner),
        AstroGenerator(runner),
        SvelteKitGenerator(runner),
    ):
        registry.register(generator.framework, generator)
    return registry
