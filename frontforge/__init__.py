"""FrontForge -- frontend project generator.

Turns a :class:`~frontforge.config.Config` into a ready-to-run frontend
project: Vite-based projects are written file by file from Jinja2 templates,
meta-frameworks (Next.js, Astro, SvelteKit) are created by their upstream CLI
and then extended.

Quick usage::

    from frontforge.config import quick_preset
    from frontforge.meta import default_registry
    from frontforge.scaffolder import ProjectGenerator

    config = quick_preset("my-app", dry_run=True)
    result = await ProjectGenerator(default_registry()).generate(config)
"""

__version__ = "0.1.0"
