"""FrontForge scaffolder -- writes Vite-based project structures.

Quick usage::

    from frontforge.config import Config
    from frontforge.meta import default_registry
    from frontforge.scaffolder import ProjectGenerator

    config = Config(project_name="my-app", framework="Vue")
    result = await ProjectGenerator(default_registry()).generate(config)
    print(result.files_written)
"""

from frontforge.scaffolder.generator import (
    GenerationError,
    GenerationResult,
    ProjectGenerator,
)
from frontforge.scaffolder.templates import TemplateRenderer

__all__ = [
    "GenerationError",
    "GenerationResult",
    "ProjectGenerator",
    "TemplateRenderer",
]
