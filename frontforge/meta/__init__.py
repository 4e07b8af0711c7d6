"""Meta-framework support.

A :class:`Registry` maps framework names onto :class:`MetaGenerator` plugins.
Each plugin creates the project with the framework's own CLI (``scaffold``)
and then layers FrontForge extras on top (``post_scaffold``).  External
commands go through :class:`ProcessRunner`, which enforces a timeout and
reports failures as :class:`ScaffoldError`.
"""

from frontforge.meta.registry import (
    MetaGenerator,
    OptionMatrix,
    Registry,
    default_registry,
    run_meta_scaffold,
)
from frontforge.meta.runner import ProcessRunner, ScaffoldError

__all__ = [
    "MetaGenerator",
    "OptionMatrix",
    "ProcessRunner",
    "Registry",
    "ScaffoldError",
    "default_registry",
    "run_meta_scaffold",
]
