"""create-t3-fire scaffolder -- materializes an install plan on disk.

Holds the idempotent file-system primitives every installer is built from,
the Jinja2 renderer used for templates that need values substituted, and the
orchestrator that runs installers in catalog order.

Quick usage::

    from t3fire.scaffolder import ProjectScaffolder

    scaffolder = ProjectScaffolder(ctx)
    await scaffolder.prepare()
    installed = await scaffolder.install()
"""

from t3fire.scaffolder.generator import ProjectScaffolder
from t3fire.scaffolder.templates import TemplateRenderer

__all__ = [
    "ProjectScaffolder",
    "TemplateRenderer",
]
