"""Database container installer.

Renders ``start-database.sh`` for providers that run locally in Docker or
Podman, with the project name substituted into the container name.
"""

from __future__ import annotations

from t3fire.scaffolder.primitives import make_executable, render_if_exists

from .models import InstallerContext


def install(ctx: InstallerContext) -> None:
    script = ctx.dest("start-database.sh")
    rendered = render_if_exists(
        ctx.renderer(),
        ctx.extras("start-database", f"{ctx.provider.value}.sh.j2"),
        script,
        ctx.template_context(),
    )
    if rendered:
        make_executable(script)
