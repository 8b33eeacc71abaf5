"""Biome installer."""

from __future__ import annotations

from t3fire.scaffolder.primitives import (
    add_package_dependency,
    add_package_script,
    copy_if_exists,
)

from .models import InstallerContext


def install(ctx: InstallerContext) -> None:
    add_package_dependency(ctx.project_dir, ["@biomejs/biome"], dev_mode=True)
    add_package_script(
        ctx.project_dir,
        {
            "check": "biome check .",
            "check:unsafe": "biome check --write --unsafe .",
            "check:write": "biome check --write .",
            "typecheck": "tsc --noEmit",
        },
    )
    copy_if_exists(ctx.extras("config/biome.jsonc"), ctx.dest("biome.jsonc"))
