"""Tailwind CSS installer."""

from __future__ import annotations

from t3fire.scaffolder.primitives import (
    add_package_dependency,
    add_package_script,
    copy_if_exists,
)

from .models import InstallerContext

FORMAT_SCRIPTS = {
    "format:check": 'prettier --check "**/*.{ts,tsx,js,jsx,mdx}" --cache',
    "format:write": 'prettier --write "**/*.{ts,tsx,js,jsx,mdx}" --cache',
}


def install(ctx: InstallerContext) -> None:
    add_package_dependency(
        ctx.project_dir,
        [
            "tailwindcss",
            "postcss",
            "@tailwindcss/postcss",
            "prettier",
            "prettier-plugin-tailwindcss",
        ],
        dev_mode=True,
    )
    add_package_script(ctx.project_dir, FORMAT_SCRIPTS)

    copy_if_exists(ctx.extras("config/postcss.config.js"), ctx.dest("postcss.config.js"))
    copy_if_exists(
        ctx.extras("config/tailwind.prettier.config.js"),
        ctx.dest("prettier.config.js"),
    )
    copy_if_exists(ctx.extras("src/styles/globals.css"), ctx.dest("src/styles/globals.css"))
