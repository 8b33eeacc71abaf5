"""ESLint + Prettier installer.

``eslint.config.js`` is generated rather than copied: the Drizzle plugin and
its rules are only wired in when DRIZZLE is in use.
"""

from __future__ import annotations

from t3fire.scaffolder.primitives import (
    add_package_dependency,
    add_package_script,
    write_file,
)

from .models import Feature, InstallerContext
from .tailwind import FORMAT_SCRIPTS

ESLINT_CONFIG_TEMPLATE = """\
import { FlatCompat } from "@eslint/eslintrc";
import tseslint from "typescript-eslint";
{% if with_drizzle %}
// @ts-ignore -- no types for this plugin
import drizzle from "eslint-plugin-drizzle";
{% endif %}

const compat = new FlatCompat({
  baseDirectory: import.meta.dirname,
});

export default tseslint.config(
  {
    ignores: [".next"],
  },
  ...compat.extends("next/core-web-vitals"),
  {
    files: ["**/*.ts", "**/*.tsx"],
{% if with_drizzle %}
    plugins: {
      drizzle,
    },
{% endif %}
    extends: [
      ...tseslint.configs.recommended,
      ...tseslint.configs.recommendedTypeChecked,
      ...tseslint.configs.stylisticTypeChecked,
    ],
    rules: {
      "@typescript-eslint/array-type": "off",
      "@typescript-eslint/consistent-type-definitions": "off",
      "@typescript-eslint/consistent-type-imports": [
        "warn",
        { prefer: "type-imports", fixStyle: "inline-type-imports" },
      ],
      "@typescript-eslint/no-unused-vars": [
        "warn",
        { argsIgnorePattern: "^_" },
      ],
      "@typescript-eslint/require-await": "off",
      "@typescript-eslint/no-misused-promises": [
        "error",
        { checksVoidReturn: { attributes: false } },
      ],
{% if with_drizzle %}
      "drizzle/enforce-delete-with-where": [
        "error",
        { drizzleObjectName: ["db", "ctx.db"] },
      ],
      "drizzle/enforce-update-with-where": [
        "error",
        { drizzleObjectName: ["db", "ctx.db"] },
      ],
{% endif %}
    },
  },
  {
    linterOptions: {
      reportUnusedDisableDirectives: true,
    },
    languageOptions: {
      parserOptions: {
        projectService: true,
      },
    },
  },
);
"""


def install(ctx: InstallerContext) -> None:
    with_drizzle = ctx.uses(Feature.DRIZZLE)

    deps = [
        "eslint",
        "eslint-config-next",
        "typescript-eslint",
        "@eslint/eslintrc",
        "prettier",
    ]
    if with_drizzle:
        deps.append("eslint-plugin-drizzle")
    add_package_dependency(ctx.project_dir, deps, dev_mode=True)

    add_package_script(
        ctx.project_dir,
        {
            "lint": "next lint",
            "lint:fix": "next lint --fix",
            "check": "next lint && tsc --noEmit",
            "typecheck": "tsc --noEmit",
            **FORMAT_SCRIPTS,
        },
    )

    content = ctx.renderer().render_string(
        ESLINT_CONFIG_TEMPLATE,
        ctx.template_context(with_drizzle=with_drizzle),
    )
    write_file(ctx.dest("eslint.config.js"), content)
