"""Drizzle installer.

Picks the database driver, config, schema and client for the active
provider.  Consults NEXT_AUTH for the auth tables.
"""

from __future__ import annotations

from t3fire.scaffolder.primitives import (
    add_package_dependency,
    add_package_script,
    copy_if_exists,
    render_if_exists,
)

from .models import DatabaseProvider, Feature, InstallerContext

_DRIVERS: dict[DatabaseProvider, str] = {
    DatabaseProvider.MYSQL: "mysql2",
    DatabaseProvider.POSTGRES: "postgres",
    DatabaseProvider.SQLITE: "@libsql/client",
    DatabaseProvider.PLANETSCALE: "@planetscale/database",
}

# Schema templates exist per SQL dialect; PlanetScale speaks MySQL.
_DIALECTS: dict[DatabaseProvider, str] = {
    DatabaseProvider.MYSQL: "mysql",
    DatabaseProvider.POSTGRES: "postgres",
    DatabaseProvider.SQLITE: "sqlite",
    DatabaseProvider.PLANETSCALE: "mysql",
}


def install(ctx: InstallerContext) -> None:
    provider = ctx.provider.value
    driver = _DRIVERS.get(ctx.provider)
    dialect = _DIALECTS.get(ctx.provider, "sqlite")

    add_package_dependency(ctx.project_dir, ["drizzle-kit"], dev_mode=True)
    add_package_dependency(
        ctx.project_dir,
        ["drizzle-orm", *([driver] if driver else [])],
        dev_mode=False,
    )

    add_package_script(
        ctx.project_dir,
        {
            "db:generate": "drizzle-kit generate",
            "db:migrate": "drizzle-kit migrate",
            "db:push": "drizzle-kit push",
            "db:studio": "drizzle-kit studio",
        },
    )

    copy_if_exists(
        ctx.extras("config/drizzle", f"{provider}.ts"),
        ctx.dest("drizzle.config.ts"),
    )

    render_if_exists(
        ctx.renderer(),
        ctx.extras("src/server/db/schema-drizzle", f"{dialect}.ts.j2"),
        ctx.dest("src/server/db/schema.ts"),
        ctx.template_context(with_auth=ctx.uses(Feature.NEXT_AUTH)),
    )
    copy_if_exists(
        ctx.extras("src/server/db/index-drizzle", f"{provider}.ts"),
        ctx.dest("src/server/db/index.ts"),
    )
