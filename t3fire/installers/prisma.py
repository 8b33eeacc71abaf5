"""Prisma installer.

The schema is a Jinja2 template rendered with the active provider so one
template serves every relational database.  Consults NEXT_AUTH for the auth
models.
"""

from __future__ import annotations

from t3fire.scaffolder.primitives import (
    add_package_dependency,
    add_package_script,
    copy_if_exists,
    render_if_exists,
)

from .models import DatabaseProvider, Feature, InstallerContext

# Prisma datasource names differ from ours for two providers.
_DATASOURCE_PROVIDERS: dict[DatabaseProvider, str] = {
    DatabaseProvider.MYSQL: "mysql",
    DatabaseProvider.POSTGRES: "postgresql",
    DatabaseProvider.SQLITE: "sqlite",
    DatabaseProvider.PLANETSCALE: "mysql",
}


def install(ctx: InstallerContext) -> None:
    planetscale = ctx.provider is DatabaseProvider.PLANETSCALE

    deps = ["@prisma/client"]
    if planetscale:
        deps += ["@prisma/adapter-planetscale", "@planetscale/database"]
    add_package_dependency(ctx.project_dir, deps, dev_mode=False)
    add_package_dependency(ctx.project_dir, ["prisma"], dev_mode=True)

    add_package_script(
        ctx.project_dir,
        {
            "postinstall": "prisma generate",
            "db:push": "prisma db push",
            "db:studio": "prisma studio",
            "db:generate": "prisma migrate dev",
            "db:migrate": "prisma migrate deploy",
        },
    )

    render_if_exists(
        ctx.renderer(),
        ctx.extras("prisma/schema.prisma.j2"),
        ctx.dest("prisma/schema.prisma"),
        ctx.template_context(
            datasource_provider=_DATASOURCE_PROVIDERS.get(ctx.provider, "sqlite"),
            relation_mode_prisma=planetscale,
            with_auth=ctx.uses(Feature.NEXT_AUTH),
        ),
    )

    client_name = "db-prisma-planetscale.ts" if planetscale else "db-prisma.ts"
    copy_if_exists(
        ctx.extras("src/server/db", client_name),
        ctx.dest("src/server/db.ts"),
    )
