"""NextAuth.js installer.

Consults PRISMA and DRIZZLE to pick the adapter and auth config.
"""

from __future__ import annotations

from t3fire.scaffolder.primitives import add_package_dependency, copy_if_exists

from .models import Feature, InstallerContext


def install(ctx: InstallerContext) -> None:
    using_prisma = ctx.uses(Feature.PRISMA)
    using_drizzle = ctx.uses(Feature.DRIZZLE)

    deps = ["next-auth"]
    if using_prisma:
        deps.append("@auth/prisma-adapter")
    if using_drizzle:
        deps.append("@auth/drizzle-adapter")
    add_package_dependency(ctx.project_dir, deps, dev_mode=False)

    if ctx.app_router:
        route_src = ctx.extras("src/app/api/auth/[...nextauth]/route.ts")
        route_dest = ctx.dest("src/app/api/auth/[...nextauth]/route.ts")
    else:
        route_src = ctx.extras("src/pages/api/auth/[...nextauth].ts")
        route_dest = ctx.dest("src/pages/api/auth/[...nextauth].ts")
    copy_if_exists(route_src, route_dest)

    if using_prisma:
        config_name = "with-prisma.ts"
    elif using_drizzle:
        config_name = "with-drizzle.ts"
    else:
        config_name = "base.ts"
    copy_if_exists(
        ctx.extras("src/server/auth/config", config_name),
        ctx.dest("src/server/auth/config.ts"),
    )
    copy_if_exists(
        ctx.extras("src/server/auth/index.ts"),
        ctx.dest("src/server/auth/index.ts"),
    )
