"""tRPC installer.

The tRPC core and the example router depend on which auth and data features
are in use, so this installer consults NEXT_AUTH, FIREBASE_AUTH, PRISMA,
DRIZZLE and FIRESTORE.  Router-specific files all come from the same variant.
"""

from __future__ import annotations

from t3fire.scaffolder.primitives import add_package_dependency, copy_if_exists

from .models import Feature, InstallerContext


def _core_name(ctx: InstallerContext) -> str:
    with_db = ctx.uses(Feature.PRISMA) or ctx.uses(Feature.DRIZZLE)
    if ctx.uses(Feature.FIRESTORE):
        return "firebase"
    if ctx.uses(Feature.NEXT_AUTH):
        return "with-auth-db" if with_db else "with-auth"
    # Firebase Auth verifies ID tokens through the admin SDK, so its core
    # is the firebase one even without Firestore.
    if ctx.uses(Feature.FIREBASE_AUTH):
        return "firebase-db" if with_db else "firebase"
    return "with-db" if with_db else "base"


def _router_name(ctx: InstallerContext) -> str:
    if ctx.uses(Feature.FIRESTORE):
        return "firebase"
    parts = ["with"]
    if ctx.uses(Feature.NEXT_AUTH):
        parts.append("auth")
    if ctx.uses(Feature.PRISMA):
        parts.append("prisma")
    elif ctx.uses(Feature.DRIZZLE):
        parts.append("drizzle")
    return "-".join(parts) if len(parts) > 1 else "base"


def install(ctx: InstallerContext) -> None:
    deps = [
        "@tanstack/react-query",
        "superjson",
        "@trpc/server",
        "@trpc/client",
        "@trpc/react-query",
    ]
    if ctx.app_router:
        deps.append("server-only")
    else:
        deps.append("@trpc/next")
    add_package_dependency(ctx.project_dir, deps, dev_mode=False)

    if ctx.app_router:
        copy_if_exists(
            ctx.extras("src/app/api/trpc/[trpc]/route.ts"),
            ctx.dest("src/app/api/trpc/[trpc]/route.ts"),
        )
        copy_if_exists(ctx.extras("src/trpc"), ctx.dest("src/trpc"))
    else:
        copy_if_exists(
            ctx.extras("src/pages/api/trpc/[trpc].ts"),
            ctx.dest("src/pages/api/trpc/[trpc].ts"),
        )
        copy_if_exists(ctx.extras("src/utils/api.ts"), ctx.dest("src/utils/api.ts"))

    copy_if_exists(
        ctx.extras("src/server/api/trpc", ctx.variant(f"{_core_name(ctx)}.ts")),
        ctx.dest("src/server/api/trpc.ts"),
    )
    copy_if_exists(ctx.extras("src/server/api/root.ts"), ctx.dest("src/server/api/root.ts"))
    copy_if_exists(
        ctx.extras("src/server/api/routers/post", f"{_router_name(ctx)}.ts"),
        ctx.dest("src/server/api/routers/post.ts"),
    )
