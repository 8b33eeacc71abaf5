"""Firebase Auth installer.

Every router-specific file is picked through ``ctx.variant`` so a run never
mixes app-router and pages-router sources.  Consults TRPC: the session route
handler is only needed when there is an API layer to authenticate.
"""

from __future__ import annotations

from t3fire.scaffolder.primitives import add_package_dependency, copy_if_exists

from .models import Feature, InstallerContext


def install(ctx: InstallerContext) -> None:
    add_package_dependency(
        ctx.project_dir,
        ["firebase", "firebase-admin", "cookies-next", "jsonwebtoken"],
        dev_mode=False,
    )
    add_package_dependency(ctx.project_dir, ["@types/jsonwebtoken"], dev_mode=True)

    copy_if_exists(
        ctx.extras("src/context", ctx.variant("AuthContext.tsx")),
        ctx.dest("src/context/AuthContext.tsx"),
    )
    copy_if_exists(
        ctx.extras("src/hooks/useAuth.ts"),
        ctx.dest("src/hooks/useAuth.ts"),
    )
    copy_if_exists(
        ctx.extras("src/server/auth", ctx.variant("firebase-auth.ts")),
        ctx.dest("src/server/auth.ts"),
    )

    if ctx.app_router:
        copy_if_exists(ctx.extras("src/middleware.ts"), ctx.dest("src/middleware.ts"))

    if ctx.uses(Feature.TRPC):
        session_src = ctx.extras("src/server/auth", ctx.variant("session-route.ts"))
        if ctx.app_router:
            copy_if_exists(session_src, ctx.dest("src/app/api/auth/session/route.ts"))
        else:
            copy_if_exists(session_src, ctx.dest("src/pages/api/auth/session.ts"))

    copy_if_exists(ctx.extras("src/components/auth"), ctx.dest("src/components/auth"))
