"""Firebase platform installer: SDK packages, CLI scripts and project files."""

from __future__ import annotations

from t3fire.scaffolder.primitives import (
    add_package_dependency,
    add_package_script,
    copy_if_exists,
    seed_json,
)

from .models import InstallerContext


def install(ctx: InstallerContext) -> None:
    add_package_dependency(ctx.project_dir, ["firebase", "firebase-admin"], dev_mode=False)
    add_package_dependency(ctx.project_dir, ["firebase-tools"], dev_mode=True)

    add_package_script(
        ctx.project_dir,
        {
            "firebase:deploy": "firebase deploy",
            "firebase:serve": "firebase serve",
            "firebase:emulators": "firebase emulators:start",
            "firebase:init": "firebase init",
        },
    )

    copy_if_exists(ctx.extras("config/firebase.json"), ctx.dest("firebase.json"))
    # The project binding and the client module may already carry real
    # credentials from an earlier run.
    seed_json(ctx.dest(".firebaserc"), ctx.extras("config/firebaserc"))

    copy_if_exists(
        ctx.extras("src/server/firebase", ctx.variant("firebase-admin.ts")),
        ctx.dest("src/server/firebase-admin.ts"),
    )
    copy_if_exists(
        ctx.extras("src/lib/firebase", ctx.variant("firebase-client.ts")),
        ctx.dest("src/lib/firebase.ts"),
        overwrite=False,
    )
