"""Firestore installer.

Packages are added by the Firebase installer; this one only lays down the
Firestore bindings.  ``src/server/db.ts`` and ``src/server/collections.ts``
are imported by generated code and must not move.
"""

from __future__ import annotations

from t3fire.scaffolder.primitives import copy_if_exists

from .models import InstallerContext


def install(ctx: InstallerContext) -> None:
    assets = [
        (ctx.extras("src/server/db", ctx.variant("firestore.ts")), ctx.dest("src/server/db.ts")),
        (ctx.extras("src/types/firestore.ts"), ctx.dest("src/types/firestore.ts")),
        (ctx.extras("src/lib/firestore/utils.ts"), ctx.dest("src/lib/firestore-utils.ts")),
        (ctx.extras("src/server/db/collections.ts"), ctx.dest("src/server/collections.ts")),
        (ctx.extras("config/firestore.rules"), ctx.dest("firestore.rules")),
        (ctx.extras("config/firestore.indexes.json"), ctx.dest("firestore.indexes.json")),
    ]
    for src, dest in assets:
        copy_if_exists(src, dest)
