"""create-t3-fire installers -- one module per catalog feature.

Each module exposes ``install(ctx)``.  ``installer_for`` is the only way the
scaffolder reaches an installer, so every catalog feature must be mapped
here.

Quick usage::

    from t3fire.installers import resolve

    plan = resolve(["firestore", "tailwind"], "firebase")
    for feature, entry in plan.items():
        if entry.in_use:
            entry.installer(ctx)
"""

from __future__ import annotations

from typing import Callable

from t3fire.installers import (
    biome,
    db_container,
    drizzle,
    env_vars,
    eslint,
    firebase,
    firebase_auth,
    firestore,
    next_auth,
    prisma,
    tailwind,
    trpc,
)
from t3fire.installers.models import (
    DatabaseProvider,
    Feature,
    InstallerContext,
    InstallPlan,
    PlanEntry,
    variant,
)
from t3fire.installers.resolution import parse_provider, parse_selection, resolve

_INSTALLERS: dict[Feature, Callable[[InstallerContext], None]] = {
    Feature.NEXT_AUTH: next_auth.install,
    Feature.FIREBASE_AUTH: firebase_auth.install,
    Feature.PRISMA: prisma.install,
    Feature.DRIZZLE: drizzle.install,
    Feature.FIRESTORE: firestore.install,
    Feature.FIREBASE: firebase.install,
    Feature.TAILWIND: tailwind.install,
    Feature.TRPC: trpc.install,
    Feature.ENV_VARIABLES: env_vars.install,
    Feature.ESLINT: eslint.install,
    Feature.BIOME: biome.install,
    Feature.DB_CONTAINER: db_container.install,
}

AVAILABLE_PACKAGES: list[str] = [feature.value for feature in Feature]


def installer_for(feature: Feature | str) -> Callable[[InstallerContext], None]:
    """Return the installer for *feature*."""
    return _INSTALLERS[Feature(feature)]


__all__ = [
    "AVAILABLE_PACKAGES",
    "DatabaseProvider",
    "Feature",
    "InstallPlan",
    "InstallerContext",
    "PlanEntry",
    "installer_for",
    "parse_provider",
    "parse_selection",
    "resolve",
    "variant",
]
