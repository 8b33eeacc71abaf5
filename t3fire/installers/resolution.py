"""Feature resolution: raw selection + provider -> ``InstallPlan``.

The rules are plain data so they can be read (and tested) at a glance:

* ``IMPLIES`` -- an in-use feature pulls in other features.
* ``PROVIDER_IMPLIES`` -- the active provider pulls in features.
* ``PROVIDER_EXCLUDES`` -- the active provider switches features off, even
  when they were selected explicitly.
* ``ALWAYS`` -- features that are in use on every run.

Excluded features never contribute implications of their own.
"""

from __future__ import annotations

from collections.abc import Iterable

from t3fire.errors import UnknownFeatureError, UnknownProviderError

from .models import DatabaseProvider, Feature, InstallPlan


IMPLIES: dict[Feature, frozenset[Feature]] = {
    Feature.FIRESTORE: frozenset({Feature.FIREBASE_AUTH, Feature.FIREBASE}),
    Feature.FIREBASE_AUTH: frozenset({Feature.FIREBASE}),
}

PROVIDER_IMPLIES: dict[DatabaseProvider, frozenset[Feature]] = {
    DatabaseProvider.FIREBASE: frozenset(
        {Feature.FIRESTORE, Feature.FIREBASE_AUTH, Feature.FIREBASE}
    ),
    DatabaseProvider.MYSQL: frozenset({Feature.DB_CONTAINER}),
    DatabaseProvider.POSTGRES: frozenset({Feature.DB_CONTAINER}),
}

PROVIDER_EXCLUDES: dict[DatabaseProvider, frozenset[Feature]] = {
    DatabaseProvider.FIREBASE: frozenset(
        {Feature.NEXT_AUTH, Feature.PRISMA, Feature.DRIZZLE}
    ),
}

ALWAYS: frozenset[Feature] = frozenset({Feature.ENV_VARIABLES})


def parse_selection(names: Iterable[Feature | str]) -> frozenset[Feature]:
    """Coerce feature names to ``Feature`` members.

    Raises:
        UnknownFeatureError: For any name that is not in the catalog.
    """
    selected: set[Feature] = set()
    for name in names:
        if isinstance(name, Feature):
            selected.add(name)
            continue
        try:
            selected.add(Feature(str(name).strip()))
        except ValueError:
            raise UnknownFeatureError(str(name)) from None
    return frozenset(selected)


def parse_provider(name: DatabaseProvider | str) -> DatabaseProvider:
    if isinstance(name, DatabaseProvider):
        return name
    try:
        return DatabaseProvider(str(name).strip().lower())
    except ValueError:
        raise UnknownProviderError(str(name)) from None


def resolve(
    selection: Iterable[Feature | str],
    provider: DatabaseProvider | str,
) -> InstallPlan:
    """Expand a raw selection into a complete, conflict-free ``InstallPlan``.

    Deterministic and pure.  Unknown names fail here, before any file is
    written.
    """
    selected = parse_selection(selection)
    provider = parse_provider(provider)
    excluded = PROVIDER_EXCLUDES.get(provider, frozenset())

    pending = set(selected | PROVIDER_IMPLIES.get(provider, frozenset()) | ALWAYS) - excluded
    in_use: set[Feature] = set()
    while pending:
        feature = pending.pop()
        in_use.add(feature)
        pending |= IMPLIES.get(feature, frozenset()) - excluded - in_use

    return InstallPlan(in_use)
