"""Data model for feature resolution and installation.

Defines the closed feature catalog, the database providers, the resolved
``InstallPlan`` and the immutable ``InstallerContext`` handed to every
installer.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable

from pydantic import BaseModel, ConfigDict, Field, InstanceOf

from t3fire.errors import ProjectDirectoryError
from t3fire.scaffolder.templates import TemplateRenderer

if TYPE_CHECKING:
    Installer = Callable[["InstallerContext"], None]


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Feature(str, Enum):
    """A package that can be installed into a generated project.

    Declaration order is the order installers run in.
    """
    NEXT_AUTH = "nextAuth"
    FIREBASE_AUTH = "firebaseAuth"
    PRISMA = "prisma"
    DRIZZLE = "drizzle"
    FIRESTORE = "firestore"
    FIREBASE = "firebase"
    TAILWIND = "tailwind"
    TRPC = "trpc"
    ENV_VARIABLES = "envVariables"
    ESLINT = "eslint"
    BIOME = "biome"
    DB_CONTAINER = "dbContainer"


class DatabaseProvider(str, Enum):
    """Backend/persistence platform.  Exactly one is active per run."""
    MYSQL = "mysql"
    POSTGRES = "postgres"
    SQLITE = "sqlite"
    PLANETSCALE = "planetscale"
    FIREBASE = "firebase"


FEATURE_LABELS: dict[Feature, str] = {
    Feature.NEXT_AUTH: "NextAuth.js",
    Feature.FIREBASE_AUTH: "Firebase Auth",
    Feature.PRISMA: "Prisma",
    Feature.DRIZZLE: "Drizzle",
    Feature.FIRESTORE: "Firestore",
    Feature.FIREBASE: "Firebase",
    Feature.TAILWIND: "Tailwind CSS",
    Feature.TRPC: "tRPC",
    Feature.ENV_VARIABLES: "Environment variables",
    Feature.ESLINT: "ESLint + Prettier",
    Feature.BIOME: "Biome",
    Feature.DB_CONTAINER: "Database container script",
}


# ---------------------------------------------------------------------------
# Install plan
# ---------------------------------------------------------------------------

class PlanEntry(BaseModel):
    """Resolved state of one catalog feature."""

    model_config = ConfigDict(frozen=True)

    feature: Feature
    in_use: bool = False

    @property
    def label(self) -> str:
        return FEATURE_LABELS[self.feature]

    @property
    def installer(self) -> Installer:
        """The installer for this entry's feature (tagged dispatch)."""
        from t3fire.installers import installer_for

        return installer_for(self.feature)


class InstallPlan(Mapping[Feature, PlanEntry]):
    """Total, read-only mapping of every catalog feature to its ``PlanEntry``.

    Iteration follows catalog declaration order, never selection order.
    """

    def __init__(self, in_use: Iterable[Feature] = ()) -> None:
        active = frozenset(in_use)
        self._entries: Mapping[Feature, PlanEntry] = MappingProxyType(
            {f: PlanEntry(feature=f, in_use=f in active) for f in Feature}
        )

    def __getitem__(self, feature: Feature) -> PlanEntry:
        try:
            return self._entries[Feature(feature)]
        except ValueError:
            raise KeyError(feature) from None

    def __iter__(self) -> Iterator[Feature]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, InstallPlan):
            return self.active() == other.active()
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self.active()))

    def __repr__(self) -> str:
        names = ", ".join(f.value for f in self.active())
        return f"InstallPlan([{names}])"

    def in_use(self, feature: Feature) -> bool:
        return self[feature].in_use

    def active(self) -> list[Feature]:
        """In-use features, in catalog order."""
        return [f for f, entry in self._entries.items() if entry.in_use]

    def as_dict(self) -> dict[str, bool]:
        """Return a plain ``{feature_value: in_use}`` mapping."""
        return {f.value: entry.in_use for f, entry in self._entries.items()}


# ---------------------------------------------------------------------------
# Installer context
# ---------------------------------------------------------------------------

def variant(filename: str, app_router: bool) -> str:
    """Return the router-variant name of a template file.

    ``variant("db.ts", True)`` -> ``"db-app.ts"``; pages-router projects use
    the bare name.
    """
    if not app_router:
        return filename
    stem, dot, suffix = filename.rpartition(".")
    if not dot:
        return f"{filename}-app"
    return f"{stem}-app.{suffix}"


class InstallerContext(BaseModel):
    """Everything an installer may read.

    Built once per run after resolution and shared by every installer.  The
    only thing installers mutate is the project directory on disk.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    project_dir: Path
    template_root: Path
    provider: DatabaseProvider
    plan: InstanceOf[InstallPlan]
    app_router: bool = False
    project_name: str = Field(..., description="Directory-safe project name")
    scoped_app_name: str = Field(..., description="package.json name, may include @scope/")

    @classmethod
    def create(cls, **kwargs) -> "InstallerContext":
        """Validate that the project directory exists, then build the context."""
        project_dir = Path(kwargs["project_dir"])
        if not project_dir.is_dir():
            raise ProjectDirectoryError(project_dir)
        return cls(**kwargs)

    def uses(self, feature: Feature) -> bool:
        return self.plan.in_use(feature)

    def extras(self, *parts: str) -> Path:
        """Path under the ``extras`` template tree."""
        return self.template_root.joinpath("extras", *parts)

    def dest(self, *parts: str) -> Path:
        """Path inside the target project."""
        return self.project_dir.joinpath(*parts)

    def variant(self, filename: str) -> str:
        return variant(filename, self.app_router)

    def renderer(self) -> TemplateRenderer:
        return TemplateRenderer(self.template_root)

    def template_context(self, **extra: Any) -> dict[str, Any]:
        """Base Jinja2 context shared by every rendered template."""
        return {
            "project_name": self.project_name,
            "scoped_app_name": self.scoped_app_name,
            "provider": self.provider.value,
            "app_router": self.app_router,
            "packages": self.plan.as_dict(),
            **extra,
        }
