"""create-t3-fire configuration.

Typed configuration for one scaffolding run.  Settings use a Pydantic v2
model so they are validated at construction time and can be read from
environment variables without boiler-plate.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from t3fire.installers.models import DatabaseProvider
from t3fire.installers.resolution import parse_provider
from t3fire.utils import parse_name_and_path

DEFAULT_APP_NAME = "my-t3-fire-app"

# npm package name rules, with an optional @scope/ prefix.
_APP_NAME_PATTERN = re.compile(
    r"^(?:@[a-z0-9-*~][a-z0-9-*._~]*/)?[a-z0-9-~][a-z0-9-._~]*$"
)


def validate_app_name(raw: str) -> str | None:
    """Return an error message if *raw* is not a usable app name, else ``None``.

    Only the package-name part is checked; leading path segments such as
    ``apps/`` are directories and may contain anything.
    """
    parts = raw.strip().replace("\\", "/").rstrip("/").split("/")
    if parts[-1] == ".":
        return None

    scope_index = next(
        (i for i, part in enumerate(parts) if part.startswith("@")), None
    )
    name = "/".join(parts[scope_index:]) if scope_index is not None else parts[-1]
    if _APP_NAME_PATTERN.match(name):
        return None
    return "App name must consist of only lowercase alphanumeric characters, '-', and '_'"


class ScaffoldConfig(BaseModel):
    """Settings for one ``create-t3-fire`` run.

    Instances are created once by the CLI (or by ``from_env``) and handed to
    ``Pipeline``.  Feature names are kept as strings here and resolved by the
    pipeline, so an unknown name fails before any file is written.
    """

    app_name: str = Field(default=DEFAULT_APP_NAME)
    packages: list[str] = Field(default_factory=list)
    database_provider: DatabaseProvider = Field(default=DatabaseProvider.SQLITE)
    app_router: bool = Field(default=False)
    template_root: Path | None = Field(
        default=None, description="Template tree; defaults to the one shipped with the package"
    )
    output_dir: Path = Field(default=Path("."))
    configure_firebase: bool = Field(
        default=True, description="Offer to collect Firebase credentials after install"
    )

    @field_validator("app_name")
    @classmethod
    def _check_app_name(cls, value: str) -> str:
        value = value.strip()
        error = validate_app_name(value)
        if error:
            raise ValueError(error)
        return value

    @field_validator("database_provider", mode="before")
    @classmethod
    def _coerce_provider(cls, value: Any) -> DatabaseProvider:
        # Unknown names raise UnknownProviderError, which pydantic lets through.
        return parse_provider(value)

    @field_validator("packages", mode="before")
    @classmethod
    def _split_packages(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [p.strip() for p in value.split(",") if p.strip()]
        return value

    # ------------------------------------------------------------------
    # Derived names and paths
    # ------------------------------------------------------------------

    @property
    def scoped_app_name(self) -> str:
        """Name written to ``package.json``; may include ``@scope/``."""
        return parse_name_and_path(self.app_name, cwd=self.output_dir)[0]

    @property
    def app_dir(self) -> str:
        return parse_name_and_path(self.app_name, cwd=self.output_dir)[1]

    @property
    def project_dir(self) -> Path:
        """Directory the project is generated into."""
        return self.output_dir / self.app_dir

    @property
    def project_name(self) -> str:
        """Directory-safe project name (used for databases and containers)."""
        return self.project_dir.resolve().name

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            T3F_APP_NAME, T3F_PACKAGES (comma-separated), T3F_DB_PROVIDER,
            T3F_APP_ROUTER, T3F_TEMPLATE_ROOT, T3F_OUTPUT_DIR,
            T3F_CONFIGURE_FIREBASE.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("T3F_APP_NAME"):
            kwargs["app_name"] = os.environ["T3F_APP_NAME"]
        if os.environ.get("T3F_PACKAGES"):
            kwargs["packages"] = os.environ["T3F_PACKAGES"]
        if os.environ.get("T3F_DB_PROVIDER"):
            kwargs["database_provider"] = os.environ["T3F_DB_PROVIDER"]
        if os.environ.get("T3F_APP_ROUTER"):
            kwargs["app_router"] = _env_flag(os.environ["T3F_APP_ROUTER"])
        if os.environ.get("T3F_TEMPLATE_ROOT"):
            kwargs["template_root"] = Path(os.environ["T3F_TEMPLATE_ROOT"])
        if os.environ.get("T3F_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["T3F_OUTPUT_DIR"])
        if os.environ.get("T3F_CONFIGURE_FIREBASE"):
            kwargs["configure_firebase"] = _env_flag(os.environ["T3F_CONFIGURE_FIREBASE"])
        return cls(**kwargs)


def _env_flag(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}
