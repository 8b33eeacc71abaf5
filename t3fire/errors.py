"""Exception hierarchy for create-t3-fire.

Anything that would leave the target project in an ambiguous state is raised
as a ``T3FireError`` subclass and propagates up to the CLI, which exits
non-zero.  Missing optional template assets are never errors.
"""

from __future__ import annotations

from pathlib import Path


class T3FireError(Exception):
    """Base class for every error raised by the scaffolder."""


class UnknownFeatureError(T3FireError):
    """Raised when a selection names a feature that is not in the catalog."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown feature: {name!r}")


class UnknownProviderError(T3FireError):
    """Raised when a database provider name is not recognised."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown database provider: {name!r}")


class MergeTargetError(T3FireError):
    """Raised when an existing JSON document cannot be merged into."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"Cannot merge into {self.path}: {reason}")


class ProjectDirectoryError(T3FireError):
    """Raised when the target project directory does not exist."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Project directory does not exist: {self.path}")


class InstallError(T3FireError):
    """Raised when an installer fails.  Files written before the failure stay."""

    def __init__(self, feature: str, message: str) -> None:
        self.feature = feature
        super().__init__(f"Installer {feature!r} failed: {message}")


class ConfigValidationError(T3FireError):
    """Raised when pasted or typed Firebase configuration is invalid."""
