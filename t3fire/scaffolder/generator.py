"""Main scaffolding orchestrator.

Takes a resolved ``InstallerContext`` and materializes every in-use feature
into the project directory, one installer at a time in catalog order.

There is no rollback: if an installer fails, files written by earlier
installers stay on disk.  Every primitive is idempotent, so re-running the
whole scaffold after fixing the cause is always safe.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING

from t3fire.errors import InstallError, T3FireError
from t3fire.utils import console

from .primitives import MANIFEST_NAME, copy_if_exists, merge_base_manifest, merge_json

if TYPE_CHECKING:
    from t3fire.installers.models import Feature, InstallerContext


class ProjectScaffolder:
    """Runs the install plan held by an ``InstallerContext``.

    Usage::

        scaffolder = ProjectScaffolder(ctx)
        await scaffolder.prepare()
        installed = await scaffolder.install()
    """

    def __init__(self, context: InstallerContext) -> None:
        self.context = context

    # -- Public API --------------------------------------------------------

    async def prepare(self) -> Path:
        """Copy the base template (if shipped) and stamp the package name.

        The base ``package.json`` is merged underneath an existing manifest
        rather than copied over it.

        Returns the path to ``package.json``.
        """
        ctx = self.context
        base = ctx.template_root / "base"
        await asyncio.to_thread(
            copy_if_exists, base, ctx.project_dir, (MANIFEST_NAME,)
        )
        await asyncio.to_thread(
            merge_base_manifest, ctx.project_dir, base / MANIFEST_NAME
        )
        manifest = ctx.dest(MANIFEST_NAME)
        await asyncio.to_thread(merge_json, manifest, {"name": ctx.scoped_app_name})
        return manifest

    async def install(self) -> list[Feature]:
        """Invoke each in-use installer exactly once, in catalog order.

        Returns:
            The features that were installed.

        Raises:
            InstallError: When an installer fails with an unexpected error.
            T3FireError: Scaffolder errors (e.g. ``MergeTargetError``) are
                re-raised unchanged so the offending path is preserved.
        """
        installed: list[Feature] = []
        for feature, entry in self.context.plan.items():
            if not entry.in_use:
                continue

            console.print(f"  Installing [bold]{entry.label}[/bold]...")
            try:
                await asyncio.to_thread(entry.installer, self.context)
            except (T3FireError, OSError):
                raise
            except Exception as exc:
                raise InstallError(feature.value, str(exc)) from exc

            console.print(f"  [green]+[/green] {entry.label}")
            installed.append(feature)

        return installed
