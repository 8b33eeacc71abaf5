"""create-t3-fire pipeline orchestrator.

Runs one scaffolding pass:

1. RESOLVE   -- Expand the selected packages into a complete install plan.
2. PREPARE   -- Create the project directory and copy the base template.
3. INSTALL   -- Run every in-use installer in catalog order.
4. CONFIGURE -- Optionally collect Firebase credentials and write them.
5. SUMMARY   -- Print what was installed and the next steps.

Usage::

    create-t3-fire my-app --packages firestore,tailwind,trpc --db-provider firebase
    python -m t3fire @acme/web --packages nextAuth,prisma --app-router
"""

from __future__ import annotations

import asyncio
import os
import sys
from pathlib import Path
from typing import Any, NoReturn

from pydantic import ValidationError
from rich.panel import Panel

from t3fire.config import DEFAULT_APP_NAME, ScaffoldConfig
from t3fire.errors import T3FireError
from t3fire.helpers.firebase_config import collect_firebase_config, write_firebase_config
from t3fire.installers import AVAILABLE_PACKAGES, DatabaseProvider, Feature, InstallerContext, resolve
from t3fire.scaffolder import ProjectScaffolder
from t3fire.scaffolder.templates import DEFAULT_TEMPLATE_ROOT
from t3fire.utils import (
    console,
    ensure_dir,
    print_error,
    print_step_header,
    print_success,
    print_summary_table,
    print_warning,
)


def detect_package_manager() -> str:
    """Guess the package manager that launched us from ``npm_config_user_agent``."""
    user_agent = os.environ.get("npm_config_user_agent", "")
    for manager in ("pnpm", "yarn", "bun"):
        if user_agent.startswith(manager):
            return manager
    return "npm"


# ---------------------------------------------------------------------------
# Pipeline Orchestrator
# ---------------------------------------------------------------------------


class Pipeline:
    """Drives one scaffolding run from configuration to next steps.

    Attributes:
        config: Settings for the run.
        interactive: Whether prompts may be shown.  Defaults to whether
            stdin is a terminal.
        state: Accumulates the results of each step.
    """

    def __init__(self, config: ScaffoldConfig, interactive: bool | None = None) -> None:
        self.config = config
        self.interactive = sys.stdin.isatty() if interactive is None else interactive
        self.state: dict[str, Any] = {"success": False}

    @property
    def template_root(self) -> Path:
        return self.config.template_root or DEFAULT_TEMPLATE_ROOT

    async def run(self) -> dict[str, Any]:
        """Execute every step.

        Returns:
            The final state dictionary with ``project_dir``, ``plan``,
            ``installed`` and a top-level ``success`` boolean.

        Raises:
            T3FireError: Resolution, merge or installer failures.
            OSError: File-system failures, unchanged.
        """
        config = self.config
        console.print(
            Panel(
                f"[bold bright_cyan]create-t3-fire[/bold bright_cyan]\n"
                f"App      : {config.scoped_app_name}\n"
                f"Directory: {config.project_dir}\n"
                f"Database : {config.database_provider.value}\n"
                f"Router   : {'app' if config.app_router else 'pages'}",
                title="[bold]Scaffold[/bold]",
                border_style="bright_cyan",
            )
        )

        # Resolution fails on unknown names before anything touches the disk.
        print_step_header("Resolving packages")
        plan = resolve(config.packages, config.database_provider)
        self.state["plan"] = plan
        console.print(
            "  In use: " + ", ".join(entry.label for entry in plan.values() if entry.in_use)
        )

        print_step_header("Installing")
        project_dir = ensure_dir(config.project_dir)
        self.state["project_dir"] = project_dir
        context = InstallerContext.create(
            project_dir=project_dir,
            template_root=self.template_root,
            provider=config.database_provider,
            plan=plan,
            app_router=config.app_router,
            project_name=config.project_name,
            scoped_app_name=config.scoped_app_name,
        )
        scaffolder = ProjectScaffolder(context)
        await scaffolder.prepare()
        self.state["installed"] = await scaffolder.install()

        if plan.in_use(Feature.FIREBASE) and config.configure_firebase and self.interactive:
            print_step_header("Firebase configuration", color="yellow")
            client, admin = await asyncio.to_thread(collect_firebase_config)
            self.state["firebase_files"] = await asyncio.to_thread(
                write_firebase_config, project_dir, client, admin, context.renderer()
            )
        elif plan.in_use(Feature.FIREBASE) and config.configure_firebase:
            print_warning(
                "Skipping Firebase configuration in a non-interactive run. "
                "Fill in src/lib/firebase.ts and .env by hand."
            )

        self._print_summary(context)
        self.state["success"] = True
        return self.state

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def next_steps(self, context: InstallerContext) -> list[str]:
        manager = detect_package_manager()
        run = "npm run" if manager == "npm" else manager

        steps: list[str] = []
        if self.config.app_dir != ".":
            steps.append(f"cd {self.config.app_dir}")
        steps.append(f"{manager} install")
        if context.uses(Feature.DB_CONTAINER):
            steps.append("./start-database.sh")
        if context.uses(Feature.PRISMA) or context.uses(Feature.DRIZZLE):
            steps.append(f"{run} db:push")
        if context.uses(Feature.FIREBASE):
            steps.append("npx firebase login")
            if context.provider is DatabaseProvider.FIREBASE:
                steps.append(f"{run} firebase:emulators")
        steps.append(f"{run} dev")
        return steps

    def _print_summary(self, context: InstallerContext) -> None:
        installed: list[Feature] = self.state.get("installed", [])
        print_summary_table(
            {
                "Project": str(context.project_dir),
                "Package name": context.scoped_app_name,
                "Database": context.provider.value,
                "Router": "app" if context.app_router else "pages",
                "Installed": ", ".join(f.value for f in installed) or "(none)",
            },
            title="Scaffold Summary",
        )
        print_success(f"Created {context.scoped_app_name}.")
        console.print("[bold]Next steps:[/bold]")
        for step in self.next_steps(context):
            console.print(f"  {step}")


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``create-t3-fire`` and ``python -m t3fire``.

    Flag defaults come from ``T3F_*`` environment variables (see
    ``ScaffoldConfig.from_env``); explicit flags win.
    """
    import argparse

    try:
        defaults = ScaffoldConfig.from_env()
    except (ValidationError, T3FireError) as exc:
        _exit_with(exc)

    parser = argparse.ArgumentParser(
        prog="create-t3-fire",
        description="Scaffold a T3 app with optional Firebase support",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-t3-fire my-app --packages nextAuth,prisma,tailwind,trpc\n"
            "  create-t3-fire my-app --packages firestore,tailwind --db-provider firebase\n"
            "  create-t3-fire @acme/web --app-router\n"
            f"\nPackages: {', '.join(AVAILABLE_PACKAGES)}\n"
        ),
    )

    parser.add_argument(
        "name",
        nargs="?",
        default=defaults.app_name,
        help=f"App name, optionally scoped or prefixed with a path (default: {DEFAULT_APP_NAME})",
    )
    parser.add_argument(
        "--packages",
        default=",".join(defaults.packages),
        help="Comma-separated packages to install",
    )
    parser.add_argument(
        "--db-provider",
        default=defaults.database_provider.value,
        help="Database provider: " + ", ".join(p.value for p in DatabaseProvider),
    )
    router = parser.add_mutually_exclusive_group()
    router.add_argument(
        "--app-router",
        dest="app_router",
        action="store_true",
        help="Generate for the Next.js app router",
    )
    router.add_argument(
        "--pages-router",
        dest="app_router",
        action="store_false",
        help="Generate for the Next.js pages router (default)",
    )
    parser.set_defaults(app_router=defaults.app_router, configure_firebase=defaults.configure_firebase)
    parser.add_argument(
        "--template-root",
        default=defaults.template_root,
        help="Use a different template tree",
    )
    parser.add_argument(
        "--no-firebase-config",
        dest="configure_firebase",
        action="store_false",
        help="Do not prompt for Firebase credentials",
    )
    parser.add_argument(
        "--output", "-o",
        default=str(defaults.output_dir),
        help="Directory the app is created in (default: .)",
    )

    args = parser.parse_args(argv)

    try:
        config = ScaffoldConfig(
            app_name=args.name,
            packages=args.packages,
            database_provider=args.db_provider,
            app_router=args.app_router,
            template_root=Path(args.template_root) if args.template_root else None,
            output_dir=Path(args.output),
            configure_firebase=args.configure_firebase,
        )
        asyncio.run(Pipeline(config).run())
    except (ValidationError, T3FireError, OSError) as exc:
        _exit_with(exc)


def _exit_with(exc: Exception) -> NoReturn:
    if isinstance(exc, ValidationError):
        message = "; ".join(error["msg"] for error in exc.errors())
    else:
        message = str(exc)
    print_error(f"Error: {message}")
    sys.exit(1)


if __name__ == "__main__":
    main()
