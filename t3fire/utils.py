"""Shared utility functions for create-t3-fire.

Provides JSON I/O, file-system helpers, app-name parsing, and Rich-based
console reporting.  Every function that touches the file system creates
missing parent directories rather than failing.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.rule import Rule
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def parse_name_and_path(raw: str, cwd: Path | None = None) -> tuple[str, str]:
    """Split a user-supplied app name into ``(scoped_app_name, app_dir)``.

    Scope segments (``@scope``) stay in the package name but never become
    directories.

    Examples::

        parse_name_and_path("my-app")        -> ("my-app", "my-app")
        parse_name_and_path("@acme/my-app")  -> ("@acme/my-app", "my-app")
        parse_name_and_path("apps/my-app")   -> ("my-app", "apps/my-app")
        parse_name_and_path("apps/@acme/x")  -> ("@acme/x", "apps/x")
        parse_name_and_path(".")             -> (<cwd name>, ".")
    """
    parts = raw.strip().replace("\\", "/").rstrip("/").split("/")
    app_name = parts[-1] or "."
    if app_name == ".":
        app_name = (cwd or Path.cwd()).resolve().name

    scope_index = next(
        (i for i, part in enumerate(parts) if part.startswith("@")), None
    )
    if scope_index is not None:
        app_name = "/".join(parts[scope_index:])

    app_dir = "/".join(p for p in parts if not p.startswith("@")) or "."
    return (app_name, app_dir)


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> Path:
    """Save data as pretty-printed JSON with a trailing newline."""
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(data, indent=2, ensure_ascii=False)
    file_path.write_text(content + "\n", encoding="utf-8")
    return file_path


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist."""
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path.resolve()


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_step_header(title: str, color: str = "bright_cyan") -> None:
    """Print a full-width rule announcing a scaffolding step."""
    console.print()
    console.print(Rule(f"[bold {color}] {title} [/bold {color}]", style=color))
    console.print()


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
