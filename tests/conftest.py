"""Shared pytest fixtures for the create-t3-fire test suite.

Provides reusable fixtures for:
- Temporary project directories
- A small hand-built template tree
- InstallerContext construction against either template tree
- File-tree snapshots for idempotence checks
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from t3fire.installers import InstallerContext, resolve
from t3fire.scaffolder.templates import DEFAULT_TEMPLATE_ROOT


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create *files* (relative path -> content) under *root*."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


def snapshot(root: Path) -> dict[str, bytes]:
    """Map every file under *root* to its bytes."""
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


def read_package_json(project_dir: Path) -> dict[str, Any]:
    return json.loads((project_dir / "package.json").read_text(encoding="utf-8"))


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Temporary directory for generated projects (auto-cleanup)."""
    project_dir = tmp_path / "test-project"
    project_dir.mkdir()
    yield project_dir


@pytest.fixture
def shipped_templates() -> Path:
    """The template tree distributed with the package."""
    return DEFAULT_TEMPLATE_ROOT


@pytest.fixture
def fake_template_root(tmp_path: Path) -> Path:
    """A minimal template tree with a pages/app pair of the same asset."""
    return write_tree(
        tmp_path / "templates",
        {
            "base/package.json": '{\n  "name": "placeholder",\n  "private": true\n}\n',
            "extras/src/server/db/firestore.ts": "// pages firestore\n",
            "extras/src/server/db/firestore-app.ts": "// app firestore\n",
            "extras/start-database/postgres.sh.j2": 'NAME="{{ project_name | slugify }}-postgres"\n',
        },
    )


@pytest.fixture
def empty_template_root(tmp_path: Path) -> Path:
    """A template root with no assets at all."""
    root = tmp_path / "empty-templates"
    root.mkdir()
    return root


# ---------------------------------------------------------------------------
# Installer contexts
# ---------------------------------------------------------------------------

@pytest.fixture
def make_context(tmp_project_dir: Path) -> Callable[..., InstallerContext]:
    """Factory building an ``InstallerContext`` for ``tmp_project_dir``.

    Defaults to the shipped templates, the sqlite provider and the pages
    router.
    """

    def _make(
        selection: list[str] | tuple[str, ...] = (),
        provider: str = "sqlite",
        app_router: bool = False,
        template_root: Path | None = None,
        project_name: str = "test-project",
        scoped_app_name: str | None = None,
    ) -> InstallerContext:
        plan = resolve(selection, provider)
        return InstallerContext.create(
            project_dir=tmp_project_dir,
            template_root=template_root or DEFAULT_TEMPLATE_ROOT,
            provider=provider,
            plan=plan,
            app_router=app_router,
            project_name=project_name,
            scoped_app_name=scoped_app_name or project_name,
        )

    return _make
