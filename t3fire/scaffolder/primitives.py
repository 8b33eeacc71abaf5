"""Idempotent file-system mutations shared by every installer.

Each primitive converges: running it again with the same arguments leaves the
project exactly as the first run did.  A missing source template is the normal
steady state for optional assets and is never an error.  Corrupt JSON in a
merge target is (``MergeTargetError``), and ``OSError`` from the file system
always propagates.
"""

from __future__ import annotations

import json
import re
import shutil
import stat
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from t3fire.errors import MergeTargetError
from t3fire.utils import save_json

from .templates import TemplateRenderer
from .versions import DEFAULT_VERSION, DEPENDENCY_VERSION_MAP

MANIFEST_NAME = "package.json"
MANIFEST_TABLES = ("dependencies", "devDependencies", "scripts")


# ---------------------------------------------------------------------------
# Copy / render
# ---------------------------------------------------------------------------


def copy_if_exists(
    src: str | Path,
    dst: str | Path,
    exclude: Iterable[str] = (),
    overwrite: bool = True,
) -> bool:
    """Copy a file or directory tree from *src* to *dst*.

    Directory sources are merged into an existing destination directory.
    Names in *exclude* are skipped at every level of a directory copy.
    With ``overwrite=False`` an existing *dst* is left alone.

    Returns:
        ``True`` if something was copied, ``False`` if *src* does not exist
        or *dst* was kept.
    """
    src, dst = Path(src), Path(dst)
    exclude = tuple(exclude)
    if not src.exists():
        return False
    if not overwrite and dst.exists():
        return False

    dst.parent.mkdir(parents=True, exist_ok=True)
    if src.is_dir():
        shutil.copytree(
            src,
            dst,
            ignore=shutil.ignore_patterns(*exclude) if exclude else None,
            dirs_exist_ok=True,
            copy_function=shutil.copyfile,
        )
    else:
        shutil.copyfile(src, dst)
    return True


def render_if_exists(
    renderer: TemplateRenderer,
    src: str | Path,
    dst: str | Path,
    context: dict[str, Any],
) -> bool:
    """Render the Jinja2 template at *src* into *dst* if the template exists.

    *src* must live under the renderer's template root.
    """
    src = Path(src)
    if not src.is_file():
        return False
    renderer.render_to_file(renderer.template_name(src), dst, context)
    return True


def write_file(path: str | Path, content: str) -> Path:
    """Write *content* to *path*, creating parent directories."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(content, encoding="utf-8")
    return out


def make_executable(path: str | Path) -> None:
    """Set the executable bits on a file."""
    path = Path(path)
    current = path.stat().st_mode
    path.chmod(current | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


# ---------------------------------------------------------------------------
# JSON documents
# ---------------------------------------------------------------------------


def read_json_object(path: str | Path) -> dict[str, Any]:
    """Read a JSON object for merging.  Missing or blank files read as ``{}``.

    Raises:
        MergeTargetError: If the file holds invalid JSON or a non-object.
    """
    path = Path(path)
    if not path.exists():
        return {}

    raw = path.read_text(encoding="utf-8")
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MergeTargetError(
            path, f"invalid JSON ({exc.msg} at line {exc.lineno})"
        ) from exc
    if not isinstance(data, dict):
        raise MergeTargetError(path, "top-level value is not an object")
    return data


def merge_json(path: str | Path, patch: dict[str, Any]) -> dict[str, Any]:
    """Shallow-merge *patch* into the JSON object at *path* (patch keys win)."""
    data = read_json_object(path)
    data.update(patch)
    save_json(data, path)
    return data


def seed_json(path: str | Path, template: str | Path) -> dict[str, Any]:
    """Fill top-level keys missing from the JSON object at *path* from *template*.

    Existing keys win.  A missing template leaves *path* untouched.
    """
    defaults = read_json_object(template)
    data = read_json_object(path)
    if not defaults:
        return data
    seeded = {**defaults, **data}
    save_json(seeded, path)
    return seeded


# ---------------------------------------------------------------------------
# package.json
# ---------------------------------------------------------------------------


def read_manifest(project_dir: str | Path) -> dict[str, Any]:
    return read_json_object(Path(project_dir) / MANIFEST_NAME)


def write_manifest(project_dir: str | Path, manifest: dict[str, Any]) -> Path:
    return save_json(manifest, Path(project_dir) / MANIFEST_NAME)


def _manifest_table(manifest: dict[str, Any], name: str, path: Path) -> dict[str, Any]:
    table = manifest.get(name)
    if table is None:
        return {}
    if not isinstance(table, dict):
        raise MergeTargetError(path, f'"{name}" is not an object')
    return dict(table)


def add_package_dependency(
    project_dir: str | Path,
    dependencies: Iterable[str],
    dev_mode: bool = False,
) -> dict[str, str]:
    """Add packages to ``dependencies`` (or ``devDependencies``).

    Packages already listed keep their version.  New ones get the pinned
    version from ``DEPENDENCY_VERSION_MAP`` or ``"latest"``.  The table is
    written back sorted by name.

    Returns:
        The resulting dependency table.
    """
    path = Path(project_dir) / MANIFEST_NAME
    manifest = read_manifest(project_dir)
    table_name = "devDependencies" if dev_mode else "dependencies"
    table = _manifest_table(manifest, table_name, path)

    for name in dependencies:
        if name not in table:
            table[name] = DEPENDENCY_VERSION_MAP.get(name, DEFAULT_VERSION)

    manifest[table_name] = dict(sorted(table.items()))
    write_manifest(project_dir, manifest)
    return manifest[table_name]


def add_package_script(project_dir: str | Path, scripts: dict[str, str]) -> dict[str, str]:
    """Set ``scripts`` entries, replacing any existing command of the same name."""
    path = Path(project_dir) / MANIFEST_NAME
    manifest = read_manifest(project_dir)
    table = _manifest_table(manifest, "scripts", path)
    table.update(scripts)
    manifest["scripts"] = table
    write_manifest(project_dir, manifest)
    return table


def merge_base_manifest(project_dir: str | Path, template: str | Path) -> dict[str, Any]:
    """Lay the template ``package.json`` underneath the project's own.

    Keys the project already has win, and so do existing entries inside the
    ``dependencies``, ``devDependencies`` and ``scripts`` tables.  Template
    keys and table entries the project lacks are added; a missing template
    adds nothing.

    Returns:
        The merged manifest.
    """
    path = Path(project_dir) / MANIFEST_NAME
    base = read_json_object(template)
    manifest = read_manifest(project_dir)

    merged = dict(base)
    for key, value in manifest.items():
        if key in MANIFEST_TABLES and isinstance(base.get(key), dict):
            merged[key] = {**base[key], **_manifest_table(manifest, key, path)}
        else:
            merged[key] = value

    write_manifest(project_dir, merged)
    return merged


# ---------------------------------------------------------------------------
# Delimited env blocks
# ---------------------------------------------------------------------------


def _block_pattern(header: str) -> re.Pattern[str]:
    # The header must fill its whole line so "# Firebase" never matches
    # "# Firebase Admin SDK".  A block runs until the next comment line, a
    # blank line, or end of file, and takes its leading separator with it.
    # Lines may end in CRLF.
    return re.compile(
        r"(?:\r?\n)*^"
        + re.escape(header)
        + r"[ \t]*(?=\r?\n|\Z)[\s\S]*?(?=\r?\n#|\r?\n\r?\n|\Z)",
        re.MULTILINE,
    )


def merge_env_block(path: str | Path, header: str, body: str) -> str:
    """Replace (or append) the block that starts with *header* in an env file.

    Any previous copy of the block is removed, the new block is appended at
    the end of the file, and the file is written with exactly one trailing
    newline.  Content before the block is left untouched.

    Body lines must be ``KEY=value`` assignments: comment lines and blank
    lines end a block, so they cannot appear inside one.

    Returns:
        The new file content.
    """
    path = Path(path)
    header = header.strip()
    if not header.startswith("#"):
        header = f"# {header}"

    lines = [line.rstrip() for line in body.splitlines() if line.strip()]
    if any(line.lstrip().startswith("#") for line in lines):
        raise ValueError(f"Env block {header!r} must not contain comment lines")

    content = path.read_text(encoding="utf-8") if path.exists() else ""
    leading = content[: len(content) - len(content.lstrip("\r\n"))]
    remaining = _block_pattern(header).sub("", content).lstrip("\r\n").rstrip("\r\n")
    if remaining:
        remaining = leading + remaining

    block = "\n".join([header, *lines])
    result = f"{remaining}\n\n{block}\n" if remaining else f"{block}\n"
    write_file(path, result)
    return result
