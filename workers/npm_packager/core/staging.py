"""
Staging — build the output tree on disk.

  reset_dir           empty (or create) the output directory
  stage_sources       copy sources into <out>/src, preserving relative paths
  stage_root_assets   copy LICENSE, README.md, docs/ ... into <out>

Only a missing root asset is tolerated; every other filesystem error
propagates.
"""
from __future__ import annotations

import errno
import logging
import shutil
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from npm_packager.errors import SourceNotFoundError

logger = logging.getLogger(__name__)


def reset_dir(path: Path) -> Path:
    """Recursively delete *path* if present and recreate it empty."""
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True)
    return path


def _copy_file(src: Path, dest: Path) -> None:
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(src, dest)


def stage_sources(
    src_dir: Path,
    dest_dir: Path,
    source_files: Optional[Sequence[str]] = None,
) -> List[str]:
    """
    Copy source files from *src_dir* into *dest_dir*.

    With *source_files*, exactly those paths (relative to *src_dir*) are
    copied. Otherwise every regular file under *src_dir* is.

    Returns the staged relative paths in POSIX form.
    """
    if not src_dir.is_dir():
        raise SourceNotFoundError(f"Source directory not found: {src_dir}")

    staged: List[str] = []

    if source_files is not None:
        for rel in source_files:
            src = src_dir / rel
            if not src.is_file():
                raise SourceNotFoundError(f"Source file not found: {src}")
            logger.info("    --> %s", rel)
            _copy_file(src, dest_dir / rel)
            staged.append(Path(rel).as_posix())
        return staged

    for src in sorted(src_dir.rglob("*"), key=lambda p: p.as_posix()):
        if not src.is_file():
            continue
        rel = src.relative_to(src_dir)
        logger.info("    --> %s", rel.as_posix())
        _copy_file(src, dest_dir / rel)
        staged.append(rel.as_posix())
    return staged


def copy_recursive(src: Path, dest: Path) -> None:
    """Copy a file, or a directory tree, from *src* to *dest*."""
    if not src.exists():
        raise FileNotFoundError(errno.ENOENT, "No such file or directory", str(src))
    if src.is_dir():
        shutil.copytree(src, dest, dirs_exist_ok=True)
    else:
        _copy_file(src, dest)


def stage_root_assets(
    root_files: Sequence[str],
    out_dir: Path,
    base_dir: Path,
) -> Tuple[List[str], List[str]]:
    """
    Copy each root asset from *base_dir* into *out_dir*.

    Returns ``(copied, missing)``.
    """
    copied: List[str] = []
    missing: List[str] = []
    for asset in root_files:
        try:
            copy_recursive(base_dir / asset, out_dir / asset)
        except FileNotFoundError:
            logger.warning("    --> %s not found, skipping", asset)
            missing.append(asset)
            continue
        copied.append(asset)
    return copied, missing
