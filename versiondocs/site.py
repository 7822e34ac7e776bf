"""Composition of the multi-version output tree."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import List

from .logging import get_logger

SITE_DIR_NAME = "site"

_LOGGER = get_logger("site")


def prepare_site_root(base_dir: Path) -> Path:
    """(Re)create an empty ``<base_dir>/site`` directory."""
    site_root = Path(base_dir) / SITE_DIR_NAME
    if site_root.exists():
        shutil.rmtree(site_root)
    site_root.mkdir(parents=True)
    return site_root


def copy_tree(src: Path, dst: Path) -> None:
    """Copy ``src`` into ``dst`` recursively, keeping permission bits."""
    src = Path(src)
    dst = Path(dst)
    if not src.is_dir():
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dst)
        return
    dst.mkdir(parents=True, exist_ok=True)
    shutil.copymode(src, dst)
    for entry in sorted(src.iterdir()):
        copy_tree(entry, dst / entry.name)


def compose(output_dir: Path, site_root: Path, version: str, latest: str) -> List[Path]:
    """Publish a version's generated site under ``site_root``.

    The output always lands in ``<site_root>/<version>``; the version matching
    ``latest`` (``v2.0`` for ``v2.0.3``) is also copied to ``site_root`` itself.
    """
    targets: List[Path] = []
    if latest.startswith(version):
        targets.append(Path(site_root))
    targets.append(Path(site_root) / version)

    for target in targets:
        _LOGGER.debug("Copying %s to %s", output_dir, target)
        copy_tree(Path(output_dir), target)
    return targets


__all__ = ["SITE_DIR_NAME", "compose", "copy_tree", "prepare_site_root"]
