"""Merging of a global override into each version's ``requirements.txt``."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Mapping, Optional

from .errors import MissingFileError, RequirementsError
from .logging import get_logger
from .models import VersionsInfo
from .remote import read_location

FILE_NAME = "requirements.txt"

_LINE = re.compile(r"^([\w.\-\[\]]+)\s*([=<>!~].*)$")

_LOGGER = get_logger("requirements")


def check(docs_root: Path) -> Path:
    """Ensure ``requirements.txt`` sits in ``docs_root`` and return its path."""
    path = Path(docs_root) / FILE_NAME
    if not path.is_file():
        raise MissingFileError(f"no file {FILE_NAME} found: {path}", path)
    return path


def get_content(location: str) -> Optional[str]:
    """Return the override file content from a local path or a URL."""
    if not location:
        return None
    return read_location(location).decode("utf-8")


def parse(content: str) -> Dict[str, str]:
    """Parse ``name<constraint>`` lines into a mapping."""
    result: Dict[str, str] = {}
    for raw in content.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        match = _LINE.match(line)
        if match is None:
            raise RequirementsError(f"invalid line format: {raw}")
        result[match.group(1)] = match.group(2).strip()
    return result


def merge(base: Mapping[str, str], override: Mapping[str, str]) -> Dict[str, str]:
    """Return ``base`` updated with ``override``; override wins on conflicts."""
    merged = dict(base)
    merged.update(override)
    return merged


def render(requirements: Mapping[str, str]) -> str:
    return "".join(f"{name}{requirements[name]}\n" for name in sorted(requirements))


def build(versions_info: VersionsInfo, override_content: Optional[str]) -> bool:
    """Merge ``override_content`` into the version's requirements file.

    Returns ``True`` when the file was rewritten.
    """
    if not override_content:
        return False

    path = Path(versions_info.current_path) / FILE_NAME
    try:
        base_content = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise MissingFileError(f"unable to read {path}", path) from exc

    try:
        base = parse(base_content)
    except RequirementsError as exc:
        raise RequirementsError(f"{path}: {exc}") from exc
    try:
        override = parse(override_content)
    except RequirementsError as exc:
        raise RequirementsError(f"requirements override: {exc}") from exc

    path.write_text(render(merge(base, override)), encoding="utf-8")
    _LOGGER.debug("Requirements of %s merged with %d override(s)", versions_info.current, len(override))
    return True


__all__ = ["FILE_NAME", "build", "check", "get_content", "merge", "parse", "render"]
