"""Configuration for versiondocs builds (CLI flags and ``.versiondocs.yml``)."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

from .errors import ConfigError
from .logging import get_logger
from .models import MenuFiles, RepoId

CONFIG_FILE_NAME = ".versiondocs.yml"
DEFAULT_IMAGE_NAME = "doc-site"
DEFAULT_DOCKERFILE_NAME = "docs.Dockerfile"

_LOGGER = get_logger("config")


@dataclass
class BuildConfig:
    """Settings of one multi-version documentation build."""

    owner: str = ""
    repository_name: str = ""
    dockerfile_url: str = ""
    experimental_branch: str = ""
    excluded_branches: List[str] = field(default_factory=list)
    image_name: str = DEFAULT_IMAGE_NAME
    dockerfile_name: str = DEFAULT_DOCKERFILE_NAME
    build_path: str = ""
    requirements: str = ""
    menu: MenuFiles = field(default_factory=MenuFiles)
    debug: bool = False
    no_cache: bool = False
    force_edit_url: bool = False
    dry_run: bool = False

    @property
    def repo_id(self) -> RepoId:
        return RepoId(owner=self.owner, repository_name=self.repository_name)

    @property
    def repo_url(self) -> str:
        return f"https://github.com/{self.owner}/{self.repository_name}"


_REQUIRED_FIELDS = (
    ("dockerfile_url", "dockerfile-url"),
    ("owner", "owner"),
    ("repository_name", "repo-name"),
)


def validate_config(config: BuildConfig) -> BuildConfig:
    """Check mandatory settings and fill defaults for empty optional ones."""
    for attribute, flag in _REQUIRED_FIELDS:
        if not getattr(config, attribute):
            raise ConfigError(f"{flag} is mandatory")

    if not config.image_name:
        _LOGGER.info("'image-name' is undefined, fallback to %s.", DEFAULT_IMAGE_NAME)
        config = replace(config, image_name=DEFAULT_IMAGE_NAME)
    if not config.dockerfile_name:
        config = replace(config, dockerfile_name=DEFAULT_DOCKERFILE_NAME)
    return config


def load_config(config_path: Path) -> BuildConfig:
    """Load defaults from ``.versiondocs.yml``; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    if not config_file.exists():
        return BuildConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")
    return config_from_mapping(data)


def config_from_mapping(data: Mapping[str, Any]) -> BuildConfig:
    """Build a configuration from a mapping using the dataclass field names."""
    known = {item.name for item in fields(BuildConfig)}
    unknown = sorted(str(key) for key in data if key not in known)
    if unknown:
        raise ConfigError(f"unknown configuration keys: {', '.join(unknown)}")

    values: Dict[str, Any] = {}
    for key, value in data.items():
        if value is None:
            continue
        if key == "menu":
            values["menu"] = _as_menu(value)
        elif key == "excluded_branches":
            values[key] = _as_str_list(value)
        elif key in {"debug", "no_cache", "force_edit_url", "dry_run"}:
            values[key] = _as_bool(value, key)
        else:
            values[key] = str(value)
    return BuildConfig(**values)


def merge_config(base: BuildConfig, overrides: Mapping[str, Any]) -> BuildConfig:
    """Apply non-empty ``overrides`` (typically CLI flags) on top of ``base``."""
    values: Dict[str, Any] = {}
    for key, value in overrides.items():
        if value is None or value == "" or value == [] or value is False:
            continue
        if key == "menu":
            current = base.menu
            menu_values = {k: v for k, v in vars(value).items() if v}
            values["menu"] = replace(current, **menu_values)
        else:
            values[key] = value
    return replace(base, **values)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = Path(config_path).expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILE_NAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_menu(value: Any) -> MenuFiles:
    if not isinstance(value, dict):
        raise ConfigError("menu must be a mapping")
    allowed = {item.name for item in fields(MenuFiles)}
    unknown = sorted(str(key) for key in value if key not in allowed)
    if unknown:
        raise ConfigError(f"unknown menu keys: {', '.join(unknown)}")
    return MenuFiles(**{key: str(item) for key, item in value.items() if item is not None})


def _as_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    raise ConfigError(f"{key} must be a boolean")


def _as_str_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    raise ConfigError("excluded_branches must be a list")


__all__ = [
    "BuildConfig",
    "CONFIG_FILE_NAME",
    "DEFAULT_DOCKERFILE_NAME",
    "DEFAULT_IMAGE_NAME",
    "config_from_mapping",
    "load_config",
    "merge_config",
    "validate_config",
]
