"""Core data models shared across versiondocs components."""

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class RepoId:
    """GitHub repository identifier."""

    owner: str
    repository_name: str


@dataclass(frozen=True)
class VersionsInfo:
    """Version context for a single iteration of the build loop."""

    current: str
    latest: str
    experimental: str = ""
    current_path: Path = Path()


class VersionState(str, Enum):
    """Lifecycle state of a documented version in the menu."""

    LATEST = "LATEST"
    EXPERIMENTAL = "EXPERIMENTAL"
    PRE_FINAL_RELEASE = "PRE_FINAL_RELEASE"
    OBSOLETE = "OBSOLETE"
    SUPPORTED = ""

    def __str__(self) -> str:
        return self.value


@dataclass
class OptionVersion:
    """Entry of the version switcher menu."""

    name: str
    path: str = ""
    text: str = ""
    state: VersionState = VersionState.SUPPORTED
    selected: bool = False


@dataclass(frozen=True)
class MenuFiles:
    """Locations of the menu templates, each either a local file or a URL."""

    js_url: str = ""
    js_file: str = ""
    css_url: str = ""
    css_file: str = ""

    def has_js(self) -> bool:
        return bool(self.js_file or self.js_url)

    def has_css(self) -> bool:
        return bool(self.css_file or self.css_url)


@dataclass(frozen=True)
class MenuContent:
    """Raw template content of the menu assets."""

    js: Optional[str] = None
    css: Optional[str] = None

    def is_empty(self) -> bool:
        return not self.js and not self.css


@dataclass(frozen=True)
class DockerfileInfo:
    """Dockerfile used to build the image running the site generator."""

    name: str
    content: bytes
    image_name: str
    path: Optional[Path] = None
    build_path: str = ""

    def with_path(self, directory: Path) -> "DockerfileInfo":
        """Return a copy of this Dockerfile bound to ``directory``."""
        return replace(self, path=Path(directory) / self.name)
