"""Reading and editing of the MkDocs manifest (``mkdocs.yml``)."""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .errors import ManifestError, MissingFileError

FILE_NAME = "mkdocs.yml"
DEFAULT_DOCS_DIR = "docs"
DEFAULT_EDIT_VERSION = "master"

# Python-specific YAML tags are not understood by a safe loader: they are
# swapped for plain placeholders while the document is parsed, then restored.
ENV_PLACEHOLDER_PREFIX = "VERSIONDOCS_TEMP_"
NAME_PLACEHOLDER_PREFIX = "VERSIONDOCS_PYNAME_"

_GETENV_TAG = re.compile(
    r"""!!python/object/apply:os\.getenv\s*\[\s*['"]?([A-Za-z0-9_-]+)['"]?\s*\]"""
)
_GETENV_PLACEHOLDER = re.compile(re.escape(ENV_PLACEHOLDER_PREFIX) + r"([A-Za-z0-9_-]+)")
_NAME_TAG = re.compile(r"!!python/name:([\w.]+)")
_NAME_PLACEHOLDER = re.compile(re.escape(NAME_PLACEHOLDER_PREFIX) + r"([\w.]+)")


@dataclass
class LocalTag:
    """Value carrying a local YAML tag such as ``!ENV`` or ``!relative``.

    MkDocs resolves these tags itself; the manifest only has to carry them
    through unchanged.
    """

    tag: str
    value: Any
    flow_style: Optional[bool] = None


class _ManifestLoader(yaml.SafeLoader):
    pass


class _ManifestDumper(yaml.SafeDumper):
    pass


def _construct_local_tag(loader: yaml.SafeLoader, tag_suffix: str, node: yaml.Node) -> LocalTag:
    tag = "!" + tag_suffix
    if isinstance(node, yaml.SequenceNode):
        return LocalTag(tag, loader.construct_sequence(node, deep=True), node.flow_style)
    if isinstance(node, yaml.MappingNode):
        return LocalTag(tag, loader.construct_mapping(node, deep=True), node.flow_style)
    return LocalTag(tag, loader.construct_scalar(node))


def _represent_local_tag(dumper: yaml.SafeDumper, data: LocalTag) -> yaml.Node:
    if isinstance(data.value, list):
        return dumper.represent_sequence(data.tag, data.value, flow_style=data.flow_style)
    if isinstance(data.value, dict):
        return dumper.represent_mapping(data.tag, data.value, flow_style=data.flow_style)
    return dumper.represent_scalar(data.tag, str(data.value))


_ManifestLoader.add_multi_constructor("!", _construct_local_tag)
_ManifestDumper.add_representer(LocalTag, _represent_local_tag)


def escape_tags(text: str) -> str:
    """Replace python-specific YAML tags by placeholders."""
    text = _GETENV_TAG.sub(lambda match: ENV_PLACEHOLDER_PREFIX + match.group(1), text)
    return _NAME_TAG.sub(lambda match: NAME_PLACEHOLDER_PREFIX + match.group(1), text)


def unescape_tags(text: str) -> str:
    """Restore the tags replaced by :func:`escape_tags`."""
    text = _GETENV_PLACEHOLDER.sub(
        lambda match: f'!!python/object/apply:os.getenv ["{match.group(1)}"]', text
    )
    return _NAME_PLACEHOLDER.sub(lambda match: f"!!python/name:{match.group(1)}", text)


class Manifest:
    """MkDocs configuration with accessors for the keys versiondocs edits.

    Every other key is kept as-is, in its original order.
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None) -> None:
        self.data: Dict[str, Any] = dict(data or {})

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Manifest):
            return self.data == other.data
        return NotImplemented

    def __repr__(self) -> str:
        return f"Manifest({self.data!r})"

    @property
    def docs_dir_attribute(self) -> str:
        value = self.data.get("docs_dir")
        if isinstance(value, str) and value.strip("/"):
            return value.strip("/")
        # https://www.mkdocs.org/user-guide/configuration/#docs_dir
        return DEFAULT_DOCS_DIR

    def docs_dir(self, manifest_path: Path) -> Path:
        """Return the directory holding the documentation sources."""
        return Path(manifest_path).parent / self.docs_dir_attribute

    @property
    def edit_uri(self) -> str:
        value = self.data.get("edit_uri")
        return value if isinstance(value, str) else ""

    @property
    def extra_javascript(self) -> List[Any]:
        return _as_list(self.data.get("extra_javascript"))

    @property
    def extra_css(self) -> List[Any]:
        return _as_list(self.data.get("extra_css"))

    @property
    def site_url(self) -> str:
        value = self.data.get("site_url")
        return value if isinstance(value, str) else ""

    def append_extra_js(self, js_file: str) -> None:
        if js_file:
            self.data["extra_javascript"] = self.extra_javascript + [js_file]

    def append_extra_css(self, css_file: str) -> None:
        if css_file:
            self.data["extra_css"] = self.extra_css + [css_file]

    def add_edit_uri(
        self,
        version: str,
        docs_dir_base: str = "",
        *,
        override: bool = False,
        repo_url: str = "",
    ) -> None:
        """Point ``edit_uri`` at the sources of ``version``.

        An existing value is kept unless ``override`` is set. The URI is
        relative to ``repo_url`` from the manifest; when the manifest has no
        ``repo_url``, the given ``repo_url`` is used to build an absolute one.
        """
        if self.edit_uri and not override:
            return

        parts = ["edit", version or DEFAULT_EDIT_VERSION, docs_dir_base.strip("/"), self.docs_dir_attribute]
        uri = posixpath.join(*[part for part in parts if part]) + "/"
        if repo_url and not self.data.get("repo_url"):
            uri = repo_url.rstrip("/") + "/" + uri
        self.data["edit_uri"] = uri

    def reset_site_url(self) -> None:
        self.data["site_url"] = ""


def _as_list(value: Any) -> List[Any]:
    # MkDocs also accepts a single entry in place of a list.
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def read(manifest_path: Path) -> Manifest:
    """Load the manifest stored at ``manifest_path``."""
    path = Path(manifest_path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise MissingFileError(f"MkDocs manifest not found: {path}", path) from exc
    except OSError as exc:
        raise ManifestError(f"error when reading MkDocs manifest {path}: {exc}") from exc

    try:
        loaded = yaml.load(escape_tags(text), Loader=_ManifestLoader)
    except yaml.YAMLError as exc:
        raise ManifestError(f"error during unmarshal of the MkDocs manifest {path}: {exc}") from exc

    if loaded is None:
        return Manifest()
    if not isinstance(loaded, dict):
        raise ManifestError(f"MkDocs manifest {path} must contain a mapping at the root")
    return Manifest(loaded)


def dumps(manifest: Manifest) -> str:
    """Serialize ``manifest`` to YAML, python and local tags included."""
    try:
        text = yaml.dump(
            manifest.data,
            Dumper=_ManifestDumper,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
    except yaml.YAMLError as exc:
        raise ManifestError(f"error when marshalling MkDocs manifest: {exc}") from exc
    return unescape_tags(text)


def write(manifest_path: Path, manifest: Manifest) -> None:
    """Write ``manifest`` back to ``manifest_path``."""
    Path(manifest_path).write_text(dumps(manifest), encoding="utf-8")


__all__ = [
    "DEFAULT_DOCS_DIR",
    "FILE_NAME",
    "LocalTag",
    "Manifest",
    "dumps",
    "escape_tags",
    "read",
    "unescape_tags",
    "write",
]
