"""Rendering of the version switcher and its injection into the manifest."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Sequence

from jinja2 import Environment, TemplateError

from .. import manifest as mkdocs_manifest
from ..errors import MenuError
from ..logging import get_logger
from ..models import MenuContent, OptionVersion, VersionsInfo
from .versions import build_versions

JS_FILE_NAME = "versiondocs-menu.js"
CSS_FILE_NAME = "versiondocs-menu.css"

_LOGGER = get_logger("menu")


@dataclass(frozen=True)
class EditUriOptions:
    """Request to point ``edit_uri`` at the built version."""

    docs_dir_base: str = ""
    override: bool = False
    repo_url: str = ""


class MenuBuilder:
    """Writes the menu assets of one version and registers them in ``mkdocs.yml``."""

    def __init__(self, content: MenuContent) -> None:
        self.content = content
        self._env = Environment(autoescape=False, keep_trailing_newline=True)

    def build(
        self,
        versions_info: VersionsInfo,
        branches: Sequence[str],
        edit_uri: Optional[EditUriOptions] = None,
    ) -> Dict[str, str]:
        """Render the menu for ``versions_info`` and update its manifest.

        Returns the manifest-relative paths of the written assets.
        """
        manifest_path = Path(versions_info.current_path) / mkdocs_manifest.FILE_NAME
        manifest = mkdocs_manifest.read(manifest_path)

        docs_dir = manifest.docs_dir(manifest_path)
        _LOGGER.info("Using docs_dir from manifest: %s", docs_dir)

        written: Dict[str, str] = {}
        if not self.content.is_empty():
            versions = build_versions(
                versions_info.current,
                branches,
                versions_info.latest,
                versions_info.experimental,
            )
            if self.content.js:
                written["js"] = self._write_asset(
                    docs_dir, "js", JS_FILE_NAME, self.content.js, versions_info, versions
                )
            if self.content.css:
                written["css"] = self._write_asset(
                    docs_dir, "css", CSS_FILE_NAME, self.content.css, versions_info, versions
                )

        manifest.append_extra_js(written.get("js", ""))
        manifest.append_extra_css(written.get("css", ""))
        if edit_uri is not None:
            manifest.add_edit_uri(
                versions_info.current,
                edit_uri.docs_dir_base,
                override=edit_uri.override,
                repo_url=edit_uri.repo_url,
            )
        manifest.reset_site_url()

        mkdocs_manifest.write(manifest_path, manifest)
        return written

    def render(
        self,
        template: str,
        versions_info: VersionsInfo,
        versions: Sequence[OptionVersion],
    ) -> str:
        try:
            return self._env.from_string(template).render(
                latest=versions_info.latest,
                current=versions_info.current,
                versions=list(versions),
            )
        except TemplateError as exc:
            raise MenuError(f"error during rendering of the menu template: {exc}") from exc

    def _write_asset(
        self,
        docs_dir: Path,
        kind: str,
        file_name: str,
        template: str,
        versions_info: VersionsInfo,
        versions: Sequence[OptionVersion],
    ) -> str:
        asset_dir = docs_dir / "theme" / kind
        asset_dir.mkdir(parents=True, exist_ok=True)
        (asset_dir / file_name).write_text(
            self.render(template, versions_info, versions), encoding="utf-8"
        )
        return f"theme/{kind}/{file_name}"


__all__ = ["CSS_FILE_NAME", "EditUriOptions", "JS_FILE_NAME", "MenuBuilder"]
