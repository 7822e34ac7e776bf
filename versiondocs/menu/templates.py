"""Loading of the menu templates."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..errors import MissingFileError
from ..models import MenuContent, MenuFiles
from ..remote import download


def get_template_content(menu_files: Optional[MenuFiles]) -> MenuContent:
    """Return the JS/CSS menu templates; an asset without a source is ``None``."""
    if menu_files is None:
        return MenuContent()

    js: Optional[str] = None
    css: Optional[str] = None
    if menu_files.has_js():
        js = _read_template(menu_files.js_file, menu_files.js_url)
    if menu_files.has_css():
        css = _read_template(menu_files.css_file, menu_files.css_url)
    return MenuContent(js=js, css=css)


def _read_template(file_path: str, url: str) -> str:
    if file_path:
        path = Path(file_path).expanduser()
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise MissingFileError(f"menu template not found: {path}", path) from exc
    return download(url).decode("utf-8")


__all__ = ["get_template_content"]
