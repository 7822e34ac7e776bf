"""Version switcher menu: classification, templates and rendering."""

from .builder import CSS_FILE_NAME, JS_FILE_NAME, EditUriOptions, MenuBuilder
from .templates import get_template_content
from .versions import build_versions, parse_branches, parse_version

__all__ = [
    "CSS_FILE_NAME",
    "EditUriOptions",
    "JS_FILE_NAME",
    "MenuBuilder",
    "build_versions",
    "get_template_content",
    "parse_branches",
    "parse_version",
]
