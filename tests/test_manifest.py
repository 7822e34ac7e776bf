"""Tests for versiondocs.manifest."""

from __future__ import annotations

from pathlib import Path

import pytest

from versiondocs import manifest
from versiondocs.errors import ManifestError, MissingFileError
from versiondocs.manifest import LocalTag, Manifest

MKDOCS_WITH_ENV = """site_name: Demo
docs_dir: docs
extra:
  productVersion: !!python/object/apply:os.getenv ["PRODUCT_VERSION"]
markdown_extensions:
- admonition
- pymdownx.superfences:
    custom_fences:
    - name: mermaid
      class: mermaid
      format: !!python/name:pymdownx.superfences.fence_code_format
extra_css:
- theme/styles/extra.css
"""

MKDOCS_WITH_LOCAL_TAGS = """site_name: Demo
site_url: !ENV [SITE_URL, 'https://x']
theme:
  name: material
  custom_dir: !relative $config_dir/overrides
extra:
  analytics: !ENV GA_KEY
"""


def test_read_empty_manifest(tmp_path: Path) -> None:
    path = tmp_path / "mkdocs.yml"
    path.write_text("", encoding="utf-8")

    assert manifest.read(path) == Manifest()


def test_read_missing_manifest(tmp_path: Path) -> None:
    with pytest.raises(MissingFileError):
        manifest.read(tmp_path / "mkdocs.yml")


def test_read_rejects_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "mkdocs.yml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ManifestError):
        manifest.read(path)


def test_read_rejects_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "mkdocs.yml"
    path.write_text("site_name: [unclosed\n", encoding="utf-8")

    with pytest.raises(ManifestError):
        manifest.read(path)


def test_read_keeps_unknown_keys_and_placeholders(tmp_path: Path) -> None:
    path = tmp_path / "mkdocs.yml"
    path.write_text(MKDOCS_WITH_ENV, encoding="utf-8")

    loaded = manifest.read(path)

    assert loaded.data["site_name"] == "Demo"
    assert loaded.data["extra"] == {"productVersion": "VERSIONDOCS_TEMP_PRODUCT_VERSION"}
    assert list(loaded.data) == ["site_name", "docs_dir", "extra", "markdown_extensions", "extra_css"]


def test_round_trip_preserves_python_tags(tmp_path: Path) -> None:
    path = tmp_path / "mkdocs.yml"
    path.write_text(MKDOCS_WITH_ENV, encoding="utf-8")

    manifest.write(path, manifest.read(path))
    written = path.read_text(encoding="utf-8")

    assert '  productVersion: !!python/object/apply:os.getenv ["PRODUCT_VERSION"]\n' in written
    assert "format: !!python/name:pymdownx.superfences.fence_code_format\n" in written
    assert manifest.read(path) == manifest.read(path)

    manifest.write(path, manifest.read(path))
    assert path.read_text(encoding="utf-8") == written


def test_round_trip_preserves_mkdocs_local_tags(tmp_path: Path) -> None:
    path = tmp_path / "mkdocs.yml"
    path.write_text(MKDOCS_WITH_LOCAL_TAGS, encoding="utf-8")

    loaded = manifest.read(path)

    assert loaded.data["site_url"] == LocalTag("!ENV", ["SITE_URL", "https://x"], True)
    assert loaded.data["theme"]["custom_dir"] == LocalTag("!relative", "$config_dir/overrides")

    loaded.append_extra_js("theme/js/menu.js")
    manifest.write(path, loaded)
    written = path.read_text(encoding="utf-8")

    assert "site_url: !ENV [SITE_URL, " in written
    assert "  custom_dir: !relative $config_dir/overrides\n" in written
    assert "  analytics: !ENV GA_KEY\n" in written
    assert manifest.read(path) == loaded


def test_escape_accepts_single_quotes() -> None:
    text = "version: !!python/object/apply:os.getenv ['VERSION']"

    assert manifest.escape_tags(text) == "version: VERSIONDOCS_TEMP_VERSION"
    assert manifest.unescape_tags("version: VERSIONDOCS_TEMP_VERSION") == (
        'version: !!python/object/apply:os.getenv ["VERSION"]'
    )


def test_docs_dir_defaults_to_docs() -> None:
    path = Path("foo") / "bar" / "mkdocs.yml"

    assert Manifest().docs_dir(path) == Path("foo") / "bar" / "docs"
    assert Manifest({"docs_dir": "/doc"}).docs_dir(path) == Path("foo") / "bar" / "doc"


def test_append_extra_js() -> None:
    empty = Manifest()
    empty.append_extra_js("")
    assert empty.data == {}

    created = Manifest()
    created.append_extra_js("test.js")
    assert created.data == {"extra_javascript": ["test.js"]}

    existing = Manifest({"extra_javascript": ["foo.js", "test.js"]})
    existing.append_extra_js("test.js")
    assert existing.data == {"extra_javascript": ["foo.js", "test.js", "test.js"]}


def test_append_extra_css() -> None:
    existing = Manifest({"extra_css": ["foo.css", "bar.css"]})
    existing.append_extra_css("")
    assert existing.data == {"extra_css": ["foo.css", "bar.css"]}

    existing.append_extra_css("test.css")
    assert existing.data == {"extra_css": ["foo.css", "bar.css", "test.css"]}


def test_add_edit_uri_defaults_to_master() -> None:
    doc = Manifest()
    doc.add_edit_uri("")
    assert doc.data == {"edit_uri": "edit/master/docs/"}


def test_add_edit_uri_keeps_existing_value_without_override() -> None:
    doc = Manifest({"edit_uri": "edit/v1/docs/"})
    doc.add_edit_uri("v2", "foo")
    assert doc.edit_uri == "edit/v1/docs/"


def test_add_edit_uri_override() -> None:
    doc = Manifest({"edit_uri": "edit/v1/docs/"})
    doc.add_edit_uri("v2", "foo", override=True)
    assert doc.edit_uri == "edit/v2/foo/docs/"


def test_add_edit_uri_absolute_without_repo_url() -> None:
    doc = Manifest()
    doc.add_edit_uri("v2", repo_url="https://github.com/acme/widgets/")
    assert doc.edit_uri == "https://github.com/acme/widgets/edit/v2/docs/"

    with_repo = Manifest({"repo_url": "https://github.com/acme/widgets"})
    with_repo.add_edit_uri("v2", repo_url="https://github.com/acme/widgets")
    assert with_repo.edit_uri == "edit/v2/docs/"


def test_reset_site_url() -> None:
    doc = Manifest({"site_url": "https://docs.example.com", "site_name": "Demo"})
    doc.reset_site_url()
    assert doc.data == {"site_url": "", "site_name": "Demo"}


def test_single_extra_entry_is_extended_not_split() -> None:
    doc = Manifest({"extra_javascript": "js/extra.js", "extra_css": "css/extra.css"})

    doc.append_extra_js("theme/js/menu.js")
    doc.append_extra_css("theme/css/menu.css")

    assert doc.data["extra_javascript"] == ["js/extra.js", "theme/js/menu.js"]
    assert doc.data["extra_css"] == ["css/extra.css", "theme/css/menu.css"]
