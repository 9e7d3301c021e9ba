"""Unit tests for loading the editor template and default markdown."""

from __future__ import annotations

from pathlib import Path

import pytest
from preview_common.error_enums import ErrorCode
from preview_service_libs.error_handling import PreviewServiceError

from markdown_preview_service.config import SERVICE_ROOT
from markdown_preview_service.implementations.editor_assets_loader import load_editor_assets


@pytest.fixture
def asset_dir(tmp_path: Path) -> Path:
    (tmp_path / "index.html").write_text(
        "<textarea>{{ Default }}</textarea>", encoding="utf-8"
    )
    (tmp_path / "markdown.md").write_text("# Hello <world>\n", encoding="utf-8")
    return tmp_path


async def test_default_markdown_fills_template_slot(asset_dir: Path) -> None:
    assets = load_editor_assets(asset_dir / "index.html", asset_dir / "markdown.md")

    page = await assets.render_editor_page()

    assert assets.default_markdown == "# Hello <world>\n"
    assert page == "<textarea># Hello &lt;world&gt;\n</textarea>"


async def test_bundled_assets_load() -> None:
    templates = SERVICE_ROOT / "templates"
    assets = load_editor_assets(templates / "index.html", templates / "markdown.md")

    page = await assets.render_editor_page()

    assert assets.default_markdown.startswith("# Markdown Editor")
    assert "/render" in page


def test_missing_template_fails_initialization(asset_dir: Path) -> None:
    with pytest.raises(PreviewServiceError) as exc_info:
        load_editor_assets(asset_dir / "missing.html", asset_dir / "markdown.md")

    error = exc_info.value
    assert error.error_code == ErrorCode.INITIALIZATION_FAILED.value
    assert error.error_detail.details["component"] == "template"
    assert error.error_detail.details["path"].endswith("missing.html")


def test_unparseable_template_fails_initialization(asset_dir: Path) -> None:
    (asset_dir / "broken.html").write_text("{% if %}", encoding="utf-8")

    with pytest.raises(PreviewServiceError) as exc_info:
        load_editor_assets(asset_dir / "broken.html", asset_dir / "markdown.md")

    assert exc_info.value.error_detail.details["component"] == "template"


def test_missing_markdown_fails_initialization(asset_dir: Path) -> None:
    with pytest.raises(PreviewServiceError) as exc_info:
        load_editor_assets(asset_dir / "index.html", asset_dir / "absent.md")

    assert exc_info.value.error_code == ErrorCode.INITIALIZATION_FAILED.value
    assert exc_info.value.error_detail.details["component"] == "default_markdown"
