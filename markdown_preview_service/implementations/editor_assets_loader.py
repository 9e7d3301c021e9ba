"""Startup loader for the editor page template and default markdown.

Both files are read exactly once, before the application serves requests.
Any failure is fatal: the caller must not start the server.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

from jinja2 import Environment, FileSystemLoader, Template, TemplateError, select_autoescape
from preview_service_libs.error_handling import raise_initialization_failed
from preview_service_libs.logging_utils import create_service_logger

logger = create_service_logger("editor.assets_loader")


@dataclass(frozen=True)
class EditorAssets:
    """Parsed editor template and the markdown it is pre-filled with."""

    template: Template
    default_markdown: str

    async def render_editor_page(self) -> str:
        """Render the editor page with the default markdown in the ``Default`` slot."""
        return await self.template.render_async(Default=self.default_markdown)


def load_editor_assets(template_path: Path, markdown_path: Path) -> EditorAssets:
    """Load and parse the editor template and read the default markdown.

    Args:
        template_path: Path to the Jinja2 page template
        markdown_path: Path to the default markdown sample

    Returns:
        EditorAssets ready for concurrent, read-only use

    Raises:
        PreviewServiceError: INITIALIZATION_FAILED if either file cannot be
            read or the template does not parse
    """
    env = Environment(
        loader=FileSystemLoader(str(template_path.parent)),
        autoescape=select_autoescape(["html", "xml"]),
        enable_async=True,
    )

    try:
        template = env.get_template(template_path.name)
    except (TemplateError, OSError) as e:
        logger.critical(f"Failed to load editor template {template_path}: {e}")
        raise_initialization_failed(
            service="markdown_preview_service",
            operation="load_editor_assets",
            component="template",
            message=f"Failed to load template {template_path}: {e}",
            correlation_id=uuid4(),
            path=str(template_path),
        )

    try:
        default_markdown = markdown_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.critical(f"Failed to read default markdown {markdown_path}: {e}")
        raise_initialization_failed(
            service="markdown_preview_service",
            operation="load_editor_assets",
            component="default_markdown",
            message=f"Failed to read default markdown {markdown_path}: {e}",
            correlation_id=uuid4(),
            path=str(markdown_path),
        )

    logger.info(
        "Loaded editor assets",
        template=str(template_path),
        default_markdown=str(markdown_path),
        default_markdown_chars=len(default_markdown),
    )
    return EditorAssets(template=template, default_markdown=default_markdown)
