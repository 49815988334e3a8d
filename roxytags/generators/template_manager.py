"""Template manager for loading and rendering Jinja2 markup templates.

Provides a centralized interface for rendering the HTML fragments
placed in generated documentation, from Jinja2 templates stored in the
package's templates/ directory.
"""

import logging
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined

logger = logging.getLogger(__name__)

_DEFAULT_TEMPLATES_DIR = Path(__file__).parent.parent / "templates"


class TemplateManager:
    """Loads and renders Jinja2 templates for webR markup.

    Templates are loaded from a configurable directory. Rendered text is
    wrapped in Rd's ``\\out{}``, so templates must write ``%`` as ``\\%``
    and keep braces balanced.
    """

    def __init__(self, templates_dir: Optional[str] = None) -> None:
        """Initialize the template manager.

        Args:
            templates_dir: Path to the templates directory. Uses the
                bundled templates/ directory if not specified.
        """
        self._templates_path = (
            Path(templates_dir) if templates_dir else _DEFAULT_TEMPLATES_DIR
        )

        if not self._templates_path.exists():
            logger.warning("Templates directory not found: %s", self._templates_path)

        self._env = Environment(
            loader=FileSystemLoader(str(self._templates_path)),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=False,
            undefined=StrictUndefined,
        )
        logger.debug("Template manager initialized with: %s", self._templates_path)

    def render_link(self, url: str) -> str:
        """Render the button linking to the webR REPL.

        Args:
            url: Full webR REPL URL.

        Returns:
            HTML fragment.
        """
        return self._render("webr_link.j2", url=url)

    def render_embed(self, url: str, height: int, frame_id: int) -> str:
        """Render the lazily loaded webR REPL frame.

        Args:
            url: Full webR REPL URL.
            height: Frame height in pixels.
            frame_id: Numeric id keeping element ids unique on the page.

        Returns:
            HTML fragment with its style and script blocks.
        """
        return self._render("webr_embed.j2", url=url, height=height, frame_id=frame_id)

    def _render(self, template_name: str, **kwargs: Any) -> str:
        """Render a template with the given context variables.

        Args:
            template_name: Name of the template file to render.
            **kwargs: Template context variables.

        Returns:
            Rendered template string.

        Raises:
            TemplateNotFound: If the template file does not exist.
        """
        template = self._env.get_template(template_name)
        rendered = template.render(**kwargs)
        logger.debug("Rendered template %s (%d chars)", template_name, len(rendered))
        return rendered
