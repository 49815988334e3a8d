"""webR REPL URLs and markup.

Builds the share URL for an encoded payload and the HTML fragments
(link button or embedded frame) placed in the ``WebR`` Rd section.
"""

import logging
from typing import Optional

from roxytags.generators.encoder import payload_id
from roxytags.generators.template_manager import TemplateManager

logger = logging.getLogger(__name__)

WEBR_SERVICE_URL = "https://webr.r-wasm.org"


def webr_repl_href(
    encoded_code: str,
    version: str = "latest",
    mode: str = "",
    channel: str = "",
    base_url: str = WEBR_SERVICE_URL,
) -> str:
    """Create a webR REPL URL for an encoded payload.

    Args:
        encoded_code: Payload from ``encode_webr_code``.
        version: webR version path segment.
        mode: Optional hyphen-joined pane list.
        channel: Optional communication channel name.
        base_url: Service root, without trailing slash.

    Returns:
        ``<base>/<version>/[?mode=..&channel=..]#code=<payload>``.
    """
    query = [
        f"{key}={value}"
        for key, value in (("mode", mode), ("channel", channel))
        if value
    ]
    query_str = f"?{'&'.join(query)}" if query else ""
    return f"{base_url.rstrip('/')}/{version}/{query_str}#code={encoded_code}"


def webr_repl_link(url: str, templates: Optional[TemplateManager] = None) -> str:
    """Create the HTML button linking to the webR REPL."""
    return (templates or TemplateManager()).render_link(url)


def webr_repl_iframe(
    url: str,
    encoded_code: str,
    height: int = 300,
    templates: Optional[TemplateManager] = None,
) -> str:
    """Create the HTML for an embedded, lazily loaded webR REPL.

    Args:
        url: Full webR REPL URL.
        encoded_code: The payload in ``url``; its prefix seeds element ids.
        height: Frame height in pixels.
        templates: Template manager to render with.

    Returns:
        HTML fragment with placeholder, frame, style and script.
    """
    frame_id = payload_id(encoded_code)
    logger.debug("Rendering embedded webR frame %d (height %dpx)", frame_id, height)
    return (templates or TemplateManager()).render_embed(url, height, frame_id)
