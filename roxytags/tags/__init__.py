"""Registry of the custom tags provided by roxytags.

The documentation host looks a tag name up in :data:`TAG_HANDLERS` and
calls its ``parse`` hook, then later its ``render`` hook with the
package configuration.
"""

import logging
from typing import Optional

from roxytags.output.rd import RdSection
from roxytags.parsers.description import PackageConfig
from roxytags.parsers.structure import Tag, TagHandler
from roxytags.tags import tempdir, webr
from roxytags.utils.config import WebRConfig

logger = logging.getLogger(__name__)

TAG_HANDLERS: dict[str, TagHandler] = {
    tempdir.TAG_NAME: TagHandler(
        name=tempdir.TAG_NAME,
        parse=tempdir.parse_examples_tempdir,
        render=tempdir.render_examples_tempdir,
        description="Run examples inside tempdir() and restore the working directory.",
    ),
    webr.TAG_NAME: TagHandler(
        name=webr.TAG_NAME,
        parse=webr.parse_examples_webr,
        render=webr.render_examples_webr,
        description="Add a webR REPL link or embedded frame next to the examples.",
    ),
}


def get_handler(name: str) -> TagHandler:
    """Look up the hooks for a tag name.

    Raises:
        KeyError: If roxytags does not provide the tag.
    """
    try:
        return TAG_HANDLERS[name]
    except KeyError:
        raise KeyError(
            f"Unknown tag '@{name}'. Available: {', '.join(sorted(TAG_HANDLERS))}"
        ) from None


def process_tag(
    tag: Tag,
    package_config: Optional[PackageConfig] = None,
    settings: Optional[WebRConfig] = None,
) -> list[RdSection]:
    """Run a tag through its parse hook and then its render hook.

    Args:
        tag: The tag occurrence.
        package_config: Package configuration passed to the render hook.
        settings: Built-in tag defaults passed to the render hook.

    Returns:
        The rendered Rd sections.
    """
    handler = get_handler(tag.name)
    parsed = handler.parse(tag)
    sections = handler.render(parsed, package_config or PackageConfig(), settings)
    logger.debug("%s rendered into %d sections", tag.location, len(sections))
    return sections
