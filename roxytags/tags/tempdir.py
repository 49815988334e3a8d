"""The ``@examplesTempdir`` tag.

Rewrites the tag into a regular ``@examples`` block whose code runs in
``tempdir()``. The working directory is saved and switched before the
example and restored after it, with both steps hidden by ``\\dontshow{}``::

    #' @examplesTempdir
    #' write.csv(df, "test.csv")

becomes::

    \\dontshow{
    .old_wd <- setwd(tempdir()) # examplesTempdir
    }
    write.csv(df, "test.csv")
    \\dontshow{
    setwd(.old_wd) # examplesTempdir
    }
"""

import logging
from typing import Optional

from roxytags.output.rd import RdSection, rd_section
from roxytags.parsers.description import PackageConfig
from roxytags.parsers.structure import ParsedTag, Tag
from roxytags.utils.config import WebRConfig

logger = logging.getLogger(__name__)

TAG_NAME = "examplesTempdir"

TEMPDIR_SETUP = "\\dontshow{\n.old_wd <- setwd(tempdir()) # examplesTempdir\n}"
TEMPDIR_TEARDOWN = "\\dontshow{\nsetwd(.old_wd) # examplesTempdir\n}"


def wrap_tempdir(body: str) -> str:
    """Bracket example code with the tempdir setup and teardown lines.

    The body is not escaped or otherwise altered.
    """
    return "\n".join([TEMPDIR_SETUP, body, TEMPDIR_TEARDOWN])


def parse_examples_tempdir(tag: Tag) -> ParsedTag:
    """Parse hook: rewrite the tag into a wrapped ``examples`` tag.

    Args:
        tag: The ``@examplesTempdir`` occurrence.

    Returns:
        A parsed ``examples`` tag holding the wrapped code.
    """
    if tag.first_line.strip():
        logger.warning(
            "%s: @%s takes no parameters, ignoring %r",
            tag.location,
            TAG_NAME,
            tag.first_line.strip(),
        )
    return ParsedTag(tag="examples", value=wrap_tempdir(tag.body()), source=tag)


def render_examples_tempdir(
    parsed: ParsedTag,
    package_config: Optional[PackageConfig] = None,
    settings: Optional[WebRConfig] = None,
) -> list[RdSection]:
    """Render hook: hand the wrapped code to the examples section.

    The tag takes no options, so the configuration arguments are unused.
    """
    return [rd_section("examples", parsed.value)]
