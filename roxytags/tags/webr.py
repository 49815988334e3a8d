"""The ``@examplesWebR`` tag.

Produces the regular examples section plus a ``WebR`` section that
links to, or embeds, the webR REPL with the example code preloaded::

    #' @examplesWebR embed height=400 version=v0.6.0
    #' plot(1:10)

The parse hook only splits the tag; options are parsed and validated in
the render hook, once the package configuration is available. Failures
there never abort the documentation build: the block falls back to its
plain examples section.
"""

import logging
from typing import Optional

from roxytags.generators.encoder import build_webr_code, encode_webr_code
from roxytags.generators.template_manager import TemplateManager
from roxytags.generators.webr import webr_repl_href, webr_repl_iframe, webr_repl_link
from roxytags.output.rd import RdSection, format_conditional, rd_section
from roxytags.parsers.description import (
    ConfigurationError,
    PackageConfig,
    package_defaults,
    resolve_repository,
)
from roxytags.parsers.params import InvalidParameterError, resolve_params
from roxytags.parsers.structure import ParsedTag, Tag, WebRTagData
from roxytags.utils.config import WebRConfig

logger = logging.getLogger(__name__)

TAG_NAME = "examplesWebR"
SECTION_TITLE = "WebR"


def parse_examples_webr(tag: Tag) -> ParsedTag:
    """Parse hook: split the tag into its parameter line and code.

    No validation happens here, so a malformed option cannot fail the
    parse phase before package context exists.

    Args:
        tag: The ``@examplesWebR`` occurrence.

    Returns:
        A parsed ``examples`` tag carrying the deferred webR data. The
        data is omitted when the code body is blank.
    """
    code = tag.body()
    parsed = ParsedTag(tag="examples", value=code, source=tag)
    if code.strip():
        parsed.webr = WebRTagData(param_line=tag.first_line, code=code)
    else:
        logger.debug("%s: empty example body, skipping webR section", tag.location)
    return parsed


def _shared_code(code: str, package_config: PackageConfig) -> str:
    """Prefix the code with install instructions when the package is known."""
    package = package_config.package
    if not package:
        return code

    try:
        repository = resolve_repository(package_config, required=True)
    except ConfigurationError as e:
        logger.warning("Omitting webR install code for %s: %s", package, e)
        return code
    return build_webr_code(code, package, repository)


def build_webr_section(
    data: WebRTagData,
    package_config: PackageConfig,
    settings: WebRConfig,
    templates: Optional[TemplateManager] = None,
) -> RdSection:
    """Build the ``WebR`` Rd section for one tag.

    Args:
        data: Parameter line and code stored by the parse hook.
        package_config: Package configuration for default options.
        settings: Built-in defaults and service settings.
        templates: Template manager for the HTML fragments.

    Returns:
        A custom section titled ``WebR``.

    Raises:
        InvalidParameterError: If the tag's version or mode is invalid.
    """
    params = resolve_params(
        data.param_line,
        package=package_defaults(package_config),
        builtin=settings.to_params(),
    )
    logger.debug("Effective webR parameters: %s", params.to_dict())

    code = _shared_code(data.code, package_config)
    payload = encode_webr_code(code, settings.filename, autorun=bool(params.autorun))
    url = webr_repl_href(
        payload,
        version=params.version or "latest",
        mode=params.mode or "",
        channel=params.channel or "",
        base_url=settings.service_url,
    )

    if params.embed:
        html = webr_repl_iframe(
            url, payload, height=params.height or 0, templates=templates
        )
    else:
        html = webr_repl_link(url, templates=templates)

    content = format_conditional(html=html, latex=f"\\url{{{url}}}")
    return rd_section("section", {"title": SECTION_TITLE, "content": content})


def render_examples_webr(
    parsed: ParsedTag,
    package_config: Optional[PackageConfig] = None,
    settings: Optional[WebRConfig] = None,
) -> list[RdSection]:
    """Render hook: emit the examples section and, if possible, the webR one.

    Args:
        parsed: Result of :func:`parse_examples_webr`.
        package_config: Package configuration; empty if not given.
        settings: Built-in defaults; ``WebRConfig()`` if not given.

    Returns:
        The examples section, followed by the ``WebR`` section when it
        could be generated.
    """
    examples = rd_section("examples", parsed.value)
    if parsed.webr is None:
        return [examples]

    try:
        section = build_webr_section(
            parsed.webr,
            package_config or PackageConfig(),
            settings or WebRConfig(),
        )
    except InvalidParameterError as e:
        logger.error("%s: %s", parsed.location, e)
        return [examples]
    except Exception as e:
        logger.warning("%s: failed to build webR section: %s", parsed.location, e)
        return [examples]

    return [examples, section]
