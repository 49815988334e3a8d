"""Parameter parsing and validation for the ``@examplesWebR`` tag line.

The tag line carries whitespace-separated ``key=value`` or bare-flag
tokens, e.g. ``@examplesWebR embed autorun version=v0.6.0 height=400``.
Only the first token for each option is read.
"""

import logging
import re
from typing import Optional

from roxytags.parsers.structure import WebRParams

logger = logging.getLogger(__name__)

MIN_WEBR_VERSION = (0, 5, 4)
MODE_COMPONENTS = ("editor", "plot", "terminal", "files")
TRUTHY_VALUES = frozenset({"true", "yes", "1"})

BUILTIN_PARAMS = WebRParams(
    embed=False,
    autorun=False,
    version="latest",
    height=300,
    mode="",
    channel="",
)

_VERSION_PREFIX = re.compile(r"^v\d+\.\d+\.\d+")
_VERSION_NUMBER = re.compile(r"^\d+(?:[.-]\d+)*$")


class InvalidParameterError(ValueError):
    """Raised when a tag parameter has a value that cannot be used."""


def parse_bool(value: str) -> bool:
    """Interpret a flag value case-insensitively.

    Args:
        value: Raw value text, e.g. ``"TRUE"`` or ``"no"``.

    Returns:
        True for ``true``, ``yes`` or ``1``; False for anything else.
    """
    return value.strip().lower() in TRUTHY_VALUES


def validate_version(version_str: str) -> bool:
    """Check that a webR version is ``latest`` or at least v0.5.4.

    Args:
        version_str: Version string such as ``"v0.6.0"``.

    Returns:
        True if the version can be targeted, False otherwise.
    """
    if version_str == "latest":
        return True

    if not _VERSION_PREFIX.match(version_str):
        return False

    numeric_part = version_str[1:]
    if not _VERSION_NUMBER.match(numeric_part):
        return False

    components = tuple(int(p) for p in re.split(r"[.-]", numeric_part))
    return components >= MIN_WEBR_VERSION


def validate_mode(mode: str) -> bool:
    """Check that every hyphen-separated pane name is known.

    Args:
        mode: Mode string such as ``"editor-plot"``. Empty is allowed.

    Returns:
        True if the mode is empty or made only of known pane names.
    """
    if mode == "":
        return True
    return all(part in MODE_COMPONENTS for part in mode.split("-"))


def _search(pattern: str, tag_line: str) -> Optional[re.Match]:
    return re.search(rf"(?<!\S){pattern}(?!\S)", tag_line)


def _flag(name: str, tag_line: str) -> Optional[bool]:
    match = _search(rf"{name}(?:=(\S*))?", tag_line)
    if match is None:
        return None
    value = match.group(1)
    return True if value is None else parse_bool(value)


def parse_params(tag_line: str) -> WebRParams:
    """Extract the options written inline on a tag line.

    Options missing from the line are left unset (``None``) so the
    result can be layered over package and built-in defaults.

    Args:
        tag_line: First line of the tag.

    Returns:
        The inline parameter layer.

    Raises:
        InvalidParameterError: If ``version`` or ``mode`` is invalid.
    """
    version = None
    match = _search(r"version=(\S+)", tag_line)
    if match:
        version = match.group(1)
        if not validate_version(version):
            raise InvalidParameterError(
                f"Invalid webR version '{version}'. Must be 'latest' or v0.5.4 "
                "or higher (e.g., v0.5.4, v0.6.0)"
            )

    mode = None
    match = _search(r"mode=(\S*)", tag_line)
    if match:
        mode = match.group(1)
        if not validate_mode(mode):
            raise InvalidParameterError(
                f"Invalid webR mode '{mode}'. Components must be joined by '-' "
                f"and be one of: {', '.join(MODE_COMPONENTS)}"
            )

    # Non-numeric heights never match and fall through to the defaults
    height = None
    match = _search(r"height=(\d+)", tag_line)
    if match:
        height = int(match.group(1))

    channel = None
    match = _search(r"channel=(\S*)", tag_line)
    if match:
        channel = match.group(1)

    params = WebRParams(
        embed=_flag("embed", tag_line),
        autorun=_flag("autorun", tag_line),
        version=version,
        height=height,
        mode=mode,
        channel=channel,
    )
    logger.debug("Parsed tag line %r into %s", tag_line, params)
    return params


def merge_params(
    builtin: WebRParams,
    package: WebRParams,
    local: WebRParams,
) -> WebRParams:
    """Merge three parameter layers into one.

    For every option the local value wins over the package value, which
    wins over the built-in value. None of the inputs is modified.

    Args:
        builtin: Hard-coded defaults.
        package: Defaults read from the package configuration.
        local: Options written on the tag line.

    Returns:
        A new WebRParams holding the effective value of each option.
    """
    merged = {}
    for name in WebRParams.field_names():
        for layer in (local, package, builtin):
            value = getattr(layer, name)
            if value is not None:
                merged[name] = value
                break
        else:
            merged[name] = None
    return WebRParams(**merged)


def resolve_params(
    tag_line: str,
    package: Optional[WebRParams] = None,
    builtin: WebRParams = BUILTIN_PARAMS,
) -> WebRParams:
    """Parse a tag line and layer it over package and built-in defaults.

    Args:
        tag_line: First line of the tag.
        package: Defaults from the package configuration, if any.
        builtin: Built-in defaults.

    Returns:
        The effective parameter set for the tag.

    Raises:
        InvalidParameterError: If an inline ``version`` or ``mode`` is invalid.
    """
    return merge_params(builtin, package or WebRParams(), parse_params(tag_line))
