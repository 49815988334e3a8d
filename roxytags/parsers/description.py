"""Package configuration read from an R package DESCRIPTION file.

DESCRIPTION files use the Debian control file (DCF) format: one
``Field: value`` per line, with indented lines continuing the previous
field. Tag defaults live under the ``Config/roxytags/`` namespace::

    Package: mypkg
    URL: https://alice.github.io/mypkg/, https://github.com/alice/mypkg
    Config/roxytags/webr-height: 500
    Config/roxytags/webr-autorun: true
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from roxytags.parsers.params import parse_bool, validate_mode, validate_version
from roxytags.parsers.structure import WebRParams

logger = logging.getLogger(__name__)

CONFIG_PREFIX = "Config/roxytags/"

_FIELD_LINE = re.compile(r"^([^\s:]+):\s*(.*)$")
_URL_SPLIT = re.compile(r"[,\s]+")
_GITHUB_PAGES = re.compile(r"^https://([A-Za-z0-9-]+)\.github\.io/([^/\s]+)/?$")
_R_UNIVERSE = re.compile(r"^https://([A-Za-z0-9-]+)\.r-universe\.dev(?:/\S*)?$")


class ConfigurationError(ValueError):
    """Raised when the package configuration cannot satisfy a request."""


@dataclass(frozen=True)
class PackageConfig:
    """Read-only view of a package's DESCRIPTION fields.

    Attributes:
        fields: Mapping of field name to raw string value.
        path: File the fields were read from, if any.
    """

    fields: dict[str, str] = field(default_factory=dict)
    path: Optional[str] = None

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return a field value, or ``default`` when absent."""
        return self.fields.get(key, default)

    def option(self, name: str) -> Optional[str]:
        """Return a ``Config/roxytags/<name>`` value, stripped, or None."""
        value = self.fields.get(CONFIG_PREFIX + name)
        if value is None:
            return None
        value = value.strip()
        return value or None

    @property
    def package(self) -> Optional[str]:
        """The package name, if the DESCRIPTION declares one."""
        name = (self.fields.get("Package") or "").strip()
        return name or None


def parse_dcf(text: str) -> dict[str, str]:
    """Parse the first record of a DCF document.

    Continuation lines are stripped and joined to their field with a
    newline. Parsing stops at the first blank line.

    Args:
        text: Contents of a DESCRIPTION file.

    Returns:
        Mapping of field names to values.

    Raises:
        ValueError: If a line is neither a field nor a continuation.
    """
    result: dict[str, str] = {}
    current: Optional[str] = None

    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            if result:
                break
            continue
        if line.startswith("#"):
            continue
        if line[0] in " \t":
            if current is None:
                raise ValueError(f"Continuation line without a field at line {lineno}")
            result[current] = f"{result[current]}\n{line.strip()}".strip()
            continue

        match = _FIELD_LINE.match(line)
        if not match:
            raise ValueError(f"Malformed DCF line {lineno}: {line!r}")
        current = match.group(1)
        result[current] = match.group(2).strip()

    return result


def read_package_config(path: Union[str, Path, None]) -> PackageConfig:
    """Read package configuration from a DESCRIPTION file.

    Missing or unreadable files are not an error: a warning is logged
    and an empty configuration is returned so built-in defaults apply.

    Args:
        path: Path to a DESCRIPTION file or to a package root directory.

    Returns:
        The package configuration.
    """
    if path is None:
        return PackageConfig()

    desc_path = Path(path)
    if desc_path.is_dir():
        desc_path = desc_path / "DESCRIPTION"

    try:
        text = desc_path.read_text(encoding="utf-8")
        fields_ = parse_dcf(text)
    except (OSError, UnicodeDecodeError, ValueError) as e:
        logger.warning("Could not read package configuration from %s: %s", desc_path, e)
        return PackageConfig()

    logger.debug("Loaded %d DESCRIPTION fields from %s", len(fields_), desc_path)
    return PackageConfig(fields=fields_, path=str(desc_path))


def package_defaults(config: PackageConfig) -> WebRParams:
    """Build the package-level parameter layer from configuration.

    Values that cannot be used (a non-numeric height, an unsupported
    version or mode) are dropped with a warning.

    Args:
        config: The package configuration.

    Returns:
        A WebRParams with only the configured options set.
    """
    height = None
    raw_height = config.option("webr-height")
    if raw_height is not None:
        if raw_height.isdecimal():
            height = int(raw_height)
        else:
            logger.warning("Ignoring non-numeric webr-height %r", raw_height)

    version = config.option("webr-version")
    if version is not None and not validate_version(version):
        logger.warning("Ignoring unsupported webr-version %r", version)
        version = None

    mode = config.option("webr-mode")
    if mode is not None and not validate_mode(mode):
        logger.warning("Ignoring invalid webr-mode %r", mode)
        mode = None

    embed = config.option("webr-embed")
    autorun = config.option("webr-autorun")

    return WebRParams(
        embed=parse_bool(embed) if embed is not None else None,
        autorun=parse_bool(autorun) if autorun is not None else None,
        version=version,
        height=height,
        mode=mode,
        channel=config.option("webr-channel"),
    )


def detect_repository(urls: str) -> Optional[str]:
    """Derive a webR package repository from a URL field.

    GitHub Pages URLs (``https://<user>.github.io/<name>/``) are
    checked first, then r-universe URLs (``https://<user>.r-universe.dev``).
    Within each pattern the first URL in declaration order wins.

    Args:
        urls: Comma- or whitespace-separated URLs.

    Returns:
        The repository URL, or None if no URL matches.
    """
    candidates = [u for u in _URL_SPLIT.split(urls.strip()) if u]

    for url in candidates:
        match = _GITHUB_PAGES.match(url)
        if match:
            return f"https://{match.group(1)}.github.io/{match.group(2)}/"

    for url in candidates:
        match = _R_UNIVERSE.match(url)
        if match:
            return f"https://{match.group(1)}.r-universe.dev"

    return None


def resolve_repository(config: PackageConfig, required: bool = False) -> Optional[str]:
    """Find the repository webR should install the package from.

    An explicit ``Config/roxytags/webr-repo`` wins; otherwise the
    repository is detected from the ``URL`` field.

    Args:
        config: The package configuration.
        required: Raise instead of returning None when nothing is found.

    Returns:
        The repository URL, or None.

    Raises:
        ConfigurationError: If ``required`` and no repository is found.
    """
    override = config.option("webr-repo")
    if override:
        if re.match(r"^https?://", override):
            return override
        logger.warning("Ignoring webr-repo %r: not an http(s) URL", override)

    repository = detect_repository(config.get("URL", "") or "")
    if repository is None and required:
        raise ConfigurationError(
            f"No webR repository found. Set {CONFIG_PREFIX}webr-repo or add a URL "
            "of the form https://<user>.github.io/<name>/ or "
            "https://<user>.r-universe.dev to the URL field"
        )
    return repository
