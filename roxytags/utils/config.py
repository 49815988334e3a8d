"""Configuration loader for roxytags.

Loads settings from configs/config.yaml and provides typed access
to all configuration sections via dataclasses.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from roxytags.generators.encoder import DEFAULT_FILENAME
from roxytags.generators.webr import WEBR_SERVICE_URL
from roxytags.parsers.structure import WebRParams
from roxytags.utils.logging import DEFAULT_FORMAT

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "configs" / "config.yaml"


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"
    format: str = DEFAULT_FORMAT
    file: Optional[str] = None


@dataclass
class WebRConfig:
    """Built-in defaults for the ``@examplesWebR`` tag.

    These form the lowest layer of the parameter cascade; package
    configuration and inline tag options override them.
    """

    service_url: str = WEBR_SERVICE_URL
    filename: str = DEFAULT_FILENAME
    embed: bool = False
    autorun: bool = False
    version: str = "latest"
    height: int = 300
    mode: str = ""
    channel: str = ""

    def to_params(self) -> WebRParams:
        """Return these defaults as a complete parameter layer."""
        return WebRParams(
            embed=self.embed,
            autorun=self.autorun,
            version=self.version,
            height=self.height,
            mode=self.mode,
            channel=self.channel,
        )


@dataclass
class AppConfig:
    """Top-level application configuration."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    webr: WebRConfig = field(default_factory=WebRConfig)


def _build_webr_config(data: dict) -> WebRConfig:
    """Build a WebRConfig from a dictionary.

    Args:
        data: Dictionary with webR settings.

    Returns:
        A configured WebRConfig instance.
    """
    defaults = WebRConfig()
    return WebRConfig(
        service_url=data.get("service_url", defaults.service_url),
        filename=data.get("filename", defaults.filename),
        embed=bool(data.get("embed", defaults.embed)),
        autorun=bool(data.get("autorun", defaults.autorun)),
        version=str(data.get("version", defaults.version)),
        height=int(data.get("height", defaults.height)),
        mode=data.get("mode", defaults.mode) or "",
        channel=data.get("channel", defaults.channel) or "",
    )


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load application configuration from a YAML file.

    Reads the YAML config file and constructs a fully typed AppConfig
    object. Falls back to defaults for any missing values.

    Args:
        config_path: Path to the YAML config file. If None, uses the
            default path at configs/config.yaml.

    Returns:
        A fully populated AppConfig instance.

    Raises:
        yaml.YAMLError: If the config file contains invalid YAML.
    """
    path = Path(config_path) if config_path else _DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.warning("Config file not found at %s, using defaults", path)
        return AppConfig()

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    logger.info("Loaded configuration from %s", path)

    logging_data = raw.get("logging", {})
    logging_config = LoggingConfig(
        level=logging_data.get("level", "INFO"),
        format=logging_data.get("format", DEFAULT_FORMAT),
        file=logging_data.get("file"),
    )

    return AppConfig(
        logging=logging_config,
        webr=_build_webr_config(raw.get("webr", {})),
    )
