"""CLI commands for roxytags.

Provides the Click-based command group 'roxytags' with subcommands for
previewing what a tag renders to, building webR share URLs, and
listing the available tags.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from roxytags import __version__
from roxytags.generators.encoder import encode_webr_code
from roxytags.generators.webr import webr_repl_href
from roxytags.output.rd import RdDocument
from roxytags.parsers.description import read_package_config
from roxytags.parsers.params import MODE_COMPONENTS, validate_mode, validate_version
from roxytags.parsers.structure import Tag
from roxytags.tags import TAG_HANDLERS, process_tag
from roxytags.utils.config import load_config
from roxytags.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="roxytags")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Override the log level from config.yaml.",
)
def roxytags(log_level: Optional[str]) -> None:
    """roxytags: custom roxygen tags for R package documentation."""
    config = load_config()
    setup_logging(
        level=log_level or config.logging.level,
        log_format=config.logging.format,
        log_file=config.logging.file,
    )


@roxytags.command()
def tags() -> None:
    """List the tags roxytags provides."""
    for name in sorted(TAG_HANDLERS):
        click.echo(f"@{name}: {TAG_HANDLERS[name].description}")


@roxytags.command()
@click.argument("tag_name")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--description",
    "description_path",
    type=click.Path(),
    default=None,
    help="DESCRIPTION file or package root to read defaults from.",
)
def render(tag_name: str, path: str, description_path: Optional[str]) -> None:
    """Render one tag block and print the resulting Rd.

    PATH holds the tag text: the first line is what follows the tag name
    (its options), the remaining lines are the example code.
    """
    name = tag_name.lstrip("@")
    if name not in TAG_HANDLERS:
        raise click.ClickException(
            f"Unknown tag '@{name}'. Available: {', '.join(sorted(TAG_HANDLERS))}"
        )

    logger.info("Rendering @%s from %s", name, path)
    config = load_config()
    package_config = read_package_config(description_path)
    tag = Tag(name=name, raw=Path(path).read_text(encoding="utf-8"), file=path, line=1)

    document = RdDocument()
    document.extend(process_tag(tag, package_config, config.webr))
    click.echo(document.format(), nl=False)


@roxytags.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--webr-version",
    "version",
    default=None,
    help="webR version (default from config).",
)
@click.option(
    "--mode",
    default=None,
    help=f"Hyphen-joined panes: {', '.join(MODE_COMPONENTS)}.",
)
@click.option("--channel", default=None, help="webR communication channel.")
@click.option("--autorun", is_flag=True, help="Run the code when the REPL opens.")
@click.option("--filename", default=None, help="Name of the shared file.")
def share(
    path: str,
    version: Optional[str],
    mode: Optional[str],
    channel: Optional[str],
    autorun: bool,
    filename: Optional[str],
) -> None:
    """Print a webR REPL URL that opens the R file at PATH."""
    settings = load_config().webr
    version = version or settings.version
    mode = settings.mode if mode is None else mode
    channel = settings.channel if channel is None else channel

    if not validate_version(version):
        raise click.ClickException(
            f"Invalid webR version '{version}'. Must be 'latest' or v0.5.4 or higher"
        )
    if not validate_mode(mode):
        raise click.ClickException(
            f"Invalid webR mode '{mode}'. Use: {', '.join(MODE_COMPONENTS)}"
        )

    code = Path(path).read_text(encoding="utf-8")
    payload = encode_webr_code(
        code,
        filename or settings.filename,
        autorun=autorun or settings.autorun,
    )
    url = webr_repl_href(payload, version, mode, channel, base_url=settings.service_url)
    # Undo the Rd escaping for a URL meant to be pasted in a browser
    click.echo(url.replace("\\%", "%"))
