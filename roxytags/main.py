"""Entry point for roxytags.

Delegates to the Click command group, which initializes configuration
and logging.
"""

from roxytags.cli.commands import roxytags


def main() -> None:
    """Launch the roxytags CLI."""
    roxytags()


if __name__ == "__main__":
    main()
