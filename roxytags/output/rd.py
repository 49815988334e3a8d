"""Rd section model and text output.

Render hooks return :class:`RdSection` objects, mirroring roxygen's
``rd_section()``. :class:`RdDocument` collects sections for one topic,
merges repeated ones, and formats the result as Rd markup.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

logger = logging.getLogger(__name__)

NON_HTML_FALLBACK = "Interactive webR content not available for this output format."


@dataclass(frozen=True)
class RdSection:
    """One section of an Rd topic.

    Attributes:
        type: Section type, e.g. ``"examples"`` or ``"section"``.
        value: Section payload. A string for examples, a dict with
            ``title`` and ``content`` for custom sections.
    """

    type: str
    value: Any


def rd_section(type_: str, value: Any) -> RdSection:
    """Create an Rd section."""
    return RdSection(type=type_, value=value)


def format_conditional(html: str, latex: str, other: str = NON_HTML_FALLBACK) -> str:
    """Build content that varies with the Rd output format.

    Args:
        html: Raw HTML emitted for HTML help pages.
        latex: Rd markup used for PDF manuals.
        other: Plain text for every other format.

    Returns:
        Nested ``\\ifelse`` Rd markup.
    """
    return (
        "\\ifelse{html}{\\out{\n"
        f"{html}"
        "\n}}{\\ifelse{latex}{"
        f"{latex}"
        "}{"
        f"{other}"
        "}}"
    )


class RdDocument:
    """Sections collected for a single Rd topic.

    Examples sections are merged into one whose value lists every
    contribution in order. Custom sections are kept separately, in
    insertion order.
    """

    def __init__(self) -> None:
        self._examples: list[str] = []
        self._sections: list[dict[str, str]] = []

    def add(self, section: RdSection) -> None:
        """Add a section to the topic.

        Args:
            section: The section to add.

        Raises:
            ValueError: If the section type is not supported.
        """
        if section.type == "examples":
            self._examples.append(section.value)
        elif section.type == "section":
            self._sections.append(dict(section.value))
        else:
            raise ValueError(f"Unsupported Rd section type: {section.type}")

    def extend(self, sections: list[RdSection]) -> None:
        for section in sections:
            self.add(section)

    def get_section(self, type_: str) -> Optional[RdSection]:
        """Return the merged section of a given type, or None if absent.

        Args:
            type_: ``"examples"`` or ``"section"``.

        Returns:
            A section whose value is a list of every contribution.
        """
        if type_ == "examples":
            values: list[Any] = list(self._examples)
        elif type_ == "section":
            values = list(self._sections)
        else:
            return None
        return RdSection(type=type_, value=values) if values else None

    def format(self) -> str:
        """Format the topic as Rd text.

        Returns:
            Custom sections followed by the examples section.
        """
        parts = [
            f"\\section{{{s['title']}}}{{\n{s['content']}\n}}" for s in self._sections
        ]
        if self._examples:
            parts.append("\\examples{\n" + "\n\n".join(self._examples) + "\n}")

        logger.debug(
            "Formatted Rd topic: %d sections, %d examples",
            len(self._sections),
            len(self._examples),
        )
        return "\n".join(parts) + "\n" if parts else ""
