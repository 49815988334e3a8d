"""Data models passed between the documentation host and tag hooks.

Defines the tag occurrence handed over by the host, the record a parse
hook returns, and the webR parameter set. Every object here is a
per-invocation value; nothing is shared across tags.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, fields
from typing import TYPE_CHECKING, Any, Callable, Optional

if TYPE_CHECKING:
    from roxytags.output.rd import RdSection
    from roxytags.parsers.description import PackageConfig
    from roxytags.utils.config import WebRConfig

_LINE_SPLIT = re.compile(r"\r?\n")


@dataclass(frozen=True)
class Tag:
    """One occurrence of a custom tag as discovered by the host.

    Attributes:
        name: Tag name without the leading ``@``.
        raw: Raw tag text. The first line is whatever followed the tag
            name on the tag line; the remaining lines are the body.
        file: Source file the tag was found in, if known.
        line: Line number of the tag in ``file``.
    """

    name: str
    raw: str
    file: str = ""
    line: int = 0

    @property
    def lines(self) -> list[str]:
        """Raw text split on LF or CRLF line endings."""
        return _LINE_SPLIT.split(self.raw)

    @property
    def first_line(self) -> str:
        """The parameter-bearing remainder of the tag line."""
        return self.lines[0]

    def body(self) -> str:
        """Return the tag body: everything after the tag line.

        A single blank separator line directly after the tag line is
        dropped. All other lines are kept verbatim and in order.

        Returns:
            The body joined with ``\\n``.
        """
        body_lines = self.lines[1:]
        if body_lines and not body_lines[0].strip():
            body_lines = body_lines[1:]
        return "\n".join(body_lines)

    @property
    def location(self) -> str:
        """Human-readable ``file:line`` reference for log messages."""
        if not self.file:
            return f"@{self.name}"
        return f"{self.file}:{self.line}"


@dataclass(frozen=True)
class WebRTagData:
    """Data stashed by the webR parse hook for the render hook.

    Attributes:
        param_line: The tag line exactly as written.
        code: The example code body.
    """

    param_line: str
    code: str


@dataclass
class ParsedTag:
    """Result of a parse hook, consumed by the matching render hook.

    Attributes:
        tag: Host-native tag name the block now renders as.
        value: Section value handed to the host's example handler.
        source: The original tag occurrence.
        webr: Deferred webR data, set only by ``@examplesWebR``.
    """

    tag: str
    value: str
    source: Optional[Tag] = None
    webr: Optional[WebRTagData] = None

    @property
    def location(self) -> str:
        """Location of the original tag, for log messages."""
        return self.source.location if self.source else f"@{self.tag}"


@dataclass(frozen=True)
class WebRParams:
    """Options controlling the webR section of one tag.

    A field left as ``None`` is unset in this layer and is filled from a
    lower-precedence layer by :func:`roxytags.parsers.params.merge_params`.

    Attributes:
        embed: Embed an iframe instead of rendering a link.
        autorun: Run the shared code as soon as the REPL opens.
        version: webR release to target, ``latest`` or ``vX.Y.Z``.
        height: Embedded frame height in pixels.
        mode: Hyphen-joined list of REPL panes to show.
        channel: webR communication channel name.
    """

    embed: Optional[bool] = None
    autorun: Optional[bool] = None
    version: Optional[str] = None
    height: Optional[int] = None
    mode: Optional[str] = None
    channel: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary.

        Returns:
            Dictionary representation of these parameters.
        """
        return asdict(self)

    @classmethod
    def field_names(cls) -> list[str]:
        """Names of all parameter fields, in declaration order."""
        return [f.name for f in fields(cls)]


@dataclass
class TagHandler:
    """A parse/render hook pair registered for one tag name.

    Attributes:
        name: Tag name the hooks respond to.
        parse: Parse-phase hook, ``Tag -> ParsedTag``.
        render: Render-phase hook, ``(ParsedTag, PackageConfig, WebRConfig)
            -> sections``.
        description: One-line summary shown by the CLI.
    """

    name: str
    parse: Callable[[Tag], ParsedTag]
    render: Callable[
        [ParsedTag, Optional[PackageConfig], Optional[WebRConfig]],
        list[RdSection],
    ]
    description: str = ""
