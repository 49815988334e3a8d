"""Encoding of R code into webR REPL share payloads.

webR restores shared code from the URL fragment ``#code=<payload>``.
The payload produced here is the JSON variant of that format:

1. a JSON list holding one ``{name, path, text}`` file entry,
2. UTF-8 bytes, standard base64,
3. percent-encoding of every reserved URL character,
4. ``%`` escaped as ``\\%`` so the payload survives Rd,
5. the flags suffix: ``&ju`` (JSON, uncompressed) or ``&jua`` (autorun).
"""

import base64
import hashlib
import json
import logging
from typing import Any, Optional
from urllib.parse import quote, unquote

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "example.R"


def encode_webr_code(
    code: str,
    filename: str = DEFAULT_FILENAME,
    autorun: bool = False,
) -> str:
    """Encode R code for webR REPL sharing.

    The result depends only on the arguments, so identical input always
    produces an identical payload.

    Args:
        code: R code to share.
        filename: Name of the file the code opens as in the REPL.
        autorun: Run the code as soon as the REPL loads.

    Returns:
        The payload, including its flags suffix.
    """
    share_item = [{"name": filename, "path": f"/{filename}", "text": code}]
    json_str = json.dumps(share_item, ensure_ascii=False, separators=(",", ":"))

    base64_str = base64.b64encode(json_str.encode("utf-8")).decode("ascii")
    encoded = quote(base64_str, safe="")
    encoded = encoded.replace("%", "\\%")

    flags = "jua" if autorun else "ju"
    return f"{encoded}&{flags}"


def decode_webr_code(payload: str) -> list[dict[str, Any]]:
    """Decode a payload produced by :func:`encode_webr_code`.

    Args:
        payload: Encoded payload, with or without its flags suffix.

    Returns:
        The list of shared file entries.

    Raises:
        ValueError: If the payload is not valid base64 JSON.
    """
    encoded, _, _flags = payload.partition("&")
    base64_str = unquote(encoded.replace("\\%", "%"))
    raw = base64.b64decode(base64_str, validate=True)
    return json.loads(raw.decode("utf-8"))


def payload_id(payload: str) -> int:
    """Derive a stable numeric id from the first 10 payload characters.

    Used to keep element ids unique when a page embeds several frames.
    """
    digest = hashlib.sha256(payload[:10].encode("utf-8")).hexdigest()
    return int(digest[:8], 16) % 1_000_000


def build_install_code(package: str, repository: str) -> str:
    """Build the R lines that install and attach a package in webR."""
    return "\n".join(
        [
            "# Install and load the package",
            f'webr::install("{package}", repos = "{repository}")',
            f"library({package})",
        ]
    )


def build_webr_code(
    code: str,
    package: Optional[str] = None,
    repository: Optional[str] = None,
) -> str:
    """Prefix example code with install instructions when possible.

    Args:
        code: The example code.
        package: Package name from the DESCRIPTION file.
        repository: Repository webR should install the package from.

    Returns:
        The code to share. Unchanged if either package or repository
        is missing.
    """
    if not package or not repository:
        return code

    logger.debug("Adding install code for %s from %s", package, repository)
    return f"{build_install_code(package, repository)}\n\n# Example code\n{code}"
