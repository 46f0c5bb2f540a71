"""Shared HTML helpers: entity table, reference-link pattern, input coercion."""

from __future__ import annotations

import re
from typing import Final

# Decoding is a single pass over this table, so "&amp;lt;" becomes "&lt;", not "<".
HTML_ENTITIES: Final[dict[str, str]] = {
    "&nbsp;": " ",
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
    "&ldquo;": '"',
    "&rdquo;": '"',
    "&lsquo;": "'",
    "&rsquo;": "'",
}

# Characters BeautifulSoup yields for the same entities.
ENTITY_CHARACTERS: Final[dict[int, str]] = {
    ord("\xa0"): " ",
    ord("“"): '"',
    ord("”"): '"',
    ord("‘"): "'",
    ord("’"): "'",
}

_ENCODE_ORDER: Final[tuple[tuple[str, str], ...]] = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)

_ENTITY_RE = re.compile("|".join(re.escape(entity) for entity in HTML_ENTITIES))

# Trilium writes internal links as <a class="reference-link" href="#root/<path>/<noteId>">.
# Group 1 is the target note id (last path segment), group 2 the link text.
REFERENCE_LINK_RE = re.compile(
    r'<a class="reference-link" href="#root/(?:[^"/]+/)*?([^"/]+)">([^<]+)</a>',
    re.IGNORECASE,
)

REFERENCE_LINK_CLASS = "reference-link"


def coerce_text(value: object) -> str:
    """Return ``value`` as text; bytes are decoded as UTF-8, anything else non-str is empty."""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return ""


def decode_entities(text: object) -> str:
    """Decode the entities of ``HTML_ENTITIES``; other entities are left as is."""
    source = coerce_text(text)
    if not source:
        return ""
    return _ENTITY_RE.sub(lambda match: HTML_ENTITIES[match.group(0)], source)


def encode_entities(text: object) -> str:
    """Escape the characters ``decode_entities`` restores."""
    encoded = coerce_text(text)
    for char, entity in _ENCODE_ORDER:
        encoded = encoded.replace(char, entity)
    return encoded


def escape_attribute(value: str) -> str:
    """Make ``value`` safe inside a double-quoted attribute.

    Uses numeric references that ``decode_entities`` leaves untouched, so a
    later decode pass cannot reopen the attribute. ``&`` is left alone, which
    keeps the escape idempotent.
    """
    return value.replace('"', "&#34;").replace("<", "&#60;").replace(">", "&#62;")
