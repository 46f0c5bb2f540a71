"""Pattern-based HTML allow-list sanitizer.

This is NOT a general HTML sanitizer. It is tuned for markup produced by
Trilium's editor and works with regular expressions, not an HTML grammar, so
it must not be relied on for hostile input. The contract:

* ``<script>`` and ``<style>`` blocks are removed with their content.
* Tags outside ``ALLOWED_TAGS`` are removed, their text is kept. A tag
  with no closing ``>`` before the next tag or the end of input is removed
  whole.
* Allowed tags are rebuilt keeping only ``ALLOWED_ATTRIBUTES``; inline
  ``on*`` event handlers never survive inside a tag, not even inside a kept
  attribute value.
* An ``href`` whose scheme is ``javascript:``, ``vbscript:`` or ``data:``
  is dropped. Character references and embedded whitespace are resolved
  before the scheme check, so ``&#106;avascript:`` is caught too.

Only markup is touched: text between tags, such as ``one = 1`` or a decoded
``< style guide >``, passes through unchanged.

Passes repeat until the output stops changing, so fragments that only form a
dangerous construct after an inner tag is removed are caught on a later pass.
A rebuilt tag is unchanged by another pass.
"""

from __future__ import annotations

import re
from html import unescape
from typing import Final

from trilium_explorer.html_utils import coerce_text, escape_attribute

ALLOWED_TAGS: Final[frozenset[str]] = frozenset(
    {"p", "br", "em", "strong", "ul", "ol", "li", "a", "blockquote", "code", "pre", "span"}
)

ALLOWED_ATTRIBUTES: Final[dict[str, frozenset[str]]] = {
    "a": frozenset({"href", "title", "class", "data-note-id"}),
    "span": frozenset({"class"}),
}

UNSAFE_URL_SCHEMES: Final[tuple[str, ...]] = ("javascript:", "vbscript:", "data:")

_BLOCK_RE = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
# Unpaired or unterminated script/style tags; the name must follow "<" directly.
_DANGLING_BLOCK_TAG_RE = re.compile(r"</?(?:script|style)\b[^<>]*>?", re.IGNORECASE)
_EVENT_HANDLER_RE = re.compile(
    r"""(?<![\w-])on\w+\s*=\s*(?:"[^"]*"|'[^']*'|[^\s"'>]*)""", re.IGNORECASE
)
# Group 4 is empty for a tag cut off by the next "<" or the end of input.
_TAG_RE = re.compile(r"<(/?)([a-zA-Z][a-zA-Z0-9]*)\b([^<>]*)(>?)")
_ATTRIBUTE_RE = re.compile(
    r"""([a-zA-Z_:][-a-zA-Z0-9_:.]*)\s*=\s*("[^"]*"|'[^']*'|[^\s"'=<>`]+)"""
)
_URL_NOISE_RE = re.compile(r"[\s\x00-\x1f]+")


def sanitize_html(html: object) -> str:
    """Apply the allow-list until the markup is stable."""
    sanitized = coerce_text(html)
    while True:
        cleaned = _sanitize_pass(sanitized)
        if cleaned == sanitized:
            return cleaned
        sanitized = cleaned


def _sanitize_pass(html: str) -> str:
    html = _BLOCK_RE.sub("", html)
    html = _DANGLING_BLOCK_TAG_RE.sub("", html)
    return _TAG_RE.sub(_rebuild_tag, html)


def is_unsafe_url(value: str) -> bool:
    """True when ``value`` resolves to a script or data URL once references are decoded."""
    normalized = _URL_NOISE_RE.sub("", unescape(value)).lower()
    return normalized.startswith(UNSAFE_URL_SCHEMES)


def _rebuild_tag(match: re.Match[str]) -> str:
    closing, name, attributes, terminated = match.groups()
    tag = name.lower()
    if not terminated or tag not in ALLOWED_TAGS:
        return ""
    if closing:
        return f"</{tag}>"

    allowed = ALLOWED_ATTRIBUTES.get(tag, frozenset())
    kept: list[str] = []
    for attr_match in _ATTRIBUTE_RE.finditer(_EVENT_HANDLER_RE.sub("", attributes)):
        attr_name = attr_match.group(1).lower()
        if attr_name not in allowed:
            continue
        value = attr_match.group(2)
        if value[:1] in {'"', "'"}:
            value = value[1:-1]
        if attr_name == "href" and is_unsafe_url(value):
            continue
        kept.append(f'{attr_name}="{escape_attribute(value)}"')

    if not kept:
        return f"<{tag}>"
    return f"<{tag} {' '.join(kept)}>"
