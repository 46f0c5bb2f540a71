"""Turn a note's raw Trilium HTML into display HTML, plain text and references."""

from __future__ import annotations

import re

from trilium_explorer.exceptions import ProcessingError
from trilium_explorer.html_utils import (
    REFERENCE_LINK_RE,
    coerce_text,
    decode_entities,
    escape_attribute,
)
from trilium_explorer.markdown import to_markdown
from trilium_explorer.sanitizer import sanitize_html
from trilium_explorer.schemas import ProcessedContent, Reference

_LEGACY_TAGS = (
    (re.compile(r"<i\b([^>]*)>", re.IGNORECASE), r"<em\1>"),
    (re.compile(r"</i\s*>", re.IGNORECASE), "</em>"),
    (re.compile(r"<b\b([^>]*)>", re.IGNORECASE), r"<strong\1>"),
    (re.compile(r"</b\s*>", re.IGNORECASE), "</strong>"),
)
_EMPTY_PARAGRAPH_RE = re.compile(r"<p>\s*</p>", re.IGNORECASE)
_BLANK_LINES_RE = re.compile(r"\n\s*\n")
_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_and_rewrite(html: object) -> str:
    """Produce display HTML from raw note HTML.

    Legacy ``<i>``/``<b>`` become ``<em>``/``<strong>``, reference-links become
    ``<a class="ref-link" data-note-id=...>`` anchors, known entities are
    decoded, empty paragraphs and blank lines are dropped, and the result goes
    through the allow-list in ``trilium_explorer.sanitizer``.
    """
    processed = coerce_text(html)
    if not processed:
        return ""

    for pattern, replacement in _LEGACY_TAGS:
        processed = pattern.sub(replacement, processed)

    processed = REFERENCE_LINK_RE.sub(_rewrite_reference_link, processed)
    processed = decode_entities(processed)
    processed = _EMPTY_PARAGRAPH_RE.sub("", processed)
    processed = _BLANK_LINES_RE.sub("\n", processed)
    processed = sanitize_html(processed)
    return processed.strip()


def _rewrite_reference_link(match: re.Match[str]) -> str:
    note_id, text = match.group(1), decode_entities(match.group(2))
    return (
        f'<a class="ref-link" data-note-id="{escape_attribute(note_id)}" '
        f'title="See reference: {escape_attribute(text)}">{text}</a>'
    )


def extract_references(html: object) -> list[Reference]:
    """Return the reference-links of ``html`` in document order."""
    source = coerce_text(html)
    if not source:
        return []
    return [
        Reference(
            note_id=match.group(1),
            text=decode_entities(match.group(2)),
            original_href=match.group(0),
        )
        for match in REFERENCE_LINK_RE.finditer(source)
    ]


def to_plain_text(html: object) -> str:
    """Strip tags, decode entities and collapse whitespace."""
    source = coerce_text(html)
    if not source:
        return ""
    stripped = decode_entities(_TAG_RE.sub("", source))
    return _WHITESPACE_RE.sub(" ", stripped).strip()


def word_count(plain: str) -> int:
    return len(plain.split())


def process_content(raw: object) -> ProcessedContent:
    """Derive every representation of one note body from the same raw input."""
    source = coerce_text(raw)
    try:
        markdown = to_markdown(source)
    except (ValueError, TypeError, RecursionError) as exc:
        raise ProcessingError(f"Markdown conversion failed: {exc}") from exc
    return ProcessedContent(
        raw=source,
        html=sanitize_and_rewrite(source),
        plain=to_plain_text(source),
        markdown=markdown,
        references=extract_references(source),
    )
