"""Convert Trilium note HTML to Markdown with a custom serializer."""

from __future__ import annotations

import re

from trilium_explorer.html_utils import (
    ENTITY_CHARACTERS,
    REFERENCE_LINK_CLASS,
    coerce_text,
)

try:
    from bs4 import BeautifulSoup
    from bs4.element import Comment, NavigableString, Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc


_HEADING_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6"}
_CONTAINER_TAGS = {"html", "body", "section", "article", "div", "figure", "main"}

# Characters that start Markdown syntax anywhere in a line.
_MARKDOWN_SPECIAL_RE = re.compile(r"([\\`*_\[\]])")
# Text at the start of a line that would read as a heading, list item or quote.
_LINE_MARKER_RE = re.compile(
    r"^(?:(#{1,6}(?=\s|$)|[-+](?=\s|$)|>)|(\d+)([.)])(?=\s|$))", re.MULTILINE
)


def to_markdown(html: object) -> str:
    """Convert note HTML into Markdown.

    Headings are ATX style, emphasis uses ``*``/``**``, code blocks are fenced,
    unordered items use ``- `` and ordered items ``1. `` with continuation
    lines indented two spaces. Reference-links keep only their text.
    Non-breaking spaces and curly quotes come out as their plain ASCII forms.
    """
    source = coerce_text(html)
    if not source.strip():
        return ""
    soup = BeautifulSoup(source, "lxml")
    for tag in soup.find_all(["script", "style", "noscript", "head"]):
        tag.decompose()
    blocks = _serialize_children(soup)
    return "\n\n".join(block for block in blocks if block).strip()


def _serialize_children(container: Tag) -> list[str]:
    blocks: list[str] = []
    inline_run: list[str] = []

    def flush() -> None:
        text = _cleanup_inline_text("".join(inline_run))
        inline_run.clear()
        if text:
            blocks.append(text)

    for child in container.children:
        if isinstance(child, Comment):
            continue
        if isinstance(child, Tag) and _is_block(child):
            flush()
            blocks.extend(_serialize_block(child))
        else:
            inline_run.append(_serialize_inline(child))
    flush()
    return blocks


def _is_block(tag: Tag) -> bool:
    return tag.name in _HEADING_TAGS | _CONTAINER_TAGS | {
        "p",
        "ul",
        "ol",
        "pre",
        "blockquote",
        "table",
        "hr",
    }


def _serialize_block(tag: Tag) -> list[str]:
    if tag.name in _CONTAINER_TAGS:
        return _serialize_children(tag)

    if tag.name in _HEADING_TAGS:
        level = int(tag.name[1])
        heading = _normalize_text(_serialize_children_inline(tag))
        if not heading:
            return []
        return [f"{'#' * level} {heading}"]

    if tag.name == "p":
        paragraph = _cleanup_inline_text(_serialize_children_inline(tag))
        return [paragraph] if paragraph else []

    if tag.name in {"ul", "ol"}:
        lines = _serialize_list(tag)
        return ["\n".join(lines)] if lines else []

    if tag.name == "pre":
        code = _translate(tag.get_text()).strip("\n")
        return [f"```\n{code}\n```"] if code else []

    if tag.name == "blockquote":
        inner = "\n\n".join(_serialize_children(tag))
        if not inner:
            return []
        return ["\n".join(f"> {line}" if line else ">" for line in inner.split("\n"))]

    if tag.name == "table":
        text = _normalize_text(tag.get_text(" "))
        return [_translate(text)] if text else []

    if tag.name == "hr":
        return ["---"]

    return _serialize_children(tag)


def _serialize_list(list_tag: Tag) -> list[str]:
    prefix = "1. " if list_tag.name == "ol" else "- "
    lines: list[str] = []
    for item in list_tag.find_all("li", recursive=False):
        content = "\n".join(_serialize_children(item)).strip()
        item_lines = content.split("\n") if content else [""]
        for index, line in enumerate(item_lines):
            if index == 0:
                lines.append(f"{prefix}{line}".rstrip())
            else:
                lines.append(f"  {line}" if line else "")
    return lines


def _serialize_inline(node: Tag | NavigableString) -> str:
    if isinstance(node, Comment):
        return ""
    if isinstance(node, NavigableString):
        return _escape_markdown(_translate(str(node)))

    if node.name == "br":
        return "\n"

    if node.name in {"em", "i"}:
        text = _serialize_children_inline(node).strip()
        return f"*{text}*" if text else ""

    if node.name in {"strong", "b"}:
        text = _serialize_children_inline(node).strip()
        return f"**{text}**" if text else ""

    if node.name == "code":
        text = _translate(node.get_text())
        return f"`{text}`" if text else ""

    if node.name == "a":
        text = _serialize_children_inline(node).strip()
        if REFERENCE_LINK_CLASS in node.get("class", []):
            return text
        href = node.get("href")
        if href:
            return f"[{text or href}]({href})"
        return text

    if node.name == "img":
        src = node.get("src")
        if not src:
            return ""
        return f"![{node.get('alt', '')}]({src})"

    if _is_block(node):
        return "\n\n".join(_serialize_block(node))

    return _serialize_children_inline(node)


def _serialize_children_inline(tag: Tag) -> str:
    return "".join(_serialize_inline(child) for child in tag.children)


def _translate(text: str) -> str:
    return text.translate(ENTITY_CHARACTERS)


def _escape_markdown(text: str) -> str:
    return _MARKDOWN_SPECIAL_RE.sub(r"\\\1", text)


def _escape_line_marker(match: re.Match[str]) -> str:
    marker, number, delimiter = match.groups()
    if number is not None:
        return f"{number}\\{delimiter}"
    return f"\\{marker}"


def _cleanup_inline_text(text: str) -> str:
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r" *\n *", "\n", text)
    return _LINE_MARKER_RE.sub(_escape_line_marker, text.strip())


def _normalize_text(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()
