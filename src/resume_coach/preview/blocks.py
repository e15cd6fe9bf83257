"""Split a Markdown resume into the blocks that suggestions attach to."""

from __future__ import annotations

import html
import re
from dataclasses import dataclass

import markdown

_HEADING_RE = re.compile(r"^\s{0,3}#{1,6}\s+")
_LIST_ITEM_RE = re.compile(r"^\s{0,3}(?:[-*+]|\d+[.)])\s+")
_QUOTE_RE = re.compile(r"^\s{0,3}>")
_FENCE_RE = re.compile(r"^\s{0,3}(```|~~~)")
_TAG_RE = re.compile(r"<[^>]+>")

# Kinds a suggestion can be shown under; code blocks are rendered but never annotated
ANNOTATED_KINDS = ("heading", "paragraph", "list_item", "blockquote")


@dataclass(frozen=True)
class Block:
    kind: str  # "heading" | "paragraph" | "list_item" | "blockquote" | "code"
    source: str  # Markdown as written

    @property
    def html(self) -> str:
        return markdown.markdown(self.source, extensions=["fenced_code"])

    @property
    def text(self) -> str:
        """Rendered text with markup removed, as a reader would see it."""
        return html.unescape(_TAG_RE.sub("", self.html)).strip()

    @property
    def annotatable(self) -> bool:
        return self.kind in ANNOTATED_KINDS


def split_blocks(content: str) -> list[Block]:
    """Split ``content`` into headings, paragraphs, list items, quotes and code."""
    blocks: list[Block] = []
    buffer: list[str] = []
    kind: str | None = None

    def flush() -> None:
        nonlocal buffer, kind
        if kind is not None and buffer:
            blocks.append(Block(kind=kind, source="\n".join(buffer)))
        buffer = []
        kind = None

    for line in content.splitlines():
        if kind == "code":
            buffer.append(line)
            if _FENCE_RE.match(line):
                flush()
            continue

        if not line.strip():
            flush()
            continue

        if _FENCE_RE.match(line):
            flush()
            kind = "code"
            buffer.append(line)
        elif _HEADING_RE.match(line):
            flush()
            blocks.append(Block(kind="heading", source=line.strip()))
        elif _LIST_ITEM_RE.match(line):
            flush()
            kind = "list_item"
            buffer.append(line)
        elif _QUOTE_RE.match(line):
            if kind != "blockquote":
                flush()
                kind = "blockquote"
            buffer.append(line)
        elif kind in ("list_item", "paragraph", "blockquote"):
            # lazy continuation of the current block
            buffer.append(line)
        else:
            kind = "paragraph"
            buffer.append(line)

    flush()
    return blocks
