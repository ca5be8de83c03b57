"""Public data models for content-reader.

This module holds the closed vocabularies used across the pipeline
(token kinds, document node types, mark types), the :class:`Token`
dataclass produced by the token stream adapter, and the result and
warning types returned by the converter.

Document nodes and marks themselves are plain ``dict`` objects so that
the output is directly JSON-serialisable as an editor payload.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class TokenType(str, Enum):
    """Kinds of token produced by :class:`~content_reader.converter.TokenStream`."""

    # Inline kinds
    TEXT = "text"
    STRONG = "strong"
    EM = "em"
    CODESPAN = "codespan"
    HTML = "html"
    BR = "br"
    LINK = "link"
    IMAGE = "image"
    SPAN = "span"

    # Block kinds
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    BLOCKQUOTE = "blockquote"
    HR = "hr"
    CODE = "code"
    LIST = "list"
    TABLE = "table"

    UNKNOWN = "unknown"
    """Anything the tokenizer produced that has no counterpart above."""


INLINE_TOKEN_TYPES: frozenset[TokenType] = frozenset({
    TokenType.TEXT,
    TokenType.STRONG,
    TokenType.EM,
    TokenType.CODESPAN,
    TokenType.HTML,
    TokenType.BR,
    TokenType.LINK,
    TokenType.IMAGE,
    TokenType.SPAN,
})


class NodeType(str, Enum):
    """Document node types accepted by the editor schema."""

    DOC = "doc"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    TEXT = "text"
    IMAGE = "image"
    DIVIDER = "divider"
    BULLET_LIST = "bulletList"
    ORDERED_LIST = "orderedList"
    LIST_ITEM = "listItem"
    CODE_BLOCK = "codeBlock"
    DATA_BLOCK = "dataBlock"
    BLOCKQUOTE = "blockquote"
    TABLE = "table"
    TABLE_ROW = "tableRow"
    TABLE_CELL = "tableCell"
    EYEBROW_HEADING = "eyebrowHeading"
    """Declared by the schema; never produced by the pipeline."""
    INSET_REF = "inset_ref"
    INSET_PLACEHOLDER = "inset_placeholder"


class MarkType(str, Enum):
    """Mark types that can decorate text nodes."""

    BOLD = "bold"
    ITALIC = "italic"
    CODE = "code"
    LINK = "link"
    BUTTON = "button"
    SPAN = "span"


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------

@dataclass
class Token:
    """A single node of the normalised token tree.

    Only the fields relevant to a given :attr:`type` are populated; the
    rest keep their defaults.

    Attributes
    ----------
    type:
        Token kind.
    raw:
        Exact source slice (or the closest equivalent the tokenizer
        exposes).
    text:
        Decoded text payload: alt text for images, label for links and
        spans, body for code blocks.
    children:
        Ordered child tokens (inline content for inline containers and
        paragraphs/headings; block content for blockquotes).
    depth:
        Heading level.
    lang:
        Code fence info string.
    href, title:
        Link/image destination and title.
    attrs:
        Attribute map parsed from a trailing ``{...}`` block.
    ordered, start, items:
        List flag, start number, and per-item child block tokens.
    align, header, rows:
        Table column alignments, header cells and body rows.  Each cell
        is a list of inline tokens.
    """

    type: TokenType
    raw: str = ""
    text: str = ""
    children: list[Token] = field(default_factory=list)
    depth: int = 0
    lang: str | None = None
    href: str = ""
    title: str | None = None
    attrs: dict[str, Any] = field(default_factory=dict)
    ordered: bool = False
    start: int = 1
    items: list[list[Token]] = field(default_factory=list)
    align: list[str | None] = field(default_factory=list)
    header: list[list[Token]] = field(default_factory=list)
    rows: list[list[list[Token]]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly view of this token (used for debug dumps)."""
        out: dict[str, Any] = {"type": self.type.value}
        if self.raw:
            out["raw"] = self.raw
        if self.text:
            out["text"] = self.text
        if self.children:
            out["children"] = [child.to_dict() for child in self.children]
        if self.type is TokenType.HEADING:
            out["depth"] = self.depth
        if self.lang:
            out["lang"] = self.lang
        if self.href:
            out["href"] = self.href
        if self.title is not None:
            out["title"] = self.title
        if self.attrs:
            out["attrs"] = dict(self.attrs)
        if self.type is TokenType.LIST:
            out["ordered"] = self.ordered
            out["start"] = self.start
            out["items"] = [[t.to_dict() for t in item] for item in self.items]
        if self.type is TokenType.TABLE:
            out["align"] = list(self.align)
            out["header"] = [[t.to_dict() for t in cell] for cell in self.header]
            out["rows"] = [
                [[t.to_dict() for t in cell] for cell in row] for row in self.rows
            ]
        return out


# ---------------------------------------------------------------------------
# Conversion results
# ---------------------------------------------------------------------------

@dataclass
class ConversionWarning:
    """A non-fatal issue encountered during conversion.

    Attributes
    ----------
    code:
        A machine-readable warning code (e.g. ``"DATA_BLOCK_FALLBACK"``).
    message:
        A human-readable description of the issue.
    context:
        Arbitrary structured data for diagnostics.
    """

    code: str
    message: str
    context: dict = field(default_factory=dict)


@dataclass
class ConversionResult:
    """Output of a Markdown-to-document conversion.

    Attributes
    ----------
    document:
        The root ``doc`` node.
    warnings:
        Non-fatal issues discovered during conversion.
    """

    document: dict = field(default_factory=lambda: {"type": NodeType.DOC.value, "content": []})
    warnings: list[ConversionWarning] = field(default_factory=list)
