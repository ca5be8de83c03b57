"""Lex Markdown with mistune and normalise the result into :class:`Token` trees.

This module wraps mistune v3's AST mode (with the table rules and the
attribute extensions from :mod:`content_reader.converter.extensions`) and
maps the raw token dicts onto the closed :class:`TokenType` vocabulary
consumed by the transformers.

Block kinds:
    paragraph, heading, blockquote, hr, code, html, list, table

Inline kinds:
    text, strong, em, codespan, html, br, link, image, span

Anything else becomes a :attr:`TokenType.UNKNOWN` token carrying whatever
raw text mistune kept for it.
"""

from __future__ import annotations

import threading
from typing import Any

import mistune

from content_reader.converter.extensions import (
    ExtensionRegistry,
    create_registry,
    table_plugin,
)
from content_reader.models import Token, TokenType

# ---------------------------------------------------------------------------
# Mistune-to-token type mapping
# ---------------------------------------------------------------------------

_SIMPLE_BLOCKS: dict[str, TokenType] = {
    "paragraph": TokenType.PARAGRAPH,
    # Tight list items wrap their text in block_text.
    "block_text": TokenType.PARAGRAPH,
    "heading": TokenType.HEADING,
    "block_quote": TokenType.BLOCKQUOTE,
}

_WRAPPERS: dict[str, TokenType] = {
    "strong": TokenType.STRONG,
    "emphasis": TokenType.EM,
}

_SKIP_TYPES: frozenset[str] = frozenset({"blank_line"})


class TokenStream:
    """Lex Markdown into a list of top-level block :class:`Token` objects.

    Parameters
    ----------
    registry:
        Inline extensions to install into the tokenizer.  Defaults to
        :func:`create_registry`.
    """

    def __init__(self, registry: ExtensionRegistry | None = None) -> None:
        self.registry = registry if registry is not None else create_registry()
        self._parser = mistune.create_markdown(renderer="ast")
        self._parser.use(table_plugin)
        self._parser.use(self.registry)

    def lex(self, markdown: str) -> list[Token]:
        """Tokenize *markdown* and return normalised block tokens."""
        raw_tokens = self._parser(markdown)
        if isinstance(raw_tokens, str):
            return []
        return normalize_blocks(raw_tokens)


# ---------------------------------------------------------------------------
# Process-wide default
# ---------------------------------------------------------------------------

_default_stream: TokenStream | None = None
_default_lock = threading.Lock()


def default_token_stream() -> TokenStream:
    """Return the shared :class:`TokenStream`, creating it on first use."""
    global _default_stream
    if _default_stream is None:
        with _default_lock:
            if _default_stream is None:
                _default_stream = TokenStream()
    return _default_stream


# ---------------------------------------------------------------------------
# Block normalisation
# ---------------------------------------------------------------------------

def normalize_blocks(raw_tokens: list[dict]) -> list[Token]:
    """Normalise a list of mistune block tokens, dropping noise tokens."""
    result: list[Token] = []
    for raw in raw_tokens:
        token = normalize_block(raw)
        if token is not None:
            result.append(token)
    return result


def normalize_block(raw: dict) -> Token | None:
    """Normalise a single mistune block token, or return None to skip it."""
    raw_type = raw.get("type", "")
    attrs = raw.get("attrs") or {}

    if raw_type in _SKIP_TYPES:
        return None

    simple = _SIMPLE_BLOCKS.get(raw_type)
    if simple is TokenType.BLOCKQUOTE:
        return Token(
            type=simple,
            children=normalize_blocks(raw.get("children", [])),
        )
    if simple is not None:
        return Token(
            type=simple,
            depth=attrs.get("level", 0),
            children=normalize_inlines(raw.get("children", [])),
        )

    if raw_type == "thematic_break":
        return Token(type=TokenType.HR)

    if raw_type == "block_code":
        code = raw.get("raw", "")
        return Token(
            type=TokenType.CODE,
            raw=code,
            text=code,
            lang=attrs.get("info") or None,
        )

    if raw_type == "block_html":
        html = raw.get("raw", "")
        return Token(type=TokenType.HTML, raw=html, text=html)

    if raw_type == "list":
        return _normalize_list(raw)

    if raw_type == "table":
        return _normalize_table(raw)

    return Token(type=TokenType.UNKNOWN, raw=raw.get("raw", ""))


def _normalize_list(raw: dict) -> Token:
    attrs = raw.get("attrs") or {}
    items: list[list[Token]] = []
    for item in raw.get("children", []):
        if item.get("type") in ("list_item", "task_list_item"):
            items.append(normalize_blocks(item.get("children", [])))
    return Token(
        type=TokenType.LIST,
        ordered=bool(attrs.get("ordered", False)),
        start=attrs.get("start", 1),
        items=items,
    )


def _normalize_table(raw: dict) -> Token:
    """Flatten mistune's head/body/row/cell nesting into header and rows."""
    header: list[list[Token]] = []
    align: list[str | None] = []
    rows: list[list[list[Token]]] = []

    for part in raw.get("children", []):
        part_type = part.get("type", "")
        if part_type == "table_head":
            for cell in part.get("children", []):
                align.append((cell.get("attrs") or {}).get("align"))
                header.append(normalize_inlines(cell.get("children", [])))
        elif part_type == "table_body":
            for row in part.get("children", []):
                rows.append([
                    normalize_inlines(cell.get("children", []))
                    for cell in row.get("children", [])
                ])

    return Token(type=TokenType.TABLE, align=align, header=header, rows=rows)


# ---------------------------------------------------------------------------
# Inline normalisation
# ---------------------------------------------------------------------------

def normalize_inlines(raw_tokens: list[dict]) -> list[Token]:
    # Some mistune releases emit empty text tokens around nested emphasis.
    return [
        normalize_inline(raw)
        for raw in raw_tokens
        if not (raw.get("type") == "text" and not raw.get("raw"))
    ]


def normalize_inline(raw: dict) -> Token:
    """Normalise a single mistune inline token."""
    raw_type = raw.get("type", "")
    attrs = raw.get("attrs") or {}

    if raw_type == "text":
        return Token(type=TokenType.TEXT, raw=raw.get("raw", ""))

    if raw_type == "softbreak":
        return Token(type=TokenType.TEXT, raw="\n")

    if raw_type == "linebreak":
        return Token(type=TokenType.BR, raw="\n")

    wrapper = _WRAPPERS.get(raw_type)
    if wrapper is not None:
        return Token(type=wrapper, children=normalize_inlines(raw.get("children", [])))

    if raw_type == "codespan":
        code = raw.get("raw", "")
        return Token(type=TokenType.CODESPAN, raw=code, text=code)

    if raw_type == "inline_html":
        html = raw.get("raw", "")
        return Token(type=TokenType.HTML, raw=html, text=html)

    if raw_type == "attr_link":
        return Token(
            type=TokenType.LINK,
            raw=raw.get("raw", ""),
            text=attrs.get("label", ""),
            href=attrs.get("url", ""),
            title=attrs.get("title"),
            attrs=dict(attrs.get("attributes") or {}),
        )

    if raw_type == "attr_image":
        return Token(
            type=TokenType.IMAGE,
            raw=raw.get("raw", ""),
            text=attrs.get("alt", ""),
            href=attrs.get("url", ""),
            title=attrs.get("title"),
            attrs=dict(attrs.get("attributes") or {}),
        )

    if raw_type == "attr_span":
        return Token(
            type=TokenType.SPAN,
            raw=raw.get("raw", ""),
            text=attrs.get("label", ""),
            attrs=dict(attrs.get("attributes") or {}),
            children=normalize_inlines(raw.get("children", [])),
        )

    # mistune's own link/image rules: reference links, autolinks, and
    # anything the attribute patterns did not accept.
    if raw_type in ("link", "image"):
        return Token(
            type=TokenType.LINK if raw_type == "link" else TokenType.IMAGE,
            text=extract_text(raw.get("children", [])),
            href=attrs.get("url", ""),
            title=attrs.get("title") or None,
        )

    return Token(type=TokenType.UNKNOWN, raw=raw.get("raw", "") or extract_text(raw.get("children", [])))


def extract_text(children: list[dict]) -> str:
    """Recursively extract plain text from raw mistune inline tokens."""
    parts: list[str] = []
    for token in children:
        token_type = token.get("type", "")
        if token_type == "softbreak":
            parts.append("\n")
        elif "children" in token:
            parts.append(extract_text(token["children"]))
        elif "raw" in token:
            parts.append(token["raw"])
    return "".join(parts)
