"""content_reader -- Markdown to editor document trees.

Converts Markdown, extended with a ``{key=value .class #id flag}``
attribute syntax, into a JSON-serialisable document tree of typed nodes
and marks.

Public re-exports
-----------------

* **Conversion:** :func:`markdown_to_document`, :class:`MarkdownConverter`
* **Configuration:** :class:`ConverterConfig`
* **Errors:** Every :class:`ContentReaderError` subclass and :class:`ErrorCode`
* **Models:** Token/node/mark enums and result dataclasses
* **Schema:** :func:`get_base_schema`

Usage::

    from content_reader import markdown_to_document

    doc = markdown_to_document("# Title\\n\\nSome **bold** text.")
"""

from __future__ import annotations

# ── Configuration ───────────────────────────────────────────────────────
from content_reader.config import DEFAULT_DATA_LANGUAGES, ConverterConfig

# ── Conversion ──────────────────────────────────────────────────────────
from content_reader.converter import (
    ExtensionRegistry,
    MarkdownConverter,
    TokenStream,
    assemble_document,
    create_registry,
    extract_trailing_attributes,
    has_attributes,
    markdown_to_document,
    merge_attributes,
    normalize_attribute_names,
    parse_attribute_string,
    transform_block,
    transform_inline,
    transform_list,
    transform_table,
)

# ── Errors ──────────────────────────────────────────────────────────────
from content_reader.errors import (
    ContentReaderConversionError,
    ContentReaderDataError,
    ContentReaderError,
    ErrorCode,
)

# ── Models ──────────────────────────────────────────────────────────────
from content_reader.models import (
    ConversionResult,
    ConversionWarning,
    MarkType,
    NodeType,
    Token,
    TokenType,
)

# ── Schema ──────────────────────────────────────────────────────────────
from content_reader.schema import get_base_schema

__all__ = [
    # Configuration
    "DEFAULT_DATA_LANGUAGES",
    "ConverterConfig",
    # Conversion
    "ExtensionRegistry",
    "MarkdownConverter",
    "TokenStream",
    "assemble_document",
    "create_registry",
    "extract_trailing_attributes",
    "has_attributes",
    "markdown_to_document",
    "merge_attributes",
    "normalize_attribute_names",
    "parse_attribute_string",
    "transform_block",
    "transform_inline",
    "transform_list",
    "transform_table",
    # Errors
    "ContentReaderConversionError",
    "ContentReaderDataError",
    "ContentReaderError",
    "ErrorCode",
    # Models
    "ConversionResult",
    "ConversionWarning",
    "MarkType",
    "NodeType",
    "Token",
    "TokenType",
    # Schema
    "get_base_schema",
]
