"""Markdown -> document conversion pipeline.

Public API:

- :class:`MarkdownConverter` -- Markdown -> ``doc`` node plus warnings.
- :class:`TokenStream` -- lex Markdown into normalised :class:`Token` trees.
- :func:`create_registry` -- build the attribute-syntax tokenizer extensions.
- :func:`transform_inline` / :func:`transform_block` -- lower single tokens.
- :func:`transform_list` / :func:`transform_table` -- list and table nodes.
- :func:`assemble_document` -- lower a top-level token sequence to a ``doc``.
"""

from content_reader.converter.attributes import (
    extract_trailing_attributes,
    has_attributes,
    merge_attributes,
    normalize_attribute_names,
    parse_attribute_string,
)
from content_reader.converter.block_builder import transform_block, transform_blocks
from content_reader.converter.code_blocks import dedent_code, parse_code_info, parse_data
from content_reader.converter.extensions import (
    ExtensionRegistry,
    InlineExtension,
    create_registry,
)
from content_reader.converter.inline import transform_inline, transform_inlines
from content_reader.converter.lists import transform_list
from content_reader.converter.md_to_document import (
    MarkdownConverter,
    assemble_document,
    markdown_to_document,
)
from content_reader.converter.tables import transform_table
from content_reader.converter.token_stream import TokenStream, default_token_stream

__all__ = [
    "ExtensionRegistry",
    "InlineExtension",
    "MarkdownConverter",
    "TokenStream",
    "assemble_document",
    "create_registry",
    "dedent_code",
    "default_token_stream",
    "extract_trailing_attributes",
    "has_attributes",
    "markdown_to_document",
    "merge_attributes",
    "normalize_attribute_names",
    "parse_attribute_string",
    "parse_code_info",
    "parse_data",
    "transform_block",
    "transform_blocks",
    "transform_inline",
    "transform_inlines",
    "transform_list",
    "transform_table",
]
