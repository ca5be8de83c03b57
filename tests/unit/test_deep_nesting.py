"""Deep nesting stress tests for the conversion pipeline.

Deeply nested lists, blockquotes and emphasis must convert without
errors; anything past ``max_nesting_depth`` is dropped with a
``NESTING_DEPTH_EXCEEDED`` warning instead of recursing further.
"""

from __future__ import annotations

from content_reader.config import ConverterConfig
from content_reader.converter.block_builder import transform_block
from content_reader.converter.context import ConversionContext
from content_reader.converter.md_to_document import MarkdownConverter
from content_reader.models import Token, TokenType


def _converter(**kwargs: object) -> MarkdownConverter:
    return MarkdownConverter(ConverterConfig(**kwargs))


def _nested_list_md(levels: int) -> str:
    return "\n".join("  " * i + f"- level {i}" for i in range(levels))


def _list_depth(node: dict) -> int:
    depth = 0
    while node["type"] in ("bulletList", "orderedList"):
        depth += 1
        children = node["content"][0]["content"]
        if len(children) < 2:
            break
        node = children[1]
    return depth


# =========================================================================
# Nested lists
# =========================================================================


class TestDeepNestedLists:

    def test_four_levels_preserved(self):
        result = _converter().convert(_nested_list_md(4))
        assert _list_depth(result.document["content"][0]) == 4
        assert result.warnings == []

    def test_limit_truncates(self):
        result = _converter(max_nesting_depth=2).convert(_nested_list_md(4))
        assert _list_depth(result.document["content"][0]) == 2
        assert {w.code for w in result.warnings} == {"NESTING_DEPTH_EXCEEDED"}

    def test_truncated_item_keeps_its_paragraph(self):
        result = _converter(max_nesting_depth=1).convert(_nested_list_md(3))
        item = result.document["content"][0]["content"][0]
        assert [node["type"] for node in item["content"]] == ["paragraph"]


# =========================================================================
# Nested blockquotes
# =========================================================================


class TestDeepNestedBlockquotes:

    def test_within_limit(self):
        result = _converter(max_nesting_depth=4).convert("> > > > deep")
        node = result.document["content"][0]
        for _ in range(4):
            assert node["type"] == "blockquote"
            node = node["content"][0]
        assert node["type"] == "paragraph"
        assert result.warnings == []

    def test_beyond_limit(self):
        result = _converter(max_nesting_depth=2).convert("> > > > deep")
        outer = result.document["content"][0]
        assert outer["content"][0]["content"] == []
        assert result.warnings[0].context["construct"] == "blockquote"


# =========================================================================
# Synthetic token trees deeper than the tokenizer produces
# =========================================================================


class TestSyntheticDepth:

    def test_very_deep_emphasis_is_bounded(self):
        token: Token = Token(type=TokenType.TEXT, raw="core")
        for i in range(500):
            token = Token(type=TokenType.STRONG if i % 2 else TokenType.EM, children=[token])
        paragraph = Token(type=TokenType.PARAGRAPH, children=[token])
        ctx = ConversionContext(ConverterConfig(max_nesting_depth=32))
        assert transform_block(paragraph, ctx=ctx) is None
        assert len(ctx.warnings) == 1

    def test_very_deep_blockquotes_are_bounded(self):
        token = Token(type=TokenType.PARAGRAPH, children=[Token(type=TokenType.TEXT, raw="x")])
        for _ in range(500):
            token = Token(type=TokenType.BLOCKQUOTE, children=[token])
        ctx = ConversionContext()
        result = transform_block(token, ctx=ctx)
        assert result["type"] == "blockquote"
        assert len(ctx.warnings) == 1
