"""Tests for converter/tables.py."""

from __future__ import annotations

import pytest

from content_reader.converter.tables import column_alignment, transform_table
from content_reader.converter.token_stream import TokenStream
from content_reader.models import Token, TokenType


def cell(value: str) -> list[Token]:
    return [Token(type=TokenType.TEXT, raw=value)]


class TestTransformTable:

    def test_header_and_body_rows(self):
        token = Token(
            type=TokenType.TABLE,
            align=["left", None],
            header=[cell("A"), cell("B")],
            rows=[[cell("1"), cell("2")]],
        )
        table = transform_table(token)
        assert table["type"] == "table"
        header, body = table["content"]
        assert header["type"] == "tableRow"
        assert header["content"][0] == {
            "type": "tableCell",
            "attrs": {"colspan": 1, "rowspan": 1, "align": "left", "header": True},
            "content": [{"type": "paragraph", "content": [{"type": "text", "text": "A"}]}],
        }
        assert body["content"][1]["attrs"] == {
            "colspan": 1, "rowspan": 1, "align": None, "header": False,
        }

    def test_mixed_alignment_from_markdown(self):
        md = "| C | R | L | N |\n|:---:|---:|:---|---|\n| 1 | 2 | 3 | 4 |"
        token = TokenStream().lex(md)[0]
        table = transform_table(token)
        for row in table["content"]:
            aligns = [c["attrs"]["align"] for c in row["content"]]
            assert aligns == ["center", "right", "left", None]

    def test_inline_marks_in_cells(self):
        token = TokenStream().lex("| **H** |\n|---|\n| `x` |")[0]
        table = transform_table(token)
        head_text = table["content"][0]["content"][0]["content"][0]["content"][0]
        body_text = table["content"][1]["content"][0]["content"][0]["content"][0]
        assert head_text["marks"] == [{"type": "bold"}]
        assert body_text["marks"] == [{"type": "code"}]

    def test_empty_cell_has_empty_paragraph(self):
        token = Token(type=TokenType.TABLE, header=[[]], rows=[])
        cell_node = transform_table(token)["content"][0]["content"][0]
        assert cell_node["content"] == [{"type": "paragraph", "content": []}]

    def test_ragged_rows_passed_through(self):
        token = Token(
            type=TokenType.TABLE,
            align=[None, None],
            header=[cell("A"), cell("B")],
            rows=[[cell("1")]],
        )
        rows = transform_table(token)["content"]
        assert len(rows[1]["content"]) == 1


class TestColumnAlignment:

    @pytest.mark.parametrize(
        ("align", "index", "expected"),
        [
            (["center"], 0, "center"),
            (["left", "right"], 1, "right"),
            (["left"], 3, None),
            (["justify"], 0, None),
            ([], 0, None),
        ],
    )
    def test_lookup(self, align, index, expected):
        assert column_alignment(align, index) == expected
