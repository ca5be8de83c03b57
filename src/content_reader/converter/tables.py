"""Table conversion: table tokens to ``table`` nodes.

The header row and each body row become ``tableRow`` nodes.  Cells look
like::

    {
        "type": "tableCell",
        "attrs": {"colspan": 1, "rowspan": 1, "align": "center", "header": true},
        "content": [{"type": "paragraph", "content": [<inline nodes>]}],
    }

Column alignment comes from the separator row (``:---:`` center,
``---:`` right, ``:---`` left, ``---`` none) and is looked up by column
index.  The tokenizer pads or cuts body rows to the header width; a
hand-built token whose rows differ in length is passed through as is.
"""

from __future__ import annotations

from content_reader.converter.context import ConversionContext
from content_reader.converter.inline import merge_adjacent_text, transform_inlines
from content_reader.models import NodeType, Token

ALIGNMENTS: frozenset[str] = frozenset({"left", "center", "right"})


def transform_table(token: Token, *, ctx: ConversionContext | None = None) -> dict:
    """Build a ``table`` node from a table token.

    Parameters
    ----------
    token:
        A :attr:`TokenType.TABLE` token.
    ctx:
        Conversion context; a default one is created when omitted.

    Returns
    -------
    dict
        The table node; its first row is the header row.
    """
    if ctx is None:
        ctx = ConversionContext()

    rows = [_build_row(token.header, token.align, True, ctx)]
    rows.extend(_build_row(row, token.align, False, ctx) for row in token.rows)
    return {"type": NodeType.TABLE.value, "content": rows}


def column_alignment(align: list[str | None], index: int) -> str | None:
    """Return the alignment of column *index*, or None if unset."""
    if index >= len(align):
        return None
    value = align[index]
    return value if value in ALIGNMENTS else None


def _build_row(
    cells: list[list[Token]],
    align: list[str | None],
    header: bool,
    ctx: ConversionContext,
) -> dict:
    return {
        "type": NodeType.TABLE_ROW.value,
        "content": [
            _build_cell(cell, column_alignment(align, index), header, ctx)
            for index, cell in enumerate(cells)
        ],
    }


def _build_cell(
    tokens: list[Token],
    align: str | None,
    header: bool,
    ctx: ConversionContext,
) -> dict:
    content = transform_inlines(tokens, ctx=ctx)
    if ctx.config.merge_adjacent_text:
        content = merge_adjacent_text(content)
    return {
        "type": NodeType.TABLE_CELL.value,
        "attrs": {"colspan": 1, "rowspan": 1, "align": align, "header": header},
        "content": [{"type": NodeType.PARAGRAPH.value, "content": content}],
    }
