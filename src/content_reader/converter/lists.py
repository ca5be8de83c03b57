"""List conversion: list tokens to ``bulletList`` / ``orderedList`` nodes.

Every ``listItem`` starts with a ``paragraph``::

    {
        "type": "orderedList",
        "attrs": {"start": 3},
        "content": [
            {"type": "listItem", "content": [
                {"type": "paragraph", "content": [...]},
                {"type": "bulletList", "content": [...]},
            ]},
        ],
    }

Nested lists follow the item's leading paragraph.
"""

from __future__ import annotations

from content_reader.converter.context import ConversionContext
from content_reader.models import NodeType, Token


def transform_list(
    token: Token,
    *,
    ctx: ConversionContext | None = None,
    depth: int = 0,
) -> dict | None:
    """Build a list node from a list token.

    Parameters
    ----------
    token:
        A :attr:`TokenType.LIST` token.
    ctx:
        Conversion context; a default one is created when omitted.
    depth:
        Container nesting depth of the list itself.

    Returns
    -------
    dict | None
        The list node, or None if the list is nested beyond
        ``config.max_nesting_depth``.
    """
    if ctx is None:
        ctx = ConversionContext()
    if ctx.too_deep(depth + 1, "list"):
        return None

    items = [_build_list_item(item, ctx, depth + 1) for item in token.items]

    if token.ordered:
        start = token.start if isinstance(token.start, int) else 1
        return {
            "type": NodeType.ORDERED_LIST.value,
            "attrs": {"start": start},
            "content": items,
        }
    return {"type": NodeType.BULLET_LIST.value, "content": items}


def _build_list_item(tokens: list[Token], ctx: ConversionContext, depth: int) -> dict:
    # Imported here: block_builder imports this module.
    from content_reader.converter.block_builder import transform_blocks

    content = transform_blocks(tokens, ctx=ctx, depth=depth)
    if not content or content[0]["type"] != NodeType.PARAGRAPH.value:
        content.insert(0, {"type": NodeType.PARAGRAPH.value, "content": []})
    return {"type": NodeType.LIST_ITEM.value, "content": content}
