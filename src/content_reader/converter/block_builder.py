"""Convert normalised block tokens to document block nodes.

Handled block kinds:

- paragraph -> one or more ``paragraph`` nodes, with non-icon images
  hoisted out as sibling ``image`` nodes
- heading -> ``heading`` with ``attrs.level``
- blockquote -> ``blockquote`` wrapping the flattened child blocks
- hr -> ``divider``
- code -> ``dataBlock`` or ``codeBlock`` (see :mod:`.code_blocks`)
- list -> delegate to :mod:`.lists`
- table -> delegate to :mod:`.tables`
- html -> comments dropped silently; other HTML dropped with a warning

Every handler returns a node, a list of nodes, or None when the token
produces nothing.
"""

from __future__ import annotations

from collections.abc import Callable

from content_reader.converter.code_blocks import build_code_block
from content_reader.converter.context import ConversionContext
from content_reader.converter.inline import merge_adjacent_text, transform_inlines
from content_reader.converter.lists import transform_list
from content_reader.converter.tables import transform_table
from content_reader.models import NodeType, Token, TokenType

BlockResult = dict | list[dict] | None


def transform_block(
    token: Token,
    *,
    ctx: ConversionContext | None = None,
    depth: int = 0,
) -> BlockResult:
    """Convert one block token.

    Parameters
    ----------
    token:
        A block-level :class:`Token`.
    ctx:
        Conversion context; a default one is created when omitted.
    depth:
        Container nesting depth of *token* (0 at the document root).

    Returns
    -------
    dict | list[dict] | None
        A single node, an ordered list of sibling nodes (paragraphs with
        hoisted images), or None if the token is dropped.
    """
    if ctx is None:
        ctx = ConversionContext()
    handler = _BLOCK_HANDLERS.get(token.type, _build_unknown)
    return handler(token, ctx, depth)


def transform_blocks(
    tokens: list[Token],
    *,
    ctx: ConversionContext | None = None,
    depth: int = 0,
) -> list[dict]:
    """Convert a sequence of block tokens into a flat list of nodes."""
    if ctx is None:
        ctx = ConversionContext()
    nodes: list[dict] = []
    for token in tokens:
        nodes.extend(flatten(transform_block(token, ctx=ctx, depth=depth)))
    return nodes


def flatten(result: BlockResult) -> list[dict]:
    """Normalise a :data:`BlockResult` to a list."""
    if result is None:
        return []
    if isinstance(result, list):
        return result
    return [result]


def inline_content(tokens: list[Token], ctx: ConversionContext) -> list[dict]:
    """Lower inline tokens, merging split text runs when configured."""
    nodes = transform_inlines(tokens, ctx=ctx)
    if ctx.config.merge_adjacent_text:
        nodes = merge_adjacent_text(nodes)
    return nodes


def is_hoistable(node: dict) -> bool:
    """Return True for image nodes that should stand as their own block."""
    return (
        node.get("type") == NodeType.IMAGE.value
        and node.get("attrs", {}).get("role") != "icon"
    )


def hoist_images(content: list[dict]) -> list[dict]:
    """Split inline *content* into paragraphs around hoistable images.

    ``[text, image, text]`` becomes
    ``[paragraph([text]), image, paragraph([text])]``.  No empty
    paragraph is produced when an image starts or ends the run, and
    whitespace-only runs between images are dropped.
    """
    result: list[dict] = []
    pending: list[dict] = []
    for node in content:
        if is_hoistable(node):
            if not _is_blank_run(pending):
                result.append(_paragraph(pending))
            pending = []
            result.append(node)
        else:
            pending.append(node)
    if not _is_blank_run(pending):
        result.append(_paragraph(pending))
    return result


def _is_blank_run(nodes: list[dict]) -> bool:
    return all(
        node.get("type") == NodeType.TEXT.value and not node.get("text", "").strip()
        for node in nodes
    )


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

def _paragraph(content: list[dict]) -> dict:
    return {"type": NodeType.PARAGRAPH.value, "content": content}


def _build_paragraph(token: Token, ctx: ConversionContext, depth: int) -> BlockResult:
    content = inline_content(token.children, ctx)
    if not content:
        return None
    if not ctx.config.hoist_images:
        return [_paragraph(content)]
    return hoist_images(content)


def _build_heading(token: Token, ctx: ConversionContext, depth: int) -> BlockResult:
    return {
        "type": NodeType.HEADING.value,
        "attrs": {"level": token.depth, "id": None},
        "content": inline_content(token.children, ctx),
    }


def _build_blockquote(token: Token, ctx: ConversionContext, depth: int) -> BlockResult:
    if ctx.too_deep(depth + 1, "blockquote"):
        return None
    return {
        "type": NodeType.BLOCKQUOTE.value,
        "content": transform_blocks(token.children, ctx=ctx, depth=depth + 1),
    }


def _build_divider(token: Token, ctx: ConversionContext, depth: int) -> BlockResult:
    return {
        "type": NodeType.DIVIDER.value,
        "attrs": {"style": "line", "size": "normal"},
    }


def _build_code(token: Token, ctx: ConversionContext, depth: int) -> BlockResult:
    return build_code_block(token.lang, token.text, ctx)


def _build_list(token: Token, ctx: ConversionContext, depth: int) -> BlockResult:
    return transform_list(token, ctx=ctx, depth=depth)


def _build_table(token: Token, ctx: ConversionContext, depth: int) -> BlockResult:
    return transform_table(token, ctx=ctx)


def _handle_html_block(token: Token, ctx: ConversionContext, depth: int) -> BlockResult:
    html = token.raw.strip()
    if html.startswith("<!--"):
        return None
    ctx.add_warning(
        "HTML_BLOCK_SKIPPED",
        "Raw HTML block has no document node and was skipped.",
        html=html[:200],
    )
    return None


def _build_unknown(token: Token, ctx: ConversionContext, depth: int) -> BlockResult:
    ctx.add_warning(
        "UNKNOWN_TOKEN",
        f"Unsupported block token '{token.type.value}' was skipped.",
        token_type=token.type.value,
        raw=token.raw[:200],
    )
    return None


# ---------------------------------------------------------------------------
# Dispatch table
# ---------------------------------------------------------------------------

_BlockHandler = Callable[[Token, ConversionContext, int], BlockResult]

_BLOCK_HANDLERS: dict[TokenType, _BlockHandler] = {
    TokenType.PARAGRAPH: _build_paragraph,
    TokenType.HEADING: _build_heading,
    TokenType.BLOCKQUOTE: _build_blockquote,
    TokenType.HR: _build_divider,
    TokenType.CODE: _build_code,
    TokenType.LIST: _build_list,
    TokenType.TABLE: _build_table,
    TokenType.HTML: _handle_html_block,
}
