"""Lower inline tokens to document text and image nodes.

A text node looks like::

    {"type": "text", "text": "hello", "marks": [{"type": "bold"}]}

``marks`` is omitted when empty.  Marks are ordered from the innermost
syntactic wrapper to the outermost: ``**_x_**`` gives
``[italic, bold]`` because the emphasis is lowered first and the strong
wrapper appends its mark afterwards.

Image tokens lower to ``image`` nodes with an ``attrs`` map resolved from
the destination prefix and the curly-brace attributes.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

from content_reader.converter.context import ConversionContext
from content_reader.models import MarkType, NodeType, Token, TokenType

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

BUTTON_PREFIX = "button:"

ICON_LIBRARIES: tuple[str, ...] = ("lucide", "heroicons", "phosphor", "tabler", "feather")
"""Named icon libraries addressable as ``library:icon-name``."""

_ICON_RE = re.compile(rf"^({'|'.join(ICON_LIBRARIES)}|icon):(.+)$", re.S)
_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")

_ENTITIES: tuple[tuple[str, str], ...] = (
    ("&#39;", "'"),
    ("&quot;", '"'),
    ("&amp;", "&"),
)

# Link/button attributes lifted into named mark attributes.
_LINK_KNOWN_ATTRS: tuple[str, ...] = ("download", "target", "rel", "size", "icon")

# Image attributes copied only when present, in output order.
_IMAGE_VALUE_ATTRS: tuple[str, ...] = ("size", "color")
_IMAGE_DIMENSION_ATTRS: tuple[str, ...] = ("width", "height")
_IMAGE_MEDIA_ATTRS: tuple[str, ...] = ("loading", "poster", "preview")
_IMAGE_FLAG_ATTRS: tuple[str, ...] = ("autoplay", "muted", "loop", "controls")
_IMAGE_STYLE_ATTRS: tuple[str, ...] = ("fit", "position", "class", "id")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def transform_inline(
    token: Token,
    decode_newlines: bool = False,
    *,
    ctx: ConversionContext | None = None,
    depth: int = 0,
) -> list[dict]:
    """Convert one inline token to zero or more document nodes.

    Parameters
    ----------
    token:
        An inline :class:`Token`.
    decode_newlines:
        Strip newline characters from plain text runs.
    ctx:
        Conversion context; a default one is created when omitted.
    depth:
        Current wrapper nesting depth, checked against
        ``config.max_nesting_depth``.

    Returns
    -------
    list[dict]
        Text and/or image nodes, in source order.
    """
    if ctx is None:
        ctx = ConversionContext()
    handler = _INLINE_HANDLERS.get(token.type, _lower_other)
    return handler(token, decode_newlines, ctx, depth)


def transform_inlines(
    tokens: list[Token],
    decode_newlines: bool = False,
    *,
    ctx: ConversionContext | None = None,
    depth: int = 0,
) -> list[dict]:
    """Convert a sequence of inline tokens, concatenating the results."""
    if ctx is None:
        ctx = ConversionContext()
    nodes: list[dict] = []
    for token in tokens:
        nodes.extend(transform_inline(token, decode_newlines, ctx=ctx, depth=depth))
    return nodes


def merge_adjacent_text(nodes: list[dict]) -> list[dict]:
    """Merge consecutive text nodes whose mark lists are equal."""
    merged: list[dict] = []
    for node in nodes:
        prev = merged[-1] if merged else None
        if (
            prev is not None
            and prev["type"] == NodeType.TEXT.value
            and node["type"] == NodeType.TEXT.value
            and prev.get("marks") == node.get("marks")
        ):
            merged[-1] = {**prev, "text": prev["text"] + node["text"]}
        else:
            merged.append(node)
    return merged


def decode_entities(text: str) -> str:
    """Decode the three HTML entities the tokenizer may leave in text."""
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    return text


# ---------------------------------------------------------------------------
# Node helpers
# ---------------------------------------------------------------------------

def _text_node(text: str, marks: list[dict] | None = None) -> dict:
    node: dict[str, Any] = {"type": NodeType.TEXT.value, "text": text}
    if marks:
        node["marks"] = marks
    return node


def _mark(mark_type: MarkType, attrs: dict | None = None) -> dict:
    mark: dict[str, Any] = {"type": mark_type.value}
    if attrs is not None:
        mark["attrs"] = attrs
    return mark


def _copy_mark(mark: dict) -> dict:
    copied = dict(mark)
    if "attrs" in copied:
        copied["attrs"] = dict(copied["attrs"])
    return copied


def _append_mark(nodes: list[dict], mark: dict) -> list[dict]:
    """Return *nodes* with *mark* appended (outermost) to every node."""
    return [
        {**node, "marks": [*node.get("marks", []), _copy_mark(mark)]}
        for node in nodes
    ]


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

def _lower_text(token: Token, decode_newlines: bool, ctx: ConversionContext, depth: int) -> list[dict]:
    # raw keeps quotes and ampersands exactly as authored
    text = token.raw
    if decode_newlines:
        text = text.replace("\n", "")
    return [_text_node(text)] if text else []


def _lower_wrapper(mark_type: MarkType) -> _InlineHandler:
    def lower(token: Token, decode_newlines: bool, ctx: ConversionContext, depth: int) -> list[dict]:
        if ctx.too_deep(depth + 1, token.type.value):
            return []
        children = transform_inlines(
            token.children, decode_newlines, ctx=ctx, depth=depth + 1,
        )
        return _append_mark(children, _mark(mark_type))
    return lower


def _lower_codespan(token: Token, decode_newlines: bool, ctx: ConversionContext, depth: int) -> list[dict]:
    return [_text_node(decode_entities(token.text), [_mark(MarkType.CODE)])]


def _lower_html(token: Token, decode_newlines: bool, ctx: ConversionContext, depth: int) -> list[dict]:
    return [_text_node(token.raw)] if token.raw else []


def _lower_br(token: Token, decode_newlines: bool, ctx: ConversionContext, depth: int) -> list[dict]:
    return [_text_node("\n")]


def _lower_span(token: Token, decode_newlines: bool, ctx: ConversionContext, depth: int) -> list[dict]:
    attrs = dict(token.attrs)
    class_name = attrs.pop("class", None)
    element_id = attrs.pop("id", None)

    mark_attrs: dict[str, Any] = {}
    if class_name:
        mark_attrs["class"] = class_name
    if element_id:
        mark_attrs["id"] = element_id
    mark_attrs.update(attrs)
    span_mark = _mark(MarkType.SPAN, mark_attrs)

    if token.children:
        if ctx.too_deep(depth + 1, token.type.value):
            return []
        children = transform_inlines(
            token.children, decode_newlines, ctx=ctx, depth=depth + 1,
        )
        return _append_mark(children, span_mark)

    return [_text_node(decode_entities(token.text), [span_mark])]


def _strip_button_class(class_name: Any) -> tuple[bool, str | None]:
    """Split the ``button`` word out of a class list.

    Returns whether it was present and the remaining classes (None if
    nothing is left).
    """
    if not isinstance(class_name, str):
        return False, None
    words = class_name.split()
    remaining = [word for word in words if word != "button"]
    return len(remaining) != len(words), " ".join(remaining) or None


def _lower_link(token: Token, decode_newlines: bool, ctx: ConversionContext, depth: int) -> list[dict]:
    attrs = dict(token.attrs)
    has_prefix = token.href.startswith(BUTTON_PREFIX)
    has_class, class_name = _strip_button_class(attrs.pop("class", None))
    is_button = has_prefix or has_class
    href = token.href[len(BUTTON_PREFIX):] if has_prefix else token.href

    variant = attrs.pop("variant", "primary")
    mark_attrs: dict[str, Any] = {"href": href, "title": token.title or None}
    if is_button:
        mark_attrs["variant"] = variant
    for key in _LINK_KNOWN_ATTRS:
        value = attrs.pop(key, None)
        if key == "download":
            if value is not None:
                mark_attrs[key] = value
        elif value:
            mark_attrs[key] = value
    if class_name:
        mark_attrs["class"] = class_name
    mark_attrs.update(attrs)

    mark_type = MarkType.BUTTON if is_button else MarkType.LINK
    return [_text_node(decode_entities(token.text), [_mark(mark_type, mark_attrs)])]


def resolve_image_source(href: str) -> dict[str, Any]:
    """Derive ``src``, ``role`` and icon fields from an image destination.

    * ``lucide:arrow-right`` (any named library) -> icon with
      ``library``/``name`` and no ``src``.
    * ``icon:./path.svg`` -> icon whose ``src`` and ``name`` are the
      remainder.
    * ``hero:./banner.jpg`` (any non-http ``role:path``) -> that role.
    * anything else -> ``src`` verbatim, role left to the caller.
    """
    m = _ICON_RE.match(href)
    if m is not None:
        library, name = m.group(1), m.group(2)
        if library == "icon":
            return {"src": name, "role": "icon", "name": name}
        return {"src": None, "role": "icon", "library": library, "name": name}
    if ":" in href and not href.startswith("http"):
        role, _, src = href.partition(":")
        return {"src": src, "role": role}
    return {"src": href, "role": None}


def _coerce_dimension(value: Any) -> Any:
    if isinstance(value, str):
        m = _LEADING_INT_RE.match(value)
        if m is not None:
            return int(m.group(1))
    return value


def _lower_image(token: Token, decode_newlines: bool, ctx: ConversionContext, depth: int) -> list[dict]:
    source = resolve_image_source(token.href)
    attrs = token.attrs
    alt = decode_entities(token.text)

    node_attrs: dict[str, Any] = {
        "src": source["src"],
        "caption": token.title or None,
        "alt": alt or None,
        # An explicit {role=...} always wins over the destination prefix.
        "role": attrs.get("role") or source["role"] or "image",
    }
    for key in ("library", "name"):
        if key in source:
            node_attrs[key] = source[key]

    for key in _IMAGE_VALUE_ATTRS:
        if attrs.get(key):
            node_attrs[key] = attrs[key]
    for key in _IMAGE_DIMENSION_ATTRS:
        if attrs.get(key):
            node_attrs[key] = _coerce_dimension(attrs[key])
    for key in _IMAGE_MEDIA_ATTRS:
        if attrs.get(key):
            node_attrs[key] = attrs[key]
    for key in _IMAGE_FLAG_ATTRS:
        if key in attrs:
            node_attrs[key] = attrs[key]
    for key in _IMAGE_STYLE_ATTRS:
        if attrs.get(key):
            node_attrs[key] = attrs[key]

    return [{"type": NodeType.IMAGE.value, "attrs": node_attrs}]


def _lower_other(token: Token, decode_newlines: bool, ctx: ConversionContext, depth: int) -> list[dict]:
    return [_text_node(token.raw)] if token.raw else []


# ---------------------------------------------------------------------------
# Dispatch table
# ---------------------------------------------------------------------------

_InlineHandler = Callable[[Token, bool, ConversionContext, int], list[dict]]

_INLINE_HANDLERS: dict[TokenType, _InlineHandler] = {
    TokenType.TEXT: _lower_text,
    TokenType.STRONG: _lower_wrapper(MarkType.BOLD),
    TokenType.EM: _lower_wrapper(MarkType.ITALIC),
    TokenType.CODESPAN: _lower_codespan,
    TokenType.HTML: _lower_html,
    TokenType.BR: _lower_br,
    TokenType.LINK: _lower_link,
    TokenType.IMAGE: _lower_image,
    TokenType.SPAN: _lower_span,
}
