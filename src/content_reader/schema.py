"""Base schema: every node and mark type the converter can emit.

The catalogue follows the ProseMirror/TipTap schema-spec shape: each
entry may carry ``attrs`` (attribute name -> ``{"default": ...}``, or an
empty dict for required attributes), a ``content`` expression and a
``group``.  Consumers build their editor schema from it; the converter
never emits a node or mark type that is missing here.
"""

from __future__ import annotations

import copy
from typing import Any

from content_reader.models import MarkType, NodeType


def _attr(default: Any = None) -> dict[str, Any]:
    return {"default": default}


_REQUIRED: dict[str, Any] = {}

_BASE_NODES: dict[str, dict[str, Any]] = {
    NodeType.DOC.value: {"content": "block+"},
    NodeType.PARAGRAPH.value: {"content": "inline*", "group": "block"},
    NodeType.HEADING.value: {
        "attrs": {"level": _attr(1), "id": _attr()},
        "content": "inline*",
        "group": "block",
    },
    NodeType.EYEBROW_HEADING.value: {"content": "inline*", "group": "block"},
    NodeType.TEXT.value: {"group": "inline"},
    NodeType.IMAGE.value: {
        "attrs": {
            "src": _REQUIRED,
            "caption": _attr(),
            "alt": _attr(),
            "role": _attr("image"),
            # icons addressed through a named library
            "library": _attr(),
            "name": _attr(),
            "width": _attr(),
            "height": _attr(),
            "size": _attr(),
            "color": _attr(),
            "loading": _attr(),
            "poster": _attr(),
            "preview": _attr(),
            "autoplay": _attr(),
            "muted": _attr(),
            "loop": _attr(),
            "controls": _attr(),
            "fit": _attr(),
            "position": _attr(),
            "class": _attr(),
            "id": _attr(),
        },
    },
    NodeType.INSET_REF.value: {
        "attrs": {"component": _REQUIRED, "alt": _attr()},
        "group": "block",
    },
    NodeType.INSET_PLACEHOLDER.value: {
        "attrs": {"refId": _REQUIRED},
        "group": "block",
    },
    NodeType.DIVIDER.value: {
        "attrs": {"style": _attr("line"), "size": _attr("normal")},
        "group": "block",
    },
    NodeType.BULLET_LIST.value: {"content": "listItem+", "group": "block"},
    NodeType.ORDERED_LIST.value: {
        "attrs": {"start": _attr(1)},
        "content": "listItem+",
        "group": "block",
    },
    NodeType.LIST_ITEM.value: {"content": "paragraph block*", "defining": True},
    NodeType.CODE_BLOCK.value: {
        "attrs": {"language": _attr(), "tag": _attr()},
        "content": "text*",
        "marks": "",
        "group": "block",
        "code": True,
        "defining": True,
    },
    NodeType.DATA_BLOCK.value: {
        "attrs": {"tag": _REQUIRED, "data": _attr()},
        "group": "block",
        "atom": True,
    },
    NodeType.BLOCKQUOTE.value: {"content": "block*", "group": "block"},
    NodeType.TABLE.value: {
        "content": "tableRow+",
        "group": "block",
        "tableRole": "table",
    },
    NodeType.TABLE_ROW.value: {"content": "tableCell+", "tableRole": "row"},
    NodeType.TABLE_CELL.value: {
        "content": "paragraph+",
        "attrs": {
            "colspan": _attr(1),
            "rowspan": _attr(1),
            "align": _attr(),
            "header": _attr(False),
        },
        "tableRole": "cell",
    },
}

_BASE_MARKS: dict[str, dict[str, Any]] = {
    MarkType.BOLD.value: {},
    MarkType.ITALIC.value: {},
    MarkType.LINK.value: {
        "attrs": {
            "href": _REQUIRED,
            "title": _attr(),
            "target": _attr(),
            "rel": _attr(),
            "download": _attr(),
            "class": _attr(),
        },
    },
    MarkType.BUTTON.value: {
        "attrs": {
            "href": _REQUIRED,
            "title": _attr(),
            "variant": _attr("primary"),
            "size": _attr(),
            "icon": _attr(),
            "target": _attr(),
            "rel": _attr(),
            "download": _attr(),
            "class": _attr(),
        },
    },
    MarkType.CODE.value: {"inclusive": True, "code": True},
    MarkType.SPAN.value: {
        "attrs": {"class": _attr(), "id": _attr()},
    },
}


def get_base_schema() -> dict[str, dict[str, dict[str, Any]]]:
    """Return ``{"nodes": ..., "marks": ...}``.

    A deep copy is returned on every call, so callers may extend it.
    """
    return {
        "nodes": copy.deepcopy(_BASE_NODES),
        "marks": copy.deepcopy(_BASE_MARKS),
    }
