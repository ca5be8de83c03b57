"""Tokenizer extensions: the curly-brace attribute syntax and GFM tables.

Three mistune inline rules are added in front of mistune's own ``link``
rule:

* ``attr_image`` -- ``![alt](src "title"){attrs}``
* ``attr_link``  -- ``[text](href "title"){attrs}``
* ``attr_span``  -- ``[text]{attrs}`` (Pandoc-style bracketed span)

The title and the attribute block are optional for images and links.
When a pattern does not match at the scan position, mistune falls back to
its built-in link/image handling.  Links and spans never start right
after an unescaped ``!``; that position belongs to an image.

Rules are grouped in an immutable :class:`ExtensionRegistry`.  The
registry is itself a mistune plugin: calling it with a
:class:`mistune.Markdown` instance installs the rules, and installing
twice leaves a single copy of each rule.

:func:`table_plugin` installs the GFM table block rules.  Unlike
mistune's own ``table`` plugin it keeps a table whose body rows have the
wrong number of cells: short rows are padded with empty cells and long
rows are cut to the header width.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from content_reader.converter.attributes import parse_attribute_string

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

# Group names must be unique across every rule mistune joins into its
# scanner regex, hence the ``cr_`` prefixes.
IMAGE_PATTERN = (
    r"!\[(?P<cr_img_alt>[^\]]*)\]"
    r"\((?P<cr_img_src>[^)\"'\s]+)(?:\s+[\"'](?P<cr_img_title>[^\"']*)[\"'])?\)"
    r"(?:\{(?P<cr_img_attrs>[^}]*)\})?"
)

LINK_PATTERN = (
    r"(?<!(?<!\\)!)\[(?P<cr_link_text>[^\]]+)\]"
    r"\((?P<cr_link_href>[^)\"'\s]+)(?:\s+[\"'](?P<cr_link_title>[^\"']*)[\"'])?\)"
    r"(?:\{(?P<cr_link_attrs>[^}]*)\})?"
)

SPAN_PATTERN = r"(?<!(?<!\\)!)\[(?P<cr_span_text>[^\]]+)\]\{(?P<cr_span_attrs>[^}]+)\}"


# ---------------------------------------------------------------------------
# Rule handlers
# ---------------------------------------------------------------------------

def parse_attr_image(inline: Any, m: Any, state: Any) -> int:
    attr_string = m.group("cr_img_attrs")
    state.append_token({
        "type": "attr_image",
        "raw": m.group(0),
        "attrs": {
            "alt": m.group("cr_img_alt") or "",
            "url": m.group("cr_img_src"),
            "title": m.group("cr_img_title") or None,
            "attributes": parse_attribute_string(attr_string) if attr_string else {},
        },
    })
    return m.end()


def parse_attr_link(inline: Any, m: Any, state: Any) -> int:
    attr_string = m.group("cr_link_attrs")
    state.append_token({
        "type": "attr_link",
        "raw": m.group(0),
        "attrs": {
            "label": m.group("cr_link_text"),
            "url": m.group("cr_link_href"),
            "title": m.group("cr_link_title") or None,
            "attributes": parse_attribute_string(attr_string) if attr_string else {},
        },
    })
    return m.end()


def parse_attr_span(inline: Any, m: Any, state: Any) -> int:
    label = m.group("cr_span_text")
    # Span labels may carry their own emphasis, code, links...
    children = inline(label, state.env)
    state.append_token({
        "type": "attr_span",
        "raw": m.group(0),
        "children": children,
        "attrs": {
            "label": label,
            "attributes": parse_attribute_string(m.group("cr_span_attrs")),
        },
    })
    return m.end()


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InlineExtension:
    """A single inline rule: its mistune name, regex and handler."""

    name: str
    pattern: str
    parse: Callable[[Any, Any, Any], int | None]


@dataclass(frozen=True)
class ExtensionRegistry:
    """Ordered, immutable set of inline extensions.

    Parameters
    ----------
    extensions:
        Rules in priority order.  Image comes first so that ``![`` is
        never claimed by the link or span rules.
    before:
        Name of the mistune rule the extensions are inserted ahead of.
    """

    extensions: tuple[InlineExtension, ...]
    before: str = "link"

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(ext.name for ext in self.extensions)

    def __call__(self, md: Any) -> None:
        """Install the rules into *md* (mistune plugin protocol)."""
        inline = md.inline
        for ext in self.extensions:
            if ext.name in inline.rules:
                continue
            inline.register(ext.name, ext.pattern, ext.parse, before=self.before)


def create_registry() -> ExtensionRegistry:
    """Return the registry with the image, link and span extensions."""
    return ExtensionRegistry(extensions=(
        InlineExtension("attr_image", IMAGE_PATTERN, parse_attr_image),
        InlineExtension("attr_link", LINK_PATTERN, parse_attr_link),
        InlineExtension("attr_span", SPAN_PATTERN, parse_attr_span),
    ))


# ---------------------------------------------------------------------------
# Table block rules
# ---------------------------------------------------------------------------

TABLE_PATTERN = (
    r"^ {0,3}\|(?P<cr_table_head>.+)\|[ \t]*\n"
    r" {0,3}\|(?P<cr_table_align> *[-:]+[-| :]*)\|[ \t]*\n"
    r"(?P<cr_table_body>(?: {0,3}\|.*\|[ \t]*(?:\n|$))*)\n*"
)

# Same table without the outer pipes.
NPTABLE_PATTERN = (
    r"^ {0,3}(?P<cr_nptable_head>\S.*\|.*)\n"
    r" {0,3}(?P<cr_nptable_align>[-:]+ *\|[-| :]*)\n"
    r"(?P<cr_nptable_body>(?:.*\|.*(?:\n|$))*)\n*"
)

_CELL_SPLIT_RE = re.compile(r" *(?<!\\)\| *")
_PIPED_ROW_RE = re.compile(r"^ {0,3}\|(.*)\|[ \t]*$")

_ALIGN_RES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("center", re.compile(r"^ *:-+: *$")),
    ("left", re.compile(r"^ *:-+ *$")),
    ("right", re.compile(r"^ *-+: *$")),
)


def _split_cells(text: str) -> list[str]:
    return [cell.strip() for cell in _CELL_SPLIT_RE.split(text.strip())]


def _column_align(cell: str) -> str | None:
    for name, pattern in _ALIGN_RES:
        if pattern.match(cell):
            return name
    return None


def _table_cells(cells: list[str], aligns: list[str | None], head: bool) -> list[dict]:
    return [
        {"type": "table_cell", "text": text, "attrs": {"align": align, "head": head}}
        for text, align in zip(cells, aligns)
    ]


def _append_table(state: Any, head: str, align: str, rows: list[str]) -> bool:
    headers = _split_cells(head)
    aligns = [_column_align(cell) for cell in _split_cells(align)]
    if len(headers) != len(aligns):
        return False

    width = len(aligns)
    body: list[dict] = []
    for row in rows:
        cells = _split_cells(row)[:width]
        cells += [""] * (width - len(cells))
        body.append({"type": "table_row", "children": _table_cells(cells, aligns, False)})

    state.append_token({
        "type": "table",
        "children": [
            {"type": "table_head", "children": _table_cells(headers, aligns, True)},
            {"type": "table_body", "children": body},
        ],
    })
    return True


def parse_table(block: Any, m: Any, state: Any) -> int | None:
    rows = []
    for line in m.group("cr_table_body").splitlines():
        row = _PIPED_ROW_RE.match(line)
        if row is None:
            return None
        rows.append(row.group(1))
    if not _append_table(state, m.group("cr_table_head"), m.group("cr_table_align"), rows):
        return None
    return m.end()


def parse_nptable(block: Any, m: Any, state: Any) -> int | None:
    rows = m.group("cr_nptable_body").splitlines()
    if not _append_table(state, m.group("cr_nptable_head"), m.group("cr_nptable_align"), rows):
        return None
    return m.end()


def table_plugin(md: Any) -> None:
    """Install the ``table`` and ``nptable`` block rules into *md*."""
    md.block.register("table", TABLE_PATTERN, parse_table, before="paragraph")
    md.block.register("nptable", NPTABLE_PATTERN, parse_nptable, before="paragraph")
