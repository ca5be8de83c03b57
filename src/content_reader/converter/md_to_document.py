"""Full Markdown-to-document conversion pipeline.

:class:`MarkdownConverter` runs the two-stage pipeline:

1. **Lex** -- :class:`TokenStream` tokenizes the Markdown with mistune
   (plus the attribute extensions) and normalises the result into
   :class:`Token` trees.
2. **Assemble** -- :func:`assemble_document` lowers each top-level block
   token, flattens multi-node results, drops empty paragraphs and wraps
   the remainder in a ``doc`` node.

The result is a :class:`ConversionResult` holding the document and any
non-fatal warnings.
"""

from __future__ import annotations

import json
import sys
import time

from content_reader.config import ConverterConfig
from content_reader.converter.block_builder import flatten, transform_block
from content_reader.converter.context import ConversionContext
from content_reader.converter.extensions import ExtensionRegistry
from content_reader.converter.token_stream import TokenStream, default_token_stream
from content_reader.errors import ContentReaderConversionError
from content_reader.models import ConversionResult, NodeType, Token
from content_reader.observability import NoopMetricsHook, get_logger

log = get_logger("content_reader.converter")


def assemble_document(
    tokens: list[Token],
    *,
    ctx: ConversionContext | None = None,
) -> dict:
    """Lower top-level block tokens into a ``doc`` node.

    Parameters
    ----------
    tokens:
        Top-level block tokens, in document order.
    ctx:
        Conversion context; a default one is created when omitted.

    Returns
    -------
    dict
        ``{"type": "doc", "content": [...]}`` with no empty paragraphs
        at the root.
    """
    if ctx is None:
        ctx = ConversionContext()

    content: list[dict] = []
    for token in tokens:
        content.extend(flatten(transform_block(token, ctx=ctx)))

    return {
        "type": NodeType.DOC.value,
        "content": [node for node in content if not _is_empty_paragraph(node)],
    }


def _is_empty_paragraph(node: dict) -> bool:
    return node.get("type") == NodeType.PARAGRAPH.value and not node.get("content")


class MarkdownConverter:
    """Convert Markdown text to an editor document tree.

    Parameters
    ----------
    config:
        Converter configuration.  Defaults to ``ConverterConfig()``.
    registry:
        Inline extension registry to tokenize with.  When omitted the
        process-wide default token stream is shared.

    Examples
    --------
    >>> converter = MarkdownConverter()
    >>> result = converter.convert("# Hello\\n\\nWorld")
    >>> [node["type"] for node in result.document["content"]]
    ['heading', 'paragraph']
    """

    def __init__(
        self,
        config: ConverterConfig | None = None,
        registry: ExtensionRegistry | None = None,
    ) -> None:
        self._config = config if config is not None else ConverterConfig()
        self._stream = TokenStream(registry) if registry is not None else default_token_stream()
        self._metrics = self._config.metrics or NoopMetricsHook()

    @property
    def config(self) -> ConverterConfig:
        return self._config

    def convert(self, markdown: str) -> ConversionResult:
        """Full pipeline: lex -> assemble -> collect warnings.

        Parameters
        ----------
        markdown:
            Raw Markdown text to convert.

        Returns
        -------
        ConversionResult
            Contains ``document`` (the root ``doc`` node) and ``warnings``
            (list of :class:`ConversionWarning`).

        Raises
        ------
        ContentReaderConversionError
            If *markdown* is not a string, or the tokenizer itself fails.
        """
        if not isinstance(markdown, str):
            raise ContentReaderConversionError(
                message=f"Expected Markdown text, got {type(markdown).__name__}",
                context={"input_type": type(markdown).__name__, "stage": "input"},
            )

        t0 = time.monotonic()

        # Stage 1: lex and normalise
        try:
            tokens = self._stream.lex(markdown)
        except RecursionError as exc:
            raise ContentReaderConversionError(
                message="Markdown nesting exceeds the tokenizer's recursion limit",
                context={"stage": "lex"},
                cause=exc,
            ) from exc
        except (ValueError, TypeError, KeyError, IndexError) as exc:
            raise ContentReaderConversionError(
                message=f"Tokenizer failed: {exc}",
                context={"stage": "lex"},
                cause=exc,
            ) from exc

        if self._config.debug_dump_tokens:
            print(
                "[content_reader] Normalized tokens:",
                json.dumps([t.to_dict() for t in tokens], indent=2, ensure_ascii=False),
                file=sys.stderr,
            )

        # Stage 2: assemble the document
        ctx = ConversionContext(self._config)
        document = assemble_document(tokens, ctx=ctx)

        if self._config.debug_dump_document:
            print(
                "[content_reader] Document:",
                json.dumps(document, indent=2, ensure_ascii=False),
                file=sys.stderr,
            )

        elapsed_ms = (time.monotonic() - t0) * 1000
        self._report(document, ctx, elapsed_ms)

        return ConversionResult(document=document, warnings=ctx.warnings)

    def _report(self, document: dict, ctx: ConversionContext, elapsed_ms: float) -> None:
        blocks = len(document["content"])
        self._metrics.increment("content_reader.conversions_total")
        self._metrics.increment("content_reader.blocks_emitted_total", blocks)
        self._metrics.timing("content_reader.conversion_duration_ms", elapsed_ms)

        for warning in ctx.warnings:
            self._metrics.increment(
                "content_reader.conversion_warnings_total",
                tags={"code": warning.code},
            )
            if warning.code == "DATA_BLOCK_FALLBACK":
                log.warning(
                    warning.message,
                    extra={"extra_fields": {"op": "convert", "code": warning.code, **warning.context}},
                )

        log.debug(
            "Conversion complete",
            extra={
                "extra_fields": {
                    "op": "convert",
                    "blocks": blocks,
                    "warnings": len(ctx.warnings),
                    "duration_ms": round(elapsed_ms, 3),
                }
            },
        )


def markdown_to_document(markdown: str, config: ConverterConfig | None = None) -> dict:
    """Convert *markdown* and return just the ``doc`` node."""
    return MarkdownConverter(config).convert(markdown).document
