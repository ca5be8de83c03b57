"""Converter configuration for content-reader.

:class:`ConverterConfig` captures every tuneable knob of the
Markdown-to-document pipeline.  Instances are passed to
:class:`~content_reader.converter.MarkdownConverter` and threaded through
the block and inline transformers.

The module-level constant :data:`DEFAULT_DATA_LANGUAGES` lists the code
fence languages whose tagged bodies are decoded into ``dataBlock`` nodes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFAULT_DATA_LANGUAGES: tuple[str, ...] = ("json", "yaml", "yml")
"""Fence languages eligible for structured-data decoding."""


# ---------------------------------------------------------------------------
# Configuration dataclass
# ---------------------------------------------------------------------------

@dataclass
class ConverterConfig:
    """Complete configuration for a Markdown converter.

    Every parameter has a default, so ``ConverterConfig()`` is a valid
    configuration.

    Parameters
    ----------
    max_nesting_depth:
        Upper bound on container nesting (lists, blockquotes) and on
        inline wrapper nesting (strong, emphasis, spans).  Content nested
        deeper is dropped and a ``NESTING_DEPTH_EXCEEDED`` warning is
        recorded.
    data_languages:
        Code fence languages whose tagged bodies are decoded into
        ``dataBlock`` nodes.  Matching is case-insensitive.
    hoist_images:
        Pull non-icon images out of paragraphs so they become sibling
        block nodes.
    merge_adjacent_text:
        Merge neighbouring text nodes carrying identical marks.  The
        tokenizer may split one run of text into several tokens (for
        instance around a literal ``[`` that did not open a link).
    metrics:
        Optional :class:`~content_reader.observability.MetricsHook`
        backend.  ``None`` uses a no-op hook.
    debug_dump_tokens:
        Write the normalised token tree to *stderr* on each conversion.
    debug_dump_document:
        Write the resulting document to *stderr* on each conversion.
    """

    # ── Structure ───────────────────────────────────────────────────────
    max_nesting_depth: int = 32

    hoist_images: bool = True

    merge_adjacent_text: bool = True

    # ── Code fences ─────────────────────────────────────────────────────
    data_languages: tuple[str, ...] = field(
        default_factory=lambda: DEFAULT_DATA_LANGUAGES,
    )

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_tokens: bool = False

    debug_dump_document: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.max_nesting_depth < 1:
            raise ValueError(
                f"max_nesting_depth must be >= 1, got {self.max_nesting_depth}"
            )
        if isinstance(self.data_languages, str):
            raise ValueError(
                "data_languages must be a sequence of language names, "
                f"got the string {self.data_languages!r}"
            )
        self.data_languages = tuple(lang.lower() for lang in self.data_languages)
