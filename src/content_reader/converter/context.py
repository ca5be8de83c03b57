"""Per-conversion state shared by the transformers."""

from __future__ import annotations

from content_reader.config import ConverterConfig
from content_reader.models import ConversionWarning


class ConversionContext:
    """Mutable accumulator for a single conversion pass.

    A fresh context is created for every conversion; it holds the
    configuration and collects :class:`ConversionWarning` objects.
    """

    __slots__ = ("config", "warnings")

    def __init__(self, config: ConverterConfig | None = None) -> None:
        self.config = config if config is not None else ConverterConfig()
        self.warnings: list[ConversionWarning] = []

    def add_warning(self, code: str, message: str, **context: object) -> None:
        self.warnings.append(ConversionWarning(
            code=code, message=message, context=dict(context),
        ))

    def too_deep(self, depth: int, construct: str) -> bool:
        """Return True (and warn) if *depth* exceeds the nesting limit."""
        limit = self.config.max_nesting_depth
        if depth <= limit:
            return False
        self.add_warning(
            "NESTING_DEPTH_EXCEEDED",
            f"{construct} nested deeper than {limit} levels was dropped.",
            construct=construct,
            depth=depth,
        )
        return True
