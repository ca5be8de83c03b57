"""Error hierarchy for content-reader.

Every public error class inherits from :class:`ContentReaderError`. Each
carries a machine-readable ``code`` (from :class:`ErrorCode`), a
human-readable ``message``, an optional structured ``context`` dict, and
an optional ``cause`` (chained exception).

The conversion itself is total over well-formed input: malformed
attribute syntax degrades silently and malformed embedded data falls back
to a display code block.  Errors therefore surface only at the converter
entry point (bad input type, tokenizer failure).
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error the package can raise."""

    CONVERSION_ERROR = "CONVERSION_ERROR"
    DATA_PARSE_ERROR = "DATA_PARSE_ERROR"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class ContentReaderError(Exception):
    """Base exception for all content-reader errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


# ---------------------------------------------------------------------------
# Conversion errors
# ---------------------------------------------------------------------------

class ContentReaderConversionError(ContentReaderError):
    """The Markdown input could not be converted.

    Raised for input that is not a string, and wraps exceptions raised by
    the underlying tokenizer.

    Context keys: ``input_type``, ``stage``.
    """

    def __init__(
        self,
        message: str = "Conversion error",
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.CONVERSION_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class ContentReaderDataError(ContentReaderError):
    """The body of a tagged code fence is not valid JSON/YAML.

    Handled inside the block transformer, which falls back to a display
    ``codeBlock``; it never reaches callers of the converter.

    Context keys: ``language``, ``tag``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.DATA_PARSE_ERROR,
            message=message,
            context=context,
            cause=cause,
        )
