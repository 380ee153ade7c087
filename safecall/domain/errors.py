"""Domain-level error types raised by guarded primitive calls.

Primitives report failure in-band (a sentinel return value plus a message in
the diagnostic slot). The guarded call layer turns that pair into one of the
exceptions below so callers only ever deal with a structured error.
"""

from __future__ import annotations

from typing import Optional

from safecall.domain.ports import Diagnostic

UNKNOWN_ERROR_MESSAGE = "An error occured"


class PrimitiveCallError(RuntimeError):
    """A wrapped primitive returned its failure sentinel."""

    def __init__(
        self,
        message: str,
        *,
        primitive: Optional[str] = None,
        diagnostic: Optional[Diagnostic] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.primitive = primitive
        self.diagnostic = diagnostic

    @classmethod
    def from_diagnostic(
        cls,
        primitive: Optional[str],
        diagnostic: Optional[Diagnostic],
        *,
        fallback: str = UNKNOWN_ERROR_MESSAGE,
    ) -> "PrimitiveCallError":
        """Build an error from whatever the diagnostic slot held after the call.

        Args:
            primitive: Name of the primitive that failed.
            diagnostic: Record read from the slot, or ``None`` when the
                primitive failed without reporting anything.
            fallback: Message used when no diagnostic text is available.

        Returns:
            PrimitiveCallError: Instance of ``cls`` ready to raise.
        """
        text = (diagnostic.message if diagnostic is not None else "") or ""
        message = text.strip() or fallback
        return cls(message, primitive=primitive, diagnostic=diagnostic)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, primitive={self.primitive!r})"


class StringsError(PrimitiveCallError):
    """Failure of a string or hashing primitive."""


__all__ = ["PrimitiveCallError", "StringsError", "UNKNOWN_ERROR_MESSAGE"]
