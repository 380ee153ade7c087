from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, ContextManager, Optional, Protocol

Primitive = Callable[..., Any]
FailurePredicate = Callable[[Any], bool]


@dataclass(frozen=True)
class Diagnostic:
    """Last error reported by the platform for one slot."""

    message: str
    source: Optional[str] = None


# ---- Ports (Hexagonal boundaries) ----
class DiagnosticsPort(Protocol):
    """Read/clear access to a "last error" slot.

    ``guard`` returns the context that must be held across the
    clear/execute/read sequence. Providers whose slot is not shared between
    threads may return a no-op context.
    """

    def clear(self) -> None: ...
    def report(self, message: str, source: Optional[str] = None) -> None: ...
    def last(self) -> Optional[Diagnostic]: ...
    def guard(self) -> ContextManager[Any]: ...


__all__ = ["Diagnostic", "DiagnosticsPort", "FailurePredicate", "Primitive"]
