"""Concrete "last error" slots for guarded primitive calls.

Dependencies:
    - ``threading`` for per-thread storage and the shared-slot lock.
    - ``safecall.domain.ports.DiagnosticsPort`` as the implemented protocol.

Call context:
    - ``safecall.adapters.platform_strings`` reports failures into the slot
      returned by :func:`active_diagnostics`: the one bound by the running
      guarded call, or the process default.
    - ``safecall.usecases.guarded_call.GuardedCall`` clears and reads a slot
      around each primitive call.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager, nullcontext
from contextvars import ContextVar
from typing import Any, ContextManager, Iterator, Optional

from safecall.domain.config import CallConfig
from safecall.domain.ports import Diagnostic, DiagnosticsPort

_log = logging.getLogger(__name__)


class ThreadLocalDiagnostics(DiagnosticsPort):
    """One diagnostic slot per thread.

    Threads never observe each other's diagnostics, so no lock is needed
    around the clear/execute/read sequence.
    """

    def __init__(self) -> None:
        self._local = threading.local()

    def clear(self) -> None:
        self._local.diagnostic = None

    def report(self, message: str, source: Optional[str] = None) -> None:
        self._local.diagnostic = Diagnostic(message=message, source=source)

    def last(self) -> Optional[Diagnostic]:
        return getattr(self._local, "diagnostic", None)

    def guard(self) -> ContextManager[Any]:
        return nullcontext()


class SharedDiagnostics(DiagnosticsPort):
    """A single process-wide slot.

    ``guard`` hands out a re-entrant lock so concurrent guarded calls are
    serialized around the whole clear/execute/read sequence.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._diagnostic: Optional[Diagnostic] = None

    def clear(self) -> None:
        with self._lock:
            self._diagnostic = None

    def report(self, message: str, source: Optional[str] = None) -> None:
        with self._lock:
            self._diagnostic = Diagnostic(message=message, source=source)

    def last(self) -> Optional[Diagnostic]:
        with self._lock:
            return self._diagnostic

    def guard(self) -> ContextManager[Any]:
        return self._lock


def build_diagnostics(config: CallConfig) -> DiagnosticsPort:
    """Create the slot implementation selected by ``config.diagnostics_mode``."""
    if config.diagnostics_mode == "shared":
        return SharedDiagnostics()
    return ThreadLocalDiagnostics()


_default: Optional[DiagnosticsPort] = None
_default_lock = threading.Lock()


def default_diagnostics() -> DiagnosticsPort:
    """Return the process default slot, creating it from the environment once."""
    global _default
    with _default_lock:
        if _default is None:
            config = CallConfig.from_env()
            _default = build_diagnostics(config)
            _log.debug("Using %s diagnostics slot", config.diagnostics_mode)
        return _default


def set_default_diagnostics(diagnostics: Optional[DiagnosticsPort]) -> Optional[DiagnosticsPort]:
    """Replace the process default slot and return the previous one.

    Passing ``None`` resets it so the next lookup rebuilds from the environment.
    """
    global _default
    with _default_lock:
        previous = _default
        _default = diagnostics
        return previous


_active: ContextVar[Optional[DiagnosticsPort]] = ContextVar("safecall_active_diagnostics", default=None)


@contextmanager
def bind_diagnostics(diagnostics: DiagnosticsPort) -> Iterator[DiagnosticsPort]:
    """Make ``diagnostics`` the slot primitives report into for the enclosed block."""
    token = _active.set(diagnostics)
    try:
        yield diagnostics
    finally:
        _active.reset(token)


def active_diagnostics() -> DiagnosticsPort:
    """Return the slot bound by the innermost guarded call, else the process default."""
    bound = _active.get()
    return bound if bound is not None else default_diagnostics()


__all__ = [
    "SharedDiagnostics",
    "ThreadLocalDiagnostics",
    "active_diagnostics",
    "bind_diagnostics",
    "build_diagnostics",
    "default_diagnostics",
    "set_default_diagnostics",
]
