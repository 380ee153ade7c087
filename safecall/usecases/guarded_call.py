from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Type

from safecall.adapters.diagnostics import bind_diagnostics, default_diagnostics
from safecall.domain.arguments import forward_arguments
from safecall.domain.config import CallConfig
from safecall.domain.errors import PrimitiveCallError
from safecall.domain.ports import DiagnosticsPort, FailurePredicate, Primitive
from safecall.domain.sentinels import is_false


@dataclass
class GuardedCall:
    """Call a sentinel-returning primitive and raise instead of returning the sentinel.

    Attributes:
        primitive: The wrapped callable.
        failure: Predicate that recognizes the primitive's failure sentinel.
        diagnostics: Slot to clear and read. It is also bound as the active
            slot while the primitive runs, so ``report_error`` writes into
            it. ``None`` resolves the process default at call time.
        name: Primitive name carried by raised errors.
        error_cls: Exception type raised on failure.
        config: Shared call settings.
    """

    primitive: Primitive
    failure: FailurePredicate = is_false
    diagnostics: Optional[DiagnosticsPort] = None
    name: Optional[str] = None
    error_cls: Type[PrimitiveCallError] = PrimitiveCallError
    config: CallConfig = field(default_factory=CallConfig)

    def __post_init__(self) -> None:
        if self.name is None:
            self.name = getattr(self.primitive, "__name__", None) or repr(self.primitive)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        """Forward arguments to the primitive and translate its failure sentinel.

        Raises:
            PrimitiveCallError: The primitive returned its failure sentinel.
                The message is the diagnostic reported during this call.
            TypeError: An omitted positional argument precedes a supplied one.
        """
        call_args, call_kwargs = forward_arguments(args, kwargs)
        diagnostics = self.diagnostics if self.diagnostics is not None else default_diagnostics()
        with diagnostics.guard(), bind_diagnostics(diagnostics):
            diagnostics.clear()
            result = self.primitive(*call_args, **call_kwargs)
            diagnostic = diagnostics.last()
        if self.failure(result):
            raise self.error_cls.from_diagnostic(
                self.name,
                diagnostic,
                fallback=self.config.unknown_error_message,
            )
        return result


__all__ = ["GuardedCall"]
