from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from safecall.domain.errors import UNKNOWN_ERROR_MESSAGE

DIAGNOSTICS_MODES = ("thread", "shared")
_MESSAGE_ENV_VAR = "SAFECALL_UNKNOWN_ERROR_MESSAGE"
_MODE_ENV_VAR = "SAFECALL_DIAGNOSTICS_MODE"


@dataclass(frozen=True)
class CallConfig:
    """Settings shared by guarded calls.

    Attributes:
        unknown_error_message: Message used when a primitive fails without
            reporting a diagnostic.
        diagnostics_mode: ``"thread"`` for one diagnostic slot per thread,
            ``"shared"`` for a single slot serialized with a lock.
    """

    unknown_error_message: str = UNKNOWN_ERROR_MESSAGE
    diagnostics_mode: str = "thread"

    def __post_init__(self) -> None:
        if self.diagnostics_mode not in DIAGNOSTICS_MODES:
            raise ValueError(
                f"diagnostics_mode must be one of {DIAGNOSTICS_MODES}, "
                f"got {self.diagnostics_mode!r}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CallConfig":
        """Read overrides from the environment, ignoring unusable values."""
        env = os.environ if environ is None else environ
        message = (env.get(_MESSAGE_ENV_VAR) or "").strip() or UNKNOWN_ERROR_MESSAGE
        mode = (env.get(_MODE_ENV_VAR) or "").strip().lower()
        if mode not in DIAGNOSTICS_MODES:
            mode = "thread"
        return cls(unknown_error_message=message, diagnostics_mode=mode)


__all__ = ["CallConfig", "DIAGNOSTICS_MODES"]
