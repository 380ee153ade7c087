"""Domain package exports for error types, markers and ports."""

from .arguments import OMITTED, Omitted, Provided, forward_arguments, is_omitted
from .config import CallConfig
from .errors import PrimitiveCallError, StringsError, UNKNOWN_ERROR_MESSAGE
from .ports import Diagnostic, DiagnosticsPort, FailurePredicate, Primitive
from .sentinels import any_of, equals, is_false, is_none

__all__ = [
    "CallConfig",
    "Diagnostic",
    "DiagnosticsPort",
    "FailurePredicate",
    "OMITTED",
    "Omitted",
    "Primitive",
    "PrimitiveCallError",
    "Provided",
    "StringsError",
    "UNKNOWN_ERROR_MESSAGE",
    "any_of",
    "equals",
    "forward_arguments",
    "is_false",
    "is_none",
    "is_omitted",
]
