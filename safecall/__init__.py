"""Structured errors for primitives that signal failure with a sentinel value."""

from safecall.domain.arguments import OMITTED, Provided
from safecall.domain.config import CallConfig
from safecall.domain.errors import PrimitiveCallError, StringsError
from safecall.strings import (
    convert_uudecode,
    count_chars,
    hex2bin,
    md5_file,
    metaphone,
    sha1_file,
    substr,
)
from safecall.usecases.guarded_call import GuardedCall
from safecall.utils.logging import configure_from_env, install_null_handler

install_null_handler()
configure_from_env()

__all__ = [
    "CallConfig",
    "GuardedCall",
    "OMITTED",
    "PrimitiveCallError",
    "Provided",
    "StringsError",
    "convert_uudecode",
    "count_chars",
    "hex2bin",
    "md5_file",
    "metaphone",
    "sha1_file",
    "substr",
]
