"""Sentinel-returning string and hashing primitives.

These functions follow the in-band calling convention that guarded calls
exist to hide: on failure they return ``False`` and, where a message is
available, report it into the active diagnostic slot. Nothing here
raises for bad input.

Dependencies:
    - ``hashlib`` and ``binascii`` for digests and byte codecs.
    - ``jellyfish`` for metaphone keys.
    - ``safecall.adapters.diagnostics.active_diagnostics`` as the slot.

Call context:
    - Wrapped one-to-one by ``safecall.strings``.
"""

from __future__ import annotations

import binascii
import hashlib
import logging
import os
from collections import Counter
from typing import Any, Dict, Union

import jellyfish

from safecall.adapters.diagnostics import active_diagnostics

_log = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024
_UNSET: Any = object()

Text = Union[str, bytes]
PathArg = Union[str, bytes, os.PathLike]


def report_error(primitive: str, message: str) -> None:
    """Record ``message`` as the last platform error for ``primitive``."""
    text = f"{primitive}(): {message}"
    _log.debug("%s", text)
    active_diagnostics().report(text, source=primitive)


def _as_bytes(data: Text) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def convert_uudecode(data: Text) -> Union[bytes, bool]:
    raw = _as_bytes(data)
    if not raw:
        return False
    decoded = bytearray()
    for line in raw.splitlines():
        if not line.strip():
            continue
        # A zero-length line terminates the payload.
        if line[:1] in (b"`", b" ") or line.strip() == b"end":
            break
        declared = (line[0] - 0x20) & 0x3F
        # a2b_uu zero-fills short lines; treat them as truncated input.
        if len(line) - 1 < (declared + 2) // 3 * 4:
            return _invalid_uuencoded()
        try:
            decoded += binascii.a2b_uu(line)
        except binascii.Error:
            return _invalid_uuencoded()
    return bytes(decoded)


def _invalid_uuencoded() -> bool:
    report_error("convert_uudecode", "The given parameter is not a valid uuencoded string")
    return False


def count_chars(data: Text, mode: int = 0) -> Union[Dict[int, int], bytes, bool]:
    if mode not in (0, 1, 2, 3, 4):
        report_error("count_chars", "Unknown mode")
        return False
    counts = Counter(_as_bytes(data))
    if mode == 0:
        return {value: counts.get(value, 0) for value in range(256)}
    if mode == 1:
        return {value: counts[value] for value in range(256) if counts.get(value, 0) > 0}
    if mode == 2:
        return {value: 0 for value in range(256) if counts.get(value, 0) == 0}
    if mode == 3:
        return bytes(value for value in range(256) if counts.get(value, 0) > 0)
    return bytes(value for value in range(256) if counts.get(value, 0) == 0)


def hex2bin(data: Text) -> Union[bytes, bool]:
    raw = _as_bytes(data)
    if len(raw) % 2:
        report_error("hex2bin", "Hexadecimal input string must have an even length")
        return False
    try:
        return binascii.unhexlify(raw)
    except binascii.Error:
        report_error("hex2bin", "Input string must be hexadecimal string")
        return False


def _hash_file(primitive: str, digest: Any, filename: PathArg, binary: bool) -> Union[str, bytes, bool]:
    try:
        with open(filename, "rb") as fh:
            for chunk in iter(lambda: fh.read(_CHUNK_SIZE), b""):
                digest.update(chunk)
    except OSError as exc:
        reason = exc.strerror or str(exc)
        report_error(primitive, f"{os.fsdecode(filename)}: Failed to open stream: {reason}")
        return False
    return digest.digest() if binary else digest.hexdigest()


def md5_file(filename: PathArg, binary: bool = False) -> Union[str, bytes, bool]:
    return _hash_file("md5_file", hashlib.md5(), filename, binary)


def sha1_file(filename: PathArg, binary: bool = False) -> Union[str, bytes, bool]:
    return _hash_file("sha1_file", hashlib.sha1(), filename, binary)


def metaphone(string: str, max_phonemes: int = 0) -> Union[str, bool]:
    if max_phonemes < 0:
        report_error(
            "metaphone", "Argument #2 ($max_phonemes) must be greater than or equal to 0"
        )
        return False
    key = jellyfish.metaphone(string)
    # Hard cut; multi-character phonemes are not kept whole.
    if max_phonemes:
        key = key[:max_phonemes]
    return key


def substr(string: Text, offset: int, length: Any = _UNSET) -> Union[Text, bool]:
    """Slice with classic byte-string ``substr`` rules.

    ``length`` left out means "to the end"; passed explicitly as ``None`` it
    counts as zero. No diagnostic is reported on failure.
    """
    size = len(string)
    if offset > size:
        return False
    if offset < 0:
        offset = max(size + offset, 0)
    if length is _UNSET:
        return string[offset:]
    if length is None:
        length = 0
    if length < 0:
        end = size + length
        if end < offset:
            return False
        return string[offset:end]
    return string[offset:offset + length]


__all__ = [
    "convert_uudecode",
    "count_chars",
    "hex2bin",
    "md5_file",
    "metaphone",
    "report_error",
    "sha1_file",
    "substr",
]
