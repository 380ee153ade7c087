"""String and hashing functions that raise instead of returning ``False``.

Each function forwards to the matching primitive in
``safecall.adapters.platform_strings`` through a :class:`GuardedCall`, so a
failure surfaces as :class:`~safecall.domain.errors.StringsError` carrying
the diagnostic reported during that call.
"""

from __future__ import annotations

from typing import Dict, Union

from safecall.adapters import platform_strings
from safecall.adapters.platform_strings import PathArg, Text
from safecall.domain.arguments import OMITTED, Omitted, Provided
from safecall.domain.config import CallConfig
from safecall.domain.errors import StringsError
from safecall.usecases.guarded_call import GuardedCall

_config = CallConfig.from_env()


def _guard(primitive) -> GuardedCall:
    return GuardedCall(primitive, error_cls=StringsError, config=_config)


_convert_uudecode = _guard(platform_strings.convert_uudecode)
_count_chars = _guard(platform_strings.count_chars)
_hex2bin = _guard(platform_strings.hex2bin)
_md5_file = _guard(platform_strings.md5_file)
_metaphone = _guard(platform_strings.metaphone)
_sha1_file = _guard(platform_strings.sha1_file)
_substr = _guard(platform_strings.substr)


def convert_uudecode(data: Text) -> bytes:
    """Decode a uuencoded string.

    Args:
        data: The uuencoded data.

    Returns:
        bytes: The decoded data.

    Raises:
        StringsError: ``data`` is empty or not valid uuencoded text.
    """
    return _convert_uudecode(data)


def count_chars(data: Text, mode: int = 0) -> Union[Dict[int, int], bytes]:
    """Count the occurrences of every byte value (0..255) in ``data``.

    ``mode`` selects the result:

    * 0 - mapping of every byte value to its frequency.
    * 1 - same as 0, only byte values with a frequency above zero.
    * 2 - same as 0, only byte values with a frequency of zero.
    * 3 - bytes holding every byte value that occurs.
    * 4 - bytes holding every byte value that does not occur.

    Raises:
        StringsError: ``mode`` is not one of the above.
    """
    return _count_chars(data, mode)


def hex2bin(data: Text) -> bytes:
    """Decode a hexadecimally encoded binary string.

    Args:
        data: Hexadecimal representation of the data. Text is UTF-8 encoded
            before decoding.

    Returns:
        bytes: The decoded binary data, e.g. ``hex2bin("68656c6c6f")`` is
        ``b"hello"``. Call ``.decode()`` when the payload is known to be text.

    Raises:
        StringsError: ``data`` has odd length or holds non-hex digits.
    """
    return _hex2bin(data)


def md5_file(filename: PathArg, binary: bool = False) -> Union[str, bytes]:
    """Calculate the MD5 hash of the file at ``filename``.

    Args:
        filename: Path of the file to hash.
        binary: Return the raw 16-byte digest instead of 32 hex characters.

    Raises:
        StringsError: The file cannot be opened or read.
    """
    return _md5_file(filename, binary)


def metaphone(string: str, max_phonemes: int = 0) -> str:
    """Calculate the metaphone key of ``string``.

    Similar sounding words share the same key. ``max_phonemes`` restricts the
    key to that many characters; ``0`` means no restriction. The key is cut
    at exactly that length, so a two-character phoneme such as ``KS`` (for
    ``X``) may be split and the key never exceeds the limit.

    Raises:
        StringsError: ``max_phonemes`` is negative.
    """
    return _metaphone(string, max_phonemes)


def sha1_file(filename: PathArg, binary: bool = False) -> Union[str, bytes]:
    """Calculate the SHA-1 hash of the file at ``filename``.

    Args:
        filename: Path of the file to hash.
        binary: Return the raw 20-byte digest instead of 40 hex characters.

    Raises:
        StringsError: The file cannot be opened or read.
    """
    return _sha1_file(filename, binary)


def substr(
    string: Text,
    offset: int,
    length: Union[int, None, Provided, Omitted] = OMITTED,
) -> Text:
    """Return the portion of ``string`` given by ``offset`` and ``length``.

    Args:
        string: The input string.
        offset: Start position counted from zero. Negative values count from
            the end of ``string``.
        length: Leave out to take everything up to the end. A positive value
            takes at most that many characters. A negative value drops that
            many characters from the end. ``0`` or ``None`` give an empty
            result.

    Returns:
        The extracted part of ``string``, possibly empty.

    Raises:
        StringsError: ``offset`` lies past the end of ``string``, or a
            negative ``length`` truncates before ``offset``.
    """
    return _substr(string, offset, length)


__all__ = [
    "convert_uudecode",
    "count_chars",
    "hex2bin",
    "md5_file",
    "metaphone",
    "sha1_file",
    "substr",
]
