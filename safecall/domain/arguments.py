"""Optional argument markers for primitives that tell omission from a value.

Some primitives behave differently when a trailing argument is left out
versus passed explicitly (even as ``None``). Public wrappers therefore default
such parameters to :data:`OMITTED`, and :func:`forward_arguments` drops them
before the primitive is called.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Mapping, Sequence, Tuple, TypeVar

T = TypeVar("T")


class Omitted:
    _instance: "Omitted | None" = None

    def __new__(cls) -> "Omitted":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "OMITTED"

    def __reduce__(self) -> str:
        return "OMITTED"


OMITTED = Omitted()


@dataclass(frozen=True)
class Provided(Generic[T]):
    """An optional argument the caller supplied explicitly."""

    value: T


def is_omitted(value: Any) -> bool:
    return value is OMITTED


def _unwrap(value: Any) -> Any:
    return value.value if isinstance(value, Provided) else value


def forward_arguments(
    args: Sequence[Any], kwargs: Mapping[str, Any]
) -> Tuple[Tuple[Any, ...], Dict[str, Any]]:
    """Translate wrapper arguments into the argument list for a primitive.

    Args:
        args: Positional arguments as received by the wrapper.
        kwargs: Keyword arguments as received by the wrapper.

    Returns:
        Tuple[Tuple[Any, ...], Dict[str, Any]]: Positional and keyword
        arguments with ``OMITTED`` entries removed and ``Provided`` unwrapped.

    Raises:
        TypeError: When an omitted positional argument is followed by a
            supplied one; the primitive has no way to express that gap.
    """
    positional: List[Any] = list(args)
    while positional and positional[-1] is OMITTED:
        positional.pop()
    for index, value in enumerate(positional):
        if value is OMITTED:
            raise TypeError(
                f"positional argument {index} is omitted but a later argument is supplied"
            )
    forwarded_kwargs = {
        key: _unwrap(value) for key, value in kwargs.items() if value is not OMITTED
    }
    return tuple(_unwrap(value) for value in positional), forwarded_kwargs


__all__ = ["OMITTED", "Omitted", "Provided", "forward_arguments", "is_omitted"]
