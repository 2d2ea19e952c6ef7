"""A small printf supporting the c, s, p, d, i, u, x, X and % conversions."""

from __future__ import annotations

import operator
import sys
from collections.abc import Callable, Iterator
from typing import IO, Any

__all__ = ["CONVERSIONS", "format_printf", "print_formatted"]

CONVERSIONS = "sdcpuxXi"

_INT_BITS = 32
_POINTER_BITS = 64
_LOWER_HEX = "0123456789abcdef"
_UPPER_HEX = "0123456789ABCDEF"


def _as_int(value: Any, conversion: str) -> int:
    try:
        return operator.index(value)
    except TypeError:
        raise TypeError(
            f"%{conversion} requires an integer, not {type(value).__name__}"
        ) from None


def _unsigned(value: int, bits: int) -> int:
    return value & ((1 << bits) - 1)


def _signed(value: int, bits: int) -> int:
    value = _unsigned(value, bits)
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _in_base(value: int, digits: str) -> str:
    base = len(digits)
    out = []
    while True:
        value, rest = divmod(value, base)
        out.append(digits[rest])
        if value == 0:
            break
    return "".join(reversed(out))


def _char(value: Any) -> str:
    if isinstance(value, str):
        if len(value) != 1:
            raise TypeError("%c requires a single character or an integer")
        return value
    return chr(_as_int(value, "c") & 0xFF)


def _string(value: Any) -> str:
    if value is None:
        return "(null)"
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("latin-1")
    if not isinstance(value, str):
        raise TypeError(f"%s requires a string, not {type(value).__name__}")
    return value


def _pointer(value: Any) -> str:
    if value is None:
        return "(nil)"
    address = _unsigned(_as_int(value, "p"), _POINTER_BITS)
    if address == 0:
        return "(nil)"
    return "0x" + _in_base(address, _LOWER_HEX)


def _decimal(value: Any) -> str:
    return str(_signed(_as_int(value, "d"), _INT_BITS))


def _unsigned_decimal(value: Any) -> str:
    return str(_unsigned(_as_int(value, "u"), _INT_BITS))


def _hex(digits: str, conversion: str) -> Callable[[Any], str]:
    def render(value: Any) -> str:
        return _in_base(_unsigned(_as_int(value, conversion), _INT_BITS), digits)

    return render


_RENDERERS: dict[str, Callable[[Any], str]] = {
    "s": _string,
    "d": _decimal,
    "i": _decimal,
    "c": _char,
    "p": _pointer,
    "u": _unsigned_decimal,
    "x": _hex(_LOWER_HEX, "x"),
    "X": _hex(_UPPER_HEX, "X"),
}


def _pieces(fmt: str, args: tuple[Any, ...]) -> Iterator[str]:
    values = iter(args)
    chars = iter(fmt)
    for char in chars:
        if char != "%":
            yield char
            continue
        conversion = next(chars, None)
        if conversion is None:
            # A lone trailing '%' emits the terminating NUL and ends the format.
            yield "\0"
            return
        render = _RENDERERS.get(conversion)
        if render is None:
            # '%%' and unknown conversions print the character itself.
            yield conversion
            continue
        try:
            value = next(values)
        except StopIteration:
            raise TypeError(
                f"not enough arguments for conversion %{conversion}"
            ) from None
        yield render(value)


def format_printf(fmt: str, *args: Any) -> str:
    """Return ``fmt`` with each conversion replaced by the next argument."""
    return "".join(_pieces(fmt, args))


def print_formatted(fmt: str, *args: Any, file: IO[str] | None = None) -> int:
    """Write the formatted text to ``file`` (standard output by default).

    Returns the number of characters written.
    """
    if file is None:
        file = sys.stdout
    text = format_printf(fmt, *args)
    file.write(text)
    file.flush()
    return len(text)