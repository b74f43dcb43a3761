"""printf-style message formatting for compiled translations.

Messages are formatted the way translators expect from printf-family
functions rather than with Python's "%" operator:

- surplus arguments are ignored ("Hello" with ["Bob"] -> "Hello")
- argument-numbered specifiers pick arguments by position
  ("%2$s, %1$s" with ["a", "b"] -> "b, a")
- numeric strings are accepted by numeric conversions ("%d" with ["3"])
- a "%" that does not start a known specifier is kept literally

Example:
    >>> format_message("%d items in your cart", [3, "ignored"])
    '3 items in your cart'
    >>> format_message("%2$s wrote to %1$s", ["Ann", "Bob"])
    'Bob wrote to Ann'
"""

import re
from typing import Any, Sequence

SPECIFIER_PATTERN = re.compile(
    r"%(?:(?P<position>[1-9][0-9]*)\$)?"
    r"(?P<flags>[-+ 0#]*)(?P<width>[0-9]*)(?P<precision>\.[0-9]+)?"
    r"(?P<conversion>[bcdeEfFgGosuxX%])"
)

_INTEGER_CONVERSIONS = "bcdouxX"
_FLOAT_CONVERSIONS = "eEfFgG"


def _coerce(value: Any, conversion: str) -> Any:
    if conversion in _INTEGER_CONVERSIONS:
        if isinstance(value, str):
            return int(float(value.strip() or 0))
        if isinstance(value, float):
            return int(value)
    elif conversion in _FLOAT_CONVERSIONS and isinstance(value, str):
        return float(value.strip() or 0)
    return value


def _render(match: "re.Match[str]", value: Any) -> str:
    conversion = match.group("conversion")
    spec = match.group("flags") + match.group("width") + (match.group("precision") or "")
    value = _coerce(value, conversion)

    if conversion == "b":
        return format(value, f"{spec}b")
    if conversion == "u":
        return f"%{spec}d" % (value if value >= 0 else value + 2**64)
    return f"%{spec}{conversion}" % (value,)


def format_message(message: str, args: Sequence[Any]) -> str:
    """Substitute positional arguments into a printf-style message.

    Args:
        message: Message containing specifiers such as "%s", "%05.2f" or "%1$s".
        args: Values consumed in order, or picked by "%N$" position.

    Returns:
        Formatted message.

    Raises:
        TypeError: If a specifier refers to a missing argument or a value
            cannot be converted.
    """
    args = list(args)
    next_index = 0

    def substitute(match: "re.Match[str]") -> str:
        nonlocal next_index
        if match.group("conversion") == "%":
            return "%"

        position = match.group("position")
        if position is not None:
            index = int(position) - 1
        else:
            index = next_index
            next_index += 1

        if index >= len(args):
            raise TypeError(
                f"not enough arguments for format string {message!r} ({len(args)} given)"
            )
        try:
            return _render(match, args[index])
        except ValueError as e:
            raise TypeError(f"cannot format argument {index + 1} of {message!r}: {e}") from e

    return SPECIFIER_PATTERN.sub(substitute, message)
