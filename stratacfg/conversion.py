# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""String conversion for typed configuration access.

Configuration values are always stored as strings. This module converts
them to and from a closed set of Python types:

- str: returned unchanged
- int: optional sign and digits; culture grouping separators are removed
  when they sit between whole groups of three digits
- float: culture decimal point is honoured; exponent, nan and inf accepted
- bool: true/false, yes/no, on/off, 1/0 (case-insensitive)

Any other target type raises ConversionError. The number format is taken
from a Culture; INVARIANT (decimal point ".", no grouping) is the default
so documents stay portable between machines.

Example:
    Parse with a non-invariant culture:
        ```python
        from stratacfg.conversion import Culture, parse_value

        german = Culture("de", decimal_point=",", thousands_sep=".")
        parse_value("1.234,5", float, german)  # 1234.5
        ```
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import locale
import re
from typing import Any, TypeVar

from stratacfg.exceptions import ConversionError, InvalidArgumentError

T = TypeVar("T")

__all__ = [
    "Culture",
    "INVARIANT",
    "SUPPORTED_TYPES",
    "parse_value",
    "format_value",
]

_INT_PATTERN = re.compile(r"[+-]?\d+")
_TRUE_LITERALS = frozenset({"true", "yes", "on", "1"})
_FALSE_LITERALS = frozenset({"false", "no", "off", "0"})


@dataclass(frozen=True)
class Culture:
    """Number formatting rules used when converting values.

    Attributes:
        name: Display name of the culture (e.g., "invariant", "de_DE").
        decimal_point: Decimal separator for floats.
        thousands_sep: Digit grouping separator, empty for none.
    """

    name: str = "invariant"
    decimal_point: str = "."
    thousands_sep: str = ""

    @classmethod
    def from_locale(cls) -> Culture:
        """Snapshot the number format of the current process locale."""
        conv = locale.localeconv()
        name = locale.setlocale(locale.LC_NUMERIC)
        return cls(
            name=name,
            decimal_point=str(conv["decimal_point"]) or ".",
            thousands_sep=str(conv["thousands_sep"]),
        )

    def strip_grouping(self, text: str) -> str:
        """Remove digit grouping from the integer part of text.

        Raises:
            ValueError: If a grouping separator appears anywhere other than
                between whole groups of three digits.
        """
        sep = self.thousands_sep
        if not sep or sep not in text:
            return text
        whole, point, fraction = text.partition(self.decimal_point)
        grouped = rf"[+-]?\d{{1,3}}(?:{re.escape(sep)}\d{{3}})+"
        if sep in fraction or not re.fullmatch(grouped, whole):
            raise ValueError(text)
        return whole.replace(sep, "") + point + fraction


INVARIANT = Culture()


def _parse_str(text: str, culture: Culture) -> str:
    return text


def _parse_int(text: str, culture: Culture) -> int:
    candidate = culture.strip_grouping(text.strip())
    if not _INT_PATTERN.fullmatch(candidate):
        raise ValueError(text)
    return int(candidate)


def _parse_float(text: str, culture: Culture) -> float:
    candidate = culture.strip_grouping(text.strip())
    if "_" in candidate:
        raise ValueError(text)
    if culture.decimal_point != ".":
        candidate = candidate.replace(culture.decimal_point, ".")
    return float(candidate)


def _parse_bool(text: str, culture: Culture) -> bool:
    candidate = text.strip().lower()
    if candidate in _TRUE_LITERALS:
        return True
    if candidate in _FALSE_LITERALS:
        return False
    raise ValueError(text)


_PARSERS: dict[type, Callable[[str, Culture], Any]] = {
    str: _parse_str,
    int: _parse_int,
    float: _parse_float,
    bool: _parse_bool,
}

SUPPORTED_TYPES: tuple[type, ...] = tuple(_PARSERS)


def parse_value(text: str, target: type[T], culture: Culture = INVARIANT) -> T:
    """Convert a stored string to the requested type.

    Args:
        text: Stored configuration value.
        target: One of str, int, float or bool.
        culture: Number format to apply.

    Returns:
        The converted value.

    Raises:
        ConversionError: If the target type is unsupported or the text
            cannot be parsed as that type.
    """
    parser = _PARSERS.get(target)
    if parser is None:
        raise ConversionError(
            f"Unsupported conversion target: {getattr(target, '__name__', target)}",
            value=text,
            target=target,
        )
    try:
        return parser(text, culture)
    except ValueError as err:
        raise ConversionError(
            f"Cannot convert {text!r} to {target.__name__} ({culture.name} culture)",
            value=text,
            target=target,
        ) from err


def format_value(value: Any, culture: Culture = INVARIANT) -> str:
    """Render a typed value as a configuration string.

    Raises:
        InvalidArgumentError: If value is None.
        ConversionError: If the value type is not supported.
    """
    if value is None:
        raise InvalidArgumentError("value can't be None.")
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        text = repr(value)
        if culture.decimal_point != ".":
            text = text.replace(".", culture.decimal_point)
        return text
    raise ConversionError(
        f"Unsupported value type: {type(value).__name__}",
        value=value,
        target=str,
    )
