"""Runtime values for Slang and their textual renderings.

A Slang value is one of `NumberVal`, `StrVal`, `ListVal` or `UnitVal`.
All of them are frozen, so a list that is bound into another list can be
shared without any later change becoming visible through it.

Values have two renderings. `to_display` is what `print` shows for each
of its arguments: strings appear raw. `to_debug` is used for everything
nested inside a list: strings appear in double quotes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple, Union

INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1

UNIT_TEXT = '()'


@dataclass(frozen=True)
class NumberVal:
    value: int

    def __repr__(self) -> str:
        return f"Number({self.value})"


@dataclass(frozen=True)
class StrVal:
    value: str

    def __repr__(self) -> str:
        return f"String({self.value!r})"


@dataclass(frozen=True)
class ListVal:
    """An ordered, fixed-length sequence of values.

    `depth` is the nesting depth of the list (1 for a list without nested
    lists). It is computed once at construction and is not part of
    equality.
    """
    items: Tuple['Value', ...]
    depth: int = field(default=0, init=False, compare=False, repr=False)

    def __post_init__(self):
        # accept any iterable but always store a tuple
        items = tuple(self.items)
        object.__setattr__(self, 'items', items)
        nested = [item.depth for item in items if isinstance(item, ListVal)]
        object.__setattr__(self, 'depth', 1 + max(nested, default=0))

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        return f"List({list(self.items)!r})"


@dataclass(frozen=True)
class UnitVal:
    """Absence of a value, e.g. a block without a trailing expression."""

    def __repr__(self) -> str:
        return 'Unit'


Value = Union[NumberVal, StrVal, ListVal, UnitVal]


def in_int_range(n: int) -> bool:
    return INT_MIN <= n <= INT_MAX


def type_name(value: Value) -> str:
    """Return the Slang type name of a runtime value."""
    if isinstance(value, NumberVal):
        return 'Number'
    if isinstance(value, StrVal):
        return 'String'
    if isinstance(value, ListVal):
        return 'List'
    if isinstance(value, UnitVal):
        return 'Unit'
    raise TypeError(f"not a Slang value: {value!r}")


def to_display(value: Value) -> str:
    """Render a value the way it appears as a top-level `print` argument."""
    if isinstance(value, NumberVal):
        return str(value.value)
    if isinstance(value, StrVal):
        return value.value
    if isinstance(value, ListVal):
        return '[' + ', '.join(to_debug(item) for item in value.items) + ']'
    if isinstance(value, UnitVal):
        return UNIT_TEXT
    raise TypeError(f"not a Slang value: {value!r}")


def to_debug(value: Value) -> str:
    """Render a value the way it appears nested inside a list.

    Identical to `to_display` except that strings are wrapped in double
    quotes. No escaping is done: string literals cannot contain quotes.
    """
    if isinstance(value, NumberVal):
        return str(value.value)
    if isinstance(value, StrVal):
        return '"' + value.value + '"'
    if isinstance(value, ListVal):
        return '[' + ', '.join(to_debug(item) for item in value.items) + ']'
    if isinstance(value, UnitVal):
        return UNIT_TEXT
    raise TypeError(f"not a Slang value: {value!r}")
