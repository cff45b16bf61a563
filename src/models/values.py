"""
Argument value models

Shortcode arguments are literals of four kinds: booleans, numbers, strings
and (possibly nested) lists of those. Values are immutable once parsed.

Example:
    For the tag `figure(src="a.png", width=640, tags=["x", true])`:
        {
            "src": Text("a.png"),
            "width": Number(640),
            "tags": List((Text("x"), Boolean(True))),
        }
"""

from dataclasses import dataclass
from typing import Any, Tuple, Union


@dataclass(frozen=True)
class Boolean:
    """A `true` / `false` literal"""
    value: bool

    def python(self) -> bool:
        return self.value


@dataclass(frozen=True)
class Number:
    """
    A numeric literal

    Integral literals (`42`, `-7`) keep an int; literals with a fraction or
    an exponent (`1.5`, `2e3`) become a float.
    """
    value: Union[int, float]

    def python(self) -> Union[int, float]:
        return self.value


@dataclass(frozen=True)
class Text:
    """A quoted string literal, escapes already resolved"""
    value: str

    def python(self) -> str:
        return self.value


@dataclass(frozen=True)
class List:
    """A bracketed list of literals"""
    items: Tuple["ArgValue", ...] = ()

    def python(self) -> list:
        return [item.python() for item in self.items]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


ArgValue = Union[Boolean, Number, Text, List]


def value_fromPython(obj: Any) -> ArgValue:
    """
    Build an ArgValue from a plain Python value

    bool is checked before int since bool is an int subclass.

    Raises:
        TypeError: If obj (or a list element) is not bool/int/float/str/list/tuple
    """
    if isinstance(obj, bool):
        return Boolean(obj)
    if isinstance(obj, (int, float)):
        return Number(obj)
    if isinstance(obj, str):
        return Text(obj)
    if isinstance(obj, (list, tuple)):
        return List(tuple(value_fromPython(item) for item in obj))
    raise TypeError(f"Cannot convert {type(obj).__name__} to a shortcode argument value")
