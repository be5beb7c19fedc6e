"""Runtime values for Nesia.

Nesia values map onto Python objects as follows:

* Number  -> ``float`` (always a float, never an ``int``)
* String  -> ``str``
* Boolean -> ``bool``
* Nil     -> the ``NIL`` instance of :class:`NilVal`
* Function -> :class:`FunctionValue`

This module also holds the helpers that inspect values: naming their type
for error messages, formatting them for ``print`` and comparing them for
``==``/``!=``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, List
from decimal import Decimal
import math

if TYPE_CHECKING:
    from .ast import Node
    from .environment import Environment


class NilVal:
    """Marker object for the Nesia ``nil`` value."""
    def __repr__(self) -> str:
        return 'nil'


NIL = NilVal()


@dataclass
class ErrorVal:
    """Describes a Nesia error: a kind name and a human readable message."""
    name: str
    message: str

    def __repr__(self) -> str:
        return f"Error(name={self.name!r}, message={self.message!r})"


class FunctionValue:
    """A user-defined function together with the scope it was declared in."""
    def __init__(self, name: str, params: List[str], body: List['Node'], closure: 'Environment'):
        self.name = name
        self.params = params
        self.body = body
        self.closure = closure

    @property
    def arity(self) -> int:
        return len(self.params)

    def __repr__(self) -> str:
        return f"<fn {self.name}>"


def type_name(value: Any) -> str:
    """Return the Nesia type name of a runtime value."""
    if isinstance(value, bool):
        return 'Boolean'
    if isinstance(value, float):
        return 'Number'
    if isinstance(value, str):
        return 'String'
    if isinstance(value, FunctionValue):
        return 'Function'
    if isinstance(value, NilVal):
        return 'Nil'
    return type(value).__name__


def is_number(value: Any) -> bool:
    return isinstance(value, float)


def format_number(value: float) -> str:
    """Format a number the way ``print`` shows it.

    Integral values drop the fractional part (``7`` rather than ``7.0``);
    everything else uses the shortest digits that round-trip, written out
    positionally (``0.0000001`` rather than ``1e-07``).
    """
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'inf' if value > 0 else '-inf'
    if value.is_integer():
        return f"{value:.0f}"
    return format(Decimal(repr(value)), 'f')


def to_string(value: Any) -> str:
    """Convert a Nesia value to its printed representation."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, NilVal):
        return 'nil'
    if isinstance(value, FunctionValue):
        return f"<fn {value.name}>"
    return str(value)


def values_equal(a: Any, b: Any) -> bool:
    """Structural equality used by ``==`` and ``!=``.

    Values of different types are never equal, and neither are functions.
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if is_number(a) and is_number(b):
        return a == b
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    if isinstance(a, NilVal) and isinstance(b, NilVal):
        return True
    return False
