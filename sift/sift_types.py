"""
Parameter-shape constraints used to select builtin signatures.

Constraints are declared structurally in the function table, e.g.
`{Hash: [Any, Any]}`, `Iterable` or `{Callable: [2, 2]}`, and built once when
the table is loaded.
"""
import collections.abc
from typing import Any, Optional

from sift.sift_datatypes import Arity, Lambda, callable_arity
from sift.sift_iteration import is_iterable


class SiftType:
    """Base class for all parameter-shape constraints."""
    name = 'Any'

    def accepts(self, value: Any) -> bool:
        return True

    def __repr__(self) -> str:
        return self.name

    def __eq__(self, other):
        return type(self) is type(other) and repr(self) == repr(other)

    def __hash__(self):
        return hash(repr(self))


class AnyType(SiftType):
    name = 'Any'


class ScalarType(SiftType):
    def __init__(self, name: str, accepts_fn):
        self.name = name
        self._accepts = accepts_fn

    def accepts(self, value: Any) -> bool:
        return self._accepts(value)


def _is_int(v): return isinstance(v, int) and not isinstance(v, bool)
def _is_float(v): return isinstance(v, float)


SCALARS = {
    'Undef': ScalarType('Undef', lambda v: v is None),
    'Boolean': ScalarType('Boolean', lambda v: isinstance(v, bool)),
    'Integer': ScalarType('Integer', _is_int),
    'Float': ScalarType('Float', _is_float),
    'Numeric': ScalarType('Numeric', lambda v: _is_int(v) or _is_float(v)),
    'String': ScalarType('String', lambda v: isinstance(v, str)),
}


class ArrayType(SiftType):
    name = 'Array'

    def __init__(self, element: SiftType = AnyType()):
        self.element = element

    def accepts(self, value: Any) -> bool:
        if not isinstance(value, (list, tuple)):
            return False
        if isinstance(self.element, AnyType):
            return True
        return all(self.element.accepts(v) for v in value)

    def __repr__(self) -> str:
        if isinstance(self.element, AnyType):
            return 'Array'
        return f"Array[{self.element!r}]"


class HashType(SiftType):
    name = 'Hash'

    def __init__(self, key: SiftType = AnyType(), value: SiftType = AnyType()):
        self.key = key
        self.value = value

    def accepts(self, value: Any) -> bool:
        if not isinstance(value, collections.abc.Mapping):
            return False
        if isinstance(self.key, AnyType) and isinstance(self.value, AnyType):
            return True
        return all(self.key.accepts(k) and self.value.accepts(v) for k, v in value.items())

    def __repr__(self) -> str:
        if isinstance(self.key, AnyType) and isinstance(self.value, AnyType):
            return 'Hash'
        return f"Hash[{self.key!r}, {self.value!r}]"


class IterableType(SiftType):
    """Anything the iteration adapter can produce a cursor for."""
    name = 'Iterable'

    def accepts(self, value: Any) -> bool:
        return is_iterable(value)


class CallableType(SiftType):
    """A block constraint: accepts callables taking between lo and hi positional values."""
    name = 'Callable'

    def __init__(self, lo: int = 0, hi: Optional[int] = None):
        if hi is not None and hi < lo:
            raise ValueError(f"Callable[{lo},{hi}]: max is below min")
        self.lo = lo
        self.hi = hi

    def accepts(self, value: Any) -> bool:
        if not (isinstance(value, Lambda) or callable(value)):
            return False
        return self.accepts_arity(callable_arity(value))

    def accepts_arity(self, arity: Arity) -> bool:
        return arity.overlaps(self.lo, self.hi)

    def __repr__(self) -> str:
        hi = 'default' if self.hi is None else self.hi
        return f"Callable[{self.lo},{hi}]"


# =================================================================
# Type declarations from the function table
# =================================================================

def _count(value: Any, where: str) -> Optional[int]:
    # Counts are ints; `default` (or null) leaves the max open.
    if value is None or value == 'default':
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Callable counts must be integers or 'default', got {value!r} in {where}")
    return value


def build_type(node: Any) -> SiftType:
    """Builds a constraint from a YAML node.

    A bare name (`Any`, `Iterable`, `String`, `Hash`, `Callable`, ...) gives the
    unparameterised type; a single-key mapping parameterises it:
    `{Hash: [String, Any]}`, `{Array: [Integer]}`, `{Callable: [2, 2]}`.
    """
    if isinstance(node, str):
        name, args = node, None
    elif isinstance(node, dict) and len(node) == 1:
        name, args = next(iter(node.items()))
        if not isinstance(name, str) or not isinstance(args, list):
            raise ValueError(f"Malformed type declaration {node!r}")
    else:
        raise ValueError(f"Malformed type declaration {node!r}")

    match name:
        case 'Any' | 'Iterable' if args is not None:
            raise ValueError(f"{name} takes no parameters: {node!r}")
        case 'Any':
            return AnyType()
        case 'Iterable':
            return IterableType()
        case 'Hash':
            if args is None:
                return HashType()
            if len(args) != 2:
                raise ValueError(f"Hash takes 2 parameters: {node!r}")
            return HashType(build_type(args[0]), build_type(args[1]))
        case 'Array':
            if args is None:
                return ArrayType()
            if len(args) != 1:
                raise ValueError(f"Array takes 1 parameter: {node!r}")
            return ArrayType(build_type(args[0]))
        case 'Callable':
            if args is None:
                return CallableType()
            if not 1 <= len(args) <= 2:
                raise ValueError(f"Callable takes [min, max] counts: {node!r}")
            lo = _count(args[0], repr(node))
            hi = _count(args[1], repr(node)) if len(args) == 2 else None
            return CallableType(lo or 0, hi)
        case _ if name in SCALARS:
            if args is not None:
                raise ValueError(f"{name} takes no parameters: {node!r}")
            return SCALARS[name]
        case _:
            raise ValueError(f"Unknown type {name!r} in {node!r}")
