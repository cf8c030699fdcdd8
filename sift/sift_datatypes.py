"""
Defines the core data types for the SIFT function runtime.

This module provides the evaluation scope handed to lambdas, the callable
types a builtin can receive as its block, the truthiness rule shared with the
host language, and the error kinds raised while dispatching builtins.
"""

from abc import ABC
from typing import List, Dict, Any, Optional, Callable
import collections.abc
import inspect


# =================================================================
# Errors
# =================================================================

class UnknownOperation(LookupError):
    """Raised when a builtin name has no registered signatures."""
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name


class NoMatchingSignature(TypeError):
    """Raised when no candidate signature accepts the call's arguments."""
    def __init__(self, name: str, arg_shapes: List[str], block_arity: Optional['Arity'],
                 signatures: List[Any], detail: Optional[str] = None):
        super().__init__(f"'{name}' has no signature matching ({', '.join(arg_shapes)})")
        self.name = name
        self.arg_shapes = arg_shapes
        self.block_arity = block_arity
        self.signatures = signatures
        self.sift_detail = detail


class NotIterable(TypeError):
    """Raised when a value is neither a mapping nor exposes iteration."""
    def __init__(self, value: Any):
        super().__init__(f"value of type {type_name(value)} is not iterable")
        self.value = value
        self.sift_detail = f"expected a dict or an iterable, got {type_name(value)}"


class RegistryFrozen(RuntimeError):
    """Raised when registering a signature after initialization completed."""
    def __init__(self, name: str):
        super().__init__(f"cannot register '{name}': registry is frozen")
        self.name = name


# =================================================================
# Truthiness and type names
# =================================================================

def is_truthy(value: Any) -> bool:
    """Only `false` and `none` (undef) are falsy; 0, '' and empty collections are truthy."""
    return value is not None and value is not False


def type_name(val: object) -> str:
    """Primitive type name of a runtime value, as shown in diagnostics."""
    if val is None: return 'none'
    if isinstance(val, bool): return 'boolean'
    if isinstance(val, int): return 'int'
    if isinstance(val, float): return 'float'
    if isinstance(val, str): return 'string'
    if isinstance(val, (list, tuple)): return 'list'
    if isinstance(val, collections.abc.Mapping): return 'dict'
    if isinstance(val, Scope): return 'scope'
    if isinstance(val, Lambda) or callable(val): return 'function'
    if isinstance(val, collections.abc.Iterator): return 'iterator'
    if isinstance(val, collections.abc.Iterable): return 'iterable'
    return type(val).__name__


# =================================================================
# Core Runtime Types
# =================================================================

class Scope:
    """Evaluation scope for lambda bodies.

    Bindings are looked up on this scope first and then along the parent
    chain, which is how a lambda sees its closure.
    """
    def __init__(self, parent: Optional['Scope'] = None):
        self.bindings: Dict[str, Any] = {}
        self.parent = parent

    def __setitem__(self, key: str, value: Any):
        if not isinstance(key, str):
            raise TypeError(f"Scope key must be a str, not {type(key)}")
        self.bindings[key] = value

    def __getitem__(self, key: str) -> Any:
        owner = self.find_owner(key)
        if owner:
            return owner.bindings[key]
        raise KeyError(f"'{key}'")

    def __contains__(self, key: Any) -> bool:
        return isinstance(key, str) and self.find_owner(key) is not None

    def find_owner(self, key: str) -> Optional['Scope']:
        """Finds the Scope in the lookup chain (self → parent) that owns key."""
        if key in self.bindings:
            return self
        if self.parent is not None:
            return self.parent.find_owner(key)
        return None

    def get(self, key: str, default: Any = None) -> Any:
        owner = self.find_owner(key)
        if owner:
            return owner.bindings[key]
        return default

    def keys(self) -> collections.abc.KeysView:
        """Returns a view of keys in the current scope only."""
        return self.bindings.keys()

    def __repr__(self) -> str:
        keys = ', '.join(self.bindings.keys())
        parent_id = f", parent=#{id(self.parent)}" if self.parent else ""
        return f"<Scope bindings=[{keys}]{parent_id}>"


class Arity:
    """Accepted positional argument count of a callable; max=None is unbounded."""
    def __init__(self, min: int, max: Optional[int]):
        self.min = min
        self.max = max

    def accepts(self, count: int) -> bool:
        return count >= self.min and (self.max is None or count <= self.max)

    def overlaps(self, lo: int, hi: Optional[int]) -> bool:
        """True if some count in [lo, hi] is accepted."""
        upper = self.max if hi is None else (hi if self.max is None else min(hi, self.max))
        return upper is None or max(lo, self.min) <= upper

    def __repr__(self) -> str:
        hi = "*" if self.max is None else self.max
        return f"Arity({self.min}, {hi})"

    def __eq__(self, other):
        return isinstance(other, Arity) and (self.min, self.max) == (other.min, other.max)


class SiftCallable(ABC):
    """Abstract base class for callables defined in the host language."""
    pass


class Lambda(SiftCallable):
    """A host-language lambda: `|$k, $v = none| { ... }`.

    Bundles the parameter names, the body and the scope it was defined in.
    The body is a Python callable evaluated against a fresh call scope whose
    parent is the closure. Trailing parameters named in `defaults` are
    optional; `rest` collects any extra arguments as a list.
    """
    def __init__(self, params: List[str], body: Callable[[Scope], Any],
                 closure: Optional[Scope] = None,
                 defaults: Optional[Dict[str, Any]] = None,
                 rest: Optional[str] = None):
        self.params = list(params)
        self.body = body
        self.closure = closure
        self.defaults = dict(defaults or {})
        self.rest = rest
        required = 0
        for name in self.params:
            if name in self.defaults:
                break
            required += 1
        for name in self.params[required:]:
            if name not in self.defaults:
                raise ValueError(f"required parameter '{name}' follows an optional one")
        self.arity = Arity(required, None if rest is not None else len(self.params))

    def __call__(self, *args: Any) -> Any:
        if not self.arity.accepts(len(args)):
            raise TypeError(f"lambda expects {self.arity}, got {len(args)} arguments")
        call_scope = Scope(parent=self.closure)
        for i, name in enumerate(self.params):
            call_scope[name] = args[i] if i < len(args) else self.defaults[name]
        if self.rest is not None:
            call_scope[self.rest] = list(args[len(self.params):])
        return self.body(call_scope)

    def __repr__(self) -> str:
        from sift.sift_printer import Printer
        printer = Printer()
        names = [f"${n}" if n not in self.defaults else f"${n} = {printer.pformat(self.defaults[n])}" for n in self.params]
        if self.rest is not None:
            names.append(f"*${self.rest}")
        return f"|{', '.join(names)}| {{...}}"


def callable_arity(func: Any) -> Arity:
    """Declared positional arity of a block."""
    if isinstance(func, Lambda):
        return func.arity
    if not callable(func):
        raise TypeError(f"Object is not callable: {func!r}")
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        # Builtin types such as `bool` or `str` expose no signature; they take one value.
        return Arity(1, 1)
    lo, hi = 0, 0
    for p in sig.parameters.values():
        match p.kind:
            case inspect.Parameter.POSITIONAL_ONLY | inspect.Parameter.POSITIONAL_OR_KEYWORD:
                hi += 1
                if p.default is inspect.Parameter.empty:
                    lo += 1
            case inspect.Parameter.VAR_POSITIONAL:
                return Arity(lo, None)
    return Arity(lo, hi)
