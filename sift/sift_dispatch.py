"""
The dispatcher: picks the first registered signature that accepts a call.
"""
import os
import sys
from typing import Any, List, Optional

from sift.sift_datatypes import (
    Arity, NoMatchingSignature, callable_arity, type_name
)
from sift.sift_printer import Printer
from sift.sift_registry import FunctionRegistry, Signature


class CallArguments:
    """Positional arguments of a builtin call plus its attached block."""
    def __init__(self, args: List[Any], block: Any = None):
        self.args = list(args)
        self.block = block
        self.block_arity: Optional[Arity] = None
        if block is not None and callable(block):
            self.block_arity = callable_arity(block)

    def shapes(self) -> List[str]:
        shapes = [type_name(a) for a in self.args]
        if self.block is not None:
            if self.block_arity is None:
                shapes.append(f"&{type_name(self.block)}")
            else:
                hi = "default" if self.block_arity.max is None else self.block_arity.max
                shapes.append(f"&Callable[{self.block_arity.min},{hi}]")
        return shapes

    def __repr__(self) -> str:
        return f"CallArguments({self.args!r}, block={self.block!r})"


class Dispatcher:
    """Selects and invokes builtin handlers by argument shape and block arity."""

    def __init__(self, registry: FunctionRegistry):
        self.registry = registry
        self.call_stack: List[dict] = []

    def _dbg(self, *parts):
        if os.environ.get("SIFT_DEBUG"):
            print("[DBG]", *parts, file=sys.stderr)

    def _matches(self, sig: Signature, call: CallArguments) -> bool:
        if len(sig.params) != len(call.args):
            return False
        for param, arg in zip(sig.params, call.args):
            if not param.accepts(arg):
                return False
        if sig.block is None:
            return call.block is None
        if call.block_arity is None:
            return False
        return sig.block.accepts_arity(call.block_arity)

    def select(self, name: str, call: CallArguments) -> Signature:
        """Returns the first matching candidate without invoking it."""
        candidates = self.registry.candidates_for(name)
        for sig in candidates:
            if self._matches(sig, call):
                self._dbg("select", name, "->", sig.handler_name)
                return sig
        shapes = call.shapes()
        self._dbg("no match", name, shapes)
        detail = Printer().format_mismatch(name, shapes, candidates)
        raise NoMatchingSignature(name, shapes, call.block_arity, list(candidates), detail)

    def dispatch(self, name: str, call: CallArguments) -> Any:
        """Invokes the selected handler; errors raised by the block propagate unchanged."""
        self._dbg("dispatch", name, "argc", len(call.args), "block", call.block_arity)
        self.call_stack.append({'name': name, 'args': call.args, 'block': call.block})
        try:
            sig = self.select(name, call)
            if sig.block is None:
                return sig.handler(*call.args)
            return sig.handler(*call.args, call.block)
        except Exception as e:
            # Keep the innermost stack for diagnostics.
            if getattr(e, 'sift_stack', None) is None:
                try:
                    e.sift_stack = [dict(f) for f in self.call_stack]
                except AttributeError:
                    pass
            raise
        finally:
            self.call_stack.pop()
