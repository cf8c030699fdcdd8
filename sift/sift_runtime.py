# sift_runtime.py

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Literal, Optional

from sift.sift_datatypes import (
    UnknownOperation, NoMatchingSignature, NotIterable, Lambda
)
from sift.sift_dispatch import CallArguments, Dispatcher
from sift.sift_functions import Builtins
from sift.sift_printer import Printer
from sift.sift_registry import FunctionRegistry

DEFAULT_FUNCTIONS_PATH = Path(__file__).parent / "functions.yaml"


@dataclass
class ExecutionResult:
    """The structured result of a builtin call made through `evaluate`."""
    status: Literal['success', 'error']
    value: Any = None
    error_message: Optional[str] = None

    def format_error(self) -> str:
        if self.status != 'error':
            return ""
        return str(self.error_message or "Unknown error")


class Runtime:
    """Owns the function registry and dispatches builtin calls for an evaluator."""

    # The bundled table is parsed once per process and shared by all runtimes.
    _default_registry: Optional[FunctionRegistry] = None
    _init_lock = threading.Lock()

    def __init__(self, functions_path: Optional[str | Path] = None, load_builtins: bool = True):
        self.builtins = Builtins()
        if not load_builtins:
            self.registry = FunctionRegistry().freeze()
        elif functions_path is not None:
            self.registry = FunctionRegistry.from_yaml(functions_path, self.builtins)
        else:
            self.registry = Runtime._shared_registry()
        self.dispatcher = Dispatcher(self.registry)
        self.printer = Printer()

    @classmethod
    def _shared_registry(cls) -> FunctionRegistry:
        if cls._default_registry is None:
            with cls._init_lock:
                if cls._default_registry is None:
                    cls._default_registry = FunctionRegistry.from_yaml(DEFAULT_FUNCTIONS_PATH, Builtins())
        return cls._default_registry

    def call(self, name: str, *args: Any, block: Any = None) -> Any:
        """Dispatches a builtin call; all errors propagate to the caller."""
        return self.dispatcher.dispatch(name, CallArguments(list(args), block))

    def evaluate(self, name: str, *args: Any, block: Any = None) -> ExecutionResult:
        """Dispatches a builtin call and reports errors as an ExecutionResult."""
        try:
            value = self.call(name, *args, block=block)
        except Exception as e:
            return ExecutionResult(status='error', error_message=self._format_runtime_error(e))
        return ExecutionResult(status='success', value=value)

    # --- Diagnostics ---

    def _format_runtime_error(self, e: Exception) -> str:
        match e:
            case UnknownOperation() as uo:
                msg = f"UnknownOperation: {uo.name}"
            case NoMatchingSignature() as nm:
                msg = f"TypeError: invalid-args in ({nm.name})"
            case NotIterable() as ni:
                msg = f"TypeError: not-iterable {self.printer.pformat(ni.value)}"
            case TypeError():
                msg = f"TypeError: {e}"
            case _:
                msg = f"{type(e).__name__}: {e}"
        detail = getattr(e, 'sift_detail', None)
        if isinstance(detail, str) and detail:
            msg = f"{msg}\n{detail}"
        st = self._format_stacktrace(getattr(e, 'sift_stack', None) or [])
        if st:
            msg += "\n" + st
        return msg

    def _format_stacktrace(self, stack: List[dict]) -> str:
        if not stack:
            return ""

        def fmt(arg):
            match arg:
                case None | bool() | int() | float() | str():
                    return self.printer.pformat(arg)
                case Lambda():
                    return "fn"
                case list() | tuple():
                    return f"#[{len(arg)}]"
                case dict():
                    return "#{...}"
                case _ if callable(arg):
                    return getattr(arg, '__name__', None) or "<callable>"
                case _:
                    return self.printer.pformat(arg)

        frames = []
        for frame in stack:
            parts = [frame.get('name') or '<call>']
            parts.extend(fmt(a) for a in frame.get('args') or [])
            if frame.get('block') is not None:
                parts.append(fmt(frame['block']))
            frames.append(f"({' '.join(parts)})")
        return "sift stacktrace: " + " ".join(frames)


_default_runtime: Optional[Runtime] = None
_default_runtime_lock = threading.Lock()


def default_runtime() -> Runtime:
    """Returns the lazily created process-wide Runtime."""
    global _default_runtime
    if _default_runtime is None:
        with _default_runtime_lock:
            if _default_runtime is None:
                _default_runtime = Runtime()
    return _default_runtime


def call(name: str, *args: Any, block: Any = None) -> Any:
    """Calls a builtin on the process-wide Runtime."""
    return default_runtime().call(name, *args, block=block)
