from sift.sift_runtime import Runtime, ExecutionResult, call
from sift.sift_datatypes import (
    Scope, Lambda, Arity, is_truthy,
    UnknownOperation, NoMatchingSignature, NotIterable, RegistryFrozen,
)
from sift.sift_registry import FunctionRegistry, Signature
from sift.sift_dispatch import CallArguments, Dispatcher
from sift.sift_iteration import Cursor, CursorState, adapt

__all__ = [
    "Runtime", "ExecutionResult", "call",
    "Scope", "Lambda", "Arity", "is_truthy",
    "UnknownOperation", "NoMatchingSignature", "NotIterable", "RegistryFrozen",
    "FunctionRegistry", "Signature",
    "CallArguments", "Dispatcher",
    "Cursor", "CursorState", "adapt",
]
