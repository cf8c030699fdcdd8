"""
The signature registry: operation name -> ordered candidate signatures.

Signatures are declared in a YAML function table, loaded once, and frozen
before any dispatch happens.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import yaml

from sift.sift_datatypes import UnknownOperation, RegistryFrozen
from sift.sift_types import SiftType, CallableType, build_type


@dataclass(frozen=True)
class Signature:
    """One alternative of a builtin: parameter shapes, block constraint, handler."""
    name: str
    handler_name: str
    params: Tuple[SiftType, ...]
    block: Optional[CallableType]
    handler: Callable[..., Any]

    def __repr__(self) -> str:
        parts = [repr(p) for p in self.params]
        if self.block is not None:
            parts.append(f"&{self.block!r}")
        return f"{self.name}({', '.join(parts)})"


class FunctionRegistry:
    """Maps builtin names to their ordered candidate signatures."""

    def __init__(self):
        self._signatures: Dict[str, List[Signature]] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, name: str, signature: Signature) -> None:
        """Appends a candidate; declaration order is dispatch order."""
        if self._frozen:
            raise RegistryFrozen(name)
        self._signatures.setdefault(name, []).append(signature)

    def freeze(self) -> 'FunctionRegistry':
        self._frozen = True
        return self

    def candidates_for(self, name: str) -> Tuple[Signature, ...]:
        sigs = self._signatures.get(name)
        if not sigs:
            raise UnknownOperation(name)
        return tuple(sigs)

    def names(self) -> List[str]:
        return list(self._signatures.keys())

    def __contains__(self, name: str) -> bool:
        return name in self._signatures

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"<FunctionRegistry {state} functions={len(self._signatures)}>"

    # --- Function tables ---

    @staticmethod
    def _resolve_handler(handlers: Any, handler_name: str) -> Callable[..., Any]:
        # Table names are kebab-case; handler methods are `_snake_case`.
        attr = '_' + handler_name.replace('-', '_')
        member = getattr(handlers, attr, None)
        if not callable(member):
            raise ValueError(f"Function table names unknown handler {handler_name!r}")
        return member

    def load_table(self, table: Dict[str, Any], handlers: Any) -> 'FunctionRegistry':
        """Registers every signature of an already-parsed function table."""
        if not isinstance(table, dict):
            raise ValueError("Function table must be a mapping of name -> signatures")
        for name, entries in table.items():
            if not isinstance(entries, list) or not entries:
                raise ValueError(f"Function {name!r} declares no signatures")
            for entry in entries:
                handler_name = entry.get('handler')
                if not handler_name:
                    raise ValueError(f"Signature of {name!r} has no handler")
                params = tuple(build_type(p) for p in entry.get('params') or [])
                block = None
                if entry.get('block') is not None:
                    block = build_type(entry['block'])
                    if not isinstance(block, CallableType):
                        raise ValueError(f"Block of {handler_name!r} must be a Callable type")
                sig = Signature(
                    name=name,
                    handler_name=handler_name,
                    params=params,
                    block=block,
                    handler=self._resolve_handler(handlers, handler_name),
                )
                self.register(name, sig)
        return self

    @classmethod
    def from_yaml(cls, path: str | Path, handlers: Any) -> 'FunctionRegistry':
        """Loads a YAML function table and returns a frozen registry."""
        with Path(path).open(encoding="utf-8") as f:
            table = yaml.safe_load(f)
        return cls().load_table(table, handlers).freeze()
