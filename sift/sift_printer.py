"""
A pretty-printer for SIFT values, used in diagnostics.
"""
import collections.abc

import pystache

from sift.sift_datatypes import Lambda, Scope


MISMATCH_TEMPLATE = """\
'{{name}}' expects one of:
{{#signatures}}
  {{signature}}
{{/signatures}}
got ({{shapes}})"""


class Printer:
    """Formats runtime values in the host language's literal syntax."""

    def __init__(self, max_items=8):
        self.max_items = max_items
        self._handlers = self._create_handlers()
        self._renderer = pystache.Renderer(escape=lambda u: u)

    def pformat(self, obj):
        """Public entry point to format an object."""
        return self._get_handler(obj)(obj)

    def _get_handler(self, obj):
        obj_type = type(obj)
        if obj_type in self._handlers:
            return self._handlers[obj_type]
        if isinstance(obj, Lambda): return self._pformat_lambda
        if isinstance(obj, collections.abc.Mapping): return self._pformat_dict
        if isinstance(obj, (list, tuple)): return self._pformat_list
        # Default to Python's repr for unknown types
        return repr

    def _create_handlers(self):
        return {
            str: self._pformat_str,
            int: self._pformat_primitive,
            float: self._pformat_primitive,
            bool: self._pformat_bool,
            type(None): self._pformat_none,
            Scope: repr,
        }

    def _pformat_primitive(self, obj):
        return str(obj)

    def _pformat_str(self, obj):
        return f"'{obj}'"

    def _pformat_bool(self, obj):
        return 'true' if obj else 'false'

    def _pformat_none(self, obj):
        return 'none'

    def _pformat_lambda(self, obj):
        return repr(obj)

    def _elided(self, items):
        shown = list(items[:self.max_items])
        if len(items) > self.max_items:
            shown.append('...')
        return ', '.join(shown)

    def _pformat_list(self, obj):
        return f"#[{self._elided([self.pformat(v) for v in obj])}]"

    def _pformat_dict(self, obj):
        items = [f"{self.pformat(k)}: {self.pformat(v)}" for k, v in obj.items()]
        return f"#{{{self._elided(items)}}}"

    def format_mismatch(self, name, shapes, signatures) -> str:
        """Renders the 'expects one of' message for a call that matched no signature."""
        context = {
            'name': name,
            'signatures': [{'signature': repr(s)} for s in signatures],
            'shapes': ', '.join(shapes),
        }
        return self._renderer.render(MISMATCH_TEMPLATE, context)
