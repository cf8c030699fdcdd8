"""
Python implementations of the iteration builtins.

Each builtin has four handlers, selected by the dispatcher from
`functions.yaml`: a dict receiver or a general iterable, crossed with a block
taking one value or two. Dict handlers run a loop bounded by the dict's size;
iterable handlers pull until the cursor reports exhaustion, so lazy and
infinite sources work as long as the builtin can stop early.
"""
from typing import Any, Callable, Dict, List

from sift.sift_datatypes import is_truthy
from sift.sift_iteration import adapt

Block = Callable[..., Any]


class Builtins:
    """Handlers for any, all, each, find, filter and map."""

    # --- any ---
    def _any_hash_1(self, mapping, block: Block) -> bool:
        cursor = adapt(mapping)
        for _ in range(cursor.size):
            ok, pair = cursor.pull()
            if not ok:
                break
            if is_truthy(block(pair)):
                cursor.mark_found()
                return True
        return False

    def _any_hash_2(self, mapping, block: Block) -> bool:
        cursor = adapt(mapping)
        for _ in range(cursor.size):
            ok, pair = cursor.pull()
            if not ok:
                break
            key, value = pair
            if is_truthy(block(key, value)):
                cursor.mark_found()
                return True
        return False

    def _any_iterable_1(self, iterable, block: Block) -> bool:
        cursor = adapt(iterable)
        while True:
            ok, elem = cursor.pull()
            if not ok:
                return False
            if is_truthy(block(elem)):
                cursor.mark_found()
                return True

    def _any_iterable_2(self, iterable, block: Block) -> bool:
        cursor = adapt(iterable)
        index = 0
        while True:
            ok, elem = cursor.pull()
            if not ok:
                return False
            if is_truthy(block(index, elem)):
                cursor.mark_found()
                return True
            index += 1

    # --- all ---
    def _all_hash_1(self, mapping, block: Block) -> bool:
        cursor = adapt(mapping)
        for _ in range(cursor.size):
            ok, pair = cursor.pull()
            if not ok:
                break
            if not is_truthy(block(pair)):
                cursor.mark_found()
                return False
        return True

    def _all_hash_2(self, mapping, block: Block) -> bool:
        cursor = adapt(mapping)
        for _ in range(cursor.size):
            ok, pair = cursor.pull()
            if not ok:
                break
            key, value = pair
            if not is_truthy(block(key, value)):
                cursor.mark_found()
                return False
        return True

    def _all_iterable_1(self, iterable, block: Block) -> bool:
        cursor = adapt(iterable)
        while True:
            ok, elem = cursor.pull()
            if not ok:
                return True
            if not is_truthy(block(elem)):
                cursor.mark_found()
                return False

    def _all_iterable_2(self, iterable, block: Block) -> bool:
        cursor = adapt(iterable)
        index = 0
        while True:
            ok, elem = cursor.pull()
            if not ok:
                return True
            if not is_truthy(block(index, elem)):
                cursor.mark_found()
                return False
            index += 1

    # --- each ---
    # Returns the receiver, so calls can be chained.
    def _each_hash_1(self, mapping, block: Block):
        cursor = adapt(mapping)
        for _ in range(cursor.size):
            ok, pair = cursor.pull()
            if not ok:
                break
            block(pair)
        return mapping

    def _each_hash_2(self, mapping, block: Block):
        cursor = adapt(mapping)
        for _ in range(cursor.size):
            ok, pair = cursor.pull()
            if not ok:
                break
            key, value = pair
            block(key, value)
        return mapping

    def _each_iterable_1(self, iterable, block: Block):
        cursor = adapt(iterable)
        ok, elem = cursor.pull()
        while ok:
            block(elem)
            ok, elem = cursor.pull()
        return iterable

    def _each_iterable_2(self, iterable, block: Block):
        cursor = adapt(iterable)
        index = 0
        ok, elem = cursor.pull()
        while ok:
            block(index, elem)
            index += 1
            ok, elem = cursor.pull()
        return iterable

    # --- find ---
    def _find_hash_1(self, mapping, block: Block):
        cursor = adapt(mapping)
        for _ in range(cursor.size):
            ok, pair = cursor.pull()
            if not ok:
                break
            if is_truthy(block(pair)):
                cursor.mark_found()
                return pair
        return None

    def _find_hash_2(self, mapping, block: Block):
        cursor = adapt(mapping)
        for _ in range(cursor.size):
            ok, pair = cursor.pull()
            if not ok:
                break
            if is_truthy(block(*pair)):
                cursor.mark_found()
                return pair
        return None

    def _find_iterable_1(self, iterable, block: Block):
        cursor = adapt(iterable)
        while True:
            ok, elem = cursor.pull()
            if not ok:
                return None
            if is_truthy(block(elem)):
                cursor.mark_found()
                return elem

    def _find_iterable_2(self, iterable, block: Block):
        cursor = adapt(iterable)
        index = 0
        while True:
            ok, elem = cursor.pull()
            if not ok:
                return None
            if is_truthy(block(index, elem)):
                cursor.mark_found()
                return elem
            index += 1

    # --- filter ---
    def _filter_hash_1(self, mapping, block: Block) -> Dict[Any, Any]:
        cursor = adapt(mapping)
        out = {}
        for _ in range(cursor.size):
            ok, pair = cursor.pull()
            if not ok:
                break
            key, value = pair
            if is_truthy(block((key, value))):
                out[key] = value
        return out

    def _filter_hash_2(self, mapping, block: Block) -> Dict[Any, Any]:
        cursor = adapt(mapping)
        out = {}
        for _ in range(cursor.size):
            ok, pair = cursor.pull()
            if not ok:
                break
            key, value = pair
            if is_truthy(block(key, value)):
                out[key] = value
        return out

    def _filter_iterable_1(self, iterable, block: Block) -> List[Any]:
        cursor = adapt(iterable)
        out = []
        ok, elem = cursor.pull()
        while ok:
            if is_truthy(block(elem)):
                out.append(elem)
            ok, elem = cursor.pull()
        return out

    def _filter_iterable_2(self, iterable, block: Block) -> List[Any]:
        cursor = adapt(iterable)
        out = []
        index = 0
        ok, elem = cursor.pull()
        while ok:
            if is_truthy(block(index, elem)):
                out.append(elem)
            index += 1
            ok, elem = cursor.pull()
        return out

    # --- map ---
    def _map_hash_1(self, mapping, block: Block) -> List[Any]:
        cursor = adapt(mapping)
        out = []
        for _ in range(cursor.size):
            ok, pair = cursor.pull()
            if not ok:
                break
            out.append(block(pair))
        return out

    def _map_hash_2(self, mapping, block: Block) -> List[Any]:
        cursor = adapt(mapping)
        out = []
        for _ in range(cursor.size):
            ok, pair = cursor.pull()
            if not ok:
                break
            out.append(block(*pair))
        return out

    def _map_iterable_1(self, iterable, block: Block) -> List[Any]:
        cursor = adapt(iterable)
        out = []
        ok, elem = cursor.pull()
        while ok:
            out.append(block(elem))
            ok, elem = cursor.pull()
        return out

    def _map_iterable_2(self, iterable, block: Block) -> List[Any]:
        cursor = adapt(iterable)
        out = []
        index = 0
        ok, elem = cursor.pull()
        while ok:
            out.append(block(index, elem))
            index += 1
            ok, elem = cursor.pull()
        return out
