import collections.abc
import itertools

import pytest

from sift import Runtime, NoMatchingSignature


@pytest.fixture
def rt():
    return Runtime()


DATA = {"a": 1, "b": 0, "c": 3}


def test_all_hash_and_array(rt):
    assert rt.call('all', DATA, block=lambda k, v: isinstance(v, int)) is True
    assert rt.call('all', DATA, block=lambda pair: pair[1] > 0) is False
    assert rt.call('all', [1, 2, 3], block=lambda v: v > 0) is True
    assert rt.call('all', [1, 2, 3], block=lambda i, v: v == i + 1) is True


def test_all_empty_is_true(rt):
    assert rt.call('all', {}, block=lambda v: False) is True
    assert rt.call('all', [], block=lambda i, v: False) is True


def test_all_stops_on_first_falsy(rt):
    assert rt.call('all', itertools.count(), block=lambda v: v < 3) is False


def test_all_treats_zero_as_truthy(rt):
    assert rt.call('all', [0, "", []], block=lambda v: v) is True
    assert rt.call('all', [0, None], block=lambda v: v) is False


def test_each_returns_receiver(rt):
    seen = []
    assert rt.call('each', DATA, block=lambda k, v: seen.append(k)) is DATA
    assert seen == ["a", "b", "c"]

    pairs = []
    rt.call('each', DATA, block=lambda pair: pairs.append(pair))
    assert pairs == [("a", 1), ("b", 0), ("c", 3)]

    items = ["x", "y"]
    indexed = []
    assert rt.call('each', items, block=lambda i, v: indexed.append((i, v))) is items
    assert indexed == [(0, "x"), (1, "y")]


def test_find(rt):
    assert rt.call('find', DATA, block=lambda k, v: v == 0) == ("b", 0)
    assert rt.call('find', DATA, block=lambda pair: pair[0] == "c") == ("c", 3)
    assert rt.call('find', [5, 6, 7], block=lambda v: v > 5) == 6
    assert rt.call('find', [5, 6, 7], block=lambda i, v: i == 2) == 7
    assert rt.call('find', [5, 6, 7], block=lambda v: v > 10) is None
    assert rt.call('find', itertools.count(), block=lambda v: v * v > 50) == 8


def test_filter(rt):
    assert rt.call('filter', DATA, block=lambda k, v: v > 0) == {"a": 1, "c": 3}
    assert rt.call('filter', DATA, block=lambda pair: pair[0] != "a") == {"b": 0, "c": 3}
    assert rt.call('filter', [1, 2, 3, 4], block=lambda v: v % 2 == 0) == [2, 4]
    assert rt.call('filter', ["a", "b", "c"], block=lambda i, v: i != 1) == ["a", "c"]
    assert rt.call('filter', range(5), block=lambda v: None) == []


def test_map(rt):
    assert rt.call('map', DATA, block=lambda k, v: f"{k}={v}") == ["a=1", "b=0", "c=3"]
    assert rt.call('map', DATA, block=lambda pair: pair[0]) == ["a", "b", "c"]
    assert rt.call('map', [1, 2], block=lambda v: v * 10) == [10, 20]
    assert rt.call('map', (x for x in "ab"), block=lambda i, v: (i, v)) == [(0, "a"), (1, "b")]


@pytest.mark.parametrize("name", ["any", "all", "each", "find", "filter", "map"])
def test_every_builtin_rejects_scalars(rt, name):
    with pytest.raises(NoMatchingSignature):
        rt.call(name, 3.5, block=lambda v: v)


@pytest.mark.parametrize("name", ["any", "all", "each", "find", "filter", "map"])
def test_every_builtin_requires_a_block(rt, name):
    with pytest.raises(NoMatchingSignature):
        rt.call(name, [1])


class ShortMapping(collections.abc.Mapping):
    """Reports more entries than it yields."""
    def __init__(self, data, extra):
        self.data = data
        self.extra = extra

    def __getitem__(self, key):
        return self.data[key]

    def __iter__(self):
        return iter(self.data)

    def __len__(self):
        return len(self.data) + self.extra


def test_mapping_shorter_than_its_len(rt):
    short = ShortMapping({"a": 1, "b": 2}, extra=2)
    assert rt.call('any', short, block=lambda k, v: v > 5) is False
    assert rt.call('all', short, block=lambda pair: pair[1] > 0) is True
    assert rt.call('find', short, block=lambda k, v: False) is None
    assert rt.call('filter', short, block=lambda k, v: v > 1) == {"b": 2}
    assert rt.call('map', short, block=lambda k, v: k) == ["a", "b"]
    assert rt.call('map', short, block=lambda pair: pair) == [("a", 1), ("b", 2)]
    seen = []
    assert rt.call('each', short, block=lambda pair: seen.append(pair)) is short
    assert seen == [("a", 1), ("b", 2)]
