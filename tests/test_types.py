import itertools

import pytest

from sift.sift_datatypes import Arity, Lambda
from sift.sift_types import (
    build_type, AnyType, HashType, ArrayType, IterableType, CallableType, SCALARS
)


def test_build_simple_names():
    assert isinstance(build_type("Any"), AnyType)
    assert isinstance(build_type("Iterable"), IterableType)
    assert build_type("String") is SCALARS['String']
    assert repr(build_type("Hash")) == "Hash"
    assert repr(build_type("Array")) == "Array"


def test_build_parameterized():
    h = build_type({'Hash': ['String', 'Integer']})
    assert isinstance(h, HashType)
    assert repr(h) == "Hash[String, Integer]"
    assert repr(build_type({'Hash': ['Any', 'Any']})) == "Hash"
    assert repr(build_type({'Array': ['Numeric']})) == "Array[Numeric]"
    nested = build_type({'Hash': ['String', {'Array': ['Integer']}]})
    assert nested == HashType(SCALARS['String'], ArrayType(SCALARS['Integer']))


def test_build_callable_counts():
    c = build_type({'Callable': [2, 2]})
    assert (c.lo, c.hi) == (2, 2)
    c = build_type({'Callable': [1, 'default']})
    assert (c.lo, c.hi) == (1, None)
    c = build_type({'Callable': [1]})
    assert (c.lo, c.hi) == (1, None)
    c = build_type("Callable")
    assert (c.lo, c.hi) == (0, None)
    assert repr(build_type({'Callable': [0, 3]})) == "Callable[0,3]"


def test_table_declarations_from_yaml():
    import yaml
    node = yaml.safe_load("{Hash: [String, {Array: [Integer]}]}")
    assert repr(build_type(node)) == "Hash[String, Array[Integer]]"
    assert build_type(yaml.safe_load("{Callable: [2, 2]}")) == CallableType(2, 2)


@pytest.mark.parametrize("node", [
    "", None, 3, ['Hash'], {'Hash': ['Any']}, {'Array': ['Any', 'Any']},
    {'Callable': [3, 1]}, {'Callable': ['Any']}, {'Callable': [True, 2]},
    {'Callable': []}, {'Integer': [1]}, {'Any': ['String']}, {'Hash': [1, 2]},
    {'Hash': 'Any'}, {'Hash': ['Any', 'Any'], 'Array': []}, "Widget",
])
def test_malformed_declarations(node):
    with pytest.raises(ValueError):
        build_type(node)


def test_scalar_acceptance():
    assert SCALARS['Integer'].accepts(3)
    assert not SCALARS['Integer'].accepts(True)
    assert SCALARS['Boolean'].accepts(False)
    assert SCALARS['Numeric'].accepts(1.5) and SCALARS['Numeric'].accepts(2)
    assert SCALARS['Undef'].accepts(None)
    assert not SCALARS['String'].accepts(1)


def test_hash_and_array_acceptance():
    assert build_type("Hash").accepts({})
    assert not build_type("Hash").accepts([])
    assert build_type({"Hash": ["String", "Integer"]}).accepts({"a": 1})
    assert not build_type({"Hash": ["String", "Integer"]}).accepts({"a": "b"})
    assert build_type({"Array": ["String"]}).accepts(["a", "b"])
    assert not build_type({"Array": ["String"]}).accepts(["a", 1])
    assert not build_type("Array").accepts("ab")


def test_iterable_acceptance():
    t = IterableType()
    for value in ({}, [], (), "s", range(2), itertools.count(), (x for x in [])):
        assert t.accepts(value)
    for value in (1, 2.0, None, True):
        assert not t.accepts(value)


def test_callable_acceptance():
    two = CallableType(2, 2)
    assert two.accepts(lambda a, b: 0)
    assert not two.accepts(lambda a: 0)
    assert two.accepts(Lambda(["a", "b"], lambda s: 0))
    assert not two.accepts(42)
    assert two.accepts_arity(Arity(1, None))
    assert not two.accepts_arity(Arity(3, None))
    assert CallableType(1, None).accepts_arity(Arity(5, 5))
