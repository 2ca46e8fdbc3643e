"""Property-based tests for digest determinism using hypothesis."""

from __future__ import annotations

import dataclasses

from hypothesis import given, settings, strategies as st

from object_digest.canonical.engine import build_canonical_form
from object_digest.handle import ObjectDigest, digest_object

scalars = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(),
    st.floats(allow_nan=True, allow_infinity=True),
    st.text(max_size=20),
    st.binary(max_size=8),
)

values = st.recursive(
    scalars,
    lambda children: st.one_of(
        st.lists(children, max_size=5),
        st.dictionaries(st.text(max_size=8), children, max_size=5),
        st.frozensets(st.one_of(st.integers(), st.text(max_size=8)), max_size=5),
    ),
    max_leaves=25,
)

hashable_items = st.one_of(st.integers(), st.text(max_size=8), st.tuples(st.integers()))


@dataclasses.dataclass
class Profile:
    name: str
    age: int
    tags: list[str]


@settings(max_examples=75)
@given(value=values)
def test_digest_is_deterministic(value: object) -> None:
    """Digesting the same value twice yields the same hash."""

    wrapped = [value]
    assert digest_object(wrapped) == digest_object(wrapped)
    assert build_canonical_form(wrapped) == build_canonical_form(wrapped)


@settings(max_examples=75)
@given(items=st.lists(hashable_items, max_size=8, unique=True), data=st.data())
def test_set_digest_ignores_permutation(items: list[object], data: st.DataObject) -> None:
    """Any permutation of an unordered collection has the same digest."""

    permuted = data.draw(st.permutations(items))
    assert digest_object(set(items)) == digest_object(set(permuted))


@settings(max_examples=75)
@given(pairs=st.dictionaries(st.text(max_size=8), st.integers(), max_size=8), data=st.data())
def test_mapping_digest_ignores_insertion_order(
    pairs: dict[str, int], data: st.DataObject
) -> None:
    """Dicts built in any key order share a digest."""

    keys = data.draw(st.permutations(list(pairs)))
    reordered = {key: pairs[key] for key in keys}
    assert digest_object(pairs) == digest_object(reordered)


@settings(max_examples=75)
@given(
    name=st.text(max_size=10),
    age=st.integers(),
    other_age=st.integers(),
    tags=st.lists(st.text(max_size=5), max_size=4),
)
def test_excluded_field_value_is_irrelevant(
    name: str, age: int, other_age: int, tags: list[str]
) -> None:
    """The excluded field's value never reaches the digest."""

    first = ObjectDigest(Profile(name, age, tags), exclusions={"age"})
    second = ObjectDigest(Profile(name, other_age, tags), exclusions={"age"})
    assert first == second


@settings(max_examples=50)
@given(items=st.lists(st.integers(), min_size=2, max_size=6, unique=True))
def test_list_digest_follows_order(items: list[int]) -> None:
    """Reversing a list of distinct items changes its digest."""

    assert digest_object(items) != digest_object(list(reversed(items)))


@dataclasses.dataclass
class Pair:
    left: list[int]
    right: list[int]


@dataclasses.dataclass
class SwappedPair:
    right: list[int]
    left: list[int]


@settings(max_examples=75)
@given(
    keys=st.lists(st.text(max_size=6), min_size=2, max_size=6, unique=True),
    shared=st.lists(st.integers(), max_size=4),
    data=st.data(),
)
def test_shared_value_digest_ignores_insertion_order(
    keys: list[str], shared: list[int], data: st.DataObject
) -> None:
    """Keys that all point at one list digest alike in any insertion order."""

    permuted = data.draw(st.permutations(keys))
    original = {key: shared for key in keys}
    reordered = {key: shared for key in permuted}
    assert digest_object(original) == digest_object(reordered)


@settings(max_examples=50)
@given(shared=st.lists(st.integers(), max_size=4), scope=st.sampled_from(["pass", "path"]))
def test_shared_value_digest_ignores_field_declaration_order(
    shared: list[int], scope: str
) -> None:
    """Records differing only in field declaration order share a digest."""

    first = ObjectDigest(Pair(shared, shared), cycle_scope=scope)  # type: ignore[arg-type]
    second = ObjectDigest(SwappedPair(shared, shared), cycle_scope=scope)  # type: ignore[arg-type]
    assert first == second
