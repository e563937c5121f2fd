"""Tests for equality, hashing, freezing and copying of records.

Covers:
- Strict equality (==) by concrete type and field values, through nesting
- Lenient equality (alike) across types
- Hash consistency with strict equality
- freeze(): instance and one-level value freezing, idempotence
- duplicate()/copy.copy and clone()/copy.deepcopy semantics
"""

from __future__ import annotations

import copy

import pytest

from portrait import (
    FrozenList,
    FrozenViolationError,
    Record,
    alike,
    attributes,
    clone,
    duplicate,
    field,
    freeze,
    is_frozen,
    is_record,
)
from portrait.structural import equal, record_hash

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


class Single(Record):
    foo = field()


class OtherSingle(Record):
    foo = field()


class SubSingle(Single):
    pass


class Holder(Record):
    array = field()


class Parent(Record):
    nested_class = field(nested=lambda cls: cls.register_field("foo"))


# ---------------------------------------------------------------------------
# Equality
# ---------------------------------------------------------------------------


class TestStrictEquality:
    def test_equal_by_values(self) -> None:
        assert Single(foo="foo") == Single(foo="foo")
        assert Single(foo="foo") != Single(foo="bar")

    def test_different_types_are_not_equal(self) -> None:
        assert Single(foo="foo") != OtherSingle(foo="foo")

    def test_subtype_is_not_equal(self) -> None:
        assert Single(foo="value") != SubSingle(foo="value")

    def test_non_record_falls_back_to_identity(self) -> None:
        record = Single(foo="value")
        assert record != "value"
        assert (record == object()) is False
        assert record == record

    def test_computed_defaults_compare_equal(self) -> None:
        class Computed(Record):
            foo = field(compute=lambda self: 2 + 2)

        assert Computed() == Computed()

    def test_callable_defaults_compare_equal(self) -> None:
        def four() -> int:
            return 4

        class Stored(Record):
            foo = field(default=four)

        assert Stored() == Stored()

    def test_propagates_to_nested_records(self) -> None:
        nested = Parent.NestedClass  # type: ignore[attr-defined]
        first = Parent(nested_class=nested(foo="hello"))
        second = Parent(nested_class=nested(foo="hello"))
        third = Parent(nested_class=nested(foo="hi"))
        assert first == second
        assert first != third

    def test_equal_function_matches_operator(self) -> None:
        assert equal(Single(foo=1), Single(foo=1))
        assert not equal(Single(foo=1), OtherSingle(foo=1))
        assert equal(1, 1)


class TestLenientEquality:
    def test_alike_across_types(self) -> None:
        assert alike(Single(foo="foo"), OtherSingle(foo="foo"))
        assert alike(Single(foo="foo"), SubSingle(foo="foo"))

    def test_alike_requires_equal_values(self) -> None:
        assert not alike(Single(foo="foo"), OtherSingle(foo="bar"))

    def test_alike_requires_same_field_names(self) -> None:
        class Renamed(Record):
            bar = field()

        assert not alike(Single(foo=1), Renamed(bar=1))

    def test_alike_recurses_into_nested_records(self) -> None:
        assert alike(Holder(array=Single(foo=1)), Holder(array=OtherSingle(foo=1)))
        assert Holder(array=Single(foo=1)) != Holder(array=OtherSingle(foo=1))

    def test_alike_recurses_into_sequences_and_mappings(self) -> None:
        assert alike(Holder(array=[Single(foo=1)]), Holder(array=[OtherSingle(foo=1)]))
        assert alike(Holder(array=(Single(foo=1),)), Holder(array=(OtherSingle(foo=1),)))
        assert alike(
            Holder(array={"k": Single(foo=1)}), Holder(array={"k": OtherSingle(foo=1)})
        )
        assert alike([Single(foo=1)], [SubSingle(foo=1)])

    def test_alike_containers_still_compare_values(self) -> None:
        assert not alike([Single(foo=1)], [OtherSingle(foo=2)])
        assert not alike([Single(foo=1)], [Single(foo=1), Single(foo=1)])
        assert not alike({"k": Single(foo=1)}, {"j": OtherSingle(foo=1)})
        assert not alike([1], (1,))

    def test_strict_implies_lenient(self) -> None:
        left, right = Single(foo=[1]), Single(foo=[1])
        assert left == right
        assert alike(left, right)

    def test_non_records_use_plain_equality(self) -> None:
        assert alike(1, 1)
        assert not alike(Single(foo=1), 1)


# ---------------------------------------------------------------------------
# Hashing
# ---------------------------------------------------------------------------


class TestHashing:
    def test_same_class_and_values_hash_equal(self) -> None:
        assert hash(Single(foo="foo")) == hash(Single(foo="foo"))

    def test_different_class_hashes_differ(self) -> None:
        assert hash(Single(foo="foo")) != hash(OtherSingle(foo="foo"))

    def test_different_values_hash_differ(self) -> None:
        assert hash(Single(foo="foo")) != hash(Single(foo="bar"))

    def test_dict_keys_match_on_class_and_values(self) -> None:
        object1 = Single(foo="foo")
        object2 = OtherSingle(foo="foo")
        object3 = Single(foo="foo")
        table = {object1: "1", object2: "2"}
        assert table[object1] == "1"
        assert table[object2] == "2"
        assert table[object3] == "1"

    def test_records_with_containers_are_hashable(self) -> None:
        first = Holder(array=[1, {"a": [2]}, {3}])
        second = Holder(array=[1, {"a": [2]}, {3}])
        assert hash(first) == hash(second)

    def test_frozen_and_unfrozen_equal_records_hash_equal(self) -> None:
        frozen = freeze(Holder(array=["a"]))
        thawed = Holder(array=["a"])
        assert frozen == thawed
        assert hash(frozen) == hash(thawed)

    def test_record_hash_matches_builtin(self) -> None:
        record = Single(foo=1)
        assert record_hash(record) == hash(record)


# ---------------------------------------------------------------------------
# Freezing
# ---------------------------------------------------------------------------


class TestFreeze:
    def test_returns_the_record(self) -> None:
        record = Single(foo="foo")
        assert freeze(record) is record
        assert is_frozen(record)

    def test_prevents_assignment(self) -> None:
        record = freeze(Single(foo="foo"))
        with pytest.raises(FrozenViolationError, match="frozen"):
            record.foo = "bar"

    def test_prevents_deletion(self) -> None:
        record = freeze(Single(foo="foo"))
        with pytest.raises(FrozenViolationError):
            del record.foo

    def test_prevents_modification_of_values(self) -> None:
        record = freeze(Holder(array=["a"]))
        with pytest.raises(FrozenViolationError, match="frozen"):
            record.array.append("b")
        assert record.array == ["a"]

    def test_freezes_nested_records(self) -> None:
        inner = Single(foo=[1])
        outer = freeze(Holder(array=inner))
        assert is_frozen(inner)
        assert outer.array is inner
        with pytest.raises(FrozenViolationError):
            inner.foo = 2

    def test_cascade_is_one_level_for_containers(self) -> None:
        record = freeze(Holder(array=[["deep"]]))
        record.array[0].append("still mutable")
        assert record.array[0] == ["deep", "still mutable"]

    def test_is_idempotent(self) -> None:
        record = freeze(Single(foo=["a"]))
        before = record.foo
        freeze(record)
        assert record.foo is before

    def test_unfrozen_by_default(self) -> None:
        assert not is_frozen(Single(foo=1))

    def test_handles_reference_cycles(self) -> None:
        first = Holder(array=None)
        second = Holder(array=first)
        first.array = second
        freeze(first)
        assert is_frozen(first)
        assert is_frozen(second)

    def test_unregistered_objects_stay_mutable(self) -> None:
        class Bag:
            def __init__(self) -> None:
                self.items: list[int] = []

        bag = Bag()
        record = freeze(Holder(array=bag))
        record.array.items.append(1)
        assert record.array is bag
        assert bag.items == [1]

    def test_frozen_flag_is_not_a_field(self) -> None:
        record = freeze(Single(foo=1))
        assert attributes(record) == {"foo": 1}


# ---------------------------------------------------------------------------
# Copying
# ---------------------------------------------------------------------------


class TestDuplicate:
    def test_copies_the_object(self) -> None:
        record = Single(foo="foo")
        copy_ = duplicate(record)
        assert copy_ is not record
        copy_.foo = "bar"
        assert record.foo == "foo"
        assert copy_.foo == "bar"

    def test_copies_field_values(self) -> None:
        record = Holder(array=["a"])
        copy_ = copy.copy(record)
        record.array.append("b")
        copy_.array.append("c")
        assert record.array == ["a", "b"]
        assert copy_.array == ["a", "c"]

    def test_does_not_copy_frozen_state(self) -> None:
        record = freeze(Single(foo="foo"))
        assert not is_frozen(duplicate(record))

    def test_does_not_copy_frozen_state_of_values(self) -> None:
        record = freeze(Holder(array=["a"]))
        copy_ = duplicate(record)
        assert not isinstance(copy_.array, FrozenList)
        copy_.array.append("b")
        assert record.array == ["a"]

    def test_containers_are_copied_one_level(self) -> None:
        inner = Single(foo=[["x"]])
        copy_ = duplicate(Holder(array=inner))
        assert copy_.array is not inner
        assert copy_.array == inner
        assert copy_.array.foo is not inner.foo
        assert copy_.array.foo[0] is inner.foo[0]

    def test_copy_is_equal(self) -> None:
        record = Holder(array=[1, 2])
        assert duplicate(record) == record


class TestClone:
    def test_copies_the_object(self) -> None:
        record = Single(foo="foo")
        copy_ = clone(record)
        assert copy_ is not record
        copy_.foo = "bar"
        assert record.foo == "foo"

    def test_copies_field_values(self) -> None:
        record = Holder(array=["a"])
        copy_ = copy.deepcopy(record)
        record.array.append("b")
        copy_.array.append("c")
        assert record.array == ["a", "b"]
        assert copy_.array == ["a", "c"]

    def test_copies_frozen_state(self) -> None:
        record = freeze(Single(foo="foo"))
        assert is_frozen(clone(record))

    def test_copies_frozen_state_of_values(self) -> None:
        record = freeze(Holder(array=["a"]))
        copy_ = clone(record)
        assert isinstance(copy_.array, FrozenList)
        with pytest.raises(FrozenViolationError):
            copy_.array.append("b")

    def test_deep_copies_nested_records(self) -> None:
        inner = Single(foo=["x"])
        copy_ = clone(Holder(array=inner))
        assert copy_.array is not inner
        assert copy_.array.foo is not inner.foo
        assert copy_.array == inner

    def test_keeps_reference_cycles(self) -> None:
        first = Holder(array=None)
        second = Holder(array=first)
        first.array = second
        copy_ = copy.deepcopy(first)
        assert copy_.array.array is copy_


def test_is_record() -> None:
    assert is_record(Single(foo=1))
    assert not is_record(Single)
    assert not is_record(1)
