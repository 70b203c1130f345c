"""
Tests for bulk remapping.

Includes the non-transactional failure policy: a failing converter stops
the pass but leaves earlier cells converted.
"""

import pytest

from tabular import (
    ColumnConverter,
    FunctionColumnConverter,
    Mapper,
    MappingError,
    TabularCache,
    TableMetadata,
)


def _mapped_column(cache: TabularCache, column) -> list:
    cache.before_first()
    values = []
    while cache.next():
        values.append(cache.get_object(column))
    return values


def _original_column(cache: TabularCache, column, kind=object) -> list:
    """Originals are only visible through typed reads when mapped no longer matches."""
    cache.before_first()
    values = []
    while cache.next():
        values.append(cache.get_typed(column, kind))
    return values


@pytest.fixture
def mixed_cache():
    return TabularCache(
        [("code", "CHAR"), ("qty", "INTEGER"), ("note", None)],
        [(" a ", 1, "x"), (" b ", 2, "y"), (" c ", 3, "z")],
    )


def test_remap_applies_only_to_registered_types(mixed_cache):
    mixed_cache.remap(Mapper({"char": str.strip}))

    assert _mapped_column(mixed_cache, "code") == ["a", "b", "c"]
    # No converter for INTEGER: mapped stays equal to original
    assert _mapped_column(mixed_cache, "qty") == [1, 2, 3]
    assert _mapped_column(mixed_cache, "note") == ["x", "y", "z"]


def test_type_name_lookup_is_case_insensitive(mixed_cache):
    mixed_cache.remap(Mapper({"Integer": lambda value: value * 10}))
    assert _mapped_column(mixed_cache, "qty") == [10, 20, 30]


def test_original_values_survive_remap(mixed_cache):
    mixed_cache.remap(Mapper({"integer": str}))

    assert _mapped_column(mixed_cache, "qty") == ["1", "2", "3"]
    # Mapped is now text, so an integer read falls through to the original
    assert _original_column(mixed_cache, "qty", int) == [1, 2, 3]


def test_remap_with_none_is_a_no_op(mixed_cache):
    mixed_cache.remap(None)
    mixed_cache.remap(Mapper())
    assert _mapped_column(mixed_cache, "code") == [" a ", " b ", " c "]


def test_remap_does_not_move_cursor(mixed_cache):
    mixed_cache.absolute(2)
    mixed_cache.remap(Mapper({"char": str.strip}))
    assert mixed_cache.row == 2


def test_mapper_applied_at_construction():
    cache = TabularCache(
        [("n", "VARCHAR")],
        [("1",), ("2",)],
        mapper=Mapper({"varchar": int}),
    )
    assert _mapped_column(cache, 1) == [1, 2]


def test_failed_remap_keeps_earlier_cells():
    """The pass stops at the bad cell; cells before it stay converted."""
    cache = TabularCache(
        [("n", "VARCHAR")],
        [("1",), ("two",), ("3",)],
    )

    with pytest.raises(MappingError) as exc_info:
        cache.remap(Mapper({"varchar": int}))

    assert exc_info.value.column_index == 1
    assert exc_info.value.row == 2
    assert isinstance(exc_info.value.__cause__, ValueError)
    assert _mapped_column(cache, 1) == [1, "two", "3"]


def test_failure_in_later_column_keeps_earlier_columns():
    cache = TabularCache(
        [("a", "CHAR"), ("b", "INTEGER")],
        [(" x ", 1), (" y ", 0)],
    )

    with pytest.raises(MappingError):
        cache.remap(Mapper({"char": str.strip, "integer": lambda value: 10 // value}))

    assert _mapped_column(cache, "a") == ["x", "y"]
    assert _mapped_column(cache, "b") == [10, 0]


def test_remap_is_idempotent_for_idempotent_converters(mixed_cache):
    mapper = Mapper({"char": str.strip})
    mixed_cache.remap(mapper)
    first_pass = _mapped_column(mixed_cache, "code")

    mixed_cache.remap(mapper)
    assert _mapped_column(mixed_cache, "code") == first_pass


def test_column_converter_receives_index_and_metadata(mixed_cache):
    seen = []

    class Recording(ColumnConverter):
        def convert(self, value, column_index, metadata):
            seen.append((column_index, metadata))
            return value

    mixed_cache.remap(Mapper({"integer": Recording()}))

    assert [index for index, _ in seen] == [2, 2, 2]
    assert all(isinstance(metadata, TableMetadata) for _, metadata in seen)


def test_mapper_wraps_plain_callables():
    mapper = Mapper({"VARCHAR": str.upper})

    assert isinstance(mapper.get("varchar"), FunctionColumnConverter)
    assert mapper.get("VarChar") is mapper.get("varchar")
    assert mapper.get(None) is None
    assert mapper.get("integer") is None
    assert list(mapper.converters) == ["varchar"]


def test_mapper_register_replaces():
    mapper = Mapper().register("text", str.upper).register("TEXT", str.lower)
    assert mapper.get("text").convert("AbC", 1, TableMetadata([])) == "abc"


def test_mapper_rejects_non_callables():
    with pytest.raises(TypeError):
        Mapper({"text": 42})


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
