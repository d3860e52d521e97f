"""Compatibility lattice: every pair of Pando types is enumerated."""

import itertools

import pytest

from pando.type_system import (
	PANDO_TYPES,
	RUST_TYPE_MAP,
	WIDENINGS,
	is_compatible,
	is_valid_type,
	rust_type,
)

# Expected widenings, written out by hand: source -> legal targets
EXPECTED = {
	"int": {"int8", "int16", "int32", "int64", "int128", "int_size", "float", "double"},
	"int8": {"int16", "int32", "int64", "int128", "int_size", "float", "double"},
	"int16": {"int32", "int64", "int128", "int_size", "float", "double"},
	"int32": {"int64", "int128", "float", "double"},
	"int64": {"int128", "float", "double"},
	"float": {"double"},
}

ALL_PAIRS = list(itertools.product(PANDO_TYPES, PANDO_TYPES))


@pytest.mark.parametrize("target,source", ALL_PAIRS)
def test_every_pair(target, source):
	expected = target == source or target in EXPECTED.get(source, set())
	assert is_compatible(target, source) is expected


@pytest.mark.parametrize("name", PANDO_TYPES)
def test_reflexive(name):
	assert is_compatible(name, name)


def test_widening_table_matches_expectation():
	assert {k: set(v) for k, v in WIDENINGS.items()} == EXPECTED


def test_no_narrowing():
	for source, targets in EXPECTED.items():
		for target in targets:
			assert not is_compatible(source, target), (source, target)


def test_no_cross_signedness():
	assert not is_compatible("uint32", "int8")
	assert not is_compatible("int64", "uint8")
	assert not is_compatible("uint64", "uint8")


def test_numeric_never_flows_into_non_numeric():
	for source in EXPECTED:
		for target in ("bool", "char", "str", "string", "bytes", "bytearray", "None"):
			assert not is_compatible(target, source)


def test_float_double():
	assert is_compatible("double", "float")
	assert not is_compatible("float", "double")


def test_unknown_types_only_match_themselves():
	assert is_compatible("foo", "foo")
	assert not is_compatible("int", "foo")
	assert not is_compatible("foo", "int")


def test_type_enumeration_and_rust_map():
	assert set(PANDO_TYPES) == set(RUST_TYPE_MAP)
	assert len(PANDO_TYPES) == len(set(PANDO_TYPES))
	assert rust_type("int") == "i32"
	assert rust_type("uint_size") == "usize"
	assert rust_type("string") == "String"
	assert rust_type("None") == "()"
	assert rust_type("foo") is None
	assert is_valid_type("bytearray")
	assert not is_valid_type("Int")


def test_int_flows_into_every_sized_signed_type():
	for target in ("int8", "int16", "int32", "int64", "int128", "int_size"):
		assert is_compatible(target, "int")
		assert not is_compatible("int", target)


def test_unsigned_and_int_size_have_no_widenings():
	for source in ("uint8", "uint32", "uint_size", "int_size", "int128"):
		assert not is_compatible("double", source)
	assert not is_compatible("int_size", "int32")
