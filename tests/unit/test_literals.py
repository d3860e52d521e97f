"""Literal classification rules."""

import pytest

from pando.literals import classify_literal


@pytest.mark.parametrize("text,expected", [
	("0", "int"),
	("42", "int"),
	("-17", "int"),
	("3.14", "float"),
	("-2.5", "float"),
	("7.", "float"),
	(".5", "float"),
	("-.5", "float"),
	("True", "bool"),
	("False", "bool"),
	("None", "None"),
	("'a'", "char"),
	('"b"', "char"),
	('"hello"', "str"),
	("'hi there'", "str"),
	('""', "str"),
])
def test_classified_literals(text, expected):
	assert classify_literal(text) == expected


@pytest.mark.parametrize("text", [
	"true",
	"none",
	"abc",
	"1.2.3",
	"--1",
	"'mismatched\"",
	"\"",
	"x + 1",
	"()",
	"",
])
def test_unclassified_values(text):
	assert classify_literal(text) is None
