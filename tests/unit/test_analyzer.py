"""End-to-end analyzer tests."""

import pytest

from pando.analyzer import (
	DECLARATION_MODIFIER,
	DUPLICATE_VARIABLE,
	ERROR,
	FUNCTION_TOKEN,
	KEYWORD_TOKEN,
	TYPE_MISMATCH,
	TYPE_TOKEN,
	UNDECLARED_VARIABLE,
	UNDEFINED_TYPE,
	VARIABLE_TOKEN,
	WARNING,
	Analyzer,
	HighlightToken,
	analyze,
)
from pando.scanner import Span


def _codes(result):
	return [d.code for d in result.diagnostics]


def test_valid_int_declaration_has_no_diagnostics():
	result = analyze("x: int = 5")
	assert result.diagnostics == ()
	assert result.symbols["x"].type == "int"
	assert result.symbols["x"].span == Span(0, 0, 1)


def test_bool_with_int_literal_is_a_mismatch():
	result = analyze("x: bool = 5")
	assert _codes(result) == [TYPE_MISMATCH]
	d = result.diagnostics[0]
	assert d.severity == ERROR
	assert d.span == Span(0, 10, 11)
	assert d.source == "pando"
	assert "int" in d.message and "bool" in d.message


def test_unknown_type_is_reported_once_without_mismatch():
	result = analyze("x: foo = 1")
	assert _codes(result) == [UNDEFINED_TYPE]
	assert result.diagnostics[0].span == Span(0, 3, 6)
	assert result.diagnostics[0].severity == ERROR
	assert "x" not in result.symbols


def test_unknown_type_with_variable_value_is_not_checked():
	result = analyze("x: foo = missing")
	assert _codes(result) == [UNDEFINED_TYPE]


def test_duplicate_declaration_keeps_first():
	result = analyze("x: int = 1\nx: str = \"a\"\n")
	assert _codes(result) == [DUPLICATE_VARIABLE]
	d = result.diagnostics[0]
	assert d.severity == WARNING
	assert d.span == Span(1, 0, 1)
	assert "line 1" in d.message
	assert result.symbols["x"].type == "int"
	assert result.symbols["x"].line == 0


def test_duplicate_after_invalid_declaration_is_a_fresh_declaration():
	result = analyze("x: foo\nx: int\n")
	assert _codes(result) == [UNDEFINED_TYPE]
	assert result.symbols["x"].type == "int"


def test_simple_assignment_with_undeclared_source():
	result = analyze("y: int\ny = x\n")
	assert _codes(result) == [UNDECLARED_VARIABLE]
	assert result.diagnostics[0].span == Span(1, 4, 5)


def test_simple_assignment_with_both_sides_undeclared():
	result = analyze("y = x")
	assert _codes(result) == [UNDECLARED_VARIABLE, UNDECLARED_VARIABLE]
	assert [d.span for d in result.diagnostics] == [Span(0, 0, 1), Span(0, 4, 5)]


def test_simple_assignment_type_check():
	ok = analyze("a: int8\nb: int64\nb = a\n")
	assert ok.diagnostics == ()

	bad = analyze("a: int8\nb: int64\na = b\n")
	assert _codes(bad) == [TYPE_MISMATCH]
	assert bad.diagnostics[0].span == Span(2, 4, 5)


@pytest.mark.parametrize("target", ["int8", "int16", "int32", "int64", "int128", "int_size"])
def test_integer_literal_fits_sized_signed_types(target):
	assert analyze(f"x: {target} = 5").diagnostics == ()


def test_int_variable_into_sized_types():
	assert analyze("a: int\nb: int32 = a\n").diagnostics == ()
	assert analyze("a: int\nb: int8\nb = a\n").diagnostics == ()
	assert _codes(analyze("a: int32\nb: int = a\n")) == [TYPE_MISMATCH]
	assert _codes(analyze("a: int32\nb: int_size = a\n")) == [TYPE_MISMATCH]


def test_declaration_from_variable():
	assert analyze("a: float\nb: double = a\n").diagnostics == ()

	result = analyze("a: double\nb: float = a\n")
	assert _codes(result) == [TYPE_MISMATCH]
	assert result.diagnostics[0].span == Span(1, 11, 12)


def test_declaration_from_undeclared_variable():
	result = analyze("b: int = nope")
	assert _codes(result) == [UNDECLARED_VARIABLE]
	assert result.diagnostics[0].span == Span(0, 9, 13)


def test_self_reference_reports_at_the_value():
	result = analyze("x: bool\ny: int = x\n")
	assert _codes(result) == [TYPE_MISMATCH]
	assert result.diagnostics[0].span == Span(1, 9, 10)


def test_declarations_are_visible_before_their_line():
	# pass 1 collects every declaration before values are checked
	result = analyze("a: int = b\nb: int = 1\n")
	assert result.diagnostics == ()


def test_unclassified_value_is_silent():
	assert analyze("x: int = a + 1").diagnostics == ()
	assert analyze("x: bool = compute()").diagnostics == ()


def test_literal_checks():
	assert analyze("f: double = 1").diagnostics == ()
	assert analyze("f: float = 1.5").diagnostics == ()
	assert analyze("b: bool = False").diagnostics == ()
	assert analyze("n: None = None").diagnostics == ()
	assert analyze("c: char = 'z'").diagnostics == ()
	assert analyze("s: str = \"hello\"").diagnostics == ()
	assert analyze("s: str = \"h\"").diagnostics == ()
	assert _codes(analyze("i: int = 1.5")) == [TYPE_MISMATCH]
	assert _codes(analyze("c: char = \"word\"")) == [TYPE_MISMATCH]
	assert _codes(analyze("u: uint8 = 1")) == [TYPE_MISMATCH]
	assert _codes(analyze("s: str = True")) == [TYPE_MISMATCH]


def test_print_argument_must_be_declared():
	result = analyze("print(z)")
	assert _codes(result) == [UNDECLARED_VARIABLE]
	assert result.diagnostics[0].span == Span(0, 6, 7)

	assert analyze("z: int = 1\nprint(z)\n").diagnostics == ()


def test_comment_lines_are_ignored():
	assert analyze("# x: foo = 1\n   # print(y)\n").diagnostics == ()


def test_declaration_tokens():
	result = analyze("count: int = 1")
	assert result.tokens == (
		HighlightToken(0, 0, 5, VARIABLE_TOKEN, DECLARATION_MODIFIER),
		HighlightToken(0, 7, 3, TYPE_TOKEN, 0),
	)


def test_usage_and_keyword_tokens():
	result = analyze("count: int = 1\nprint(count)\nflag: bool = True\n")
	assert HighlightToken(1, 0, 5, FUNCTION_TOKEN, 0) in result.tokens
	assert HighlightToken(1, 6, 5, VARIABLE_TOKEN, 0) in result.tokens
	assert HighlightToken(2, 13, 4, KEYWORD_TOKEN, 0) in result.tokens


def test_invalid_declarations_emit_no_tokens():
	assert analyze("x: foo").tokens == ()


def test_duplicate_name_is_highlighted_as_a_use():
	result = analyze("x: int\nx: int\n")
	assert HighlightToken(1, 0, 1, VARIABLE_TOKEN, 0) in result.tokens
	assert HighlightToken(1, 3, 3, TYPE_TOKEN, 0) not in result.tokens


def test_tokens_are_sorted(sample_program):
	tokens = analyze(sample_program).tokens
	positions = [(t.line, t.start) for t in tokens]
	assert positions == sorted(positions)
	assert len(positions) == len(set(positions))


def test_sample_program_is_clean(sample_program):
	result = analyze(sample_program)
	assert result.diagnostics == ()
	assert set(result.symbols) == {"count", "ratio", "name", "flag", "big"}


def test_analysis_is_idempotent(sample_program):
	text = sample_program + "y = x\nq: foo\n"
	assert analyze(text) == analyze(text)


def test_analyzer_instance_can_be_reused():
	analyzer = Analyzer()
	first = analyzer.analyze("x: int\nx: int\n")
	second = analyzer.analyze("y: bool = 1")
	assert "x" not in second.symbols
	assert _codes(second) == [TYPE_MISMATCH]
	assert _codes(first) == [DUPLICATE_VARIABLE]


def test_errors_and_warnings_views():
	result = analyze("x: int\nx: int\nprint(q)\n")
	assert [d.code for d in result.errors] == [UNDECLARED_VARIABLE]
	assert [d.code for d in result.warnings] == [DUPLICATE_VARIABLE]


def test_diagnostic_str():
	d = analyze("print(q)").diagnostics[0]
	assert str(d) == '1:7 error [undeclared-variable] Variable "q" is not declared'
