import io

import pytest

from qasmsem.semantic_error import (
    SemanticError,
    SemanticErrorKind,
    SemanticErrorList,
    SyntaxSpan,
    TextRange,
    report_error,
)

SOURCE = "qubit q;\nx = 2;\n"
SPAN = SyntaxSpan("x = 2;", TextRange(9, 15))


def test_text_range_rejects_reversed():
    with pytest.raises(ValueError):
        TextRange(5, 2)


def test_text_range_rejects_negative():
    with pytest.raises(ValueError):
        TextRange(-1, 2)


def test_message_is_kind_name():
    err = SemanticError(SemanticErrorKind.UNDEF_VAR_ERROR, SPAN)
    assert err.message() == "UndefVarError"
    assert err.range == TextRange(9, 15)


def test_str_mentions_kind_and_text():
    err = SemanticError(SemanticErrorKind.REDECLARATION_ERROR, SPAN)
    text = str(err)
    assert text.startswith("RedeclarationError: x = 2;")
    assert "9..15" in text


def test_insert_and_sequence_access():
    errors = SemanticErrorList("prog.qasm")
    assert len(errors) == 0
    errors.insert(SemanticErrorKind.UNDEF_GATE_ERROR, SPAN)
    errors.insert(SemanticErrorKind.UNDEF_VAR_ERROR, SPAN)
    assert len(errors) == 2
    assert errors[0].kind is SemanticErrorKind.UNDEF_GATE_ERROR
    assert [e.kind for e in errors] == [
        SemanticErrorKind.UNDEF_GATE_ERROR,
        SemanticErrorKind.UNDEF_VAR_ERROR,
    ]


def test_any_semantic_errors_checks_included():
    top = SemanticErrorList("top.qasm")
    assert not top.any_semantic_errors()
    inner = SemanticErrorList("inner.qasm")
    top.push_included(inner)
    assert not top.any_semantic_errors()
    inner.insert(SemanticErrorKind.MUTATE_CONST_ERROR, SPAN)
    assert top.any_semantic_errors()
    assert len(top) == 0


def test_report_error_locates_line():
    report = report_error("UndefVarError", TextRange(9, 15), "prog.qasm", SOURCE)
    assert report.startswith("Error: UndefVarError\n")
    assert "prog.qasm:2:1" in report
    assert "2 | x = 2;" in report
    assert "^^^^^^ Near this point" in report


def test_format_errors_contains_each_report():
    errors = SemanticErrorList("prog.qasm")
    errors.insert(SemanticErrorKind.UNDEF_VAR_ERROR, SPAN)
    text = errors.format_errors(SOURCE)
    expected = report_error("UndefVarError", SPAN.range, "prog.qasm", SOURCE)
    assert text == expected + "\n"


def test_format_errors_empty_needs_no_source():
    errors = SemanticErrorList("missing/file.qasm")
    errors.push_included(SemanticErrorList("also/missing.qasm"))
    assert errors.format_errors() == ""


def test_print_errors_reads_file(tmp_path):
    path = tmp_path / "prog.qasm"
    path.write_text(SOURCE, encoding="utf-8")
    errors = SemanticErrorList(path)
    errors.insert(SemanticErrorKind.UNDEF_VAR_ERROR, SPAN)
    out = io.StringIO()
    errors.print_errors(file=out)
    assert out.getvalue() == errors.format_errors(SOURCE)


def test_included_errors_follow_top_level(tmp_path):
    inc_path = tmp_path / "inc.qasm"
    inc_path.write_text(SOURCE, encoding="utf-8")
    inner = SemanticErrorList(inc_path)
    inner.insert(SemanticErrorKind.NUM_GATE_QUBITS_ERROR, SPAN)
    top = SemanticErrorList("top.qasm")
    top.insert(SemanticErrorKind.UNDEF_VAR_ERROR, SPAN)
    top.push_included(inner)
    text = top.format_errors(SOURCE)
    assert text.index("UndefVarError") < text.index("NumGateQubitsError")
    assert str(inc_path) in text