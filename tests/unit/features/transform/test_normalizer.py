"""Tests for input normalization and auto-correction."""

import pytest

from codeshift_mcp.features.transform.normalizer import normalize_code, preprocess
from codeshift_mcp.features.transform.registry import REGISTRY
from codeshift_mcp.models.transformation import Language

# =============================================================================
# Pre-processing Tests
# =============================================================================


class TestPreprocess:
    """Tests for whitespace and line-ending cleanup."""

    def test_unifies_line_endings(self):
        """Test CRLF and CR become LF."""
        assert preprocess("a\r\nb\rc") == "a\nb\nc"

    def test_strips_trailing_whitespace(self):
        """Test trailing spaces are removed per line."""
        assert preprocess("x = 1   \ny = 2\t") == "x = 1\ny = 2"

    def test_collapses_spacing_around_commas(self):
        """Test spacing before and after commas."""
        assert preprocess("foo(a ,  b)") == "foo(a, b)"

    def test_tidies_block_openers(self):
        """Test spacing before a trailing colon or brace."""
        assert preprocess("if x   :") == "if x:"
        assert preprocess("if (x)    {") == "if (x) {"

    def test_leaves_string_literals_alone(self):
        """Test commas inside strings keep their spacing."""
        spec = REGISTRY[Language.PYTHON]
        assert preprocess("print('a ,  b')", spec) == "print('a ,  b')"

    def test_preserves_indentation(self):
        """Test leading whitespace is kept."""
        assert preprocess("    return x") == "    return x"


# =============================================================================
# Correction Tests
# =============================================================================


class TestMissingColon:
    """Tests for the missing-colon correction."""

    def test_adds_colon_to_python_header(self):
        """Test a def header without a colon."""
        result = normalize_code("def f(x)\n    return x", "python")
        assert result.normalized == "def f(x):\n    return x"
        assert result.corrections == ["missing_colon"]
        assert "Normalizing: added missing colon (lines 1)" in result.warnings

    def test_unknown_source_uses_python_only_headers(self):
        """Test the correction still applies to unambiguous python headers."""
        result = normalize_code("def f(x)\n    return x")
        assert result.normalized == "def f(x):\n    return x"

    def test_keeps_trailing_comment(self):
        """Test the colon goes before a trailing comment."""
        result = normalize_code("if x > 1  # check\n    y = 2", "python")
        assert result.normalized.split("\n")[0] == "if x > 1:  # check"

    def test_not_applied_to_brace_source(self):
        """Test brace-language input is not given colons."""
        result = normalize_code("if (x) {\n  y();\n}", "javascript")
        assert "missing_colon" not in result.corrections


class TestMissingBrace:
    """Tests for the missing-brace correction."""

    def test_adds_brace_to_paren_header(self):
        """Test an if header without an opening brace."""
        result = normalize_code("if (x > 0)\n  y();", "javascript")
        assert result.normalized == "if (x > 0) {\n  y();"
        assert "missing_brace" in result.corrections

    def test_allman_style_unchanged(self):
        """Test a brace on the next line is respected."""
        code = "if (x > 0)\n{\n  y();\n}"
        result = normalize_code(code, "javascript")
        assert result.normalized == code
        assert "missing_brace" not in result.corrections

    def test_not_applied_to_python(self):
        """Test brace correction is skipped for indentation sources."""
        code = "def f(x)\n    if x > 0 {\n        return x\n    }"
        result = normalize_code(code, "python")
        assert result.normalized.split("\n")[1] == "    if x > 0 {"


class TestOtherCorrections:
    """Tests for the remaining auto-corrections."""

    def test_print_statement(self):
        """Test python 2 print statements become calls."""
        result = normalize_code("print x", "python")
        assert result.normalized == "print(x)"
        assert result.corrections == ["print_statement"]

    def test_quotes_unified(self):
        """Test single-quoted strings become double-quoted."""
        result = normalize_code("x = 'hi'", "python")
        assert result.normalized == 'x = "hi"'
        assert "Normalizing: unified string quotes (lines 1)" in result.warnings

    def test_quotes_with_embedded_double_quote_unchanged(self):
        """Test strings that contain a double quote keep single quotes."""
        code = "x = 'say \"hi\"'"
        assert normalize_code(code, "python").normalized == code

    def test_char_literals_unchanged(self):
        """Test single quotes are left alone where they denote characters."""
        result = normalize_code("char c = 'a';", "java")
        assert result.normalized == "char c = 'a';"
        assert "quotes" not in result.corrections

    def test_duplicate_terminators_collapsed(self):
        """Test repeated semicolons collapse to one."""
        assert normalize_code("x = 1;;", "javascript").normalized == "x = 1;"

    def test_for_header_terminators_kept(self):
        """Test empty counted-loop clauses are not collapsed."""
        code = "for (;;) {\n  tick();\n}"
        assert normalize_code(code, "javascript").normalized == code

    def test_logical_operators_to_words(self):
        """Test symbolic operators in python become words."""
        result = normalize_code("if a && b:\n    pass", "python")
        assert result.normalized.split("\n")[0] == "if a and b:"
        assert "logical_operators" in result.corrections

    def test_logical_operators_to_symbols(self):
        """Test word operators in javascript become symbols."""
        result = normalize_code("if (a and b) {\n}", "javascript")
        assert result.normalized.split("\n")[0] == "if (a && b) {"

    def test_else_if_keyword_follows_target(self):
        """Test the else-if keyword is unified to the target's spelling."""
        code = "if x:\n    a = 1\nelif y:\n    a = 2"
        result = normalize_code(code, "python", "javascript")
        assert result.normalized.split("\n")[2] == "else if y:"
        assert "else_if_keyword" in result.corrections

    def test_else_if_keyword_needs_target(self):
        """Test the keyword correction is skipped without a target."""
        code = "if x:\n    a = 1\nelif y:\n    a = 2"
        result = normalize_code(code, "python")
        assert "else_if_keyword" not in result.corrections


# =============================================================================
# Normalization Properties
# =============================================================================


class TestNormalizationProperties:
    """Tests for properties that hold for every input."""

    def test_mixed_language_warning(self):
        """Test mixed input is flagged in the warnings."""
        code = "def f(x)\n    if x > 0 {\n        return x\n    }"
        result = normalize_code(code, "python")
        assert result.warnings[0] == "Mixed languages detected: python, javascript"
        assert result.mixed_report is not None
        assert result.mixed_report.detected

    def test_mixed_input_keeps_brace_header(self):
        """Test the colon is added to the def line and the brace header is left alone."""
        code = "def f(x)\n    if x > 0 {\n        return x\n    }"
        result = normalize_code(code, "python")
        assert result.normalized == "def f(x):\n    if x > 0 {\n        return x\n    }"
        assert result.corrections == ["missing_colon"]

    @pytest.mark.parametrize("code,language", [
        ("def f(x)\n    return 'a'", "python"),
        ("if (x)\n  y();;", "javascript"),
        ("print x\nif a && b\n    pass", "python"),
    ])
    def test_idempotent(self, code, language):
        """Test normalizing twice equals normalizing once."""
        once = normalize_code(code, language).normalized
        assert normalize_code(once, language).normalized == once

    def test_line_count_preserved(self, samples):
        """Test corrections never add or remove lines."""
        for language, code in samples.items():
            result = normalize_code(code, language)
            assert len(result.normalized.split("\n")) == len(code.split("\n")), language

    def test_clean_input_unchanged(self):
        """Test already-normal input produces no corrections."""
        code = "def f(x):\n    return x"
        result = normalize_code(code, "python")
        assert result.normalized == code
        assert result.corrections == []
        assert result.warnings == []
