"""Tests for the transformation orchestrator."""

from unittest.mock import patch

from codeshift_mcp.features.transform.orchestrator import transform
from codeshift_mcp.models.transformation import Language, LineClassification

# =============================================================================
# Pipeline Tests
# =============================================================================


class TestTransformPipeline:
    """Tests for supported-pair transformations."""

    def test_python_function_to_javascript(self):
        """Test a function with a print body."""
        result = transform("def greet(name):\n    print(name)", "python", "javascript")
        assert result.code == "function greet(name) {\n  console.log(name);\n}"
        assert result.errors == []
        assert result.source_language == "python"
        assert result.target_language == "javascript"

    def test_statistics(self):
        """Test counts of recognized constructs and changed lines."""
        result = transform("def greet(name):\n    print(name)", "python", "javascript")
        assert result.statistics.functions_detected == 1
        assert result.statistics.lines_transformed == 2
        assert result.statistics.normalization_applied is False
        assert result.statistics.mixed_language_detected is False

    def test_per_line_transformations(self):
        """Test each input line is paired with its rewritten form."""
        result = transform("def greet(name):\n    print(name)", "python", "javascript")
        assert [line.line_number for line in result.lines] == [1, 2]
        assert result.lines[1].original == "    print(name)"
        assert result.lines[1].transformed == "    console.log(name);"
        assert result.lines[1].classification == LineClassification.CHANGED

    def test_warning_classification(self):
        """Test lines with warnings are classified as warning."""
        result = transform("class Foo:\n    x = 1", "python", "go")
        assert result.lines[0].classification == LineClassification.WARNING
        assert result.lines[0].warnings == ["Go has no classes, using struct instead"]

    def test_warnings_deduplicated(self):
        """Test repeated warnings appear once in the aggregate list."""
        code = "class A:\n    x = 1\nclass B:\n    y = 2"
        result = transform(code, "python", "go")
        assert result.warnings.count("Go has no classes, using struct instead") == 1
        assert result.statistics.classes_detected == 2

    def test_structure_describes_output(self):
        """Test the structural summary is built from the final code."""
        result = transform("def greet(name):\n    print(name)", "python", "javascript")
        assert result.structure[0].type == "function"
        assert result.structure[0].name == "greet"

    def test_auto_detects_source(self):
        """Test auto and missing sources are detected."""
        code = "def f(x):\n    return x"
        assert transform(code, "auto", "javascript").source_language == "python"
        assert transform(code, None, "javascript").source_language == "python"

    def test_enum_arguments(self):
        """Test Language members are accepted as identifiers."""
        result = transform("x = 1", Language.PYTHON, Language.JAVASCRIPT)
        assert result.code == "let x = 1;"

    def test_normalization_reported(self):
        """Test corrections are surfaced as warnings and statistics."""
        result = transform("def f(x)\n    return x", "python", "javascript")
        assert result.statistics.normalization_applied is True
        assert "Normalizing: added missing colon (lines 1)" in result.warnings
        assert result.code.startswith("function f(x) {")


# =============================================================================
# Special Cases
# =============================================================================


class TestTransformSpecialCases:
    """Tests for identity, unsupported and failing calls."""

    def test_identity_returns_input(self):
        """Test same-language calls return the input verbatim."""
        code = "x = 1\n"
        result = transform(code, "python", "Python")
        assert result.code == code
        assert result.warnings == []
        assert result.errors == []
        assert result.statistics.lines_transformed == 0
        assert all(line.classification == LineClassification.UNCHANGED for line in result.lines)

    def test_identity_for_unknown_language(self):
        """Test equal unknown identifiers are still an identity."""
        result = transform("anything", "cobol", "cobol")
        assert result.code == "anything"
        assert result.errors == []
        assert result.structure == []

    def test_unsupported_target(self):
        """Test an unknown target returns the input behind a comment."""
        result = transform("x = 1", "python", "cobol")
        message = "Unsupported language pair: python -> cobol"
        assert result.code == f"# {message}\nx = 1"
        assert result.errors == [message]
        assert result.warnings == [message]

    def test_unsupported_source(self):
        """Test an unknown source uses the target's comment marker."""
        result = transform("x = 1", "cobol", "javascript")
        assert result.code == "// Unsupported language pair: cobol -> javascript\nx = 1"

    def test_non_string_input(self):
        """Test non-string code is treated as empty."""
        result = transform(None, "python", "javascript")
        assert result.code == ""
        assert result.errors == []

    def test_internal_failure_is_reported(self):
        """Test exceptions inside the pipeline become errors."""
        with patch(
            "codeshift_mcp.features.transform.orchestrator.rewrite_code",
            side_effect=RuntimeError("boom"),
        ):
            result = transform("x = 1", "python", "javascript")
        assert result.errors == ["Transformation failed: boom"]
        assert result.code == "x = 1"
