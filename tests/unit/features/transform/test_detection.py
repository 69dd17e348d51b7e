"""Tests for single-language guessing and mixed-language detection."""

import pytest

from codeshift_mcp.constants import DetectionDefaults
from codeshift_mcp.features.transform.detection import (
    detect_language,
    detect_mixed_languages,
    score_languages,
)


class TestDetectLanguage:
    """Tests for detect_language."""

    @pytest.mark.parametrize("code,expected", [
        ("def greet(name):\n    return name", "python"),
        ("const x = 5;\nconsole.log(x);", "javascript"),
        ("package main\n\nfunc main() {\n\tx := 5\n\tfmt.Println(x)\n}", "go"),
        ("fn main() {\n    let mut x = 5;\n    println!(\"{}\", x);\n}", "rust"),
        ("def greet(name)\n  puts name\nend", "ruby"),
        ("<?php\n$x = 5;\necho $x;", "php"),
        ("#include <iostream>\nint main() {\n    std::cout << 1;\n}", "cpp"),
        ("public class Main {\n    System.out.println(1);\n}", "java"),
        ("using System;\nConsole.WriteLine(1);", "csharp"),
        ("function f(name: string): void {\n}", "typescript"),
    ])
    def test_detects_representative_snippets(self, code, expected):
        """Test each language is recognized from a typical snippet."""
        assert detect_language(code) == expected

    def test_empty_input_defaults_to_javascript(self):
        """Test empty and whitespace-only input."""
        assert detect_language("") == "javascript"
        assert detect_language("   \n\t") == "javascript"

    def test_no_match_defaults_to_javascript(self):
        """Test text with no indicators."""
        assert detect_language("hello there") == "javascript"

    def test_ties_follow_priority_order(self):
        """Test a tie between python and cpp resolves to python."""
        assert detect_language("self.x = nullptr") == "python"


class TestMixedLanguageDetection:
    """Tests for detect_mixed_languages and score_languages."""

    def test_single_language(self):
        """Test plain python scores only python."""
        report = detect_mixed_languages("def f(x):\n    return x")
        assert report.detected is False
        assert report.languages == ["python"]
        assert report.confidence == DetectionDefaults.SINGLE_CONFIDENCE

    def test_mixed_python_and_braces(self):
        """Test a python header with a brace-delimited body."""
        code = "def f(x)\n    if x > 0 {\n        return x\n    }"
        report = detect_mixed_languages(code)
        assert report.detected is True
        assert report.languages[:2] == ["python", "javascript"]
        assert report.confidence == DetectionDefaults.MIXED_CONFIDENCE

    def test_empty_input(self):
        """Test empty input reports nothing."""
        report = detect_mixed_languages("")
        assert report.detected is False
        assert report.languages == []
        assert report.confidence == DetectionDefaults.NO_MATCH_CONFIDENCE

    def test_scores_count_each_indicator_once(self):
        """Test repeated matches of one indicator count once."""
        scores = score_languages("print(1)\nprint(2)\nprint(3)")
        assert scores == {"python": 1}

    def test_languages_sorted_by_score(self):
        """Test languages are ordered by descending score."""
        code = "<?php\n$x = 5;\necho $x;\nconsole.log(x)"
        report = detect_mixed_languages(code)
        assert report.languages[0] == "php"
        assert "javascript" in report.languages
