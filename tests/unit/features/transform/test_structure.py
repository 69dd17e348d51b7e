"""Tests for the structural summary."""

from codeshift_mcp.features.transform.structure import build_structural_summary, flatten

PYTHON_CODE = """import os

class Foo:
    def bar(self):
        if x:
            return 1
    # done
y = 2"""


class TestStructuralSummary:
    """Tests for build_structural_summary."""

    def test_python_outline(self):
        """Test top-level nodes and nesting follow indentation."""
        roots = build_structural_summary(PYTHON_CODE, "python")
        assert [node.type for node in roots] == ["import", "class", "variable"]

        cls = roots[1]
        assert cls.name == "Foo"
        assert (cls.line_start, cls.line_end) == (2, 6)
        assert [child.type for child in cls.children] == ["function", "comment"]

        method = cls.children[0]
        assert method.name == "bar"
        assert method.line_end == 5
        assert method.children[0].type == "if"
        assert method.children[0].children[0].type == "statement"

    def test_variable_name(self):
        """Test variable nodes carry the assigned name."""
        roots = build_structural_summary(PYTHON_CODE, "python")
        assert roots[2].name == "y"
        assert roots[2].content == "y = 2"

    def test_closing_brace_extends_block(self):
        """Test a closing brace ends the block it closes."""
        code = "function f() {\n  return 1;\n}"
        roots = build_structural_summary(code, "javascript")
        assert len(roots) == 1
        assert roots[0].type == "function"
        assert roots[0].name == "f"
        assert roots[0].line_end == 2
        assert len(roots[0].children) == 1

    def test_ruby_end_extends_block(self):
        """Test ruby end lines close blocks without producing nodes."""
        code = "def greet(name)\n  puts name\nend"
        roots = build_structural_summary(code, "ruby")
        assert len(flatten(roots)) == 2
        assert roots[0].line_end == 2

    def test_empty_code(self):
        """Test empty input yields no nodes."""
        assert build_structural_summary("", "python") == []
        assert build_structural_summary("\n\n", "python") == []

    def test_unknown_language_is_lenient(self):
        """Test unknown identifiers fall back instead of raising."""
        roots = build_structural_summary("x = 1", "cobol")
        assert roots[0].type == "variable"

    def test_flatten_is_depth_first(self):
        """Test flatten visits parents before children."""
        roots = build_structural_summary(PYTHON_CODE, "python")
        types = [node.type for node in flatten(roots)]
        assert types == ["import", "class", "function", "if", "statement", "comment", "variable"]
