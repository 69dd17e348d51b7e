"""Tests for the MCP tool layer."""

import pytest

from codeshift_mcp.core.config import set_config
from codeshift_mcp.features.transform.streaming import reassemble
from codeshift_mcp.models.config import TransformerConfig

PY_GREET = "def greet(name):\n    print(name)"


# =============================================================================
# Registration
# =============================================================================


class TestToolRegistration:
    """Test that tools are registered through the central registry."""

    def test_all_tools_registered(self, mcp_server):
        """Test every transformation tool is registered."""
        assert set(mcp_server.tools) == {
            "transform_code",
            "detect_language",
            "detect_mixed_languages",
            "build_structural_summary",
            "compute_line_diff",
            "list_supported_languages",
        }


# =============================================================================
# transform_code
# =============================================================================


class TestTransformCodeTool:
    """Tests for the transform_code tool."""

    def test_transform(self, transform_code_tool, reset_config):
        """Test a basic transformation."""
        result = transform_code_tool(
            code=PY_GREET, target_language="javascript", source_language="python", stream=False
        )
        assert result["code"] == "function greet(name) {\n  console.log(name);\n}"
        assert result["errors"] == []
        assert result["statistics"]["functions_detected"] == 1
        assert result["lines"][1]["classification"] == "changed"
        assert result["structure"][0]["type"] == "function"
        assert "events" not in result

    def test_default_target_from_config(self, transform_code_tool, reset_config):
        """Test a missing target falls back to the configured default."""
        set_config(TransformerConfig(default_target_language="ruby"))
        result = transform_code_tool(code=PY_GREET, target_language=None, source_language="python", stream=False)
        assert result["target_language"] == "ruby"
        assert result["code"] == "def greet(name)\n  puts name\nend"

    def test_auto_source(self, transform_code_tool, reset_config):
        """Test the source language is detected."""
        result = transform_code_tool(code=PY_GREET, target_language="javascript", source_language="auto", stream=False)
        assert result["source_language"] == "python"

    def test_stream_events(self, transform_code_tool, reset_config):
        """Test streamed delta events reassemble to the output."""
        set_config(TransformerConfig(stream_chunk_size=5))
        result = transform_code_tool(code=PY_GREET, target_language="javascript", source_language="python", stream=True)
        events = result["events"]
        assert events[-1] == {"type": "done"}
        assert all(len(event["delta"]) <= 5 for event in events[:-1])
        assert reassemble(events) == result["code"]

    def test_structure_disabled(self, transform_code_tool, reset_config):
        """Test the structural summary can be switched off."""
        set_config(TransformerConfig(include_structure=False))
        result = transform_code_tool(code=PY_GREET, target_language="javascript", source_language="python", stream=False)
        assert "structure" not in result

    def test_unsupported_pair(self, transform_code_tool, reset_config):
        """Test unsupported pairs are reported, not raised."""
        result = transform_code_tool(code="x = 1", target_language="cobol", source_language="python", stream=False)
        assert result["errors"] == ["Unsupported language pair: python -> cobol"]

    def test_input_too_large(self, transform_code_tool, reset_config):
        """Test oversized input is rejected."""
        set_config(TransformerConfig(max_input_chars=5))
        with pytest.raises(ValueError, match="limit is 5"):
            transform_code_tool(code=PY_GREET, target_language="javascript", source_language="python", stream=False)


# =============================================================================
# Analysis Tools
# =============================================================================


class TestAnalysisTools:
    """Tests for detection, structure and diff tools."""

    def test_detect_language(self, mcp_server):
        """Test language detection."""
        result = mcp_server.tools["detect_language"](code="def f(x):\n    return x")
        assert result == {"language": "python"}

    def test_detect_mixed_languages(self, mcp_server):
        """Test the mixed-language report."""
        code = "def f(x)\n    if x > 0 {\n        return x;\n    }"
        result = mcp_server.tools["detect_mixed_languages"](code=code)
        assert result["detected"] is True
        assert "python" in result["languages"]
        assert set(result) == {"detected", "languages", "confidence", "scores"}

    def test_build_structural_summary(self, mcp_server):
        """Test the outline with auto-detection."""
        result = mcp_server.tools["build_structural_summary"](code="def f(x):\n    return x", language="auto")
        assert result["language"] == "python"
        assert result["nodes"][0]["type"] == "function"
        assert result["nodes"][0]["name"] == "f"
        assert result["node_count"] == 2

    def test_compute_line_diff(self, mcp_server):
        """Test the index-aligned diff."""
        result = mcp_server.tools["compute_line_diff"](before="a\nb", after="a\nc\nd")
        assert result["summary"] == {"unchanged": 1, "changed": 1, "added": 1, "removed": 0}
        assert result["entries"][1]["classification"] == "changed"
        assert result["entries"][2]["before_line"] is None

    def test_list_supported_languages(self, mcp_server, reset_config):
        """Test the language listing."""
        result = mcp_server.tools["list_supported_languages"]()
        assert len(result["languages"]) == 10
        assert result["default_target_language"] == "javascript"
        python = next(entry for entry in result["languages"] if entry["language"] == "python")
        assert python["block_style"] == "indent"
        assert "javascript" in python["targets"]
        assert "python" not in python["targets"]
