"""Central tool registration for MCP server."""

from mcp.server.fastmcp import FastMCP

from codeshift_mcp.features.transform.tools import register_transform_tools


def register_all_tools(mcp: FastMCP) -> None:
    """Register all MCP tools from all features.

    Transform (6 tools): transform_code, detect_language,
    detect_mixed_languages, build_structural_summary, compute_line_diff,
    list_supported_languages
    """
    register_transform_tools(mcp)
