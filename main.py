"""codeshift MCP Server - Entry point."""

from codeshift_mcp.server.runner import mcp, run_mcp_server

__all__ = ["mcp", "run_mcp_server"]

if __name__ == "__main__":
    run_mcp_server()
