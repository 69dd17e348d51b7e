"""Shared pytest fixtures for unit tests.

This module provides reusable fixtures for all unit test modules, including:
- Core fixtures (MockFastMCP, mock_field)
- Tool access fixtures (transform_tools)
- Rule context fixtures
"""

from typing import Any, Dict
from unittest.mock import patch

import pytest

from codeshift_mcp.features.transform.rules import make_context
from codeshift_mcp.models.transformation import Language


class MockFastMCP:
    """Mock FastMCP class for testing."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.tools: Dict[str, Any] = {}

    def tool(self, **kwargs: Any) -> Any:
        def decorator(func: Any) -> Any:
            self.tools[func.__name__] = func
            return func
        return decorator

    def run(self, **kwargs: Any) -> None:
        pass

    def get(self, name: str) -> Any:
        return self.tools.get(name)


def mock_field(*args: Any, **kwargs: Any) -> Any:
    """Mock pydantic Field function - accepts both positional and keyword args."""
    if args:
        return args[0]
    return kwargs.get("default")


# Tool Access Fixtures

@pytest.fixture(scope="module")
def mcp_server() -> MockFastMCP:
    """Mock server with every tool registered through the central registry."""
    from codeshift_mcp.server.registry import register_all_tools

    mcp = MockFastMCP("codeshift")
    with patch("codeshift_mcp.features.transform.tools.Field", mock_field):
        register_all_tools(mcp)
    return mcp


@pytest.fixture(scope="module")
def transform_code_tool(mcp_server):
    """Get transform_code tool function."""
    tool = mcp_server.tools.get("transform_code")
    assert tool is not None, "transform_code tool not registered"
    return tool


# Rule Context Fixtures

@pytest.fixture
def py_to_js():
    """Fresh rule context for Python -> JavaScript."""
    return make_context(Language.PYTHON, Language.JAVASCRIPT)


@pytest.fixture
def js_to_py():
    """Fresh rule context for JavaScript -> Python."""
    return make_context(Language.JAVASCRIPT, Language.PYTHON)
