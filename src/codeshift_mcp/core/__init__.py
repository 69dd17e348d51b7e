"""Core infrastructure for codeshift MCP server."""

from codeshift_mcp.core.config import (
    CONFIG_PATH,
    get_config,
    parse_args_and_get_config,
    set_config,
    validate_config_file,
)
from codeshift_mcp.core.exceptions import (
    CodeshiftError,
    ConfigurationError,
    UnknownLanguageError,
)
from codeshift_mcp.core.logging import (
    configure_logging,
    get_logger,
)
from codeshift_mcp.core.sentry import (
    init_sentry,
)

__all__ = [
    # Exceptions
    "CodeshiftError",
    "ConfigurationError",
    "UnknownLanguageError",
    # Logging
    "configure_logging",
    "get_logger",
    # Config
    "CONFIG_PATH",
    "get_config",
    "set_config",
    "validate_config_file",
    "parse_args_and_get_config",
    # Sentry
    "init_sentry",
]
