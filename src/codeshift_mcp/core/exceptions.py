"""Exception hierarchy for codeshift MCP server.

Malformed or unsupported *input code* never raises; these exceptions are
reserved for programmer and configuration errors at the boundary.
"""


class CodeshiftError(Exception):
    """Base exception for all codeshift errors."""


class UnknownLanguageError(CodeshiftError):
    """Raised when a strict lookup receives an unregistered language identifier."""

    def __init__(self, language: str) -> None:
        self.language = language
        super().__init__(f"Unknown language: {language!r}")


class ConfigurationError(CodeshiftError):
    """Raised when a configuration file is missing or invalid."""

    def __init__(self, config_path: str, message: str) -> None:
        self.config_path = config_path
        self.message = message
        super().__init__(f"Invalid configuration at {config_path}: {message}")
