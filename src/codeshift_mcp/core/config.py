"""Configuration management for codeshift MCP server."""

import argparse
import os
import sys
from typing import Optional

import yaml

from codeshift_mcp.core.exceptions import ConfigurationError
from codeshift_mcp.core.logging import configure_logging, get_logger
from codeshift_mcp.models.config import TransformerConfig

# Global variable for config path (will be set by parse_args_and_get_config)
CONFIG_PATH: Optional[str] = None

# Active settings; defaults until a config file is loaded
_config: TransformerConfig = TransformerConfig()


def get_config() -> TransformerConfig:
    """Return the active transformer configuration."""
    return _config


def set_config(config: TransformerConfig) -> None:
    """Replace the active transformer configuration."""
    global _config
    _config = config


def validate_config_file(config_path: str) -> TransformerConfig:
    """Validate a codeshift YAML config file.

    Args:
        config_path: Path to the YAML file

    Returns:
        Validated TransformerConfig model

    Raises:
        ConfigurationError: If config file is invalid
    """
    if not os.path.exists(config_path):
        raise ConfigurationError(config_path, "File does not exist")

    if not os.path.isfile(config_path):
        raise ConfigurationError(config_path, "Path is not a file")

    try:
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(config_path, f"YAML parsing failed: {e}") from e
    except OSError as e:
        raise ConfigurationError(config_path, f"Failed to read file: {e}") from e

    if config_data is None:
        raise ConfigurationError(config_path, "Config file is empty")

    if not isinstance(config_data, dict):
        raise ConfigurationError(config_path, "Config must be a YAML dictionary")

    try:
        return TransformerConfig(**config_data)
    except Exception as e:
        raise ConfigurationError(config_path, f"Validation failed: {e}") from e


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance.
    """
    prog = None
    if sys.argv[0].endswith("main.py"):
        prog = "python main.py"

    parser = argparse.ArgumentParser(
        prog=prog,
        description="codeshift MCP Server - Rule-based source-to-source code transformation via Model Context Protocol",
        epilog="""
environment variables:
  CODESHIFT_CONFIG   Path to YAML config file (overridden by --config flag)
  LOG_LEVEL          Logging level: DEBUG, INFO, WARNING, ERROR (default: INFO)
  LOG_FILE           Path to log file (logs to stderr by default)
  SENTRY_DSN         Enables Sentry error tracking when set
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=str,
        metavar="PATH",
        help="Path to YAML config file (default target language, stream chunk size, input limits)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        metavar="LEVEL",
        help="Logging level (DEBUG, INFO, WARNING, ERROR). Can also be set via LOG_LEVEL env var. Default: INFO",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        default=None,
        help="Path to log file (logs to stderr by default). Can also be set via LOG_FILE env var.",
    )
    return parser


def _resolve_config_path(args: argparse.Namespace) -> Optional[str]:
    """Resolve config file path from args or environment.

    Precedence: --config flag > CODESHIFT_CONFIG env > None

    Args:
        args: Parsed command-line arguments.

    Returns:
        Path to config file or None if not specified.
    """
    if args.config:
        return str(args.config)
    env_config = os.environ.get("CODESHIFT_CONFIG")
    if env_config:
        return env_config
    return None


def _configure_logging_from_args(args: argparse.Namespace) -> None:
    """Configure logging based on command-line arguments and environment.

    Precedence: --log-level/--log-file flags > env vars > defaults

    Args:
        args: Parsed command-line arguments.
    """
    log_level = args.log_level or os.environ.get("LOG_LEVEL", "INFO")
    log_file = args.log_file or os.environ.get("LOG_FILE")
    configure_logging(log_level=log_level, log_file=log_file)


def parse_args_and_get_config(argv: Optional[list[str]] = None) -> TransformerConfig:
    """Parse command-line arguments, configure logging and load settings.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        The active TransformerConfig

    Note:
        Calls sys.exit(1) if the config file fails validation.
    """
    global CONFIG_PATH

    parser = _create_argument_parser()
    args = parser.parse_args(argv)

    _configure_logging_from_args(args)

    CONFIG_PATH = _resolve_config_path(args)
    if CONFIG_PATH is not None:
        try:
            set_config(validate_config_file(CONFIG_PATH))
        except ConfigurationError as e:
            logger = get_logger("config")
            logger.error("config_validation_failed", config_path=CONFIG_PATH, error=str(e))
            sys.exit(1)

    config = get_config()
    get_logger("config").info(
        "config_loaded",
        config_path=CONFIG_PATH,
        default_target_language=config.default_target_language,
        stream_chunk_size=config.stream_chunk_size,
    )
    return config
