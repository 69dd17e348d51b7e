"""Tests for configuration loading and validation."""

import pytest
from pydantic import ValidationError

from codeshift_mcp.core.config import get_config, parse_args_and_get_config, validate_config_file
from codeshift_mcp.core.exceptions import ConfigurationError
from codeshift_mcp.models.config import TransformerConfig


class TestTransformerConfig:
    """Tests for the settings model."""

    def test_defaults(self):
        """Test default settings."""
        config = TransformerConfig()
        assert config.default_target_language == "javascript"
        assert config.stream_chunk_size == 50
        assert config.max_input_chars == 200_000
        assert config.include_structure is True

    def test_language_alias_normalized(self):
        """Test aliases are stored as canonical identifiers."""
        assert TransformerConfig(default_target_language="PY").default_target_language == "python"

    def test_unknown_language_rejected(self):
        """Test unregistered languages fail validation."""
        with pytest.raises(ValidationError):
            TransformerConfig(default_target_language="cobol")

    def test_chunk_size_bounds(self):
        """Test the chunk size must be positive."""
        with pytest.raises(ValidationError):
            TransformerConfig(stream_chunk_size=0)


class TestValidateConfigFile:
    """Tests for validate_config_file."""

    def test_valid_file(self, config_file):
        """Test a valid file loads."""
        path = config_file("default_target_language: py\nstream_chunk_size: 10\n")
        config = validate_config_file(path)
        assert config.default_target_language == "python"
        assert config.stream_chunk_size == 10

    def test_missing_file(self, tmp_path):
        """Test a nonexistent path."""
        with pytest.raises(ConfigurationError, match="File does not exist"):
            validate_config_file(str(tmp_path / "missing.yaml"))

    def test_directory(self, tmp_path):
        """Test a directory path."""
        with pytest.raises(ConfigurationError, match="Path is not a file"):
            validate_config_file(str(tmp_path))

    def test_empty_file(self, config_file):
        """Test an empty file."""
        with pytest.raises(ConfigurationError, match="Config file is empty"):
            validate_config_file(config_file(""))

    def test_not_a_mapping(self, config_file):
        """Test a YAML list."""
        with pytest.raises(ConfigurationError, match="Config must be a YAML dictionary"):
            validate_config_file(config_file("- a\n- b\n"))

    def test_invalid_yaml(self, config_file):
        """Test unparseable YAML."""
        with pytest.raises(ConfigurationError, match="YAML parsing failed"):
            validate_config_file(config_file("key: [unclosed\n"))

    def test_invalid_values(self, config_file):
        """Test values that fail model validation."""
        with pytest.raises(ConfigurationError, match="Validation failed"):
            validate_config_file(config_file("default_target_language: cobol\n"))


class TestParseArgs:
    """Tests for parse_args_and_get_config."""

    def test_no_config(self, reset_config, monkeypatch):
        """Test defaults when no config is given."""
        monkeypatch.delenv("CODESHIFT_CONFIG", raising=False)
        config = parse_args_and_get_config([])
        assert config == TransformerConfig()

    def test_config_flag(self, reset_config, config_file, monkeypatch):
        """Test --config loads and activates the file."""
        monkeypatch.delenv("CODESHIFT_CONFIG", raising=False)
        path = config_file("default_target_language: ruby\n")
        config = parse_args_and_get_config(["--config", path])
        assert config.default_target_language == "ruby"
        assert get_config().default_target_language == "ruby"

    def test_config_env_var(self, reset_config, config_file, monkeypatch):
        """Test CODESHIFT_CONFIG is used when no flag is given."""
        monkeypatch.setenv("CODESHIFT_CONFIG", config_file("default_target_language: go\n"))
        assert parse_args_and_get_config([]).default_target_language == "go"

    def test_invalid_config_exits(self, reset_config, config_file, monkeypatch):
        """Test an invalid config file exits the process."""
        monkeypatch.delenv("CODESHIFT_CONFIG", raising=False)
        path = config_file("stream_chunk_size: -1\n")
        with pytest.raises(SystemExit):
            parse_args_and_get_config(["--config", path])
