"""Tests for server startup and Sentry initialization."""

from unittest.mock import patch

from codeshift_mcp.core.sentry import init_sentry
from codeshift_mcp.server import runner


class TestInitSentry:
    """Tests for init_sentry."""

    def test_disabled_without_dsn(self, monkeypatch):
        """Test nothing is initialized when SENTRY_DSN is unset."""
        monkeypatch.delenv("SENTRY_DSN", raising=False)
        with patch("codeshift_mcp.core.sentry.sentry_sdk.init") as mock_init:
            init_sentry()
        mock_init.assert_not_called()

    def test_events_tagged(self, monkeypatch):
        """Test events are tagged with the service name."""
        monkeypatch.setenv("SENTRY_DSN", "https://key@example.invalid/1")
        monkeypatch.setenv("SENTRY_ENVIRONMENT", "production")
        with patch("codeshift_mcp.core.sentry.sentry_sdk.init") as mock_init, \
                patch("codeshift_mcp.core.sentry.sentry_sdk.set_tag"):
            init_sentry("codeshift-test")

        kwargs = mock_init.call_args.kwargs
        assert kwargs["environment"] == "production"
        assert kwargs["traces_sample_rate"] == 0.1
        event = kwargs["before_send"]({}, None)
        assert event["tags"]["service"] == "codeshift-test"


class TestRunMcpServer:
    """Tests for run_mcp_server."""

    def test_startup_sequence(self):
        """Test config, Sentry and tool registration run before stdio."""
        with patch.object(runner, "parse_args_and_get_config") as mock_config, \
                patch.object(runner, "init_sentry") as mock_sentry, \
                patch.object(runner, "register_all_tools") as mock_register, \
                patch.object(runner.mcp, "run") as mock_run:
            runner.run_mcp_server()

        mock_config.assert_called_once_with()
        mock_sentry.assert_called_once_with()
        mock_register.assert_called_once_with(runner.mcp)
        mock_run.assert_called_once_with(transport="stdio")
