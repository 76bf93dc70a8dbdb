"""Tests for the command line interface."""

import socket
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
import uvicorn
from click.testing import CliRunner

from usergraph import __version__, cli as cli_module
from usergraph.cli import ReportingServer, bound_addresses, cli
from usergraph.config import ServerConfig


@pytest.fixture
def runner():
    return CliRunner()


class TestSchemaCommand:
    def test_prints_sdl(self, runner):
        result = runner.invoke(cli, ["schema"])

        assert result.exit_code == 0, result.output
        assert "type Query {" in result.output
        assert "sendMessage(message: String!): Message!" in result.output


class TestVersion:
    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestServeCommand:
    """Test serve wiring without opening sockets."""

    @pytest.fixture
    def captured(self, monkeypatch):
        captured = {}

        def fake_run(self):
            captured["config"] = self.config
            captured["graphiql"] = self.graphiql

        monkeypatch.setattr(ReportingServer, "run", fake_run)
        return captured

    def test_defaults_to_loopback(self, runner, captured):
        result = runner.invoke(cli, ["serve"])

        assert result.exit_code == 0, result.output
        assert captured["config"].host == "127.0.0.1"
        assert captured["config"].port == 8080
        assert captured["graphiql"] is True

    def test_port_env_widens_bind(self, runner, captured, monkeypatch):
        monkeypatch.setenv("PORT", "10000")

        result = runner.invoke(cli, ["serve"])

        assert result.exit_code == 0, result.output
        assert captured["config"].host == "0.0.0.0"
        assert captured["config"].port == 10000

    def test_explicit_options_win(self, runner, captured, monkeypatch):
        monkeypatch.setenv("PORT", "10000")

        result = runner.invoke(cli, ["serve", "--host", "127.0.0.2", "--port", "9000"])

        assert result.exit_code == 0, result.output
        assert captured["config"].host == "127.0.0.2"
        assert captured["config"].port == 9000

    def test_reload_uses_import_string(self, runner, monkeypatch):
        calls = []
        monkeypatch.setattr(cli_module.uvicorn, "run", lambda *a, **kw: calls.append((a, kw)))

        result = runner.invoke(cli, ["serve", "--reload"])

        assert result.exit_code == 0, result.output
        args, kwargs = calls[0]
        assert args == ("usergraph.api.app:app",)
        assert kwargs["reload"] is True

    def test_startup_error_exits_nonzero(self, runner, monkeypatch):
        def boom(self):
            raise RuntimeError("no event loop for you")

        monkeypatch.setattr(ReportingServer, "run", boom)

        result = runner.invoke(cli, ["serve"])

        assert result.exit_code == 1


class TestBoundAddresses:
    def test_collects_tcp_sockets_only(self):
        tcp = SimpleNamespace(family=socket.AF_INET, getsockname=lambda: ("0.0.0.0", 8080))
        tcp6 = SimpleNamespace(family=socket.AF_INET6, getsockname=lambda: ("::", 8080, 0, 0))
        unix = SimpleNamespace(family=socket.AF_UNIX, getsockname=lambda: "/tmp/sock")
        servers = [SimpleNamespace(sockets=[tcp, unix]), SimpleNamespace(sockets=[tcp6])]

        assert bound_addresses(servers) == [  # type: ignore[arg-type]
            ServerConfig(host="0.0.0.0", port=8080),
            ServerConfig(host="::", port=8080),
        ]


@pytest.mark.integration
class TestReportingServer:
    """Address reporting after bind, and fatal bind failures."""

    @pytest.mark.asyncio
    async def test_startup_logs_bound_address(self, app, monkeypatch):
        sock = SimpleNamespace(family=socket.AF_INET, getsockname=lambda: ("0.0.0.0", 10000))

        async def fake_startup(self, sockets=None):
            self.servers = [SimpleNamespace(sockets=[sock])]

        monkeypatch.setattr(uvicorn.Server, "startup", fake_startup)
        logger = MagicMock()
        monkeypatch.setattr(cli_module, "logger", logger)

        server = ReportingServer(uvicorn.Config(app), graphiql=True)
        await server.startup()

        logger.info.assert_any_call(
            "Server running",
            address="http://0.0.0.0:10000",
            graphiql="http://0.0.0.0:10000/graphiql",
        )
        logger.info.assert_any_call(
            "Server running (friendly URL)", url="http://localhost:10000/graphiql"
        )

    @pytest.mark.asyncio
    async def test_startup_skips_report_when_exiting(self, app, monkeypatch):
        async def fake_startup(self, sockets=None):
            self.servers = []
            self.should_exit = True

        monkeypatch.setattr(uvicorn.Server, "startup", fake_startup)
        logger = MagicMock()
        monkeypatch.setattr(cli_module, "logger", logger)

        await ReportingServer(uvicorn.Config(app)).startup()

        logger.info.assert_not_called()

    def test_port_in_use_is_fatal(self, runner):
        holder = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        holder.bind(("127.0.0.1", 0))
        holder.listen()
        port = holder.getsockname()[1]

        try:
            result = runner.invoke(cli, ["serve", "--port", str(port), "--log-level", "error"])
        finally:
            holder.close()

        assert result.exit_code != 0
