"""Unit tests for statusbot_lite.__main__ and run_server."""

from __future__ import annotations

from argparse import Namespace
from unittest.mock import Mock

import pytest

import statusbot_lite
from statusbot_lite.__main__ import _create_parser, main
from statusbot_lite.api import server


@pytest.mark.unit
@pytest.mark.fast
class TestCreateParser:
    def test_create_parser_when_called_then_has_expected_prog(self) -> None:
        parser = _create_parser()
        assert parser.prog == "statusbot_lite"
        assert "StatusBot Lite" in parser.description

    def test_create_parser_parses_port_host_and_debug(self) -> None:
        args = _create_parser().parse_args(["--port", "3000", "--host", "127.0.0.1", "--debug"])
        assert args.port == 3000
        assert args.host == "127.0.0.1"
        assert args.debug is True

    def test_create_parser_when_no_args_then_defaults(self) -> None:
        args = _create_parser().parse_args([])
        assert args.port is None
        assert args.host is None
        assert args.debug is False

    def test_create_parser_when_invalid_port_then_exits(self) -> None:
        with pytest.raises(SystemExit):
            _create_parser().parse_args(["--port", "eighty"])


@pytest.mark.unit
class TestRunServer:
    def test_run_server_applies_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        start = Mock()
        monkeypatch.setattr(server, "_build_default_config_from_env", lambda: {"server_port": 8080})
        monkeypatch.setattr(server, "start_server", start)

        statusbot_lite.run_server(Namespace(port=3000, host="127.0.0.1", debug=True))

        start.assert_called_once_with(
            {"server_port": 3000, "server_bind": "127.0.0.1", "debug_logging": True}
        )

    def test_run_server_without_args_uses_env_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        start = Mock()
        monkeypatch.setattr(server, "_build_default_config_from_env", lambda: {"maps_api_key": "k"})
        monkeypatch.setattr(server, "start_server", start)

        statusbot_lite.run_server()

        start.assert_called_once_with({"maps_api_key": "k"})

    def test_main_runs_server_then_exits_zero(self, monkeypatch: pytest.MonkeyPatch) -> None:
        run = Mock()
        monkeypatch.setattr("statusbot_lite.__main__.run_server", run)
        monkeypatch.setattr("sys.argv", ["statusbot_lite", "--port", "9000"])

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 0
        assert run.call_args.args[0].port == 9000
