"""Tests for the command-line interface and diagnostics."""

import json
from unittest.mock import patch

import pytest
from httpchain.cli import build_config, build_request, create_parser, main, parse_header
from httpchain.doctor import check_dependency, check_transports, run_doctor
from httpchain.models.config import ClientConfig, TransportName
from httpchain.models.message import HttpMethod
from rich.console import Console


class TestParseHeader:
    """Tests for command-line header parsing."""

    def test_name_and_value(self):
        assert parse_header("Accept: text/html") == ("Accept", "text/html")

    def test_value_with_colon(self):
        assert parse_header("Referer: http://example.com:8080/") == ("Referer", "http://example.com:8080/")

    def test_empty_value(self):
        assert parse_header("X-Empty:") == ("X-Empty", "")

    @pytest.mark.parametrize("raw", ["no colon here", ": value"])
    def test_invalid(self, raw):
        with pytest.raises(ValueError, match="Invalid header"):
            parse_header(raw)


class TestArguments:
    """Tests for turning arguments into config and requests."""

    def test_defaults(self):
        args = create_parser().parse_args(["http://example.com"])
        config = build_config(args)
        request = build_request(args)

        assert config == ClientConfig()
        assert request.method is HttpMethod.GET
        assert request.entity is None

    def test_overrides(self):
        args = create_parser().parse_args(
            ["-t", "socket", "-t", "urllib", "--timeout", "1.5", "-A", "cli/1", "--no-decode", "-v", "http://x.test"]
        )
        config = build_config(args)

        assert config.transports == [TransportName.SOCKET, TransportName.URLLIB]
        assert config.read_timeout == 1.5
        assert config.user_agent == "cli/1"
        assert config.decode_transfer_encoding is False
        assert config.decode_content_encoding is False
        assert config.log_level == "DEBUG"

    def test_data_defaults_to_form_post(self):
        args = create_parser().parse_args(["-d", "a=1", "http://example.com"])
        request = build_request(args)

        assert request.method is HttpMethod.POST
        assert request.entity.content == b"a=1"
        assert request.entity.content_type == "application/x-www-form-urlencoded"

    def test_data_uses_header_content_type(self):
        args = create_parser().parse_args(
            ["-X", "put", "-H", "content-type: application/json", "-d", "{}", "http://example.com"]
        )
        request = build_request(args)

        assert request.method is HttpMethod.PUT
        assert request.entity.content_type == "application/json"

    def test_config_file_with_overrides(self, tmp_path):
        pytest.importorskip("yaml")
        path = tmp_path / "httpchain.yaml"
        path.write_text(ClientConfig(transports=["urllib"], read_timeout=9).to_yaml())

        args = create_parser().parse_args(["--config", str(path), "--timeout", "2", "http://example.com"])
        config = build_config(args)

        assert config.transports == [TransportName.URLLIB]
        assert config.read_timeout == 2


class TestMain:
    """Tests for the httpchain command."""

    def test_get(self, http_server, capsys):
        assert main(["--transport", "socket", f"{http_server}/plain"]) == 0
        assert capsys.readouterr().out == "hello"

    def test_include_headers(self, http_server, capsys):
        assert main(["-i", "-t", "socket", f"{http_server}/chunked"]) == 0

        out = capsys.readouterr().out
        assert "HTTP 200" in out
        assert "Content-Type: text/plain" in out
        assert "Transfer-Encoding" not in out
        assert out.endswith("hello world")

    def test_post(self, http_server, capsys):
        assert main(["-t", "socket", "-H", "X-Test: 1", "-d", "a=1", f"{http_server}/echo"]) == 0

        echoed = json.loads(capsys.readouterr().out)
        assert echoed["method"] == "POST"
        assert echoed["body"] == "a=1"
        assert echoed["headers"]["X-Test"] == "1"
        assert echoed["headers"]["Content-Type"] == "application/x-www-form-urlencoded"

    def test_error_status(self, http_server, capsys):
        assert main(["-t", "socket", f"{http_server}/missing"]) == 1
        assert capsys.readouterr().out == "not found"

    def test_request_failure(self, capsys):
        with patch("socket.create_connection", side_effect=ConnectionRefusedError("refused")):
            assert main(["-q", "-t", "socket", "http://example.com/"]) == 1
        assert "Could not open socket" in capsys.readouterr().err

    def test_missing_url(self, capsys):
        assert main([]) == 1
        assert "Please provide a URL" in capsys.readouterr().err

    def test_bad_header(self, capsys):
        assert main(["-H", "broken", "http://example.com"]) == 1
        assert "Invalid header" in capsys.readouterr().err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--version"])
        assert excinfo.value.code == 0
        assert "httpchain" in capsys.readouterr().out

    def test_doctor(self, capsys):
        assert main(["--doctor"]) == 0
        assert "All checks passed" in capsys.readouterr().out


class TestDoctor:
    """Tests for the diagnostics."""

    def test_check_dependency(self):
        assert check_dependency("json") == (True, "[OK] json")
        assert check_dependency("not_a_real_module_xyz", "fake") == (False, "[MISSING] fake")
        assert check_dependency("not_a_real_module_xyz", "fake", optional=True)[0] is False

    def test_check_transports(self):
        results = check_transports(ClientConfig(transports=["socket"]))

        assert [name for name, _, _ in results] == ["requests", "urllib", "socket"]
        assert all(available for _, available, _ in results)
        assert [enabled for _, _, enabled in results] == [False, False, True]

    def test_no_usable_transport(self):
        console = Console(record=True)
        with patch("httpchain.doctor.check_transports", return_value=[("socket", False, True)]):
            assert run_doctor(ClientConfig(), console=console) == 1
        assert "No enabled transport is available" in console.export_text()

    def test_missing_core_dependency(self):
        console = Console(record=True)
        with patch("httpchain.doctor.check_dependency", return_value=(False, "[MISSING] x")):
            assert run_doctor(ClientConfig(), console=console) == 1
        assert "core dependencies are missing" in console.export_text()
