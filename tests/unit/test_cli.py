"""
Unit tests for the command-line entry point.
"""

import logging
import socket

import pytest

from minihttp import __version__
from minihttp.__main__ import build_parser, config_from_args, main
from minihttp.config import ServerConfig


def test_flags_override_base():
    args = build_parser().parse_args(["--port", "3000", "-r", "/srv/site", "--log-format", "json"])
    config = config_from_args(args, ServerConfig(port=9000, host="0.0.0.0"))

    assert config.port == 3000
    assert config.static_root == "/srv/site"
    assert config.log_format == "json"
    assert config.host == "0.0.0.0"


def test_no_flags_keeps_base():
    args = build_parser().parse_args([])
    base = ServerConfig(port=1234, timeout=3.0)
    assert config_from_args(args, base) == base


def test_environment_below_flags(monkeypatch):
    monkeypatch.setenv("MINIHTTP_PORT", "4000")
    monkeypatch.setenv("MINIHTTP_HOST", "0.0.0.0")
    args = build_parser().parse_args(["-p", "5000"])
    config = config_from_args(args, ServerConfig.from_env())

    assert config.port == 5000
    assert config.host == "0.0.0.0"


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        build_parser().parse_args(["--version"])

    assert exc.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_bad_log_level_rejected():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--log-level", "LOUD"])


def test_invalid_port_exits_1(capsys):
    assert main(["--port", "70000"]) == 1
    assert "Invalid port" in capsys.readouterr().err


def test_busy_port_exits_1(monkeypatch):
    for name in ("MINIHTTP_HOST", "MINIHTTP_PORT"):
        monkeypatch.delenv(name, raising=False)

    package_logger = logging.getLogger("minihttp")
    saved_level = package_logger.level

    holder = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    holder.bind(("127.0.0.1", 0))
    holder.listen(1)
    try:
        port = holder.getsockname()[1]
        assert main(["--host", "127.0.0.1", "--port", str(port), "-l", "WARNING"]) == 1
    finally:
        holder.close()
        package_logger.setLevel(saved_level)
