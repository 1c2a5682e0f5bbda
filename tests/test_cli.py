from pathlib import Path

import httpx
import pytest
from click.testing import CliRunner

from pyrequests import cli as cli_module
from pyrequests.config import Config
from tests.conftest import RecordingTransport


@pytest.fixture
def transport(monkeypatch: pytest.MonkeyPatch):
    """Route every Config built by the CLI through a recording mock transport."""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            headers={"Set-Cookie": "sid=abc", "X-Echo": request.method},
            text=f"{request.method} {request.url.raw_path.decode()} {request.content.decode()}",
        )

    recording = RecordingTransport(handler)
    original_init = Config.__post_init__

    def post_init(self) -> None:
        original_init(self)
        self.transport = recording

    monkeypatch.setattr(Config, "__post_init__", post_init)
    return recording


def test_version() -> None:
    result = CliRunner().invoke(cli_module.cli, ["--version"])

    assert result.exit_code == 0
    assert "pyrequests version" in result.output


def test_get_prints_body(transport) -> None:
    result = CliRunner().invoke(
        cli_module.cli,
        ["get", "http://example.test/a b", "-p", "q=x y", "-H", "X-Test: 1", "-H", "Cookie: c=1"],
    )

    assert result.exit_code == 0, result.output
    assert "GET /a%20b?q=x%20y" in result.output
    assert transport.last.headers["X-Test"] == "1"
    assert transport.last.headers["Cookie"] == "c=1"


def test_post_with_data_and_cookies(transport) -> None:
    result = CliRunner().invoke(
        cli_module.cli,
        ["post", "http://example.test/login", "-d", "user=alice", "--show-headers", "--show-cookies"],
    )

    assert result.exit_code == 0, result.output
    assert "Status: 200" in result.output
    assert "X-Echo: POST" in result.output
    assert "POST /login user=alice" in result.output
    assert "sid: abc" in result.output


def test_post_rejects_data_and_params(transport) -> None:
    result = CliRunner().invoke(
        cli_module.cli, ["post", "http://example.test/", "-d", "a=1", "-p", "b=2"],
    )

    assert result.exit_code == 2


def test_get_writes_output_file(transport, tmp_path: Path) -> None:
    target = tmp_path / "out.txt"

    result = CliRunner().invoke(cli_module.cli, ["get", "http://example.test/f", "-o", str(target)])

    assert result.exit_code == 0, result.output
    assert target.read_text() == "GET /f "
    assert "Saved 7 bytes" in result.output


def test_invalid_url_fails(transport) -> None:
    result = CliRunner().invoke(cli_module.cli, ["post", "no-scheme"])

    assert result.exit_code == 1
    assert "Failed" in result.output
