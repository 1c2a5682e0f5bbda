from pathlib import Path

import httpx
import pytest

from pyrequests.errors import FormatError
from pyrequests.http.response import Response


def _response(content: bytes = b"", status_code: int = 200, headers=None) -> Response:
    request = httpx.Request("GET", "http://example.test/")
    return Response(httpx.Response(status_code, headers=headers, content=content, request=request))


def test_json_from_embedded_object() -> None:
    response = _response(b'prefix{"a":1}suffix')

    assert response.json() == {"a": 1}
    assert response.json_value("a") == 1
    assert response.json_value("missing") is None


def test_json_is_cached() -> None:
    response = _response(b'{"a": {"b": 2}}')

    assert response.json() is response.json()


def test_json_without_braces_fails() -> None:
    with pytest.raises(FormatError):
        _response(b"plain text").json()


def test_json_invalid_object_chains_cause() -> None:
    with pytest.raises(FormatError) as excinfo:
        _response(b"{not json}").json()

    assert excinfo.value.__cause__ is not None


def test_text_and_content() -> None:
    response = _response("héllo".encode("utf-8"))

    assert response.text() == "héllo"
    assert response.text("latin-1") == "hÃ©llo"
    assert response.content == "héllo".encode("utf-8")


def test_headers_one_row_per_value() -> None:
    response = _response(headers=[("Set-Cookie", "a=1"), ("X-Test", "t"), ("Set-Cookie", "b=2")])

    rows = [row for row in response.headers() if row[0] != "Content-Length"]

    assert rows == [("Set-Cookie", "a=1"), ("X-Test", "t"), ("Set-Cookie", "b=2")]
    assert response.header("set-cookie") == "a=1"
    assert response.header("Missing") is None
    assert response.header_list("Set-Cookie") == ["a=1", "b=2"]


def test_status_code_for_error_response_body_is_buffered() -> None:
    response = _response(b"not found", status_code=404)

    assert response.status_code == 404
    assert response.text() == "not found"
    assert repr(response) == "<Response [404]>"


def test_write_to_file_replaces_content(tmp_path: Path) -> None:
    target = tmp_path / "body.bin"
    target.write_bytes(b"old content that is longer")

    _response(b"\x00new").write_to_file(target)

    assert target.read_bytes() == b"\x00new"


def test_write_to_file_propagates_os_error(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        _response(b"x").write_to_file(tmp_path / "missing" / "body.bin")


def test_print_helpers(capsys: pytest.CaptureFixture[str]) -> None:
    response = _response(b"body", headers={"X-Test": "t"})
    response.print_headers()
    response.print_text()

    out = capsys.readouterr().out
    assert out.startswith("Response Headers:\n")
    assert "X-Test: t\n" in out
    assert out.endswith("body\n")
