import base64
import json
from urllib.parse import parse_qs

import httpx
import pytest

from pyrequests.errors import ErrorKind, OCRError
from pyrequests.ocr import OCRClient
from pyrequests.session import Session


def _form(request: httpx.Request) -> dict:
    return {key: values[0] for key, values in parse_qs(request.content.decode("utf-8")).items()}


def _ocr_handler(request: httpx.Request) -> httpx.Response:
    form = _form(request)
    if request.url.path == "/oauth/2.0/token":
        if form.get("client_secret") != "secret":
            return httpx.Response(401, json={"error": "invalid_client"})
        return httpx.Response(200, json={"access_token": "tok", "expires_in": 2592000})

    assert form["access_token"] == "tok"
    assert base64.b64decode(form["image"]) == b"\x89PNG"
    body = {"words_result": [{"words": "first line"}, {"words": "second"}], "words_result_num": 2}
    return httpx.Response(200, text=json.dumps(body))


def test_recognize(make_config) -> None:
    config = make_config(_ocr_handler)
    ocr = OCRClient("key", "secret", session=Session(config=config))

    assert ocr.token == "tok"
    assert ocr.recognize_lines(b"\x89PNG") == ["first line", "second"]
    assert ocr.recognize(b"\x89PNG") == "first line\nsecond\n"

    token_request = config.transport.requests[0]
    assert _form(token_request) == {
        "grant_type": "client_credentials",
        "client_id": "key",
        "client_secret": "secret",
    }


def test_token_rejected(make_config) -> None:
    session = Session(config=make_config(_ocr_handler))

    with pytest.raises(OCRError) as excinfo:
        OCRClient("key", "wrong", session=session)

    assert excinfo.value.kind is ErrorKind.OCR
    assert "invalid_client" in str(excinfo.value)


def test_transport_failure_is_wrapped(make_config) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(OCRError) as excinfo:
        OCRClient("key", "secret", session=Session(config=make_config(handler)))

    assert excinfo.value.__cause__ is not None


def test_missing_words_result(make_config) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/oauth/2.0/token":
            return httpx.Response(200, json={"access_token": "tok"})
        return httpx.Response(200, json={"error_code": 17, "error_msg": "Open api daily request limit reached"})

    ocr = OCRClient("key", "secret", session=Session(config=make_config(handler)))

    with pytest.raises(OCRError, match="words_result"):
        ocr.recognize(b"img")
