"""HTTP transport helpers using httpx directly.

A fresh ``httpx.Client`` is created for every request and closed once the
response body has been drained; nothing is pooled across calls. The client
never stores cookies of its own: cookie state belongs to ``Session``.

The module-level ``get`` and ``post`` are one-shot requests without session
headers or a cookie jar.
"""

import logging
from typing import Dict, Mapping, Optional, Union

import httpx

from pyrequests.config import Config
from pyrequests.errors import RequestError
from pyrequests.http.params import URLParam
from pyrequests.http.response import Response
from pyrequests.http.urls import encode_url

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = 'application/x-www-form-urlencoded'

Body = Union[str, URLParam, None]


def create_client(config: Optional[Config] = None) -> httpx.Client:
    """Create an httpx client from configuration.

    Args:
        config: Configuration object (defaults to ``Config()``)

    Returns:
        Configured httpx.Client instance

    Example:
        >>> with create_client(Config()) as client:
        ...     response = client.get(url)
    """
    config = config or Config()
    return httpx.Client(
        follow_redirects=config.follow_redirects,
        trust_env=config.trust_env,
        transport=config.transport,
    )


def body_text(data: Body) -> str:
    """Turn a request body argument into the text to send."""
    if data is None:
        return ''
    if isinstance(data, URLParam):
        return data.encoded_string()
    return data


def encode_headers(headers: Mapping[str, str]) -> Dict[str, bytes]:
    """Encode header values as UTF-8 bytes.

    httpx encodes ``str`` values as ASCII, which would reject cookies and
    headers carrying non-ASCII text.
    """
    return {name: value.encode('utf-8') for name, value in headers.items()}


def send_request(
    method: str,
    url: str,
    headers: Optional[Mapping[str, str]] = None,
    content: Optional[str] = None,
    config: Optional[Config] = None,
) -> Response:
    """Send one request on a fresh client and buffer the response.

    Args:
        method: HTTP method
        url: Target URL, sent as given
        headers: Request headers, applied in mapping order
        content: Request body text, encoded as UTF-8
        config: Configuration object

    Returns:
        Buffered Response

    Raises:
        RequestError: If connecting, sending or receiving fails
    """
    logger.debug(f"{method} {url}")
    try:
        with create_client(config) as client:
            request = client.build_request(
                method,
                url,
                headers=encode_headers(headers) if headers else None,
                content=content.encode('utf-8') if content is not None else None,
            )
            return Response(client.send(request, stream=True))
    except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError, UnicodeError) as e:
        raise RequestError(f"{method} {url} failed: {e}") from e


def get(url: str, params: Optional[URLParam] = None, config: Optional[Config] = None) -> Response:
    """Send a GET request without session headers or cookies.

    Without ``params`` the URL is sent as given, so it must already be
    encoded. With ``params`` the URL path and the parameters are encoded.

    Raises:
        FormatError: If the URL cannot be encoded
        RequestError: If the request fails
    """
    if params is not None:
        url = f"{encode_url(url)}?{params.encoded_string()}"
    return send_request('GET', url, config=config)


def post(url: str, data: Body = None, config: Optional[Config] = None) -> Response:
    """Send a POST request without session headers or cookies.

    The URL path is percent-encoded. A ``URLParam`` body is sent encoded;
    a string body is sent as given.

    Raises:
        FormatError: If the URL cannot be encoded
        RequestError: If the request fails
    """
    url = encode_url(url)
    headers = {'Content-Type': FORM_CONTENT_TYPE}
    return send_request('POST', url, headers=headers, content=body_text(data), config=config)
