"""HTTP building blocks for pyrequests.

Uses httpx directly as the transport, one client per request.
"""

from pyrequests.http.client import (
    create_client,
    get,
    post,
    send_request,
)
from pyrequests.http.cookies import Cookie, CookieJar, load_cookies_from_file, parse_cookie
from pyrequests.http.headers import load_headers_from_file, to_header_dict
from pyrequests.http.params import URLParam
from pyrequests.http.response import Response
from pyrequests.http.urls import encode_query_url, encode_url

__all__ = [
    "create_client",
    "get",
    "post",
    "send_request",
    "Cookie",
    "CookieJar",
    "load_cookies_from_file",
    "parse_cookie",
    "load_headers_from_file",
    "to_header_dict",
    "URLParam",
    "Response",
    "encode_query_url",
    "encode_url",
]
