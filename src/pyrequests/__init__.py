"""
pyrequests - HTTP requests with persistent cookies and reusable headers.

This package wraps a plain HTTP transport (httpx) with session semantics:
a cookie jar that is updated from every ``Set-Cookie`` response header,
headers that persist across calls, and percent-encoding of URL paths,
queries and form parameters.
"""

__version__ = "1.0.0"

from pyrequests.config import Config
from pyrequests.errors import ErrorKind, FormatError, OCRError, RequestError, RequestsError
from pyrequests.http.cookies import Cookie, CookieJar
from pyrequests.http.params import URLParam
from pyrequests.http.response import Response
from pyrequests.session import Session

__all__ = [
    "Config",
    "Cookie",
    "CookieJar",
    "ErrorKind",
    "FormatError",
    "OCRError",
    "RequestError",
    "RequestsError",
    "Response",
    "Session",
    "URLParam",
    "__version__",
]
