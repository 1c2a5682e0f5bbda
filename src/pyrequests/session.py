"""Request session with persistent headers and cookies.

A Session remembers its headers between calls and folds every ``Set-Cookie``
it receives into its cookie jar, so the next request carries the merged
``Cookie`` header automatically.
"""

import logging
from typing import Dict, List, Optional, Tuple

import click

from pyrequests.config import Config
from pyrequests.errors import FormatError
from pyrequests.http.client import FORM_CONTENT_TYPE, Body, body_text, send_request
from pyrequests.http.cookies import CookieJar, load_cookies_from_file
from pyrequests.http.headers import HeaderInput, load_headers_from_file, to_header_dict
from pyrequests.http.params import URLParam
from pyrequests.http.response import Response
from pyrequests.http.urls import encode_url

logger = logging.getLogger(__name__)

COOKIE_HEADER = 'Cookie'
SET_COOKIE_HEADER = 'Set-Cookie'


class Session:
    """Reusable request context carrying headers and a cookie jar.

    Header names are matched case-sensitively, exactly as stored. The
    ``Cookie`` header is always recomputed from the jar right before a
    request is sent, overriding any ``Cookie`` header set by hand.

    Not thread-safe: share a Session across threads only with external
    locking.

    Attributes:
        config: Configuration used for every transport this session opens

    Example:
        >>> session = Session.create_default()
        >>> response = session.get("http://example.test/login")
        >>> session.cookie_jar.serialize()
        'sid=abc'
    """

    def __init__(
        self,
        headers: Optional[HeaderInput] = None,
        config: Optional[Config] = None,
    ):
        """Initialize session.

        Args:
            headers: Initial headers. A ``Cookie`` entry is parsed into the
                cookie jar.
            config: Configuration object (defaults to ``Config()``)
        """
        self.config = config or Config()
        self._cookie_jar = CookieJar()
        self._headers: Dict[str, str] = to_header_dict(headers) if headers else {}

        cookie = self._headers.get(COOKIE_HEADER)
        if cookie:
            self._cookie_jar.add_from_header_list(cookie)

    @classmethod
    def create_default(cls, config: Optional[Config] = None) -> 'Session':
        """Create a session with browser-like default headers.

        The defaults are ``Accept: */*``, ``Connection: keep-alive`` and
        the configured ``User-Agent``.
        """
        config = config or Config()
        headers = {
            'Accept': '*/*',
            'Connection': 'keep-alive',
            'User-Agent': config.user_agent,
        }
        return cls(headers, config)

    @classmethod
    def from_config(cls, config: Config) -> 'Session':
        """Create a default session seeded from the config's header and cookie files."""
        session = cls.create_default(config)

        if config.header_file:
            for name, value in load_headers_from_file(config.header_file).items():
                session.add_header(name, value)
            cookie = session.get_header(COOKIE_HEADER)
            if cookie:
                session.add_cookies(cookie)

        if config.cookie_file:
            session.cookie_jar.add_many(load_cookies_from_file(config.cookie_file))

        return session

    @property
    def follow_redirects(self) -> bool:
        return self.config.follow_redirects

    @follow_redirects.setter
    def follow_redirects(self, value: bool) -> None:
        self.config.follow_redirects = value

    # Headers

    def set_headers(self, headers: HeaderInput) -> None:
        """Replace all headers.

        Args:
            headers: Mapping of name to value, or ``(name, value)`` pairs

        Raises:
            FormatError: If a pair does not have exactly two items
        """
        self._headers = to_header_dict(headers)

    def add_header(self, name: str, value: str) -> None:
        """Set a header, overwriting any value stored under the same name."""
        self._headers[name] = value

    def get_header(self, name: str) -> Optional[str]:
        return self._headers.get(name)

    def remove_header(self, name: str) -> Optional[str]:
        """Remove a header and return its value, or None if it was not set."""
        return self._headers.pop(name, None)

    @property
    def headers(self) -> List[Tuple[str, str]]:
        """Stored headers as ``(name, value)`` pairs in stored order."""
        return list(self._headers.items())

    @property
    def header_dict(self) -> Dict[str, str]:
        """The live header mapping."""
        return self._headers

    def print_headers(self) -> None:
        """Write the stored headers to stdout for debugging."""
        click.echo("Request Headers:")
        for name, value in self._headers.items():
            click.echo(f"{name}: {value}")

    # Cookies

    @property
    def cookie_jar(self) -> CookieJar:
        return self._cookie_jar

    @cookie_jar.setter
    def cookie_jar(self, jar: CookieJar) -> None:
        self._cookie_jar = jar

    def add_cookie(self, cookie: str, value: Optional[str] = None) -> None:
        """Add one cookie.

        Args:
            cookie: Cookie name when ``value`` is given, otherwise a
                ``Set-Cookie`` style string
            value: Cookie value

        Raises:
            FormatError: If the cookie text cannot be parsed
        """
        if value is None:
            self._cookie_jar.add_from_set_cookie(cookie)
        else:
            self._cookie_jar.add(cookie, value)

    def add_cookies(self, cookies: str) -> None:
        """Add every pair of a ``Cookie`` header value such as ``"a=1; b=2"``."""
        self._cookie_jar.add_from_header_list(cookies)

    def print_cookies(self) -> None:
        self._cookie_jar.print_cookies()

    # Requests

    def get(self, url: str, params: Optional[URLParam] = None) -> Response:
        """Send a GET request.

        Without ``params`` the URL is sent as given and must already be
        encoded. With ``params`` the URL path is percent-encoded and the
        encoded parameters are appended after ``?``. Do not put parameters
        in ``url`` in that case.

        Args:
            url: Target URL
            params: Query parameters

        Returns:
            Buffered Response

        Raises:
            FormatError: If the URL cannot be encoded
            RequestError: If the request fails
        """
        if params is not None:
            url = f"{encode_url(url)}?{params.encoded_string()}"
        return self._request('GET', url)

    def post(self, url: str, data: Body = None) -> Response:
        """Send a POST request.

        The URL path is percent-encoded. A string body is sent as given
        (UTF-8), so encode it beforehand if needed; a ``URLParam`` body is
        percent-encoded; None sends an empty body.

        Args:
            url: Target URL without parameters
            data: Request body

        Returns:
            Buffered Response

        Raises:
            FormatError: If the URL cannot be encoded
            RequestError: If the request fails
        """
        url = encode_url(url)
        return self._request('POST', url, body_text(data))

    def _compose_headers(self, with_body: bool) -> Dict[str, str]:
        headers = {
            name: value
            for name, value in self._headers.items()
            if name != COOKIE_HEADER
        }
        if with_body and 'Content-Type' not in headers:
            headers['Content-Type'] = FORM_CONTENT_TYPE

        cookie = self._cookie_jar.serialize()
        if cookie:
            headers[COOKIE_HEADER] = cookie
        return headers

    def _request(self, method: str, url: str, content: Optional[str] = None) -> Response:
        headers = self._compose_headers(with_body=content is not None)
        response = send_request(method, url, headers=headers, content=content, config=self.config)
        self._fold_in_cookies(response)
        return response

    def _fold_in_cookies(self, response: Response) -> None:
        """Merge every ``Set-Cookie`` of the response into the jar.

        Malformed values are skipped, so the jar may stay partly unmerged.
        """
        set_cookies = response.header_list(SET_COOKIE_HEADER)
        if not set_cookies:
            return

        for set_cookie in set_cookies:
            try:
                self._cookie_jar.add_from_set_cookie(set_cookie)
            except FormatError as e:
                logger.warning(f"Ignoring malformed Set-Cookie from {response.url}: {e}")

        self._headers[COOKIE_HEADER] = self._cookie_jar.serialize()
        logger.debug(f"Cookie jar now holds {len(self._cookie_jar)} cookies")
