"""Cookie storage and parsing.

The jar keeps at most one cookie per name. It understands both the
``Cookie`` request header (several ``name=value`` pairs) and ``Set-Cookie``
response headers (one pair followed by attributes). Netscape cookie files,
as written by browsers and curl, can be loaded as well.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

import click

from pyrequests.errors import FormatError

logger = logging.getLogger(__name__)

# RFC 6265 token characters
_TOKEN_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


@dataclass(frozen=True)
class Cookie:
    """A single name/value cookie.

    Domain, path and expiry are not modeled; the name is the identity.
    """

    name: str
    value: str

    def __str__(self) -> str:
        return f"{self.name}={self.value}"


def parse_cookie(text: str) -> Cookie:
    """Parse one cookie assignment.

    Accepts a bare ``name=value`` pair or a full ``Set-Cookie`` value. Only
    the leading pair is kept; attributes such as ``Path`` or ``Expires`` are
    discarded.

    Args:
        text: Cookie text, optionally prefixed with ``Set-Cookie:``

    Returns:
        Parsed Cookie

    Raises:
        FormatError: If the text holds no valid ``name=value`` pair
    """
    pair = text.strip()
    if pair.lower().startswith('set-cookie:'):
        pair = pair[len('set-cookie:'):]

    pair = pair.split(';', 1)[0].strip()
    name, sep, value = pair.partition('=')
    name = name.strip()
    value = value.strip()

    if not sep:
        raise FormatError(f"Invalid cookie (missing '='): {text!r}")
    if not _TOKEN_RE.match(name):
        raise FormatError(f"Invalid cookie name: {name!r}")

    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        value = value[1:-1]

    return Cookie(name=name, value=value)


class CookieJar:
    """Ordered cookie store, de-duplicated by name.

    Adding a cookie whose name is already present replaces the value at the
    existing position. Not thread-safe.
    """

    def __init__(self, cookies: Optional[Iterable[Cookie]] = None):
        self._cookies: List[Cookie] = []
        if cookies is not None:
            self.add_many(cookies)

    def add(self, cookie: Union[Cookie, str], value: Optional[str] = None) -> None:
        """Add a cookie, overwriting any cookie with the same name.

        Args:
            cookie: A Cookie (or any object with ``name`` and ``value``), a
                cookie name when ``value`` is given, or ``Set-Cookie`` text
                when it is a string without ``value``
            value: Cookie value, only used together with a name

        Raises:
            FormatError: If ``cookie`` is text that cannot be parsed
        """
        if value is not None:
            cookie = Cookie(name=str(cookie), value=value)
        elif isinstance(cookie, str):
            cookie = parse_cookie(cookie)
        elif not isinstance(cookie, Cookie):
            cookie = Cookie(name=cookie.name, value=cookie.value)

        for i, existing in enumerate(self._cookies):
            if existing.name == cookie.name:
                self._cookies[i] = cookie
                return
        self._cookies.append(cookie)

    def add_many(self, cookies: Iterable[Cookie]) -> None:
        """Add several cookies, each with overwrite-by-name semantics."""
        for cookie in cookies:
            self.add(cookie)

    def add_from_header_list(self, text: str) -> None:
        """Parse a ``Cookie`` request header value and add every pair.

        Args:
            text: Header value such as ``"a=1; b=2"``

        Raises:
            FormatError: On the first malformed pair. Pairs before it stay
                in the jar.
        """
        for segment in text.split(';'):
            segment = segment.strip()
            if not segment:
                continue
            self.add(parse_cookie(segment))

    def add_from_set_cookie(self, text: str) -> None:
        """Parse a single ``Set-Cookie`` value and add its name/value pair."""
        self.add(parse_cookie(text))

    def serialize(self) -> str:
        """Return the jar as a ``Cookie`` header value.

        Returns:
            ``"name1=value1; name2=value2"`` in jar order, or ``""`` when empty
        """
        return '; '.join(str(cookie) for cookie in self._cookies)

    def value_of(self, name: str) -> Optional[str]:
        """Return the value of the named cookie, or None if absent."""
        for cookie in self._cookies:
            if cookie.name == name:
                return cookie.value
        return None

    def pair_string(self, name: str) -> Optional[str]:
        """Return ``"name=value"`` for the named cookie, or None if absent."""
        for cookie in self._cookies:
            if cookie.name == name:
                return str(cookie)
        return None

    @property
    def cookies(self) -> List[Cookie]:
        """Copy of the stored cookies in jar order."""
        return list(self._cookies)

    def print_cookies(self) -> None:
        """Write the jar contents to stdout for debugging."""
        click.echo("Cookies:")
        for cookie in self._cookies:
            click.echo(f"{cookie.name}: {cookie.value}")

    def __len__(self) -> int:
        return len(self._cookies)

    def __iter__(self) -> Iterator[Cookie]:
        return iter(list(self._cookies))

    def __contains__(self, name: object) -> bool:
        return any(cookie.name == name for cookie in self._cookies)

    def __repr__(self) -> str:
        return f"CookieJar({self.serialize()!r})"


def load_cookies_from_file(cookie_file: str) -> List[Cookie]:
    """Load cookies from Netscape cookie file format.

    The Netscape cookie format is:
    # domain flag path secure expiration name value

    Only name and value are kept; the jar does not model the other columns.

    Args:
        cookie_file: Path to cookie file

    Returns:
        List of Cookie objects

    Example file format:
        # Netscape HTTP Cookie File
        .example.com    TRUE    /    FALSE    1735689600    sessionid    abc123
    """
    cookies = []
    cookie_path = Path(cookie_file)

    if not cookie_path.exists():
        return cookies

    with open(cookie_path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()

            # curl marks HttpOnly cookies with this prefix
            if line.startswith('#HttpOnly_'):
                line = line[len('#HttpOnly_'):]

            # Skip comments and empty lines
            if not line or line.startswith('#'):
                continue

            parts = line.split('\t')
            if len(parts) < 7:
                logger.debug(f"Skipping malformed cookie line: {line!r}")
                continue

            name, value = parts[5], parts[6]
            cookies.append(Cookie(name=name, value=value))

    return cookies
