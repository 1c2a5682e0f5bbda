"""Read-once wrapper around a completed HTTP exchange."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import click
import httpx

from pyrequests.errors import FormatError

logger = logging.getLogger(__name__)


class Response:
    """Buffered response of one request.

    The body is read exactly once, when the Response is built, and the
    underlying stream is closed right after. Every accessor works on the
    cached bytes. httpx exposes error bodies (4xx/5xx) on the same stream, so
    they are buffered the same way.

    Attributes:
        raw: The completed httpx.Response, kept for status and headers only
    """

    def __init__(self, response: httpx.Response):
        """Drain the body of a completed exchange.

        Args:
            response: httpx.Response whose body has not been consumed
        """
        self.raw = response
        try:
            self._content: bytes = response.read()
        finally:
            response.close()
        self._json: Optional[Dict[str, Any]] = None

    @property
    def content(self) -> bytes:
        """Buffered body bytes."""
        return self._content

    def text(self, encoding: str = 'utf-8') -> str:
        """Decode the body.

        Args:
            encoding: Codec name (UTF-8 by default)

        Raises:
            LookupError: If the encoding is unknown
        """
        return self._content.decode(encoding, errors='replace')

    def json(self) -> Dict[str, Any]:
        """Parse the JSON object embedded in the body.

        The object is taken from the first ``{`` to the last ``}`` of the
        text, so surrounding noise such as a JSONP wrapper is ignored. Arrays
        at the root and several top-level objects are not supported. The
        result is computed once and cached.

        Returns:
            Parsed JSON object

        Raises:
            FormatError: If the body holds no ``{...}`` span or it is not a
                valid JSON object
        """
        if self._json is None:
            text = self.text()
            start = text.find('{')
            end = text.rfind('}')
            if start == -1 or end < start:
                raise FormatError("Response body does not contain a JSON object")

            try:
                data = json.loads(text[start:end + 1])
            except json.JSONDecodeError as e:
                raise FormatError(f"Invalid JSON in response body: {e}") from e

            if not isinstance(data, dict):
                raise FormatError("Response JSON is not an object")
            self._json = data

        return self._json

    def json_value(self, key: str) -> Any:
        """Return one member of ``json()``, or None if it is missing."""
        return self.json().get(key)

    def headers(self) -> List[Tuple[str, str]]:
        """Return all response headers as ``(name, value)`` rows.

        A header received N times yields N rows with the same name, in
        the order they arrived.
        """
        encoding = self.raw.headers.encoding
        return [
            (name.decode(encoding), value.decode(encoding))
            for name, value in self.raw.headers.raw
        ]

    def header(self, name: str) -> Optional[str]:
        """Return the first value of a header, or None.

        Lookup is case-insensitive, as HTTP header names are.
        """
        values = self.raw.headers.get_list(name)
        return values[0] if values else None

    def header_list(self, name: str) -> List[str]:
        return self.raw.headers.get_list(name)

    @property
    def status_code(self) -> int:
        """HTTP status code, or -1 if it cannot be determined."""
        try:
            return int(self.raw.status_code)
        except (AttributeError, TypeError, ValueError):
            return -1

    @property
    def url(self) -> str:
        """Final URL of the exchange (after redirects)."""
        return str(self.raw.url)

    def write_to_file(self, path: Union[str, Path]) -> Path:
        """Write the body to a file, replacing any existing content.

        Args:
            path: Destination file path

        Returns:
            Path that was written

        Raises:
            OSError: If the file cannot be written
        """
        dest_path = Path(path)
        dest_path.write_bytes(self._content)
        logger.debug(f"Wrote {len(self._content)} bytes to {dest_path}")
        return dest_path

    def print_headers(self) -> None:
        """Write the response headers to stdout for debugging."""
        click.echo("Response Headers:")
        for name, value in self.headers():
            click.echo(f"{name}: {value}")

    def print_text(self) -> None:
        click.echo(self.text())

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}]>"
