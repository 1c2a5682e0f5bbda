"""Multi-valued URL parameters."""

import threading
from typing import Dict, Iterator, List, Optional
from urllib.parse import quote

import click


def percent_encode(text: str) -> str:
    """Percent-encode text as UTF-8, keeping only RFC 3986 unreserved characters."""
    return quote(text, safe='', encoding='utf-8')


class URLParam:
    """Ordered collection of query or form parameters.

    Each key maps to an insertion-ordered set of distinct values, so adding
    the same value twice for one key is a no-op. Keys keep the order in
    which they were first added.

    All operations on one instance are mutually exclusive.

    Example:
        >>> param = URLParam()
        >>> param.add("q", "a b")
        >>> param.encoded_string()
        'q=a%20b'
    """

    def __init__(self):
        # dict values double as ordered sets
        self._params: Dict[str, Dict[str, None]] = {}
        self._lock = threading.RLock()

    def add(self, key: str, value: str) -> None:
        with self._lock:
            self._params.setdefault(key, {})[value] = None

    def remove(self, key: str, value: Optional[str] = None) -> bool:
        """Remove a whole key, or a single value of a key.

        Removing the last value of a key removes the key as well.

        Args:
            key: Parameter name
            value: Value to remove; None removes every value of the key

        Returns:
            True if something was removed
        """
        with self._lock:
            if value is None:
                return self._params.pop(key, None) is not None

            values = self._params.get(key)
            if values is None or value not in values:
                return False
            del values[value]
            if not values:
                del self._params[key]
            return True

    def get(self, key: str) -> Optional[str]:
        """Return the first value added for the key, or None."""
        with self._lock:
            values = self._params.get(key)
            if not values:
                return None
            return next(iter(values))

    def get_set(self, key: str) -> Optional[List[str]]:
        """Return all values of the key in insertion order, or None."""
        with self._lock:
            values = self._params.get(key)
            return list(values) if values is not None else None

    def encoded_string(self) -> str:
        """Return ``key=value`` pairs joined by ``&``, percent-encoded as UTF-8.

        Returns:
            Encoded parameter string, or ``""`` when there are no parameters
        """
        with self._lock:
            return '&'.join(
                f"{percent_encode(key)}={percent_encode(value)}"
                for key, values in self._params.items()
                for value in values
            )

    def raw_string(self) -> str:
        """Return ``key=value`` pairs joined by ``&`` without any encoding."""
        with self._lock:
            return '&'.join(
                f"{key}={value}"
                for key, values in self._params.items()
                for value in values
            )

    def print(self) -> None:
        """Write the parameters to stdout for debugging."""
        with self._lock:
            click.echo("Param:")
            for key, values in self._params.items():
                for value in values:
                    click.echo(f"{key}: {value}")

    def __len__(self) -> int:
        with self._lock:
            return len(self._params)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._params

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._params))

    def __repr__(self) -> str:
        return f"URLParam({self.raw_string()!r})"
