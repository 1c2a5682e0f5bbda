"""URL percent-encoding helpers.

Both helpers expect *unencoded* input. Text that is already percent-encoded
gets encoded again (``%`` becomes ``%25``).
"""

from pyrequests.errors import FormatError
from pyrequests.http.params import percent_encode


def encode_url(url: str) -> str:
    """Percent-encode every path segment of a URL.

    ``scheme://authority`` is kept verbatim. Each ``/``-delimited segment
    after it is encoded on its own, so the slashes survive. Do not pass a
    query string: ``?`` and ``&`` would be encoded as path characters. Use
    ``encode_query_url`` for URLs with parameters.

    Args:
        url: URL such as ``"http://example.test/a b/c"``

    Returns:
        Encoded URL, e.g. ``"http://example.test/a%20b/c"``

    Raises:
        FormatError: If the URL has no ``://`` scheme delimiter
    """
    if not isinstance(url, str):
        raise FormatError(f"URL must be a string, got {type(url).__name__}")

    scheme, sep, rest = url.partition('://')
    if not sep:
        raise FormatError(f"Invalid URL (missing '://'): {url!r}")

    authority, slash, path = rest.partition('/')
    if not slash:
        return url

    segments = [percent_encode(segment) for segment in path.split('/')]
    return f"{scheme}://{authority}/{'/'.join(segments)}"


def encode_query_url(url: str) -> str:
    """Percent-encode the path and every query pair of a URL.

    The path is encoded with ``encode_url``. The query is split on ``&``;
    each pair is split on its first ``=`` and both sides are encoded. A
    key without ``=`` is emitted as ``key=``.

    Args:
        url: URL, optionally with a query, e.g. ``"http://h/p?q=a b&flag"``

    Returns:
        Encoded URL, e.g. ``"http://h/p?q=a%20b&flag="``

    Raises:
        FormatError: If the URL has no ``://`` scheme delimiter
    """
    base, sep, query = url.partition('?')
    if not sep:
        return encode_url(url)

    pairs = []
    for item in query.split('&'):
        key, _, value = item.partition('=')
        pairs.append(f"{percent_encode(key)}={percent_encode(value)}")

    return f"{encode_url(base)}?{'&'.join(pairs)}"
