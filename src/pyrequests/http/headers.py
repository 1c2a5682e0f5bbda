"""Header file parsing and header mapping helpers.

Header names are kept exactly as given. No case normalization happens here,
so ``Accept`` and ``accept`` are two different entries.
"""

from pathlib import Path
from typing import Dict, Iterable, Mapping, Sequence, Tuple, Union

from pyrequests.errors import FormatError

HeaderInput = Union[Mapping[str, str], Iterable[Sequence[str]]]


def parse_header_line(line: str) -> Tuple[str, str]:
    """Split a ``Name: value`` line into a pair.

    Raises:
        FormatError: If the line has no colon or an empty name
    """
    name, sep, value = line.partition(':')
    name = name.strip()
    if not sep or not name:
        raise FormatError(f"Invalid header line: {line!r}")
    return name, value.strip()


def load_headers_from_file(header_file: str) -> Dict[str, str]:
    """Load HTTP headers from a ``Name: value`` file.

    Blank lines and ``#`` comments are ignored. A later line overwrites an
    earlier one with the same (case-sensitive) name.

    Args:
        header_file: Path to header file

    Returns:
        Dictionary of header name to value, empty if the file does not exist

    Raises:
        FormatError: If a line is not a ``Name: value`` pair; the message
            names the file and line number

    Example file format:
        Accept: application/json
        Authorization: Bearer token123
    """
    header_path = Path(header_file)
    if not header_path.exists():
        return {}

    headers = {}
    with open(header_path, 'r', encoding='utf-8') as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith('#'):
                continue

            try:
                name, value = parse_header_line(line)
            except FormatError as e:
                raise FormatError(f"{header_path}:{lineno}: {e}") from e
            headers[name] = value

    return headers


def to_header_dict(headers: HeaderInput) -> Dict[str, str]:
    """Build an ordered header dict from a mapping or a list of pairs.

    Later duplicates overwrite earlier ones.

    Args:
        headers: Mapping of name to value, or an iterable of
            ``(name, value)`` pairs

    Returns:
        New dictionary of header name to value

    Raises:
        FormatError: If a pair does not have exactly two items
    """
    if isinstance(headers, Mapping):
        return {str(name): str(value) for name, value in headers.items()}

    result = {}
    for index, pair in enumerate(headers):
        if isinstance(pair, str) or len(pair) != 2:
            raise FormatError(f"headers[{index}] must be a (name, value) pair, got {pair!r}")
        name, value = pair
        result[str(name)] = str(value)
    return result
