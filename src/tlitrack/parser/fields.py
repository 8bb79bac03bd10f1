"""Field extraction for semi-structured ``Key = value`` log lines."""

from typing import Optional


def extract_field(line: str, name: str) -> Optional[str]:
    """
    Extract the value following ``name`` in a ``name = value`` token.

    Locates the first occurrence of ``name``, skips optional whitespace and
    a literal ``=``, then reads the next whitespace-delimited token.

    Args:
        line: Raw log line
        name: Field name (e.g. "PageId")

    Returns:
        The value token, or None if the field is absent, has no ``=``,
        or the token is empty
    """
    idx = line.find(name)
    if idx < 0:
        return None

    rest = line[idx + len(name):].lstrip()
    if not rest.startswith("="):
        return None

    rest = rest[1:].lstrip()
    if not rest:
        return None
    return rest.split(maxsplit=1)[0]


def extract_int_field(line: str, name: str) -> Optional[int]:
    """
    Extract a non-negative integer field.

    Returns:
        The parsed value, or None if missing or not a plain decimal number
    """
    value = extract_field(line, name)
    if value is None or not value.isdigit() or not value.isascii():
        return None
    return int(value)
