"""
Parsing of ``surah:verse`` references.
"""

import re
from typing import Optional

_REFERENCE_PATTERN = re.compile(r"^(\d+):(\d+)$")


def parse_verse_reference(reference: str) -> Optional[tuple[int, int]]:
    """
    Parse a verse reference such as ``"2:255"``.

    Args:
        reference: Reference in ``surah:verse`` form

    Returns:
        Tuple of (surah_number, verse_number), or None if the reference is
        malformed or out of range

    Examples:
        >>> parse_verse_reference("2:255")
        (2, 255)
        >>> parse_verse_reference("115:1") is None
        True
    """
    match = _REFERENCE_PATTERN.match(reference.strip())
    if not match:
        return None

    surah_number = int(match.group(1))
    verse_number = int(match.group(2))
    if 1 <= surah_number <= 114 and verse_number >= 1:
        return surah_number, verse_number
    return None
