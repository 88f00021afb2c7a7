"""
Surah metadata lookups backed by the bundled reference tables.
"""

from tartil.models import Surah
from tartil.models.surah import SURAH_AYAH_COUNTS, SURAH_NAMES


def _check_surah_number(surah_number: int) -> None:
    if surah_number < 1 or surah_number > 114:
        raise ValueError(f"Invalid surah number: {surah_number}. Must be 1-114.")


def get_ayah_count(surah_number: int) -> int:
    """
    Get the total number of ayahs in a surah.

    Args:
        surah_number: Surah number (1-114)

    Returns:
        Number of ayahs in the surah
    """
    _check_surah_number(surah_number)
    return SURAH_AYAH_COUNTS[surah_number]


def get_all_surahs() -> list[Surah]:
    """
    Get metadata for all 114 surahs.

    Returns:
        List of Surah objects with metadata
    """
    return [Surah.from_id(i) for i in range(1, 115)]


def get_surah(surah_number: int) -> Surah:
    """
    Get metadata for a specific surah.

    Args:
        surah_number: Surah number (1-114)

    Returns:
        Surah object with metadata
    """
    _check_surah_number(surah_number)
    return Surah.from_id(surah_number)


def get_surah_name(surah_number: int) -> str:
    """
    Get the transliterated name of a surah.

    Args:
        surah_number: Surah number (1-114)

    Returns:
        Name of the surah
    """
    _check_surah_number(surah_number)
    return SURAH_NAMES[surah_number]
