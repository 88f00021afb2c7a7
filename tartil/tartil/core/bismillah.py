"""
Bismillah normalisation for loaded surahs.

Text sources prefix the first verse of most surahs with the Bismillah. It is
recited before the surah but is not part of verse 1 (except in Al-Fatiha,
where it is verse 1, and At-Tawbah, which has none), so it is removed once
when a surah is loaded rather than during playback or display.
"""

from typing import Iterable, Sequence

from tartil.models import Verse

BISMILLAH = "بِسْمِ اللَّهِ الرَّحْمَٰنِ الرَّحِيمِ"
# Uthmani script spells the definite article with alef wasla
BISMILLAH_UTHMANI = "بِسْمِ ٱللَّهِ ٱلرَّحْمَٰنِ ٱلرَّحِيمِ"

BISMILLAH_PREFIXES: tuple[str, ...] = (BISMILLAH, BISMILLAH_UTHMANI)
EXEMPT_SURAHS: frozenset[int] = frozenset({1, 9})

# U+FEFF shows up at the start of some API payloads
_LEADING_JUNK = "\ufeff \t\r\n"


def strip_bismillah(
    verses: Sequence[Verse],
    surah_number: int,
    prefixes: Iterable[str] = BISMILLAH_PREFIXES,
    exempt: Iterable[int] = EXEMPT_SURAHS,
) -> list[Verse]:
    """
    Remove a leading Bismillah from the first verse of a surah.

    If the first verse starts with one of ``prefixes`` the prefix is removed
    from its text. A first verse that consists of nothing but the Bismillah is
    dropped and the remaining verses are renumbered from 1 so that
    ``number_in_surah == index + 1`` still holds.

    Args:
        verses: Verses of the surah, in order
        surah_number: Surah the verses belong to
        prefixes: Bismillah spellings to recognise
        exempt: Surahs left untouched (1 and 9 by default)

    Returns:
        New list of verses; the input is not modified

    Examples:
        >>> v = Verse(surah_number=112, number_in_surah=1, text=BISMILLAH + " قُلْ هُوَ اللَّهُ أَحَدٌ")
        >>> strip_bismillah([v], 112)[0].text
        'قُلْ هُوَ اللَّهُ أَحَدٌ'
    """
    result = list(verses)
    if surah_number in set(exempt) or not result:
        return result

    first = result[0]
    text = first.text.lstrip(_LEADING_JUNK)
    for prefix in prefixes:
        if text.startswith(prefix):
            remainder = text[len(prefix):].strip()
            if remainder:
                result[0] = first.model_copy(update={"text": remainder})
                return result
            return [
                v.model_copy(update={"number_in_surah": i})
                for i, v in enumerate(result[1:], start=1)
            ]
    return result
