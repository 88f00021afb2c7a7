from conftest import FATIHA, make_verses
from tartil.core import BISMILLAH, strip_bismillah
from tartil.core.bismillah import BISMILLAH_UTHMANI
from tartil.models import SurahAudioSet

IKHLAS_1 = "قُلْ هُوَ اللَّهُ أَحَدٌ"


def test_prefix_is_removed_from_first_verse():
    verses = make_verses(112, [f"{BISMILLAH} {IKHLAS_1}", "اللَّهُ الصَّمَدُ"])

    result = strip_bismillah(verses, 112)

    assert [v.text for v in result] == [IKHLAS_1, "اللَّهُ الصَّمَدُ"]
    assert [v.number_in_surah for v in result] == [1, 2]


def test_uthmani_spelling_and_leading_bom_are_recognised():
    verses = make_verses(112, [f"\ufeff{BISMILLAH_UTHMANI} {IKHLAS_1}"])

    assert strip_bismillah(verses, 112)[0].text == IKHLAS_1


def test_standalone_bismillah_verse_is_dropped_and_rest_renumbered():
    verses = make_verses(113, [BISMILLAH, "a", "b", "c"])

    result = strip_bismillah(verses, 113)

    assert [(v.number_in_surah, v.text) for v in result] == [(1, "a"), (2, "b"), (3, "c")]
    SurahAudioSet(surah_number=113, verses=tuple(result))


def test_fatiha_is_exempt():
    verses = make_verses(1, FATIHA)

    result = strip_bismillah(verses, 1)

    assert result == verses
    assert result[0].text == BISMILLAH


def test_custom_exempt_set():
    verses = make_verses(9, [f"{BISMILLAH} x"])

    assert strip_bismillah(verses, 9, exempt=())[0].text == "x"
    assert strip_bismillah(verses, 9)[0].text == f"{BISMILLAH} x"


def test_verse_without_prefix_is_untouched():
    verses = make_verses(2, ["الم", "ذَٰلِكَ الْكِتَابُ"])

    assert strip_bismillah(verses, 2) == verses


def test_input_is_not_modified():
    verses = make_verses(112, [f"{BISMILLAH} {IKHLAS_1}"])

    strip_bismillah(verses, 112)

    assert verses[0].text.startswith(BISMILLAH)


def test_empty_surah():
    assert strip_bismillah([], 50) == []


def test_custom_prefix():
    verses = make_verses(20, ["In the name of God, x"])

    result = strip_bismillah(verses, 20, prefixes=("In the name of God,",))

    assert result[0].text == "x"
