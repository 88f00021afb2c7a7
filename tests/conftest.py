import pytest

from tartil.audio import AudioResourceLocator, ScriptedAudioEngine
from tartil.config import TartilSettings, reset_settings
from tartil.core import VersePlaybackSequencer
from tartil.data import BookmarkStore, VerseProvider
from tartil.exceptions import QuranDataError
from tartil.models import SurahAudioSet, Verse
from tartil.notifications import RecordingNotificationSink

FATIHA = [
    "بِسْمِ اللَّهِ الرَّحْمَٰنِ الرَّحِيمِ",
    "الْحَمْدُ لِلَّهِ رَبِّ الْعَالَمِينَ",
    "الرَّحْمَٰنِ الرَّحِيمِ",
    "مَالِكِ يَوْمِ الدِّينِ",
    "إِيَّاكَ نَعْبُدُ وَإِيَّاكَ نَسْتَعِينُ",
    "اهْدِنَا الصِّرَاطَ الْمُسْتَقِيمَ",
    "صِرَاطَ الَّذِينَ أَنْعَمْتَ عَلَيْهِمْ غَيْرِ الْمَغْضُوبِ عَلَيْهِمْ وَلَا الضَّالِّينَ",
]


def make_verses(surah_number, texts):
    return [
        Verse(surah_number=surah_number, number_in_surah=i, text=text)
        for i, text in enumerate(texts, start=1)
    ]


class FakeLocator(AudioResourceLocator):
    """Resolves every verse to ``mem://SSS/VVV`` unless told otherwise."""

    def __init__(self, missing=(), raising=None):
        self.missing = set(missing)
        self.raising = raising
        self.requests = []

    def resolve(self, surah_number, number_in_surah, reciter_id):
        self.requests.append((surah_number, number_in_surah, reciter_id))
        if self.raising is not None:
            raise self.raising
        if (surah_number, number_in_surah) in self.missing:
            return None
        return url_for(surah_number, number_in_surah)


def url_for(surah_number, number_in_surah):
    return f"mem://{surah_number:03d}/{number_in_surah:03d}"


class FakeProvider(VerseProvider):
    def __init__(self, surahs):
        self.surahs = surahs
        self.closed = False

    def get_surah_verses(self, surah_number):
        if surah_number not in self.surahs:
            raise QuranDataError("Surah not available", surah_number=surah_number)
        return list(self.surahs[surah_number])

    def close(self):
        self.closed = True


class Recorder:
    """Collects sequencer notifications in one ordered log."""

    def __init__(self):
        self.events = []

    def verse_changed(self, index, number_in_surah):
        self.events.append(("verse", index, number_in_surah))

    def play_state_changed(self, playing):
        self.events.append(("playing", playing))

    def progress_changed(self, fraction):
        self.events.append(("progress", fraction))

    def of_kind(self, kind):
        return [e[1:] for e in self.events if e[0] == kind]


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    for name in ("TARTIL_API_BASE", "TARTIL_AUDIO_BASE", "TARTIL_DEFAULT_RECITER", "TARTIL_LOCAL_AUDIO_DIR"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings(tmp_path):
    return TartilSettings(bookmarks_path=tmp_path / "bookmarks.json")


@pytest.fixture
def fatiha():
    return SurahAudioSet(surah_number=1, verses=tuple(make_verses(1, FATIHA)))


@pytest.fixture
def engine():
    return ScriptedAudioEngine()


@pytest.fixture
def sink():
    return RecordingNotificationSink()


@pytest.fixture
def locator():
    return FakeLocator()


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def sequencer(engine, locator, sink, recorder, fatiha):
    seq = VersePlaybackSequencer(
        engine,
        locator,
        sink,
        on_verse_changed=recorder.verse_changed,
        on_play_state_changed=recorder.play_state_changed,
        on_progress_changed=recorder.progress_changed,
    )
    seq.reset(fatiha, "ar.alafasy")
    return seq


@pytest.fixture
def provider():
    return FakeProvider({
        1: make_verses(1, FATIHA),
        112: make_verses(112, [
            "بِسْمِ اللَّهِ الرَّحْمَٰنِ الرَّحِيمِ قُلْ هُوَ اللَّهُ أَحَدٌ",
            "اللَّهُ الصَّمَدُ",
            "لَمْ يَلِدْ وَلَمْ يُولَدْ",
            "وَلَمْ يَكُن لَّهُ كُفُوًا أَحَدٌ",
        ]),
    })


@pytest.fixture
def bookmarks(tmp_path):
    return BookmarkStore(tmp_path / "bookmarks.json")
