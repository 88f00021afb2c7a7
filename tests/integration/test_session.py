import pytest

from conftest import FakeLocator, FakeProvider, Recorder, make_verses, url_for
from tartil import ReadingSession
from tartil.audio import ChainedLocator, EveryAyahLocator, ScriptedAudioEngine
from tartil.config import TartilSettings
from tartil.exceptions import QuranDataError, UnknownReciterError
from tartil.models import PlaybackState, Severity
from tartil.session import default_locator


@pytest.fixture
def session(engine, locator, sink, provider, settings, recorder):
    s = ReadingSession(
        engine,
        locator=locator,
        sink=sink,
        provider=provider,
        settings=settings,
        on_verse_changed=recorder.verse_changed,
        on_play_state_changed=recorder.play_state_changed,
        on_progress_changed=recorder.progress_changed,
    )
    yield s
    s.close()


def test_load_surah_strips_bismillah(session, sink):
    audio_set = session.load_surah(112)

    assert len(audio_set) == 4
    assert audio_set.verse_at(0).text == "قُلْ هُوَ اللَّهُ أَحَدٌ"
    assert session.surah_number == 112
    assert session.sequencer.audio_set is audio_set
    assert sink.messages == []


def test_fatiha_keeps_bismillah_as_first_verse(session):
    audio_set = session.load_surah(1)

    assert len(audio_set) == 7
    assert audio_set.verse_at(0).text.startswith("بِسْمِ")


def test_load_failure_is_reported_and_raised(session, sink):
    with pytest.raises(QuranDataError):
        session.load_surah(2)

    assert sink.messages == [("Failed to load surah", Severity.ERROR)]
    assert session.audio_set is None


def test_inconsistent_verse_data(engine, locator, sink, settings):
    provider = FakeProvider({3: make_verses(3, ["a", "b"])[1:]})
    session = ReadingSession(engine, locator=locator, sink=sink, provider=provider, settings=settings)

    with pytest.raises(QuranDataError):
        session.load_surah(3)
    assert sink.of_severity(Severity.ERROR) == ["Failed to load surah"]


@pytest.mark.parametrize("number", [0, 115])
def test_load_surah_rejects_invalid_number(session, number):
    with pytest.raises(ValueError):
        session.load_surah(number)


def test_view_state_follows_playback(session, engine, recorder):
    session.load_surah(112)
    session.controls.play_verse(0)

    assert session.current_verse == 0
    assert session.is_playing is False

    engine.start()
    engine.tick(0.5, 2.0)

    assert session.is_playing is True
    assert session.playing_verse == 0
    assert session.progress == 0.25

    engine.finish()
    assert session.current_verse == 1
    assert session.progress == 0.0
    engine.start()

    session.controls.toggle_play_pause()
    assert session.is_playing is False
    assert session.playing_verse is None
    assert session.current_verse == 1

    assert recorder.of_kind("verse") == [(0, 1), (1, 2)]
    assert recorder.of_kind("progress") == [(0.25,)]


def test_plays_whole_surah_to_the_end(session, engine, recorder):
    session.load_surah(112)
    session.controls.play_verse(0)

    while session.sequencer.state in (PlaybackState.LOADING, PlaybackState.PLAYING):
        engine.start()
        engine.finish()

    assert recorder.of_kind("verse") == [(i, i + 1) for i in range(4)]
    assert session.sequencer.state == PlaybackState.IDLE
    assert session.is_playing is False
    assert session.playing_verse is None


def test_loading_another_surah_resets_playback(session, engine):
    session.load_surah(1)
    session.controls.play_verse(5)
    engine.start()

    session.load_surah(112)

    assert session.sequencer.state == PlaybackState.IDLE
    assert session.current_verse == 0
    assert session.is_playing is False


def test_set_reciter_restarts_with_new_voice(session, engine, locator):
    session.load_surah(112)
    session.controls.play_verse(2)
    engine.start()

    session.set_reciter("ar.abdulbasitmurattal")

    assert session.reciter.id == "ar.abdulbasitmurattal"
    assert session.sequencer.state == PlaybackState.IDLE
    assert session.current_verse == 0

    session.controls.toggle_play_pause()
    assert locator.requests[-1] == (112, 1, "ar.abdulbasitmurattal")


def test_set_unknown_reciter(session):
    with pytest.raises(UnknownReciterError):
        session.set_reciter("ar.nobody")
    assert session.reciter.id == "ar.alafasy"


def test_unknown_initial_reciter(engine, provider, settings):
    with pytest.raises(UnknownReciterError):
        ReadingSession(engine, provider=provider, settings=settings, reciter_id="ar.nobody")


def test_go_to_loads_surah_and_highlights(session):
    session.load_surah(1)

    index = session.go_to("112:3")

    assert index == 2
    assert session.surah_number == 112
    assert session.highlighted_verse == 3

    session.controls.play_verse(index)
    assert session.highlighted_verse is None


@pytest.mark.parametrize("reference", ["nonsense", "112:9", "0:1"])
def test_go_to_invalid_reference(session, reference):
    session.load_surah(112)

    assert session.go_to(reference) is None
    assert session.highlighted_verse is None


def test_toggle_bookmark(session, sink, settings):
    session.load_surah(112)

    assert session.toggle_bookmark(1, "God, the Eternal") is True
    assert session.is_bookmarked(1)
    assert settings.bookmarks_path.exists()
    assert session.bookmarks.get(112, 2).translation_text == "God, the Eternal"

    assert session.toggle_bookmark(1) is False
    assert not session.is_bookmarked(1)

    assert sink.messages == [
        ("Bookmark saved", Severity.SUCCESS),
        ("Bookmark removed", Severity.INFO),
    ]


def test_toggle_bookmark_invalid_index(session):
    with pytest.raises(IndexError):
        session.toggle_bookmark(0)

    session.load_surah(112)
    with pytest.raises(IndexError):
        session.toggle_bookmark(4)
    assert session.is_bookmarked(4) is False


def test_keyboard_shortcuts_drive_session(session, engine):
    session.load_surah(1)

    session.shortcuts.handle_key(" ")
    engine.start()
    session.shortcuts.handle_key("ArrowLeft")

    assert session.current_verse == 1
    assert engine.current.url == url_for(1, 2)


def test_playback_error_is_notified(engine, sink, provider, settings):
    session = ReadingSession(
        engine,
        locator=FakeLocator(missing={(112, 2)}),
        sink=sink,
        provider=provider,
        settings=settings,
    )
    session.load_surah(112)
    session.controls.play_verse(0)
    engine.start()

    engine.finish()

    assert session.sequencer.state == PlaybackState.ERROR
    assert session.current_verse == 1
    assert sink.messages == [("Error loading audio", Severity.ERROR)]


def test_close_stops_and_closes_provider(session, provider, engine):
    session.load_surah(1)
    session.controls.play_verse(0)

    session.close()

    assert provider.closed is True
    assert session.sequencer.state == PlaybackState.IDLE
    assert engine.current is None


def test_default_locator(tmp_path):
    assert isinstance(default_locator(TartilSettings()), EveryAyahLocator)

    chained = default_locator(TartilSettings(local_audio_dir=tmp_path))
    assert isinstance(chained, ChainedLocator)
    assert chained.resolve(1, 1, "ar.alafasy").endswith("/Alafasy_128kbps/001001.mp3")


def test_default_locator_prefers_uploads(tmp_path, provider, sink):
    upload = tmp_path / "112" / "112001_1700000000000.mp3"
    upload.parent.mkdir()
    upload.write_bytes(b"ID3")
    engine = ScriptedAudioEngine()
    settings = TartilSettings(local_audio_dir=tmp_path, bookmarks_path=tmp_path / "b.json")
    recorder = Recorder()
    session = ReadingSession(
        engine, sink=sink, provider=provider, settings=settings, on_verse_changed=recorder.verse_changed
    )

    session.load_surah(112)
    session.controls.play_verse(0)
    session.controls.play_verse(1)

    assert [s.url for s in engine.loaded] == [
        str(upload),
        "https://everyayah.com/data/Alafasy_128kbps/112002.mp3",
    ]
    assert recorder.of_kind("verse") == [(0, 1), (1, 2)]
