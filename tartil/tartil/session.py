"""
Reading session: the host around the playback sequencer.

A ReadingSession loads surah text, normalises it, hands it to the sequencer
and keeps the view state (which verse is current, playing or highlighted)
in step with the sequencer's notifications.
"""

from typing import Callable, Optional

from tartil._logging import get_logger, log_error, log_surah_loaded
from tartil.audio.base import AudioEngine
from tartil.audio.locator import (
    AudioResourceLocator,
    ChainedLocator,
    EveryAyahLocator,
    LocalAudioLocator,
)
from tartil.config import TartilSettings, get_settings
from tartil.core.bismillah import strip_bismillah
from tartil.core.controls import KeyboardShortcuts, PlaybackControls
from tartil.core.sequencer import VersePlaybackSequencer
from tartil.data.base import VerseProvider
from tartil.data.bookmarks import BookmarkStore
from tartil.data.quran_api import QuranCloudClient
from tartil.data.reciters import get_reciter
from tartil.data.references import parse_verse_reference
from tartil.exceptions import QuranDataError
from tartil.models import Severity, SurahAudioSet
from tartil.notifications import LoggingNotificationSink, NotificationSink

logger = get_logger(__name__)


def default_locator(settings: TartilSettings) -> AudioResourceLocator:
    """Remote verse audio, preferring local uploads when a directory is configured."""
    remote = EveryAyahLocator(settings.audio_base)
    if settings.local_audio_dir is not None:
        return ChainedLocator(LocalAudioLocator(settings.local_audio_dir), remote)
    return remote


class ReadingSession:
    """
    Loads surahs and drives verse playback for one reader.

    Example:
        session = ReadingSession(engine)
        session.load_surah(1)
        session.controls.play_verse(0)

    Args:
        engine: Audio backend
        locator: Verse audio locator (default: EveryAyah, local uploads first
            if ``local_audio_dir`` is configured)
        sink: User-facing notifications (default: logging)
        provider: Verse text source (default: alquran.cloud client)
        bookmarks: Bookmark store (default: file at ``bookmarks_path``)
        settings: Settings instance to use
        reciter_id: Initial reciter (default: ``default_reciter``)
        on_verse_changed, on_play_state_changed, on_progress_changed:
            Optional view callbacks, called after the session updated its
            own state
    """

    def __init__(
        self,
        engine: AudioEngine,
        locator: AudioResourceLocator | None = None,
        sink: NotificationSink | None = None,
        provider: VerseProvider | None = None,
        bookmarks: BookmarkStore | None = None,
        settings: TartilSettings | None = None,
        reciter_id: str | None = None,
        on_verse_changed: Optional[Callable[[int, int], None]] = None,
        on_play_state_changed: Optional[Callable[[bool], None]] = None,
        on_progress_changed: Optional[Callable[[float], None]] = None,
    ):
        self.settings = settings or get_settings()
        self.engine = engine
        self.sink = sink or LoggingNotificationSink()
        self.provider = provider or QuranCloudClient(settings=self.settings)
        self._bookmarks = bookmarks
        self.reciter = get_reciter(reciter_id or self.settings.default_reciter)

        self.on_verse_changed = on_verse_changed
        self.on_play_state_changed = on_play_state_changed
        self.on_progress_changed = on_progress_changed

        self.sequencer = VersePlaybackSequencer(
            engine,
            locator or default_locator(self.settings),
            self.sink,
            on_verse_changed=self._handle_verse_changed,
            on_play_state_changed=self._handle_play_state_changed,
            on_progress_changed=self._handle_progress_changed,
        )
        self.controls = PlaybackControls(self.sequencer)
        self.shortcuts = KeyboardShortcuts(self.controls)

        self.audio_set: Optional[SurahAudioSet] = None
        self.current_verse = 0
        self.playing_verse: Optional[int] = None
        self.highlighted_verse: Optional[int] = None
        self.is_playing = False
        self.progress = 0.0

    @property
    def surah_number(self) -> Optional[int]:
        return self.audio_set.surah_number if self.audio_set is not None else None

    @property
    def bookmarks(self) -> BookmarkStore:
        if self._bookmarks is None:
            self._bookmarks = BookmarkStore(self.settings.bookmarks_path)
        return self._bookmarks

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_surah(self, surah_number: int) -> SurahAudioSet:
        """
        Fetch, normalise and load a surah for playback.

        Raises:
            ValueError: If surah_number is out of range
            QuranDataError: If the text cannot be loaded (also reported to the sink)
        """
        if surah_number < 1 or surah_number > 114:
            raise ValueError(f"Invalid surah number: {surah_number}. Must be 1-114.")

        try:
            verses = self.provider.get_surah_verses(surah_number)
            verses = strip_bismillah(
                verses, surah_number, exempt=self.settings.bismillah_exempt_surahs
            )
            audio_set = SurahAudioSet(surah_number=surah_number, verses=tuple(verses))
        except QuranDataError as e:
            log_error("Failed to load surah", surah=surah_number, error=e)
            self.sink.notify("Failed to load surah", Severity.ERROR)
            raise
        except ValueError as e:
            log_error("Surah text is inconsistent", surah=surah_number, error=e)
            self.sink.notify("Failed to load surah", Severity.ERROR)
            raise QuranDataError(f"Inconsistent verse data: {e}", surah_number=surah_number) from e

        self.audio_set = audio_set
        self.current_verse = 0
        self.playing_verse = None
        self.highlighted_verse = None
        self.progress = 0.0
        self.sequencer.reset(audio_set, self.reciter.id)
        log_surah_loaded(surah_number, len(audio_set), self.reciter.id)
        return audio_set

    def set_reciter(self, reciter_id: str) -> None:
        """
        Switch reciter. Playback stops and restarts from the first verse.

        Raises:
            UnknownReciterError: If the reciter is not in the catalog
        """
        self.reciter = get_reciter(reciter_id)
        self.playing_verse = None
        self.progress = 0.0
        if self.audio_set is not None:
            self.current_verse = 0
            self.sequencer.reset(self.audio_set, self.reciter.id)

    def go_to(self, reference: str) -> Optional[int]:
        """
        Navigate to a ``surah:verse`` reference and highlight it.

        Loads the surah if another one is open.

        Returns:
            Index of the verse in the loaded surah, or None if the reference
            is malformed or out of range
        """
        parsed = parse_verse_reference(reference)
        if parsed is None:
            return None

        surah_number, verse_number = parsed
        if self.surah_number != surah_number:
            self.load_surah(surah_number)

        index = verse_number - 1
        if not self.audio_set.is_valid_index(index):
            return None
        self.highlighted_verse = verse_number
        return index

    # ------------------------------------------------------------------
    # Bookmarks
    # ------------------------------------------------------------------

    def toggle_bookmark(self, index: int, translation_text: str | None = None) -> bool:
        """
        Bookmark the verse at ``index`` or remove its bookmark.

        Returns:
            True if a bookmark was added
        """
        if self.audio_set is None or not self.audio_set.is_valid_index(index):
            raise IndexError(f"No verse at index {index}")

        added = self.bookmarks.toggle(self.audio_set.verse_at(index), translation_text)
        if added:
            self.sink.notify("Bookmark saved", Severity.SUCCESS)
        else:
            self.sink.notify("Bookmark removed", Severity.INFO)
        return added

    def is_bookmarked(self, index: int) -> bool:
        if self.audio_set is None or not self.audio_set.is_valid_index(index):
            return False
        return self.bookmarks.is_bookmarked(self.audio_set.surah_number, index + 1)

    # ------------------------------------------------------------------
    # Sequencer notifications
    # ------------------------------------------------------------------

    def _handle_verse_changed(self, index: int, number_in_surah: int) -> None:
        self.current_verse = index
        self.playing_verse = index
        self.highlighted_verse = None
        self.progress = 0.0
        if self.on_verse_changed:
            self.on_verse_changed(index, number_in_surah)

    def _handle_play_state_changed(self, playing: bool) -> None:
        self.is_playing = playing
        self.playing_verse = self.current_verse if playing else None
        if self.on_play_state_changed:
            self.on_play_state_changed(playing)

    def _handle_progress_changed(self, fraction: float) -> None:
        self.progress = fraction
        if self.on_progress_changed:
            self.on_progress_changed(fraction)

    def close(self) -> None:
        """Stop playback and release the text client."""
        self.sequencer.stop()
        close = getattr(self.provider, "close", None)
        if callable(close):
            close()
