"""
Verse playback sequencer.

Plays the verses of one surah one after another, advancing automatically
when a verse's audio completes, while letting the host jump to any verse or
toggle play/pause at any time.

State machine:

    IDLE    --play_verse-->                     LOADING
    LOADING --engine started-->                 PLAYING
    LOADING --engine/locator failure-->         ERROR
    PLAYING --toggle-->                         PAUSED
    PAUSED  --toggle-->                         PLAYING
    PLAYING --completion, next verse exists-->  LOADING (index + 1)
    PLAYING --completion, last verse-->         IDLE (no active verse)
    ERROR   --play_verse / toggle-->            LOADING

Every engine event carries the AudioSource it belongs to. Only events for the
currently active source are acted on, so a late completion or error from a
source that a newer ``play_verse`` call replaced changes nothing.
"""

import math
from typing import Callable, Optional

from tartil._logging import get_logger, log_playback_error, log_surah_finished, log_verse_started
from tartil.audio.base import AudioEngine, AudioSource
from tartil.audio.locator import AudioResourceLocator
from tartil.exceptions import AudioResourceError, PlaybackError
from tartil.models import PlaybackFailure, PlaybackState, Severity, SurahAudioSet, VerseRef
from tartil.notifications import NotificationSink

logger = get_logger(__name__)

VerseChangedCallback = Callable[[int, int], None]
PlayStateCallback = Callable[[bool], None]
ProgressCallback = Callable[[float], None]

FAILURE_MESSAGES: dict[PlaybackFailure, str] = {
    PlaybackFailure.UNAVAILABLE: "Error loading audio",
    PlaybackFailure.AUTOPLAY_BLOCKED: "Audio playback was blocked, press play to start",
    PlaybackFailure.DEVICE: "Error playing audio",
}


class VersePlaybackSequencer:
    """
    Sequential verse player for one surah at a time.

    Args:
        engine: Audio backend; the sequencer binds itself as its listener
        locator: Maps (surah, verse, reciter) to a playable resource
        sink: Receives user-facing error messages
        on_verse_changed: Called with ``(index, number_in_surah)`` whenever a
            verse is about to play, before any audio is requested
        on_play_state_changed: Called with ``is_playing`` whenever it changes
        on_progress_changed: Called with the fraction ``[0, 1]`` of the current verse
            played so far
        messages: Overrides for the user-facing failure messages

    The sequencer starts IDLE with verse 0 pending and no surah loaded; call
    ``reset()`` to hand it a surah.
    """

    def __init__(
        self,
        engine: AudioEngine,
        locator: AudioResourceLocator,
        sink: NotificationSink,
        on_verse_changed: Optional[VerseChangedCallback] = None,
        on_play_state_changed: Optional[PlayStateCallback] = None,
        on_progress_changed: Optional[ProgressCallback] = None,
        messages: dict[PlaybackFailure, str] | None = None,
    ) -> None:
        self._engine = engine
        self._locator = locator
        self._sink = sink
        self.on_verse_changed = on_verse_changed
        self.on_play_state_changed = on_play_state_changed
        self.on_progress_changed = on_progress_changed
        self._messages = {**FAILURE_MESSAGES, **(messages or {})}

        self._audio_set: Optional[SurahAudioSet] = None
        self._reciter_id: Optional[str] = None
        self._state = PlaybackState.IDLE
        # Live index cell: engine callbacks read it when they fire
        self._current_index: Optional[int] = 0
        self._active: Optional[AudioSource] = None
        self._progress = 0.0
        self._generation = 0

        engine.bind(self)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state == PlaybackState.PLAYING

    @property
    def current_index(self) -> Optional[int]:
        """Index of the active (or pending) verse; None after the surah ended."""
        return self._current_index

    @property
    def current_ref(self) -> Optional[VerseRef]:
        if self._audio_set is None or not self._audio_set.is_valid_index(self._current_index):
            return None
        return self._audio_set.ref_at(self._current_index)

    @property
    def audio_set(self) -> Optional[SurahAudioSet]:
        return self._audio_set

    @property
    def reciter_id(self) -> Optional[str]:
        return self._reciter_id

    @property
    def progress(self) -> float:
        return self._progress

    @property
    def active_source(self) -> Optional[AudioSource]:
        return self._active

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def reset(self, audio_set: SurahAudioSet, reciter_id: str) -> None:
        """
        Replace the surah (and/or reciter) being played.

        Stops any playback, forgets the previous verse list and returns to
        IDLE with verse 0 pending.
        """
        self._generation += 1
        self._release_source()
        self._audio_set = audio_set
        self._reciter_id = reciter_id
        self._current_index = 0
        self._progress = 0.0
        self._set_state(PlaybackState.IDLE)

    def play_verse(self, index: int) -> None:
        """
        Start playing the verse at ``index`` (0-based).

        Out-of-range or non-integer indices are ignored.
        """
        audio_set = self._audio_set
        if audio_set is None or not audio_set.is_valid_index(index):
            logger.debug(f"Ignoring play_verse({index!r})")
            return

        self._generation += 1
        generation = self._generation
        verse = audio_set.verse_at(index)

        self._release_source()
        self._current_index = index
        self._progress = 0.0
        self._emit_verse_changed(index, verse.number_in_surah)
        if generation != self._generation:
            # the verse-changed callback already moved on to another verse
            return
        self._set_state(PlaybackState.LOADING)
        if generation != self._generation:
            return

        try:
            url = self._locator.resolve(audio_set.surah_number, verse.number_in_surah, self._reciter_id)
        except AudioResourceError as e:
            self._fail(PlaybackFailure.UNAVAILABLE, str(e))
            return
        if not url:
            self._fail(
                PlaybackFailure.UNAVAILABLE,
                f"No audio for Surah {audio_set.surah_number} Verse {verse.number_in_surah}",
            )
            return

        source = self._engine.load(url)
        self._active = source
        log_verse_started(audio_set.surah_number, verse.number_in_surah, url)
        try:
            self._engine.play(source)
        except PlaybackError as e:
            if self._active is source:
                self._fail(e.reason, str(e))

    def toggle_play_pause(self) -> PlaybackState:
        """
        Pause when playing, resume when paused, otherwise start playing.

        From IDLE or ERROR playback starts at the current verse (verse 0
        after the surah ended). Ignored while a verse is still loading.

        Returns:
            The state after the toggle
        """
        if self._state == PlaybackState.PLAYING:
            self._engine.pause(self._active)
            self._set_state(PlaybackState.PAUSED)
        elif self._state == PlaybackState.PAUSED:
            source = self._active
            # PLAYING before resuming: the engine may report completion or an
            # error synchronously and those must not be overwritten
            self._set_state(PlaybackState.PLAYING)
            try:
                self._engine.play(source)
            except PlaybackError as e:
                if self._active is source:
                    self._fail(e.reason, str(e))
        elif self._state in (PlaybackState.IDLE, PlaybackState.ERROR):
            index = self._current_index if self._current_index is not None else 0
            self.play_verse(index)
        return self._state

    def stop(self) -> None:
        """Stop playback and return to IDLE, keeping the current verse."""
        self._generation += 1
        self._release_source()
        self._progress = 0.0
        self._set_state(PlaybackState.IDLE)

    # ------------------------------------------------------------------
    # Engine events
    # ------------------------------------------------------------------

    def on_started(self, source: AudioSource) -> None:
        if source is not self._active:
            return
        if self._state == PlaybackState.LOADING:
            self._set_state(PlaybackState.PLAYING)

    def on_ended(self, source: AudioSource) -> None:
        if source is not self._active:
            return
        if self._state not in (PlaybackState.PLAYING, PlaybackState.LOADING):
            return

        next_index = (self._current_index if self._current_index is not None else -1) + 1
        if self._audio_set is not None and next_index < len(self._audio_set):
            self.play_verse(next_index)
            return

        self._release_source()
        self._current_index = None
        self._progress = 0.0
        self._set_state(PlaybackState.IDLE)
        if self._audio_set is not None:
            log_surah_finished(self._audio_set.surah_number)

    def on_error(self, source: AudioSource, error: PlaybackError) -> None:
        if source is not self._active:
            return
        self._fail(error.reason, str(error))

    def on_progress(
        self, source: AudioSource, position: Optional[float], duration: Optional[float]
    ) -> None:
        if source is not self._active or self._state != PlaybackState.PLAYING:
            return
        if position is None or duration is None:
            return
        if not (math.isfinite(position) and math.isfinite(duration)) or duration <= 0:
            return

        self._progress = min(1.0, max(0.0, position / duration))
        if self.on_progress_changed:
            self.on_progress_changed(self._progress)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _release_source(self) -> None:
        if self._active is not None:
            self._active = None
            self._engine.stop()

    def _set_state(self, state: PlaybackState) -> None:
        was_playing = self._state == PlaybackState.PLAYING
        self._state = state
        is_playing = state == PlaybackState.PLAYING
        if was_playing != is_playing and self.on_play_state_changed:
            self.on_play_state_changed(is_playing)

    def _emit_verse_changed(self, index: int, number_in_surah: int) -> None:
        if self.on_verse_changed:
            self.on_verse_changed(index, number_in_surah)

    def _fail(self, reason: PlaybackFailure, detail: str) -> None:
        self._release_source()
        self._set_state(PlaybackState.ERROR)
        log_playback_error(
            detail,
            surah=self._audio_set.surah_number if self._audio_set else None,
            index=self._current_index,
        )
        self._sink.notify(self._messages[reason], Severity.ERROR)
