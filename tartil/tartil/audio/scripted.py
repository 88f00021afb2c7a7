"""
Deterministic in-process audio engine.

Nothing is decoded or played; events are delivered when the driver methods
(``start``, ``finish``, ``fail``, ``tick``) are called. Used for headless runs
and for exercising listeners against exact event orderings, including
events that arrive for a source that has already been superseded.
"""

from typing import Optional

from tartil.audio.base import AudioEngine, AudioSource
from tartil.exceptions import PlaybackError
from tartil.models import PlaybackFailure


class ScriptedAudioEngine(AudioEngine):
    """
    Audio engine whose events are driven explicitly.

    Args:
        autostart: Emit ``on_started`` synchronously from ``play()``
        unavailable_urls: URLs that fail with an "unavailable" error when played
        block_autoplay: Make ``play()`` raise an autoplay rejection
    """

    def __init__(
        self,
        autostart: bool = False,
        unavailable_urls: set[str] | None = None,
        block_autoplay: bool = False,
    ) -> None:
        super().__init__()
        self.autostart = autostart
        self.unavailable_urls = set(unavailable_urls or ())
        self.block_autoplay = block_autoplay
        self.current: Optional[AudioSource] = None
        self.loaded: list[AudioSource] = []
        self.calls: list[tuple[str, Optional[AudioSource]]] = []
        self.paused = False
        # completion reached while paused, delivered on resume
        self._held_end: Optional[AudioSource] = None

    # ------------------------------------------------------------------
    # AudioEngine
    # ------------------------------------------------------------------

    def load(self, url: str) -> AudioSource:
        source = AudioSource(url)
        self.current = source
        self.loaded.append(source)
        self.paused = False
        self._held_end = None
        self.calls.append(("load", source))
        return source

    def play(self, source: AudioSource) -> None:
        self.calls.append(("play", source))
        if self.block_autoplay:
            raise PlaybackError(
                "Playback was blocked by the audio device policy",
                reason=PlaybackFailure.AUTOPLAY_BLOCKED,
                url=source.url,
            )
        if source.url in self.unavailable_urls:
            self.fail(source)
            return
        was_paused = self.paused
        self.paused = False
        if was_paused and self._held_end is source:
            self._held_end = None
            self.finish(source)
        elif self.autostart and not was_paused:
            self.start(source)

    def pause(self, source: AudioSource) -> None:
        self.calls.append(("pause", source))
        if source is self.current:
            self.paused = True

    def stop(self) -> None:
        self.calls.append(("stop", self.current))
        self.current = None
        self.paused = False
        self._held_end = None

    # ------------------------------------------------------------------
    # Drivers
    # ------------------------------------------------------------------

    def _target(self, source: Optional[AudioSource]) -> AudioSource:
        target = source or self.current
        if target is None:
            raise RuntimeError("No audio source loaded")
        return target

    def start(self, source: Optional[AudioSource] = None) -> None:
        """Report that playback of ``source`` (default: current) has begun."""
        if self.listener:
            self.listener.on_started(self._target(source))

    def finish(self, source: Optional[AudioSource] = None) -> None:
        """
        Report natural completion of ``source`` (default: current).

        Completion of the paused current source is held until it is resumed.
        """
        target = self._target(source)
        if self.paused and target is self.current:
            self._held_end = target
            return
        if self.listener:
            self.listener.on_ended(target)

    def fail(
        self,
        source: Optional[AudioSource] = None,
        reason: PlaybackFailure = PlaybackFailure.UNAVAILABLE,
    ) -> None:
        """Report a load/decode/device failure for ``source`` (default: current)."""
        target = self._target(source)
        if self.listener:
            self.listener.on_error(
                target,
                PlaybackError("Audio could not be loaded", reason=reason, url=target.url),
            )

    def tick(
        self,
        position: Optional[float],
        duration: Optional[float],
        source: Optional[AudioSource] = None,
    ) -> None:
        """Report a playback position for ``source`` (default: current)."""
        if self.listener:
            self.listener.on_progress(self._target(source), position, duration)
