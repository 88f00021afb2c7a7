"""
pydub based audio engine.

Decodes local files or HTTP(S) URLs with pydub and plays them on a worker
thread in short chunks, so playback can be paused and cancelled between
chunks. Engine events are queued by the worker and delivered to the listener
only when the host calls ``pump()``, which keeps every listener callback on
the host's own thread.
"""

import io
import queue
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

import httpx
from pydub import AudioSegment
from pydub.playback import play as pydub_play

from tartil._logging import get_logger
from tartil.audio.base import AudioEngine, AudioSource
from tartil.config import TartilSettings, get_settings
from tartil.exceptions import PlaybackError
from tartil.models import PlaybackFailure

logger = get_logger(__name__)

_WAIT_SLICE_S = 0.05


@dataclass
class _Playback:
    source: AudioSource
    cancelled: threading.Event = field(default_factory=threading.Event)
    running: threading.Event = field(default_factory=threading.Event)
    thread: Optional[threading.Thread] = None


class PydubAudioEngine(AudioEngine):
    """
    Plays verse audio through pydub.

    Example:
        engine = PydubAudioEngine()
        engine.bind(listener)
        source = engine.load("https://everyayah.com/data/Alafasy_128kbps/001001.mp3")
        engine.play(source)
        while ...:
            engine.pump()
    """

    def __init__(
        self,
        chunk_ms: int | None = None,
        timeout: float | None = None,
        settings: TartilSettings | None = None,
        player: Callable[[AudioSegment], None] = pydub_play,
        http_client: httpx.Client | None = None,
    ) -> None:
        super().__init__()
        self._settings = settings or get_settings()
        self.chunk_ms = chunk_ms or self._settings.chunk_ms
        self._timeout = timeout or self._settings.request_timeout
        self._player = player
        self._http = http_client
        self._owns_http = http_client is None
        self._events: "queue.Queue[tuple]" = queue.Queue()
        self._lock = threading.Lock()
        self._current: Optional[_Playback] = None

    # ------------------------------------------------------------------
    # AudioEngine
    # ------------------------------------------------------------------

    def load(self, url: str) -> AudioSource:
        source = AudioSource(url)
        with self._lock:
            self._cancel_current()
            self._current = _Playback(source)
        return source

    def play(self, source: AudioSource) -> None:
        with self._lock:
            playback = self._current
            if playback is None or playback.source is not source:
                return
            playback.running.set()
            if playback.thread is None:
                playback.thread = threading.Thread(
                    target=self._run,
                    args=(playback,),
                    name=f"tartil-audio-{source.source_id}",
                    daemon=True,
                )
                playback.thread.start()

    def pause(self, source: AudioSource) -> None:
        with self._lock:
            if self._current is not None and self._current.source is source:
                self._current.running.clear()

    def stop(self) -> None:
        with self._lock:
            self._cancel_current()
            self._current = None

    def close(self) -> None:
        self.stop()
        if self._http is not None and self._owns_http:
            self._http.close()
            self._http = None

    def pump(self, max_events: int | None = None) -> int:
        """
        Deliver queued engine events to the listener on the calling thread.

        Returns:
            Number of events delivered
        """
        delivered = 0
        while max_events is None or delivered < max_events:
            try:
                kind, source, *args = self._events.get_nowait()
            except queue.Empty:
                break
            delivered += 1
            listener = self.listener
            if listener is None:
                continue
            if kind == "started":
                listener.on_started(source)
            elif kind == "ended":
                listener.on_ended(source)
            elif kind == "error":
                listener.on_error(source, args[0])
            elif kind == "progress":
                listener.on_progress(source, args[0], args[1])
        return delivered

    # ------------------------------------------------------------------
    # Worker
    # ------------------------------------------------------------------

    def _cancel_current(self) -> None:
        if self._current is not None:
            self._current.cancelled.set()
            self._current.running.set()

    def _fetch(self, url: str) -> bytes:
        if url.startswith(("http://", "https://")):
            if self._http is None:
                self._http = httpx.Client(timeout=self._timeout, follow_redirects=True)
            response = self._http.get(url)
            response.raise_for_status()
            return response.content
        return Path(url).read_bytes()

    def _decode(self, url: str) -> AudioSegment:
        try:
            data = self._fetch(url)
        except (httpx.HTTPError, OSError) as e:
            raise PlaybackError(
                f"Audio could not be fetched: {e}",
                reason=PlaybackFailure.UNAVAILABLE,
                url=url,
            ) from e

        fmt = Path(url.split("?", 1)[0]).suffix.lstrip(".").lower() or "mp3"
        try:
            return AudioSegment.from_file(io.BytesIO(data), format=fmt)
        except Exception as e:
            raise PlaybackError(
                f"Audio could not be decoded: {e}",
                reason=PlaybackFailure.UNAVAILABLE,
                url=url,
            ) from e

    def _wait_until_running(self, playback: _Playback) -> bool:
        while not playback.running.wait(_WAIT_SLICE_S):
            if playback.cancelled.is_set():
                return False
        return not playback.cancelled.is_set()

    def _run(self, playback: _Playback) -> None:
        source = playback.source
        try:
            segment = self._decode(source.url)
        except PlaybackError as e:
            if not playback.cancelled.is_set():
                self._events.put(("error", source, e))
            return

        if not self._wait_until_running(playback):
            return

        duration_s = len(segment) / 1000.0
        self._events.put(("started", source))
        logger.debug(f"{source} started ({duration_s:.2f}s)")

        for start_ms in range(0, len(segment), self.chunk_ms):
            if not self._wait_until_running(playback):
                logger.debug(f"{source} cancelled")
                return
            chunk = segment[start_ms:start_ms + self.chunk_ms]
            try:
                self._player(chunk)
            except Exception as e:
                self._events.put((
                    "error",
                    source,
                    PlaybackError(
                        f"Audio device error: {e}",
                        reason=PlaybackFailure.DEVICE,
                        url=source.url,
                    ),
                ))
                return
            position_s = min(start_ms + self.chunk_ms, len(segment)) / 1000.0
            self._events.put(("progress", source, position_s, duration_s))

        # a pause during the last chunk holds completion back until resume
        if not self._wait_until_running(playback):
            logger.debug(f"{source} cancelled")
            return
        self._events.put(("ended", source))
