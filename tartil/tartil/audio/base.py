"""
Abstract audio engine interface.

An engine plays one source at a time. Loading a new source supersedes the
previous one; events that an engine still emits for a superseded source carry
that source's handle, so listeners can tell them apart and ignore them.
"""

import itertools
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Protocol

from tartil.exceptions import PlaybackError

_source_ids = itertools.count(1)


@dataclass(frozen=True)
class AudioSource:
    """Handle for one loaded audio resource."""

    url: str
    source_id: int = field(default_factory=lambda: next(_source_ids))

    def __str__(self) -> str:
        return f"AudioSource#{self.source_id}({self.url})"


class EngineListener(Protocol):
    """Receiver of engine events."""

    def on_started(self, source: AudioSource) -> None: ...

    def on_ended(self, source: AudioSource) -> None: ...

    def on_error(self, source: AudioSource, error: PlaybackError) -> None: ...

    def on_progress(
        self, source: AudioSource, position: Optional[float], duration: Optional[float]
    ) -> None: ...


class AudioEngine(ABC):
    """
    Abstract interface for audio playback backends.

    Example:
        class MyEngine(AudioEngine):
            def load(self, url: str) -> AudioSource:
                ...

    Engines call back into the bound listener with ``on_started`` once audio
    is actually audible, ``on_ended`` on natural completion, ``on_error`` on
    load/decode/device failure and ``on_progress`` while playing. A source
    that reaches its end while paused reports ``on_ended`` only after it is
    resumed.
    """

    def __init__(self) -> None:
        self._listener: Optional[EngineListener] = None

    def bind(self, listener: EngineListener) -> None:
        """Attach the listener that receives engine events."""
        self._listener = listener

    @property
    def listener(self) -> Optional[EngineListener]:
        return self._listener

    @abstractmethod
    def load(self, url: str) -> AudioSource:
        """
        Load a new source, superseding (and stopping) the current one.

        Returns:
            Handle identifying the new source in later events
        """
        pass

    @abstractmethod
    def play(self, source: AudioSource) -> None:
        """
        Start or resume playback of ``source``.

        Raises:
            PlaybackError: If playback is refused outright (e.g. autoplay blocked)
        """
        pass

    @abstractmethod
    def pause(self, source: AudioSource) -> None:
        """Pause ``source`` in place."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop and release the current source, if any."""
        pass

    def close(self) -> None:
        """Release engine resources. Default implementation stops playback."""
        self.stop()

    def __enter__(self) -> "AudioEngine":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
