"""
Playback state enumerations.
"""

from enum import Enum


class PlaybackState(str, Enum):
    """State of the verse playback sequencer."""

    IDLE = "idle"
    LOADING = "loading"
    PLAYING = "playing"
    PAUSED = "paused"
    ERROR = "error"

    @property
    def has_source(self) -> bool:
        """Whether an audio source is attached in this state."""
        return self in (PlaybackState.LOADING, PlaybackState.PLAYING, PlaybackState.PAUSED)


class Severity(str, Enum):
    """Severity of a user-facing notification."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class PlaybackFailure(str, Enum):
    """Why a verse could not be played."""

    UNAVAILABLE = "unavailable"
    AUTOPLAY_BLOCKED = "autoplay_blocked"
    DEVICE = "device"
