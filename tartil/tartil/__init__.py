"""
ترتيل (Tartil) — A Python library for verse-by-verse Quran recitation playback.

Usage:
    from tartil import PlaybackState, ReadingSession
    from tartil.audio import PydubAudioEngine

    engine = PydubAudioEngine()
    session = ReadingSession(engine, reciter_id="ar.alafasy")

    # Load Al-Fatiha and start from the first verse
    session.load_surah(1)
    session.controls.play_verse(0)

    # Deliver engine events on this thread; verses advance automatically
    while session.sequencer.state != PlaybackState.IDLE:
        engine.pump()
"""

from tartil.models import (
    Bookmark,
    PlaybackFailure,
    PlaybackState,
    Reciter,
    Severity,
    Surah,
    SurahAudioSet,
    Verse,
    VerseRef,
)
from tartil.config import TartilSettings, get_settings, configure
from tartil.exceptions import (
    TartilError,
    ConfigurationError,
    QuranDataError,
    AudioResourceError,
    UnknownReciterError,
    PlaybackError,
)
from tartil.core import (
    KeyboardShortcuts,
    PlaybackControls,
    VersePlaybackSequencer,
    strip_bismillah,
)
from tartil.notifications import (
    LoggingNotificationSink,
    NotificationSink,
    RecordingNotificationSink,
)
from tartil.session import ReadingSession

__version__ = "1.0.0"
__all__ = [
    # Version
    "__version__",
    # Models
    "Verse",
    "VerseRef",
    "SurahAudioSet",
    "Surah",
    "Reciter",
    "Bookmark",
    "PlaybackState",
    "Severity",
    "PlaybackFailure",
    # Config
    "TartilSettings",
    "get_settings",
    "configure",
    # Exceptions
    "TartilError",
    "ConfigurationError",
    "QuranDataError",
    "AudioResourceError",
    "UnknownReciterError",
    "PlaybackError",
    # Playback
    "VersePlaybackSequencer",
    "PlaybackControls",
    "KeyboardShortcuts",
    "strip_bismillah",
    "ReadingSession",
    # Notifications
    "NotificationSink",
    "LoggingNotificationSink",
    "RecordingNotificationSink",
]
