"""
Pydantic data models for Tartil library.

These models represent the core data structures used throughout the library:
- Verse: A single verse of a surah
- VerseRef: Position of a verse in the loaded surah (0-based index + 1-based number)
- SurahAudioSet: The ordered verses the playback sequencer walks through
- Surah: Surah metadata
- Reciter: A reciter and where its recordings live
- Bookmark: A saved verse
- PlaybackState, Severity, PlaybackFailure: enumerations
"""

from tartil.models.playback import PlaybackFailure, PlaybackState, Severity
from tartil.models.verse import SurahAudioSet, Verse, VerseRef
from tartil.models.surah import Surah
from tartil.models.reciter import Reciter
from tartil.models.bookmark import Bookmark

__all__ = [
    "Verse",
    "VerseRef",
    "SurahAudioSet",
    "Surah",
    "Reciter",
    "Bookmark",
    "PlaybackState",
    "Severity",
    "PlaybackFailure",
]
