"""
Core modules for Tartil library.

This package contains the playback logic:
- Bismillah normalisation of loaded surahs
- The verse playback sequencer
- Playback controls and keyboard shortcuts
"""

from tartil.core.bismillah import BISMILLAH, BISMILLAH_PREFIXES, EXEMPT_SURAHS, strip_bismillah
from tartil.core.sequencer import FAILURE_MESSAGES, VersePlaybackSequencer
from tartil.core.controls import DEFAULT_BINDINGS, KeyboardShortcuts, PlaybackControls

__all__ = [
    # Bismillah
    "BISMILLAH",
    "BISMILLAH_PREFIXES",
    "EXEMPT_SURAHS",
    "strip_bismillah",
    # Sequencer
    "VersePlaybackSequencer",
    "FAILURE_MESSAGES",
    # Controls
    "PlaybackControls",
    "KeyboardShortcuts",
    "DEFAULT_BINDINGS",
]
