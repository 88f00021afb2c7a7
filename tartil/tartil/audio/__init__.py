"""
Audio module for Tartil library.

Provides the engine interface, playback backends and verse audio locators.
"""

from tartil.audio.base import AudioEngine, AudioSource, EngineListener
from tartil.audio.locator import (
    AudioResourceLocator,
    ChainedLocator,
    EveryAyahLocator,
    LocalAudioLocator,
    verse_file_stem,
)
from tartil.audio.pydub_engine import PydubAudioEngine
from tartil.audio.scripted import ScriptedAudioEngine

__all__ = [
    "AudioEngine",
    "AudioSource",
    "EngineListener",
    "AudioResourceLocator",
    "EveryAyahLocator",
    "LocalAudioLocator",
    "ChainedLocator",
    "verse_file_stem",
    "PydubAudioEngine",
    "ScriptedAudioEngine",
]
