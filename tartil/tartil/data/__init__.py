"""
Quran data module for Tartil library.

Provides surah metadata, the reciter catalog, verse text sources
(alquran.cloud API, flat-file JSON) and the bookmark store.
"""

from tartil.data.base import VerseProvider
from tartil.data.bookmarks import BookmarkStore
from tartil.data.json_store import JsonVerseStore
from tartil.data.quran import (
    get_all_surahs,
    get_ayah_count,
    get_surah,
    get_surah_name,
)
from tartil.data.quran_api import QuranCloudClient
from tartil.data.reciters import DEFAULT_RECITER, RECITERS, get_reciter, list_reciters
from tartil.data.references import parse_verse_reference

__all__ = [
    "VerseProvider",
    "QuranCloudClient",
    "JsonVerseStore",
    "BookmarkStore",
    "get_all_surahs",
    "get_ayah_count",
    "get_surah",
    "get_surah_name",
    "DEFAULT_RECITER",
    "RECITERS",
    "get_reciter",
    "list_reciters",
    "parse_verse_reference",
]
