"""
Flat-file JSON verse store.

The file maps surah numbers to a name and a list of verse texts:

    {
        "1": {"name": "Al-Fatiha", "verses": ["In the name of Allah ...", ...]},
        ...
    }

This is the format used for custom translations uploaded by the admin panel.
"""

import json
from pathlib import Path

from tartil._logging import get_logger
from tartil.data.base import VerseProvider
from tartil.exceptions import QuranDataError
from tartil.models import Verse

logger = get_logger(__name__)


class JsonVerseStore(VerseProvider):
    """
    Read-only verse provider backed by a JSON file.

    The file is read once, on first access.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._data: dict[str, dict] | None = None

    def _load(self) -> dict[str, dict]:
        if self._data is None:
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    raw = json.load(f)
            except FileNotFoundError:
                raise QuranDataError(f"Verse store not found: {self.path}")
            except json.JSONDecodeError as e:
                raise QuranDataError(f"Verse store is not valid JSON: {e}")

            if not isinstance(raw, dict):
                raise QuranDataError(f"Verse store must contain an object: {self.path}")
            self._data = raw
            logger.debug(f"Loaded verse store {self.path} ({len(raw)} surahs)")
        return self._data

    def surah_numbers(self) -> list[int]:
        """Surahs present in the store, ascending."""
        return sorted(int(key) for key in self._load() if key.isdigit())

    def get_surah_name(self, surah_number: int) -> str | None:
        entry = self._load().get(str(surah_number))
        return entry.get("name") if isinstance(entry, dict) else None

    def get_surah_verses(self, surah_number: int) -> list[Verse]:
        entry = self._load().get(str(surah_number))
        if not isinstance(entry, dict) or not isinstance(entry.get("verses"), list):
            raise QuranDataError(
                "Surah not available in verse store", surah_number=surah_number
            )

        return [
            Verse(surah_number=surah_number, number_in_surah=i, text=str(text))
            for i, text in enumerate(entry["verses"], start=1)
        ]

    def search(self, query: str, limit: int = 10) -> list[Verse]:
        """
        Case-insensitive substring search over all verses.

        Queries shorter than two characters return no matches.
        """
        query = query.strip().lower()
        if len(query) < 2:
            return []

        matches = []
        for surah_number in self.surah_numbers():
            for verse in self.get_surah_verses(surah_number):
                if query in verse.text.lower():
                    matches.append(verse)
                    if len(matches) >= limit:
                        return matches
        return matches
