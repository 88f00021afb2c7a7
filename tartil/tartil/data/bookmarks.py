"""
JSON-file bookmark store.
"""

import json
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from tartil._logging import get_logger, log_warning
from tartil.models import Bookmark, Verse
from tartil.models.bookmark import bookmark_id

logger = get_logger(__name__)


class BookmarkStore:
    """
    Persist bookmarked verses to a JSON file.

    A missing or unreadable file is treated as an empty store; it is
    rewritten on the next change.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._bookmarks: dict[str, Bookmark] = self._read()

    def _read(self) -> dict[str, Bookmark]:
        if not self.path.exists():
            return {}

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            items = [Bookmark.model_validate(item) for item in raw]
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, TypeError, ValidationError) as e:
            log_warning("Ignoring unreadable bookmark file", path=str(self.path), error=e)
            return {}

        return {b.id: b for b in items}

    def _write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [b.model_dump() for b in self.list()]
        self.path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")

    def list(self) -> list[Bookmark]:
        """Bookmarks, oldest first."""
        return sorted(self._bookmarks.values(), key=lambda b: b.timestamp)

    def is_bookmarked(self, surah: int, verse: int) -> bool:
        return bookmark_id(surah, verse) in self._bookmarks

    def get(self, surah: int, verse: int) -> Optional[Bookmark]:
        return self._bookmarks.get(bookmark_id(surah, verse))

    def add(self, verse: Verse, translation_text: str | None = None) -> Bookmark:
        bookmark = Bookmark(
            id=bookmark_id(verse.surah_number, verse.number_in_surah),
            surah=verse.surah_number,
            verse=verse.number_in_surah,
            arabic_text=verse.text,
            translation_text=translation_text,
        )
        self._bookmarks[bookmark.id] = bookmark
        self._write()
        logger.debug(f"Bookmarked {bookmark.id}")
        return bookmark

    def remove(self, bookmark_id_: str) -> bool:
        """Remove a bookmark by id. Returns False if it did not exist."""
        if self._bookmarks.pop(bookmark_id_, None) is None:
            return False
        self._write()
        return True

    def toggle(self, verse: Verse, translation_text: str | None = None) -> bool:
        """
        Add the verse if it is not bookmarked, otherwise remove it.

        Returns:
            True if the bookmark was added, False if it was removed
        """
        key = bookmark_id(verse.surah_number, verse.number_in_surah)
        if key in self._bookmarks:
            self.remove(key)
            return False
        self.add(verse, translation_text)
        return True
