"""
Bookmark data model.
"""

import time
from typing import Optional

from pydantic import BaseModel, Field


def _now_ms() -> int:
    return int(time.time() * 1000)


def bookmark_id(surah: int, verse: int) -> str:
    """Bookmark identifier for a verse, ``"<surah>-<verse>"``."""
    return f"{surah}-{verse}"


class Bookmark(BaseModel):
    """
    A saved verse.

    Attributes:
        id: "<surah>-<verse>"
        surah: Surah number (1-114)
        verse: 1-based verse number
        arabic_text: Verse text at the time of bookmarking
        translation_text: Translation shown next to it, if any
        timestamp: Creation time in milliseconds since the epoch
    """

    id: str
    surah: int = Field(..., ge=1, le=114)
    verse: int = Field(..., ge=1)
    arabic_text: str = ""
    translation_text: Optional[str] = None
    timestamp: int = Field(default_factory=_now_ms)

    def __str__(self) -> str:
        return f"Bookmark({self.surah}:{self.verse})"
