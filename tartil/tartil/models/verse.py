"""
Verse data models.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Verse(BaseModel):
    """
    A single verse (ayah) of a surah.

    Attributes:
        surah_number: Surah number (1-114)
        number_in_surah: 1-based position of the verse within its surah
        text: Verse text (Arabic or a translation)
        number: Global verse number across the whole Quran (1-6236), if known
        juz: Juz (part) the verse belongs to, if known
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "examples": [
                {
                    "surah_number": 1,
                    "number_in_surah": 1,
                    "text": "بِسْمِ اللَّهِ الرَّحْمَٰنِ الرَّحِيمِ",
                    "number": 1,
                    "juz": 1,
                }
            ]
        },
    )

    surah_number: int = Field(
        ...,
        description="Surah number (1-114)",
        ge=1,
        le=114,
    )
    number_in_surah: int = Field(
        ...,
        description="1-based verse number within the surah",
        ge=1,
    )
    text: str = Field(
        ...,
        description="Verse text",
    )
    number: Optional[int] = Field(
        default=None,
        description="Global verse number (1-6236)",
        ge=1,
        le=6236,
    )
    juz: Optional[int] = Field(
        default=None,
        description="Juz number (1-30)",
        ge=1,
        le=30,
    )

    @property
    def key(self) -> str:
        """Reference key in ``surah:verse`` form."""
        return f"{self.surah_number}:{self.number_in_surah}"

    def __str__(self) -> str:
        preview = self.text[:30] + "..." if len(self.text) > 30 else self.text
        return f"Verse({self.key}, {preview!r})"


class VerseRef(BaseModel):
    """
    Position of a verse inside the currently loaded surah.

    ``verse_index`` is the 0-based position in the loaded verse list and
    ``number_in_surah`` the 1-based verse number; they always differ by one.
    """

    model_config = ConfigDict(frozen=True)

    surah_number: int = Field(..., ge=1, le=114)
    verse_index: int = Field(..., ge=0)
    number_in_surah: int = Field(..., ge=1)

    @model_validator(mode="after")
    def _check_alignment(self) -> "VerseRef":
        if self.number_in_surah != self.verse_index + 1:
            raise ValueError(
                f"number_in_surah ({self.number_in_surah}) must equal "
                f"verse_index + 1 ({self.verse_index + 1})"
            )
        return self


class SurahAudioSet(BaseModel):
    """
    The ordered verses of one surah as handed to the playback sequencer.

    The set is immutable: loading another surah (or switching reciter) builds
    a new set instead of editing this one.

    Attributes:
        surah_number: Surah number (1-114)
        verses: Verses in playback order, numbered 1..N
    """

    model_config = ConfigDict(frozen=True)

    surah_number: int = Field(
        ...,
        description="Surah number (1-114)",
        ge=1,
        le=114,
    )
    verses: tuple[Verse, ...] = Field(
        default=(),
        description="Verses in playback order",
    )

    @model_validator(mode="after")
    def _check_numbering(self) -> "SurahAudioSet":
        for index, verse in enumerate(self.verses):
            if verse.surah_number != self.surah_number:
                raise ValueError(
                    f"verse {verse.key} does not belong to surah {self.surah_number}"
                )
            if verse.number_in_surah != index + 1:
                raise ValueError(
                    f"verse at index {index} is numbered {verse.number_in_surah}, "
                    f"expected {index + 1}"
                )
        return self

    def __len__(self) -> int:
        return len(self.verses)

    def is_valid_index(self, index: object) -> bool:
        """Whether ``index`` addresses a verse of this set."""
        if isinstance(index, bool) or not isinstance(index, int):
            return False
        return 0 <= index < len(self.verses)

    def verse_at(self, index: int) -> Verse:
        return self.verses[index]

    def ref_at(self, index: int) -> VerseRef:
        verse = self.verses[index]
        return VerseRef(
            surah_number=self.surah_number,
            verse_index=index,
            number_in_surah=verse.number_in_surah,
        )

    def __str__(self) -> str:
        return f"SurahAudioSet(Surah {self.surah_number}, {len(self.verses)} verses)"
