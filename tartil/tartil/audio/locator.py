"""
Audio resource locators.

A locator maps (surah, verse, reciter) to a playable URL or file path.
Locators never touch the network; a missing remote file only shows up when
the engine tries to load it.
"""

import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from tartil.data.reciters import get_reciter


def verse_file_stem(surah_number: int, number_in_surah: int) -> str:
    """Zero-padded file stem used for verse audio, e.g. ``"002255"``."""
    return f"{surah_number:03d}{number_in_surah:03d}"


class AudioResourceLocator(ABC):
    """Maps a verse and reciter to a playable resource."""

    @abstractmethod
    def resolve(self, surah_number: int, number_in_surah: int, reciter_id: str) -> Optional[str]:
        """
        Resolve the audio resource for a verse.

        Returns:
            URL or local path, or None if nothing playable exists

        Raises:
            AudioResourceError: If the request cannot be mapped (unknown reciter)
        """
        pass


class EveryAyahLocator(AudioResourceLocator):
    """
    Per-verse MP3s on an EveryAyah style host:
    ``{base_url}/{reciter_folder}/{SSS}{VVV}.mp3``.
    """

    def __init__(self, base_url: str = "https://everyayah.com/data"):
        self.base_url = base_url.rstrip("/")

    def resolve(self, surah_number: int, number_in_surah: int, reciter_id: str) -> Optional[str]:
        folder = get_reciter(reciter_id).folder
        return f"{self.base_url}/{folder}/{verse_file_stem(surah_number, number_in_surah)}.mp3"


class LocalAudioLocator(AudioResourceLocator):
    """
    Verse MP3s stored on disk.

    Looked up in this order:
      1. ``root/SSS/SSSVVV_<timestamp>.mp3`` (uploads, newest wins)
      2. ``root/SSS/SSSVVV.mp3``
      3. ``root/<reciter_id>/SSSVVV.mp3``
      4. ``root/SSSVVV.mp3``
    """

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def resolve(self, surah_number: int, number_in_surah: int, reciter_id: str) -> Optional[str]:
        stem = verse_file_stem(surah_number, number_in_surah)
        surah_dir = self.root / f"{surah_number:03d}"

        upload = self._newest_upload(surah_dir, stem)
        if upload is not None:
            return str(upload)

        for candidate in (
            surah_dir / f"{stem}.mp3",
            self.root / reciter_id / f"{stem}.mp3",
            self.root / f"{stem}.mp3",
        ):
            if candidate.is_file():
                return str(candidate)
        return None

    @staticmethod
    def _newest_upload(surah_dir: Path, stem: str) -> Optional[Path]:
        if not surah_dir.is_dir():
            return None

        pattern = re.compile(rf"^{stem}_(\d+)\.mp3$")
        best: tuple[int, Path] | None = None
        for entry in surah_dir.iterdir():
            match = pattern.match(entry.name)
            if match and entry.is_file():
                stamp = int(match.group(1))
                if best is None or stamp > best[0]:
                    best = (stamp, entry)
        return best[1] if best else None


class ChainedLocator(AudioResourceLocator):
    """Try several locators in order; the first non-None result wins."""

    def __init__(self, *locators: AudioResourceLocator):
        if not locators:
            raise ValueError("ChainedLocator needs at least one locator")
        self.locators = locators

    def resolve(self, surah_number: int, number_in_surah: int, reciter_id: str) -> Optional[str]:
        for locator in self.locators:
            url = locator.resolve(surah_number, number_in_surah, reciter_id)
            if url:
                return url
        return None
