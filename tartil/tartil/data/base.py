"""
Abstract source of surah verse text.
"""

from abc import ABC, abstractmethod

from tartil.models import Verse


class VerseProvider(ABC):
    """
    Anything that can supply the verses of a surah.

    Example:
        class MyProvider(VerseProvider):
            def get_surah_verses(self, surah_number: int) -> list[Verse]:
                ...
    """

    @abstractmethod
    def get_surah_verses(self, surah_number: int) -> list[Verse]:
        """
        Return the verses of a surah in order.

        Raises:
            QuranDataError: If the surah cannot be loaded
        """
        pass
