"""
Client for the alquran.cloud text API.

Fetches surah lists, surah text, translations and search results over HTTP.
"""

from typing import Any, Optional
from urllib.parse import quote

import httpx

from tartil._logging import get_logger
from tartil.config import TartilSettings, get_settings
from tartil.data.base import VerseProvider
from tartil.exceptions import QuranDataError
from tartil.models import Surah, Verse

logger = get_logger(__name__)

MIN_SEARCH_LENGTH = 2


class QuranCloudClient(VerseProvider):
    """
    HTTP client for an alquran.cloud compatible API.

    Example:
        with QuranCloudClient() as client:
            verses = client.get_surah(1)
            hits = client.search("الرحمن")

    The underlying ``httpx.Client`` is created lazily on first request and
    closed by ``close()`` or on leaving the ``with`` block.
    """

    def __init__(
        self,
        api_base: str | None = None,
        timeout: float | None = None,
        settings: TartilSettings | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            api_base: API base URL (overrides settings)
            timeout: Request timeout in seconds (overrides settings)
            settings: Settings instance to use
            transport: Custom httpx transport (used for testing)
        """
        self._settings = settings or get_settings()
        self._api_base = (api_base or self._settings.api_base).rstrip("/")
        self._timeout = timeout or self._settings.request_timeout
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @property
    def api_base(self) -> str:
        return self._api_base

    def _http(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                base_url=self._api_base,
                timeout=httpx.Timeout(self._timeout, connect=min(self._timeout, 10.0)),
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "QuranCloudClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _get(self, path: str, surah_number: int | None = None) -> Any:
        try:
            response = self._http().get(path)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            raise QuranDataError(
                f"Request to {path} failed: {e}", surah_number=surah_number
            ) from e
        except ValueError as e:
            raise QuranDataError(
                f"Invalid JSON from {path}", surah_number=surah_number
            ) from e

        if not isinstance(payload, dict) or payload.get("code") != 200:
            status = payload.get("status") if isinstance(payload, dict) else None
            raise QuranDataError(
                f"Unexpected response from {path}: {status or 'no status'}",
                surah_number=surah_number,
            )
        return payload.get("data")

    def get_surahs(self) -> list[Surah]:
        """
        Fetch metadata for all surahs.

        Raises:
            QuranDataError: If the request fails
        """
        data = self._get("/surah")
        try:
            return [
                Surah(
                    number=item["number"],
                    name=item["name"],
                    ayah_count=item["numberOfAyahs"],
                    english_name=item.get("englishName"),
                    english_name_translation=item.get("englishNameTranslation"),
                    revelation_type=item.get("revelationType"),
                )
                for item in data
            ]
        except (KeyError, TypeError) as e:
            raise QuranDataError(f"Malformed surah list: {e}") from e

    def get_surah(self, surah_number: int, edition: str | None = None) -> list[Verse]:
        """
        Fetch the verses of a surah.

        Args:
            surah_number: Surah number (1-114)
            edition: Text edition (e.g. "quran-uthmani", "en.sahih"); the
                API default edition when omitted

        Returns:
            Verses in order, numbered 1..N

        Raises:
            ValueError: If surah_number is out of range
            QuranDataError: If the request fails
        """
        if surah_number < 1 or surah_number > 114:
            raise ValueError(f"Invalid surah number: {surah_number}. Must be 1-114.")

        path = f"/surah/{surah_number}"
        if edition:
            path += f"/{edition}"

        data = self._get(path, surah_number=surah_number)
        verses = _parse_ayahs(data, surah_number)
        logger.debug(f"Fetched {len(verses)} verses for Surah {surah_number} ({edition or 'default'})")
        return verses

    def get_translation(self, surah_number: int, edition: str | None = None) -> list[Verse]:
        """Fetch a translation of a surah (defaults to the configured edition)."""
        return self.get_surah(surah_number, edition or self._settings.default_translation)

    def get_surah_verses(self, surah_number: int) -> list[Verse]:
        return self.get_surah(surah_number)

    def search(self, query: str, edition: str = "ar") -> list[Verse]:
        """
        Search all surahs for a phrase.

        Queries shorter than two characters return no matches without
        contacting the server.
        """
        query = query.strip()
        if len(query) < MIN_SEARCH_LENGTH:
            return []

        data = self._get(f"/search/{quote(query, safe='')}/all/{edition}")
        matches = (data or {}).get("matches", [])
        results = []
        for match in matches:
            try:
                results.append(
                    Verse(
                        surah_number=match["surah"]["number"],
                        number_in_surah=match["numberInSurah"],
                        text=match["text"],
                        number=match.get("number"),
                    )
                )
            except (KeyError, TypeError, ValueError):
                logger.debug(f"Skipping malformed search match: {match!r}")
        return results


def _parse_ayahs(data: Any, surah_number: int) -> list[Verse]:
    try:
        return [
            Verse(
                surah_number=surah_number,
                number_in_surah=ayah["numberInSurah"],
                text=ayah["text"],
                number=ayah.get("number"),
                juz=ayah.get("juz"),
            )
            for ayah in data["ayahs"]
        ]
    except (KeyError, TypeError, ValueError) as e:
        raise QuranDataError(f"Malformed surah payload: {e}", surah_number=surah_number) from e
