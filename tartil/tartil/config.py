"""
Configuration for Tartil library.

Settings are read from environment variables prefixed with ``TARTIL_`` (and an
optional ``.env`` file), and can be overridden in code with ``configure()``.

Example:
    export TARTIL_DEFAULT_RECITER="ar.mahermuaiqly"
    export TARTIL_LOCAL_AUDIO_DIR="public/audio"
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tartil.exceptions import ConfigurationError


class TartilSettings(BaseSettings):
    """
    Runtime settings for Tartil.

    Attributes:
        api_base: Base URL of the alquran.cloud compatible text API
        audio_base: Base URL of the EveryAyah compatible verse audio host
        default_reciter: Reciter identifier used when none is given
        default_translation: Translation edition shown next to the Arabic text
        local_audio_dir: Directory holding uploaded verse MP3s (optional)
        request_timeout: HTTP timeout in seconds
        bookmarks_path: JSON file used by the bookmark store
        chunk_ms: Playback chunk size for the pydub engine (milliseconds)
        bismillah_exempt_surahs: Surahs whose first verse is never stripped
    """

    model_config = SettingsConfigDict(
        env_prefix="TARTIL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_base: str = Field(
        default="https://api.alquran.cloud/v1",
        description="Base URL of the Quran text API",
    )
    audio_base: str = Field(
        default="https://everyayah.com/data",
        description="Base URL of the per-verse audio host",
    )
    default_reciter: str = Field(
        default="ar.alafasy",
        description="Reciter identifier used when none is given",
    )
    default_translation: str = Field(
        default="en.sahih",
        description="Translation edition identifier",
    )
    local_audio_dir: Optional[Path] = Field(
        default=None,
        description="Directory holding uploaded verse audio",
    )
    request_timeout: float = Field(
        default=15.0,
        description="HTTP timeout in seconds",
        gt=0.0,
    )
    bookmarks_path: Path = Field(
        default=Path("data") / "bookmarks.json",
        description="Bookmark store location",
    )
    chunk_ms: int = Field(
        default=250,
        description="Playback chunk size in milliseconds",
        ge=20,
        le=5000,
    )
    bismillah_exempt_surahs: frozenset[int] = Field(
        default=frozenset({1, 9}),
        description="Surahs whose opening verse is kept as-is",
    )

    @field_validator("api_base", "audio_base")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError("must be an http(s) URL")
        return value.rstrip("/")


_settings: TartilSettings | None = None


def get_settings() -> TartilSettings:
    """
    Get the process-wide settings, loading them on first use.

    Raises:
        ConfigurationError: If environment values are invalid
    """
    global _settings
    if _settings is None:
        _settings = _build_settings()
    return _settings


def configure(**overrides) -> TartilSettings:
    """
    Replace the process-wide settings, applying keyword overrides.

    Example:
        configure(default_reciter="ar.saadalghamdi", request_timeout=5)
    """
    global _settings
    _settings = _build_settings(**overrides)
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None


def _build_settings(**overrides) -> TartilSettings:
    try:
        return TartilSettings(**overrides)
    except ValidationError as e:
        first = e.errors()[0]
        setting = ".".join(str(part) for part in first.get("loc", ()))
        raise ConfigurationError(
            f"Invalid Tartil setting: {first.get('msg')}",
            setting_name=setting or None,
        ) from e
