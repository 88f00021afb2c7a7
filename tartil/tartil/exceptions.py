"""
Custom exceptions for Tartil library.

All exceptions inherit from TartilError for easy catching of library-specific errors.
"""

from typing import Any

from tartil.models.playback import PlaybackFailure


class TartilError(Exception):
    """Base exception for all Tartil errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


class ConfigurationError(TartilError):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        setting_name: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if setting_name:
            ctx["setting"] = setting_name
        super().__init__(message, ctx)
        self.setting_name = setting_name


class QuranDataError(TartilError):
    """Raised when Quran text or metadata cannot be loaded."""

    def __init__(
        self,
        message: str = "Failed to load Quran data.",
        surah_number: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if surah_number is not None:
            ctx["surah"] = surah_number
        super().__init__(message, ctx)
        self.surah_number = surah_number


class AudioResourceError(TartilError):
    """Raised when no playable audio resource exists for a verse."""

    def __init__(
        self,
        message: str,
        surah_number: int | None = None,
        number_in_surah: int | None = None,
        reciter_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if surah_number is not None:
            ctx["surah"] = surah_number
        if number_in_surah is not None:
            ctx["verse"] = number_in_surah
        if reciter_id:
            ctx["reciter"] = reciter_id
        super().__init__(message, ctx)
        self.surah_number = surah_number
        self.number_in_surah = number_in_surah
        self.reciter_id = reciter_id


class UnknownReciterError(AudioResourceError):
    """Raised when a reciter identifier is not in the catalog."""

    def __init__(self, reciter_id: str) -> None:
        super().__init__(f"Unknown reciter: {reciter_id}", reciter_id=reciter_id)


class PlaybackError(TartilError):
    """Raised (or reported by an engine) when audio cannot be played."""

    def __init__(
        self,
        message: str,
        reason: PlaybackFailure = PlaybackFailure.UNAVAILABLE,
        url: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        ctx["reason"] = reason.value
        if url:
            ctx["url"] = url
        super().__init__(message, ctx)
        self.reason = reason
        self.url = url
