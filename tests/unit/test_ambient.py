import io
import logging
from pathlib import Path

import pytest

from tartil._logging import configure_logging, disable_logging, log_playback_error
from tartil.config import TartilSettings, configure, get_settings, reset_settings
from tartil.exceptions import (
    AudioResourceError,
    ConfigurationError,
    PlaybackError,
    QuranDataError,
    TartilError,
    UnknownReciterError,
)
from tartil.models import PlaybackFailure, Severity
from tartil.notifications import LoggingNotificationSink, RecordingNotificationSink


def test_settings_defaults():
    settings = TartilSettings()

    assert settings.api_base == "https://api.alquran.cloud/v1"
    assert settings.audio_base == "https://everyayah.com/data"
    assert settings.default_reciter == "ar.alafasy"
    assert settings.local_audio_dir is None
    assert settings.bismillah_exempt_surahs == frozenset({1, 9})


def test_settings_read_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("TARTIL_DEFAULT_RECITER", "ar.mahermuaiqly")
    monkeypatch.setenv("TARTIL_LOCAL_AUDIO_DIR", str(tmp_path))
    monkeypatch.setenv("TARTIL_AUDIO_BASE", "https://audio.test/data/")

    settings = get_settings()

    assert settings.default_reciter == "ar.mahermuaiqly"
    assert settings.local_audio_dir == Path(tmp_path)
    assert settings.audio_base == "https://audio.test/data"
    assert get_settings() is settings


def test_configure_replaces_settings():
    settings = configure(default_reciter="ar.saadalghamdi", request_timeout=5)

    assert get_settings() is settings
    assert settings.request_timeout == 5.0

    reset_settings()
    assert get_settings().default_reciter == "ar.alafasy"


@pytest.mark.parametrize(
    "overrides,setting",
    [
        ({"request_timeout": 0}, "request_timeout"),
        ({"audio_base": "ftp://audio.test"}, "audio_base"),
        ({"chunk_ms": 1}, "chunk_ms"),
    ],
)
def test_invalid_settings_raise_configuration_error(overrides, setting):
    with pytest.raises(ConfigurationError) as exc:
        configure(**overrides)

    assert exc.value.setting_name == setting
    assert isinstance(exc.value, TartilError)


def test_invalid_environment_value(monkeypatch):
    monkeypatch.setenv("TARTIL_REQUEST_TIMEOUT", "soon")

    with pytest.raises(ConfigurationError):
        get_settings()


def test_error_context_rendering():
    error = QuranDataError("Failed", surah_number=2)

    assert str(error) == "Failed (surah=2)"
    assert str(TartilError("plain")) == "plain"


def test_audio_resource_error_context():
    error = AudioResourceError("missing", surah_number=1, number_in_surah=3, reciter_id="ar.alafasy")

    assert error.context == {"surah": 1, "verse": 3, "reciter": "ar.alafasy"}
    assert isinstance(UnknownReciterError("x"), AudioResourceError)


def test_playback_error_carries_reason():
    error = PlaybackError("blocked", reason=PlaybackFailure.AUTOPLAY_BLOCKED, url="mem://1")

    assert error.reason == PlaybackFailure.AUTOPLAY_BLOCKED
    assert "reason=autoplay_blocked" in str(error)
    assert PlaybackError("x").reason == PlaybackFailure.UNAVAILABLE


def test_recording_sink():
    sink = RecordingNotificationSink()
    sink.notify("Bookmark saved", Severity.SUCCESS)
    sink.notify("hello")

    assert sink.messages == [("Bookmark saved", Severity.SUCCESS), ("hello", Severity.INFO)]
    assert sink.of_severity(Severity.SUCCESS) == ["Bookmark saved"]
    sink.clear()
    assert sink.messages == []


def test_logging_sink_maps_severity(caplog):
    sink = LoggingNotificationSink()

    with caplog.at_level(logging.INFO, logger="tartil.notifications"):
        sink.notify("Error loading audio", Severity.ERROR)
        sink.notify("Bookmark saved", Severity.SUCCESS)

    levels = [(r.levelno, r.getMessage()) for r in caplog.records if r.name == "tartil.notifications"]
    assert levels == [(logging.ERROR, "Error loading audio"), (logging.INFO, "Bookmark saved")]


def test_configure_logging_writes_to_stream():
    stream = io.StringIO()
    logger = configure_logging(level=logging.WARNING, stream=stream)
    try:
        log_playback_error("decode failed", surah=1, index=2)
        assert "Playback failed: decode failed (surah=1, index=2)" in stream.getvalue()
    finally:
        disable_logging()
        logger.setLevel(logging.NOTSET)
