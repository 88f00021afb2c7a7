import importlib.util
import json
import logging
from pathlib import Path

import pytest
import requests

from tartil._logging import disable_logging

ROOT = Path(__file__).resolve().parents[2]


def _load(name, path):
    spec = importlib.util.spec_from_file_location(name, path)
    module = importlib.util.module_from_spec(spec)
    assert spec is not None and spec.loader is not None
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def player():
    yield _load("_tartil_player", ROOT / "player.py")
    disable_logging()


@pytest.fixture
def download():
    return _load("_tartil_download", ROOT / "scripts" / "download.py")


@pytest.fixture
def verses_json(tmp_path):
    path = tmp_path / "verses.json"
    path.write_text(
        json.dumps({"113": {"name": "Al-Falaq", "verses": ["v1", "v2", "v3", "v4", "v5"]}}),
        encoding="utf-8",
    )
    return path


def test_player_dry_run_walks_the_surah(player, verses_json, capsys):
    code = player.main(["113", "--dry-run", "--verses-json", str(verses_json), "--from", "3"])

    out = capsys.readouterr().out
    assert code == 0
    assert "[113:3] v3" in out
    assert "[113:5] v5" in out
    assert "[113:2]" not in out


def test_player_lists_reciters(player, capsys):
    assert player.main(["1", "--list-reciters"]) == 0
    assert "ar.alafasy" in capsys.readouterr().out


def test_player_reports_unknown_reciter(player, verses_json, capsys):
    code = player.main(["113", "--dry-run", "--verses-json", str(verses_json), "--reciter", "ar.nobody"])

    assert code == 1
    assert "Unknown reciter" in capsys.readouterr().err


def test_player_reports_missing_surah(player, verses_json, capsys):
    code = player.main(["2", "--dry-run", "--verses-json", str(verses_json)])

    assert code == 1
    assert "Surah not available" in capsys.readouterr().err


@pytest.mark.parametrize("start", ["0", "9"])
def test_player_rejects_verse_outside_surah(player, verses_json, capsys, start):
    code = player.main(["113", "--verses-json", str(verses_json), "--from", start])

    captured = capsys.readouterr()
    assert code == 1
    assert f"Surah 113 has no verse {start}" in captured.err
    assert "[113:" not in captured.out


@pytest.mark.parametrize("flags, level", [(["-v"], logging.DEBUG), ([], logging.INFO)])
def test_player_verbose_flag_sets_log_level(player, capsys, flags, level):
    assert player.main(["1", "--list-reciters", *flags]) == 0
    assert logging.getLogger("tartil").level == level


class _Response:
    def __init__(self, url):
        self.url = url
        self.content = b"ID3" + url.encode()

    def raise_for_status(self):
        if url_verse(self.url) == 4:
            raise requests.HTTPError("404 Not Found")


def url_verse(url):
    return int(url.rsplit("/", 1)[1][3:6])


def test_download_saves_verses_and_skips_existing(download, tmp_path, monkeypatch):
    fetched = []

    def fake_get(self, url, timeout=None):
        fetched.append(url)
        return _Response(url)

    monkeypatch.setattr(requests.Session, "get", fake_get)

    code = download.main(["114", "--output", str(tmp_path), "--reciter", "ar.saadalghamdi"])

    assert code == 1
    assert sorted(p.name for p in (tmp_path / "114").iterdir()) == [
        "114001.mp3", "114002.mp3", "114003.mp3", "114005.mp3", "114006.mp3",
    ]
    assert fetched[0] == "https://everyayah.com/data/Saad_Al-Ghamadi_64kbps/114001.mp3"

    fetched.clear()
    download.main(["114", "--output", str(tmp_path), "--reciter", "ar.saadalghamdi"])
    assert fetched == ["https://everyayah.com/data/Saad_Al-Ghamadi_64kbps/114004.mp3"]
