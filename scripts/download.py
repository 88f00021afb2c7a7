#!/usr/bin/env python3
"""
Download per-verse MP3s of a reciter for offline playback.

Files are saved as <output>/<SSS>/<SSS><VVV>.mp3, the layout LocalAudioLocator
reads. Existing files are skipped.

Usage:
    python scripts/download.py 1 112 113 114 --reciter ar.alafasy --output data/audio
"""

import argparse
import sys
from pathlib import Path

import requests

# Allow running without installing the package
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "tartil"))

from tartil.audio import EveryAyahLocator, verse_file_stem
from tartil.config import get_settings
from tartil.data import get_ayah_count, get_reciter


def download_surah(
    session: requests.Session,
    locator: EveryAyahLocator,
    surah_number: int,
    reciter_id: str,
    output: Path,
) -> tuple[int, int]:
    """Download every verse of a surah. Returns (downloaded, failed)."""
    surah_dir = output / f"{surah_number:03d}"
    surah_dir.mkdir(parents=True, exist_ok=True)

    downloaded = failed = 0
    for verse in range(1, get_ayah_count(surah_number) + 1):
        file_path = surah_dir / f"{verse_file_stem(surah_number, verse)}.mp3"
        if file_path.exists():
            continue

        url = locator.resolve(surah_number, verse, reciter_id)
        try:
            response = session.get(url, timeout=get_settings().request_timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            print(f"❌ {file_path.name}: {e}")
            failed += 1
            continue

        file_path.write_bytes(response.content)
        downloaded += 1
        print(f"Downloaded {file_path.name}")

    return downloaded, failed


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Download verse audio for offline playback")
    parser.add_argument("surahs", type=int, nargs="+", help="Surah numbers (1-114)")
    parser.add_argument("--reciter", default=None, help="Reciter id (default from settings)")
    parser.add_argument("--output", type=Path, default=Path("data") / "audio", help="Output directory")
    args = parser.parse_args(argv)

    settings = get_settings()
    reciter = get_reciter(args.reciter or settings.default_reciter)
    locator = EveryAyahLocator(settings.audio_base)

    total_failed = 0
    with requests.Session() as session:
        for surah_number in args.surahs:
            downloaded, failed = download_surah(session, locator, surah_number, reciter.id, args.output)
            total_failed += failed
            print(f"✅ Surah {surah_number:03d}: {downloaded} downloaded, {failed} failed")

    return 1 if total_failed else 0


if __name__ == "__main__":
    sys.exit(main())
