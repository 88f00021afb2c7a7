#!/usr/bin/env python3
"""
Terminal Quran player.

Plays a surah verse by verse and advances automatically. Type a command and
press Enter while it plays:

    p        play / pause
    n        next verse
    b        previous verse
    g 2:255  go to a verse and play it
    r <id>   switch reciter
    m        bookmark the current verse
    q        quit

Usage:
    python player.py 1
    python player.py 36 --reciter ar.mahermuaiqly --from 5
    python player.py 112 --dry-run
"""

import argparse
import logging
import queue
import sys
import threading
import time
from pathlib import Path

# Allow running without installing the package
sys.path.insert(0, str(Path(__file__).resolve().parent / "tartil"))

from tartil import PlaybackState, ReadingSession, TartilError, configure
from tartil._logging import configure_logging, enable_debug_logging
from tartil.audio import PydubAudioEngine, ScriptedAudioEngine
from tartil.data import JsonVerseStore, get_surah_name, list_reciters

POLL_S = 0.05


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play a surah verse by verse")
    parser.add_argument("surah", type=int, help="Surah number (1-114)")
    parser.add_argument("--reciter", default=None, help="Reciter id (default from settings)")
    parser.add_argument("--from", dest="start", type=int, default=1, help="First verse number")
    parser.add_argument("--audio-dir", type=Path, default=None, help="Local verse MP3 directory")
    parser.add_argument("--verses-json", type=Path, default=None, help="Read text from a JSON verse store")
    parser.add_argument("--dry-run", action="store_true", help="Walk the surah without audio")
    parser.add_argument("--list-reciters", action="store_true", help="Show reciters and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def read_commands(commands: "queue.Queue[str]") -> None:
    for line in sys.stdin:
        commands.put(line.strip())
    commands.put("q")


def handle_command(session: ReadingSession, command: str) -> bool:
    """Apply one command. Returns False when the player should exit."""
    if not command:
        return True
    verb, _, arg = command.partition(" ")
    if verb == "q":
        return False
    if verb == "p":
        session.controls.toggle_play_pause()
    elif verb == "n":
        session.controls.next_verse()
    elif verb == "b":
        session.controls.previous_verse()
    elif verb == "g":
        index = session.go_to(arg)
        if index is None:
            print(f"Not a verse reference: {arg!r}")
        else:
            session.controls.play_verse(index)
    elif verb == "r":
        try:
            session.set_reciter(arg.strip())
        except TartilError as e:
            print(e)
        else:
            session.controls.play_verse(0)
    elif verb == "m":
        session.toggle_bookmark(session.current_verse)
    else:
        print(f"Unknown command: {command!r}")
    return True


def run_dry(session: ReadingSession, engine: ScriptedAudioEngine) -> None:
    while session.sequencer.state == PlaybackState.PLAYING:
        engine.tick(1.0, 1.0)
        engine.finish()


def run_live(session: ReadingSession, engine: PydubAudioEngine) -> None:
    commands: "queue.Queue[str]" = queue.Queue()
    threading.Thread(target=read_commands, args=(commands,), daemon=True).start()

    while True:
        engine.pump()
        try:
            if not handle_command(session, commands.get_nowait()):
                return
        except queue.Empty:
            pass
        if session.sequencer.state == PlaybackState.IDLE and session.sequencer.current_index is None:
            return
        time.sleep(POLL_S)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        enable_debug_logging()
    else:
        configure_logging(level=logging.INFO)

    if args.list_reciters:
        for reciter in list_reciters():
            print(f"{reciter.id:<24} {reciter.name}")
        return 0

    overrides = {}
    if args.audio_dir:
        overrides["local_audio_dir"] = args.audio_dir
    settings = configure(**overrides)

    engine = ScriptedAudioEngine(autostart=True) if args.dry_run else PydubAudioEngine(settings=settings)
    provider = JsonVerseStore(args.verses_json) if args.verses_json else None

    def show_verse(index: int, number: int) -> None:
        verse = session.audio_set.verse_at(index)
        print(f"\n[{session.surah_number}:{number}] {verse.text}")

    try:
        session = ReadingSession(
            engine,
            provider=provider,
            settings=settings,
            reciter_id=args.reciter,
            on_verse_changed=show_verse,
        )
    except TartilError as e:
        print(f"Error: {e}", file=sys.stderr)
        engine.close()
        return 1

    try:
        audio_set = session.load_surah(args.surah)
        if not audio_set.is_valid_index(args.start - 1):
            print(f"Error: Surah {args.surah} has no verse {args.start}", file=sys.stderr)
            return 1
        print(f"Surah {args.surah} ({get_surah_name(args.surah)}), {len(audio_set)} verses, {session.reciter.id}")
        session.controls.play_verse(args.start - 1)
        if args.dry_run:
            run_dry(session, engine)
        else:
            run_live(session, engine)
    except (TartilError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        pass
    finally:
        session.close()
        engine.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
