"""
Basic usage example for Tartil library.

This example demonstrates the core workflow without an audio device:
1. Load a surah's text and normalise it
2. Play it verse by verse through a scripted engine
3. Watch verse-changed and play-state notifications
"""

from tartil import PlaybackState, RecordingNotificationSink, ReadingSession
from tartil.audio import ScriptedAudioEngine


def walk_surah(surah_number: int, reciter_id: str = "ar.alafasy"):
    """
    Walk through every verse of a surah, simulating natural completion.

    Args:
        surah_number: Surah number (1-114)
        reciter_id: Reciter identifier

    Returns:
        List of (index, number_in_surah) pairs in the order they played
    """
    played = []
    engine = ScriptedAudioEngine(autostart=True)
    sink = RecordingNotificationSink()

    session = ReadingSession(
        engine,
        sink=sink,
        reciter_id=reciter_id,
        on_verse_changed=lambda index, number: played.append((index, number)),
        on_play_state_changed=lambda playing: print(f"   {'▶' if playing else '⏸'}"),
    )

    print(f"📖 Loading Surah {surah_number}...")
    audio_set = session.load_surah(surah_number)
    print(f"   {len(audio_set)} verses")

    print("\n🔊 Playing...")
    session.controls.play_verse(0)
    while session.sequencer.state == PlaybackState.PLAYING:
        print(f"   Verse {session.sequencer.current_ref.number_in_surah}: {engine.current.url}")
        engine.tick(1.0, 2.0)
        engine.finish()

    for message, severity in sink.messages:
        print(f"   [{severity.value}] {message}")

    session.close()
    return played


if __name__ == "__main__":
    import sys

    surah = int(sys.argv[1]) if len(sys.argv) > 1 else 1
    order = walk_surah(surah)
    print(f"\n🎉 Played {len(order)} verses")
