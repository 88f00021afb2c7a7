"""
Explicit playback control handle and keyboard shortcut dispatch.

Components that need to drive playback (key handlers, verse click handlers,
menus) receive a ``PlaybackControls`` instance instead of reaching for a
shared global player object.
"""

from typing import Callable, Optional

from tartil.core.sequencer import VersePlaybackSequencer
from tartil.models import PlaybackState


class PlaybackControls:
    """Narrow control surface over a VersePlaybackSequencer."""

    def __init__(self, sequencer: VersePlaybackSequencer):
        self._sequencer = sequencer

    @property
    def is_playing(self) -> bool:
        return self._sequencer.is_playing

    @property
    def state(self) -> PlaybackState:
        return self._sequencer.state

    @property
    def current_index(self) -> Optional[int]:
        return self._sequencer.current_index

    def play_verse(self, index: int) -> None:
        self._sequencer.play_verse(index)

    def toggle_play_pause(self) -> PlaybackState:
        return self._sequencer.toggle_play_pause()

    def stop(self) -> None:
        self._sequencer.stop()

    def next_verse(self) -> bool:
        """Jump to the following verse. Returns False at the last verse."""
        audio_set = self._sequencer.audio_set
        current = self._sequencer.current_index
        target = 0 if current is None else current + 1
        if audio_set is None or not audio_set.is_valid_index(target):
            return False
        self._sequencer.play_verse(target)
        return True

    def previous_verse(self) -> bool:
        """Jump to the preceding verse. Returns False at the first verse."""
        current = self._sequencer.current_index
        if current is None or current <= 0:
            return False
        self._sequencer.play_verse(current - 1)
        return True


# Verses run right-to-left, so the left arrow moves forward.
DEFAULT_BINDINGS: dict[str, str] = {
    " ": "toggle_play_pause",
    "ArrowRight": "previous_verse",
    "ArrowLeft": "next_verse",
}


class KeyboardShortcuts:
    """
    Dispatch key presses to playback actions.

    Args:
        controls: Handle the actions are invoked on
        bindings: Key name -> PlaybackControls method name
    """

    def __init__(self, controls: PlaybackControls, bindings: dict[str, str] | None = None):
        self.controls = controls
        self.bindings = dict(DEFAULT_BINDINGS if bindings is None else bindings)
        for key, action in self.bindings.items():
            if not callable(getattr(PlaybackControls, action, None)):
                raise ValueError(f"Unknown playback action {action!r} for key {key!r}")

    def action_for(self, key: str) -> Optional[Callable]:
        name = self.bindings.get(key)
        return getattr(self.controls, name) if name else None

    def handle_key(self, key: str, target_is_input: bool = False) -> bool:
        """
        Run the action bound to ``key``.

        Keys typed into a text input are left alone.

        Returns:
            True if the key was handled
        """
        if target_is_input:
            return False
        action = self.action_for(key)
        if action is None:
            return False
        action()
        return True
