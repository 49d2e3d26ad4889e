"""
Hotkey Module for Chunk Finder

Listens for the global read hotkey using pynput. The listener runs in its
own daemon thread and calls back into the application when the hotkey is
pressed.
"""

import logging
from typing import Callable, Optional

from pynput import keyboard

from .keys import hotkey_label, pynput_hotkey

logger = logging.getLogger(__name__)


class HotkeyManager:
    """
    Manages the global hotkey listener.

    Example:
        manager = HotkeyManager("none", "f8", worker.request_read)
        manager.start()
        ...
        manager.set_binding("ctrl", "f9")
        ...
        manager.stop()
    """

    def __init__(self, modifier: str, key: str, callback: Callable[[], None]):
        """
        Initialize the hotkey manager (does not start listening).

        Args:
            modifier: Modifier name ("none", "ctrl", "alt", "shift")
            key: Key name (e.g. "f8")
            callback: Called from the listener thread on each press
        """
        self.modifier = modifier
        self.key = key
        self.callback = callback
        self._listener: Optional[keyboard.GlobalHotKeys] = None

    @property
    def label(self) -> str:
        """Display name of the current binding."""
        return hotkey_label(self.modifier, self.key)

    def _on_activate(self):
        """Listener-thread callback."""
        logger.debug(f"Hotkey {self.label} pressed")
        try:
            self.callback()
        except Exception:
            logger.exception("Error in hotkey callback")

    def start(self) -> bool:
        """
        Start listening, replacing any running listener.

        Returns:
            True if the listener started
        """
        self.stop()

        try:
            hotkey = pynput_hotkey(self.modifier, self.key)
            self._listener = keyboard.GlobalHotKeys({hotkey: self._on_activate})
            self._listener.start()
        except Exception as e:
            logger.error(f"Failed to start hotkey listener for {self.label}: {e}")
            self._listener = None
            return False

        logger.info(f"Hotkey listener started: {self.label}")
        return True

    def stop(self):
        """Stop the listener if it is running."""
        if self._listener is not None:
            self._listener.stop()
            self._listener = None
            logger.debug("Hotkey listener stopped")

    def set_binding(self, modifier: str, key: str) -> bool:
        """
        Rebind the hotkey and restart the listener.

        Returns:
            True if the new binding is active
        """
        self.modifier = modifier
        self.key = key
        return self.start()

    @property
    def is_running(self) -> bool:
        """Check if the listener thread is alive."""
        return self._listener is not None and self._listener.is_alive()
