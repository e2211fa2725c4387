import logging
import threading

from pynput import keyboard

from smart_translate.env import parse_hotkey_names
from smart_translate.host import Modifiers

logger = logging.getLogger(__name__)

_KEY_MAP = {
    "cmd": keyboard.Key.cmd,
    "ctrl": keyboard.Key.ctrl,
    "control": keyboard.Key.ctrl,
    "shift": keyboard.Key.shift,
    "alt": keyboard.Key.alt,
    "option": keyboard.Key.alt,
}

_SHIFT_KEYS = {keyboard.Key.shift, keyboard.Key.shift_l, keyboard.Key.shift_r}
_OPTION_KEYS = {keyboard.Key.alt, keyboard.Key.alt_l, keyboard.Key.alt_r, keyboard.Key.alt_gr}


def parse_hotkey(
    key_name: str,
    hotkey_str: str | None,
) -> set[keyboard.Key | keyboard.KeyCode]:
    """Turn a 'modifier+key' string (e.g. ctrl+alt+t) into a pynput key set."""
    keys: set[keyboard.Key | keyboard.KeyCode] = set()
    for part in parse_hotkey_names(key_name, hotkey_str):
        if part in _KEY_MAP:
            keys.add(_KEY_MAP[part])
        elif len(part) == 1:
            keys.add(keyboard.KeyCode.from_char(part))
        else:
            # Named keys such as 'space' or 'f5'
            keys.add(getattr(keyboard.Key, part))

    return keys


class KeyboardListener:
    """Global hotkey listening plus live shift/option state."""

    def __init__(self):
        self.hotkeys = []  # List of dicts: {'keys': set, 'object': keyboard.HotKey}
        self.listener = None
        self.running = False
        self._held: set = set()
        self._held_lock = threading.Lock()

    def register_hotkey(self, hotkey_set, callback):
        """
        Register a hotkey combination and its callback.

        Args:
            hotkey_set: Set of keyboard keys (e.g., {keyboard.Key.ctrl, keyboard.KeyCode.from_char("t")})
            callback: Function to call when hotkey is pressed
        """

        # Keep the listener thread alive whatever the callback does
        def safe_callback():
            logger.debug(f"Hotkey triggered: {hotkey_set}")
            try:
                callback()
            except Exception:
                logger.exception("Error in hotkey callback")

        hk = keyboard.HotKey(hotkey_set, safe_callback)

        self.hotkeys.append({"keys": hotkey_set, "object": hk})
        logger.debug(f"Registered hotkey: {hotkey_set}")

    def unregister_hotkey(self, hotkey_set):
        """Unregister a hotkey combination."""
        target_tuple = tuple(sorted(hotkey_set, key=str))

        initial_len = len(self.hotkeys)
        self.hotkeys = [
            entry
            for entry in self.hotkeys
            if tuple(sorted(entry["keys"], key=str)) != target_tuple
        ]

        if len(self.hotkeys) < initial_len:
            logger.debug(f"Unregistered hotkey: {hotkey_set}")
        else:
            logger.debug(f"Hotkey not registered: {hotkey_set}")

    def modifiers(self) -> Modifiers:
        """Shift/option state as of now."""
        with self._held_lock:
            held = set(self._held)
        return Modifiers(
            shift=bool(held & _SHIFT_KEYS),
            option=bool(held & _OPTION_KEYS),
        )

    def _on_press(self, key):
        if not self.listener:
            return

        if key in _SHIFT_KEYS or key in _OPTION_KEYS:
            with self._held_lock:
                self._held.add(key)

        # Canonicalize the key (handles layout differences)
        canonical_key = self.listener.canonical(key)

        for entry in self.hotkeys:
            entry["object"].press(canonical_key)

    def _on_release(self, key):
        if not self.listener:
            return

        with self._held_lock:
            self._held.discard(key)

        canonical_key = self.listener.canonical(key)

        for entry in self.hotkeys:
            entry["object"].release(canonical_key)

    def start(self):
        """Start listening for keyboard events."""
        if self.running:
            logger.debug("Keyboard listener already running")
            return

        self.running = True
        self.listener = keyboard.Listener(
            on_press=self._on_press, on_release=self._on_release
        )
        self.listener.start()
        logger.debug("Keyboard listener started")

    def stop(self):
        """Stop listening for keyboard events."""
        if not self.running:
            return

        self.running = False
        if self.listener:
            self.listener.stop()
        logger.debug("Keyboard listener stopped")

    def join(self):
        """Wait for the listener thread to finish."""
        if self.listener:
            self.listener.join()
