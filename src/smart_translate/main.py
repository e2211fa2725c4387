import logging
import threading
import time

import pyperclip
from pynput.keyboard import Controller, Key, KeyCode

from smart_translate import log_config  # noqa: F401 (logging side-effect)
from smart_translate.action import TranslateAction
from smart_translate.env import read_env
from smart_translate.host import Modifiers
from smart_translate.packages.keyboard_listener import KeyboardListener, parse_hotkey
from smart_translate.packages.notifications import Notifier
from smart_translate.packages.translator import Translator

logger = logging.getLogger(__name__)

# Time for the frontmost app to serve Cmd+C before the clipboard is read
COPY_SETTLE_SECONDS = 0.15


class DesktopHost:
    """macOS host: selection via Cmd+C, output via clipboard + Cmd+V."""

    def __init__(self, keyboard_listener: KeyboardListener, notifier: Notifier) -> None:
        self._listener = keyboard_listener
        self._notifier = notifier
        self._keyboard_controller = Controller()

    def _send_cmd(self, char: str) -> None:
        with self._keyboard_controller.pressed(Key.cmd):
            self._keyboard_controller.tap(KeyCode.from_char(char))

    def read_selection(self) -> str:
        """Copy the current selection and return it, leaving the clipboard as it was.

        Only text is saved and restored: non-text clipboard contents such as
        images or files are lost.
        """
        previous = pyperclip.paste()
        if not previous:
            logger.debug("Clipboard holds no text; non-text contents will not be restored")
        pyperclip.copy("")
        try:
            self._send_cmd("c")
            time.sleep(COPY_SETTLE_SECONDS)
            return pyperclip.paste()
        finally:
            pyperclip.copy(previous)

    def modifiers(self) -> Modifiers:
        return self._listener.modifiers()

    def paste_text(self, text: str) -> None:
        pyperclip.copy(text)
        self._send_cmd("v")
        logger.info("Result pasted at cursor via Cmd+V")

    def copy_text(self, text: str) -> None:
        pyperclip.copy(text)
        logger.info("Result copied to clipboard")

    def show_success(self) -> None:
        self._notifier.notify_success()

    def show_text(self, text: str) -> None:
        self._notifier.notify_error(text)


class SmartTranslateApp:
    """Translates the current selection whenever the hotkey is pressed."""

    def __init__(self) -> None:
        self.env = read_env()
        logger.info(f"Config:\n{self.env}")

        self.notifier = Notifier()
        self.keyboard_listener = KeyboardListener()
        self.host = DesktopHost(self.keyboard_listener, self.notifier)
        self.action = TranslateAction(
            lambda options: Translator(options.apikey, timeout=self.env.OPENAI_TIMEOUT)
        )
        self._translate_lock = threading.Lock()
        self._hotkey = None

    def on_hotkey(self) -> None:
        """Callback for the translate hotkey."""
        if not self._translate_lock.acquire(blocking=False):
            logger.debug("Hotkey ignored: translation already running")
            return

        threading.Thread(target=self._translate_flow, daemon=True).start()

    def _translate_flow(self) -> None:
        """Selection -> translate -> output. Runs in a worker thread."""
        try:
            text = self.host.read_selection()
            if not text or not text.strip():
                logger.info("No text selected")
                self.notifier.notify_info("No text selected")
                return

            logger.info(f"Translating {len(text)} chars")
            self.action.execute(text, self.env.options(), self.host)
        except Exception:
            logger.exception("Translate flow error")
            self.notifier.notify_error("Translation failed — see logs")
        finally:
            self._translate_lock.release()

    def run(self) -> None:
        """Start the application."""
        logger.info("Starting Smart Translate...")

        self._hotkey = parse_hotkey("TRANSLATE_HOTKEY", self.env.TRANSLATE_HOTKEY)
        self.keyboard_listener.register_hotkey(self._hotkey, self.on_hotkey)
        self.keyboard_listener.start()

        try:
            self.keyboard_listener.join()
        except KeyboardInterrupt:
            logger.info("Shutting down...")
            self.shutdown()

    def shutdown(self) -> None:
        """Clean shutdown of the hotkey listener."""
        if self._hotkey is not None:
            self.keyboard_listener.unregister_hotkey(self._hotkey)
        self.keyboard_listener.stop()


if __name__ == "__main__":
    app = SmartTranslateApp()
    app.run()
