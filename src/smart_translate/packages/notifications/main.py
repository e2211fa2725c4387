import logging
import platform
import subprocess
import threading

logger = logging.getLogger(__name__)

APP_TITLE = "Smart Translate"

SOUND_GLASS = "/System/Library/Sounds/Glass.aiff"
SOUND_BASSO = "/System/Library/Sounds/Basso.aiff"


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


class Notifier:
    """Handles desktop notifications and sound feedback (macOS only)."""

    def __init__(self) -> None:
        if platform.system() != "Darwin":
            raise NotImplementedError(
                f"Only macOS is supported, but got {platform.system()}"
            )

    def show_alert(self, message: str, title: str = APP_TITLE) -> None:
        """Show a desktop notification (non-blocking, runs in daemon thread)."""
        script = f'display notification "{_escape(message)}" with title "{_escape(title)}"'

        def _run() -> None:
            try:
                subprocess.run(
                    ["osascript", "-e", script],
                    check=False,
                    capture_output=True,
                )
            except Exception:
                logger.exception("Failed to show alert")

        threading.Thread(target=_run, daemon=True).start()

    def play_sound(self, sound_file: str, volume: float = 0.25) -> None:
        """Play a sound file at given volume (0.0-1.0). Fire and forget."""
        try:
            subprocess.Popen(
                ["afplay", "-v", str(volume), sound_file],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except Exception:
            logger.exception("Failed to play sound: %s", sound_file)

    def notify_success(self) -> None:
        """Short confirmation that the selection was replaced."""
        self.play_sound(SOUND_GLASS)

    def notify_error(self, message: str) -> None:
        """Show error alert and play error sound."""
        self.show_alert(message, title=f"{APP_TITLE} — Error")
        self.play_sound(SOUND_BASSO)

    def notify_info(self, message: str) -> None:
        """Show info alert."""
        self.show_alert(message)
