from .main import KeyboardListener, parse_hotkey

__all__ = ["KeyboardListener", "parse_hotkey"]
