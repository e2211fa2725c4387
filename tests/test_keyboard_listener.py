import pytest

keyboard = pytest.importorskip(
    "pynput.keyboard", reason="pynput needs a display backend", exc_type=ImportError
)

from smart_translate.env import ConfigError  # noqa: E402
from smart_translate.host import Modifiers  # noqa: E402
from smart_translate.packages.keyboard_listener import KeyboardListener, parse_hotkey  # noqa: E402


class _Listener:
    def canonical(self, key):
        return key


def test_parse_hotkey():
    keys = parse_hotkey("TRANSLATE_HOTKEY", "ctrl+option+t")
    assert keys == {keyboard.Key.ctrl, keyboard.Key.alt, keyboard.KeyCode.from_char("t")}


def test_parse_hotkey_unknown_key():
    with pytest.raises(ConfigError):
        parse_hotkey("TRANSLATE_HOTKEY", "ctrl+hyper")


def test_modifiers_follow_held_keys():
    kl = KeyboardListener()
    kl.listener = _Listener()

    kl._on_press(keyboard.Key.shift_r)
    assert kl.modifiers() == Modifiers(shift=True, option=False)

    kl._on_press(keyboard.Key.alt_l)
    assert kl.modifiers() == Modifiers(shift=True, option=True)

    kl._on_release(keyboard.Key.shift_r)
    kl._on_release(keyboard.Key.alt_l)
    assert kl.modifiers() == Modifiers()


def test_hotkey_callback_fires():
    fired = []
    kl = KeyboardListener()
    kl.listener = _Listener()
    kl.register_hotkey(parse_hotkey("TRANSLATE_HOTKEY", "ctrl+t"), lambda: fired.append(True))

    kl._on_press(keyboard.Key.ctrl)
    kl._on_press(keyboard.KeyCode.from_char("t"))

    assert fired == [True]


def test_unregister_hotkey():
    kl = KeyboardListener()
    hotkey = parse_hotkey("TRANSLATE_HOTKEY", "ctrl+alt+t")
    kl.register_hotkey(hotkey, lambda: None)

    kl.unregister_hotkey(parse_hotkey("TRANSLATE_HOTKEY", "ctrl+alt+t"))

    assert kl.hotkeys == []
