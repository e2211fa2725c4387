import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from smart_translate.languages import is_known_language
from smart_translate.packages.translator import DEFAULT_MODEL, VALID_MODELS, Options
from smart_translate.paths import get_config_file

logger = logging.getLogger(__name__)

API_KEY_PLACEHOLDER = "your_api_key"

VALID_MODIFIERS = ["cmd", "ctrl", "control", "shift", "alt", "option"]

# pynput Key names available on every platform
NAMED_KEYS = {
    "space", "enter", "tab", "esc", "backspace", "delete",
    "up", "down", "left", "right", "home", "end", "page_up", "page_down",
    *(f"f{n}" for n in range(1, 21)),
}


class ConfigError(ValueError):
    """Configuration error with key name."""

    def __init__(self, key: str, message: str):
        self.key = key
        self.message = message
        super().__init__(f"{key}: {message}")


class ConfigErrors(ValueError):
    """Multiple configuration errors."""

    def __init__(self, errors: list[ConfigError]):
        self.errors = errors
        super().__init__("\n".join(str(e) for e in errors))


@dataclass
class Env:
    OPENAI_API_KEY: str
    OPENAI_MODEL: str
    TRANSLATE_FROM: str
    TRANSLATE_TO: str
    TRANSLATE_HOTKEY: str
    OPENAI_TIMEOUT: int

    def _masked_key(self) -> str:
        if len(self.OPENAI_API_KEY) >= 4:
            return "****" + self.OPENAI_API_KEY[-4:]
        return "****"

    def options(self) -> Options:
        """Per-invocation options for the translate action."""
        return Options(
            apikey=self.OPENAI_API_KEY,
            model=self.OPENAI_MODEL,
            from_lang=self.TRANSLATE_FROM,
            to_lang=self.TRANSLATE_TO,
        )

    def __str__(self) -> str:
        return (
            f"{'OPENAI_API_KEY:':<20} {self._masked_key()}\n"
            f"{'OPENAI_MODEL:':<20} {self.OPENAI_MODEL}\n"
            f"{'TRANSLATE_FROM:':<20} {self.TRANSLATE_FROM}\n"
            f"{'TRANSLATE_TO:':<20} {self.TRANSLATE_TO}\n"
            f"{'TRANSLATE_HOTKEY:':<20} {self.TRANSLATE_HOTKEY}\n"
            f"{'OPENAI_TIMEOUT:':<20} {self.OPENAI_TIMEOUT}"
        )


def _read_language(key: str, default: str, errors: list[ConfigError]) -> str:
    value = os.getenv(key) or default
    if not is_known_language(value):
        errors.append(
            ConfigError(
                key,
                f"unknown language '{value}'. Run 'smart-translate languages' for the list",
            )
        )
    return value


def parse_hotkey_names(key_name: str, hotkey_str: str | None) -> list[str]:
    """Split a 'modifier+key' string (e.g. ctrl+alt+t) into validated key names."""
    if not hotkey_str:
        raise ConfigError(
            key_name,
            f"cannot be empty. Format: modifier+key (e.g. ctrl+alt+t). Modifiers: {', '.join(VALID_MODIFIERS)}",
        )

    names = [p.strip().lower() for p in hotkey_str.split("+")]
    if "" in names:
        raise ConfigError(
            key_name,
            f"invalid format '{hotkey_str}'. Format: modifier+key (e.g. ctrl+alt+t)",
        )

    for name in names:
        if name not in VALID_MODIFIERS and len(name) != 1 and name not in NAMED_KEYS:
            raise ConfigError(
                key_name,
                f"unknown key '{name}'. Modifiers: {', '.join(VALID_MODIFIERS)}",
            )
    return names


def read_env() -> Env:
    """Read and validate config from env file, returning an Env instance."""
    config_file = get_config_file()
    load_dotenv(config_file, override=True)

    errors: list[ConfigError] = []

    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
    if not OPENAI_API_KEY or OPENAI_API_KEY == API_KEY_PLACEHOLDER:
        errors.append(
            ConfigError(
                "OPENAI_API_KEY",
                "cannot be empty. Obtain one from https://platform.openai.com/account/api-keys",
            )
        )

    OPENAI_MODEL = os.getenv("OPENAI_MODEL") or DEFAULT_MODEL
    if OPENAI_MODEL not in VALID_MODELS:
        errors.append(
            ConfigError(
                "OPENAI_MODEL",
                f"invalid model '{OPENAI_MODEL}'. Valid: {', '.join(VALID_MODELS)}",
            )
        )

    TRANSLATE_FROM = _read_language("TRANSLATE_FROM", "Chinese", errors)
    TRANSLATE_TO = _read_language("TRANSLATE_TO", "English", errors)

    TRANSLATE_HOTKEY = (os.getenv("TRANSLATE_HOTKEY") or "ctrl+alt+t").strip()
    try:
        parse_hotkey_names("TRANSLATE_HOTKEY", TRANSLATE_HOTKEY)
    except ConfigError as e:
        errors.append(e)

    timeout_str = os.getenv("OPENAI_TIMEOUT") or "60"
    OPENAI_TIMEOUT = 60
    try:
        OPENAI_TIMEOUT = int(timeout_str)
        if OPENAI_TIMEOUT <= 0:
            errors.append(ConfigError("OPENAI_TIMEOUT", "must be a positive integer"))
    except ValueError:
        errors.append(ConfigError("OPENAI_TIMEOUT", f"invalid integer '{timeout_str}'"))

    if errors:
        raise ConfigErrors(errors)

    assert OPENAI_API_KEY is not None

    return Env(
        OPENAI_API_KEY=OPENAI_API_KEY,
        OPENAI_MODEL=OPENAI_MODEL,
        TRANSLATE_FROM=TRANSLATE_FROM,
        TRANSLATE_TO=TRANSLATE_TO,
        TRANSLATE_HOTKEY=TRANSLATE_HOTKEY,
        OPENAI_TIMEOUT=OPENAI_TIMEOUT,
    )
