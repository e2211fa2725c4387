"""
XDG-compliant paths for smart-translate.

Config:  ~/.config/smart-translate/
State:   ~/.local/state/smart-translate/
"""

import os
from pathlib import Path

APP_NAME = "smart-translate"

DEFAULT_CONFIG = """\
# Run `smart-translate config edit` to edit these

OPENAI_API_KEY=your_api_key

# One of: gpt-3.5-turbo, gpt-4, gpt-4-turbo, gpt-4o
OPENAI_MODEL=gpt-4o

# Language to translate from (see `smart-translate languages`)
TRANSLATE_FROM=Chinese

# Target language, or the language to be optimized
TRANSLATE_TO=English

TRANSLATE_HOTKEY=ctrl+alt+t

OPENAI_TIMEOUT=60
"""


def get_config_dir() -> Path:
    """~/.config/smart-translate/"""
    xdg = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg / APP_NAME


def get_state_dir() -> Path:
    """~/.local/state/smart-translate/ - for logs and runtime state"""
    xdg = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))
    return xdg / APP_NAME


def get_config_file() -> Path:
    """Get config file path, creating default if needed. Secured with chmod 600."""
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    config_file = config_dir / "config.env"
    if not config_file.exists():
        config_file.write_text(DEFAULT_CONFIG)
        config_file.chmod(0o600)
    return config_file


def get_log_dir() -> Path:
    """Get log directory."""
    log_dir = get_state_dir() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def get_pid_file() -> Path:
    """Get PID file path for daemon."""
    state_dir = get_state_dir()
    state_dir.mkdir(parents=True, exist_ok=True)
    return state_dir / "daemon.pid"
