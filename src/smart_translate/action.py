"""Translate action: selection -> chat completion -> paste, copy or notify."""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Callable

from .host import Host, Modifiers
from .packages.translator import Options, Translator, build_request, get_error_info

logger = logging.getLogger(__name__)


class OutputAction(Enum):
    PASTE_AND_NOTIFY = auto()
    PASTE_ONLY = auto()
    COPY_ONLY = auto()


def choose_output(modifiers: Modifiers) -> OutputAction:
    """shift+option pastes only, shift copies only, anything else pastes and notifies."""
    if modifiers.shift and modifiers.option:
        return OutputAction.PASTE_ONLY
    if modifiers.shift:
        return OutputAction.COPY_ONLY
    return OutputAction.PASTE_AND_NOTIFY


def dispatch_output(text: str, action: OutputAction, host: Host) -> None:
    if action is OutputAction.COPY_ONLY:
        host.copy_text(text)
        return

    host.paste_text(text)
    if action is OutputAction.PASTE_AND_NOTIFY:
        host.show_success()


def _default_translator(options: Options) -> Translator:
    return Translator(options.apikey)


class TranslateAction:
    """Runs one translation of the selected text."""

    def __init__(self, translator_factory: Callable[[Options], Translator] | None = None):
        self._translator_factory = translator_factory or _default_translator

    def execute(self, text: str, options: Options, host: Host) -> bool:
        """Translate text and route the result through host.

        Failures are shown via host.show_text and never raised.

        Returns:
            True if a result was delivered, False otherwise.
        """
        try:
            body = build_request(text, options)
            translator = self._translator_factory(options)
            result = translator.complete(body)
        except Exception as e:
            logger.exception("Translation failed")
            host.show_text(get_error_info(e))
            return False

        try:
            # Sampled after the request so keys pressed while waiting count
            action = choose_output(host.modifiers())
            logger.info(f"Translation received, output: {action.name.lower()}")
            dispatch_output(result, action, host)
        except Exception as e:
            logger.exception("Delivering the translation failed")
            host.show_text(get_error_info(e))
            return False
        return True
