"""Host side of the translate action.

The action only needs the held modifier keys and four output primitives;
the desktop daemon and the command line each provide their own host.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import click
import pyperclip

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Modifiers:
    shift: bool = False
    option: bool = False


@runtime_checkable
class Host(Protocol):
    """Environment the translate action runs in."""

    def modifiers(self) -> Modifiers:
        """Modifier keys held right now."""

    def paste_text(self, text: str) -> None:
        """Replace the selection with text."""

    def copy_text(self, text: str) -> None:
        """Put text on the clipboard."""

    def show_success(self) -> None:
        """Brief success indicator."""

    def show_text(self, text: str) -> None:
        """Show a message to the user."""


class ConsoleHost:
    """Host for the command line: results go to stdout, messages to stderr."""

    def __init__(self, modifiers: Modifiers | None = None):
        self._modifiers = modifiers or Modifiers()

    def modifiers(self) -> Modifiers:
        return self._modifiers

    def paste_text(self, text: str) -> None:
        click.echo(text)

    def copy_text(self, text: str) -> None:
        pyperclip.copy(text)
        click.secho("Copied to clipboard", fg="green", err=True)

    def show_success(self) -> None:
        logger.debug("Translation complete")

    def show_text(self, text: str) -> None:
        click.secho(text, fg="red", err=True)
