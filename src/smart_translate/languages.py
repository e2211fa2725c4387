"""Static catalog of selectable language names."""

import json
from importlib import resources
from typing import Iterable


def _load_langs() -> list[dict]:
    raw = resources.files("smart_translate").joinpath("data/languages.json").read_text(
        encoding="utf-8"
    )
    return json.loads(raw)["langs"]


def _sort_key(name: str) -> tuple[str, str]:
    # Case-insensitive first, raw string breaks ties so the order is total
    return (name.casefold(), name)


def list_language_names(langs: Iterable[dict] | None = None) -> list[str]:
    """Return every language name, sorted ascending and case-insensitively.

    Args:
        langs: Records of the form {"name": ...}. Defaults to the packaged list.

    Duplicates are kept; nothing is filtered.
    """
    if langs is None:
        langs = _load_langs()
    return sorted((lang["name"] for lang in langs), key=_sort_key)


LANGUAGE_NAMES: tuple[str, ...] = tuple(list_language_names())


def is_known_language(name: str) -> bool:
    """Check a configured language against the catalog."""
    return name in LANGUAGE_NAMES
