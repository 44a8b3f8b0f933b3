"""Localized message lookup for archive link labels and titles."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Mapping
from functools import lru_cache
from pathlib import Path

log = logging.getLogger(__name__)

I18N_DIR = Path(__file__).parent / "i18n"
DEFAULT_MESSAGE = "archive"
_LANGUAGE_RE = re.compile(r"^[a-z]{2,3}(-[a-z0-9]+)*$")

# Any callable mapping a message key to text (or None when unknown)
MessageLookup = Callable[[str], str | None]


@lru_cache(maxsize=32)
def _load_language(language: str) -> dict[str, str]:
    if not _LANGUAGE_RE.match(language or ""):
        return {}
    path = I18N_DIR / f"{language}.json"
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        log.warning("Could not load messages for %s: %s", language, exc)
        return {}
    return {key: value for key, value in data.items() if not key.startswith("@") and isinstance(value, str)}


def available_languages() -> list[str]:
    return sorted(path.stem for path in I18N_DIR.glob("*.json"))


class MessageCatalog:
    """Messages for one language with a fallback language behind it."""

    def __init__(
        self,
        language: str = "en",
        fallback_language: str = "en",
        overrides: Mapping[str, str] | None = None,
    ):
        self.language = language
        self.fallback_language = fallback_language
        self.overrides = dict(overrides or {})

    def lookup(self, key: str) -> str | None:
        if key in self.overrides:
            return self.overrides[key]
        for language in (self.language, self.fallback_language):
            value = _load_language(language).get(key)
            if value is not None:
                return value
        return None

    def __call__(self, key: str) -> str | None:
        return self.lookup(key)

    def table(self) -> dict[str, str]:
        """All known messages, fallback language first so the chosen language wins."""
        merged = dict(_load_language(self.fallback_language))
        merged.update(_load_language(self.language))
        merged.update(self.overrides)
        return merged


def resolve_message(lookup: MessageLookup | None, key: str) -> str:
    """Resolve a key to text without ever failing.

    Unknown keys resolve to the key itself; an empty key resolves to the
    generic "archive" label.
    """
    if not key:
        return DEFAULT_MESSAGE
    if lookup is None:
        return key
    try:
        value = lookup(key)
    except LookupError:
        value = None
    if not value:
        return key
    return value

