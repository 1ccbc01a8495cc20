"""
Locale-aware, table-driven substitutions.

The Translator resolves replacement text through an optional external
LocaleBackend first and the built-in CharacterTables second, then applies
each requested category in one pass over the text.
"""
from __future__ import annotations

import logging
import re
from typing import Callable, Dict, Iterable, Optional, Protocol

from . import tables
from .config import TransformOptions, get_default_options
from .errors import TableError
from .tables import CharacterTables, MatchGroups, default_tables

logger = logging.getLogger(__name__)

_NON_ASCII_RE = re.compile(r"[^\x00-\x7f]")


class LocaleBackend(Protocol):
    def lookup(self, key: str, locale: str) -> Optional[str]:
        """Return the replacement for a dotted 'category.key' name, or None if unknown."""
        ...


class TableBackend:
    """LocaleBackend over CharacterTables."""

    def __init__(self, character_tables: Optional[CharacterTables] = None):
        self.tables = character_tables or default_tables

    def lookup(self, key: str, locale: str) -> Optional[str]:
        category, _, name = key.partition(".")
        return self.tables.get(category, name, locale)


class Translator:
    def __init__(
        self,
        backend: Optional[LocaleBackend] = None,
        character_tables: Optional[CharacterTables] = None,
    ):
        self.backend = backend
        self.builtin = TableBackend(character_tables)
        self._handlers: Dict[str, Callable[[str, str, TransformOptions], str]] = {
            "abbreviations": self._abbreviations,
            "apostrophes": self._apostrophes,
            "characters": self._characters,
            "currencies": self._currencies,
            "ellipses": self._ellipses,
            "html_entities": self._html_entities,
            "smart_punctuation": self._smart_punctuation,
            "transliterations": self._transliterations,
            "unreadable_control_characters": self._unreadable_control_characters,
            "vulgar_fractions": self._vulgar_fractions,
        }

    def lookup(self, category: str, key: str, locale: Optional[str] = None) -> Optional[str]:
        locale = locale or get_default_options().locale or self.builtin.tables.default_locale
        dotted = f"{category}.{key}"
        if self.backend is not None:
            value = self.backend.lookup(dotted, locale)
            if value is not None:
                return value
        return self.builtin.lookup(dotted, locale)

    def apply(
        self,
        category: str,
        text: str,
        locale: Optional[str] = None,
        options: Optional[TransformOptions] = None,
    ) -> str:
        """Run a single category over text."""
        handler = self._handlers.get(category)
        if handler is None:
            raise TableError(f"Unknown conversion category {category!r}")
        return handler(text, locale, options or get_default_options())

    def translate(
        self,
        text: str,
        categories: Iterable[str],
        locale: Optional[str] = None,
        options: Optional[TransformOptions] = None,
    ) -> str:
        """
        Apply categories in the given order, then the locale's per-character
        transliterations. Text without matches comes back unchanged.
        """
        options = options or get_default_options()
        for category in categories:
            text = self.apply(category, text, locale, options)
        return self._transliterations(text, locale, options)

    def _replace_from_table(self, category: str, locale: Optional[str]) -> Callable[[str, MatchGroups], str]:
        def replace(key: str, groups: MatchGroups) -> str:
            value = self.lookup(category, key, locale)
            return groups[0] if value is None else value
        return replace

    def _abbreviations(self, text, locale, options):
        return tables.ABBREVIATION.sub(lambda m: m.group(0).replace(".", ""), text)

    def _apostrophes(self, text, locale, options):
        return tables.APOSTROPHE.sub(r"\1\2", text)

    def _characters(self, text, locale, options):
        def replace(key: str, groups: MatchGroups) -> str:
            if key == "slash" and options.allow_slash:
                return groups[0]
            value = self.lookup("characters", key, locale)
            if value is None:
                return groups[0]
            if key == "dot":
                return groups.expand(value)
            if key == "number" and groups[1]:
                spelled = self.lookup("numbers", groups[1], locale) or groups[1]
                return f" {value} {spelled} "
            return f" {value} " if value else value

        return tables.CHARACTERS.sub(replace, text)

    def _currencies(self, text, locale, options):
        def replace(key: str, groups: MatchGroups) -> str:
            template = self.lookup("currencies", key, locale)
            if template is None:
                return groups[0]
            return f" {groups.expand(template)} "

        return tables.CURRENCIES.sub(replace, text)

    def _ellipses(self, text, locale, options):
        value = self.lookup("ellipses", "ellipsis", locale)
        if value is None:
            return text
        return tables.ELLIPSIS.sub(lambda m: f" {value} ", text)

    def _html_entities(self, text, locale, options):
        return tables.HTML_ENTITIES.sub(self._replace_from_table("html_entities", locale), text)

    def _smart_punctuation(self, text, locale, options):
        return tables.SMART_PUNCTUATION.sub(self._replace_from_table("smart_punctuation", locale), text)

    def _vulgar_fractions(self, text, locale, options):
        return tables.VULGAR_FRACTIONS.sub(self._replace_from_table("vulgar_fractions", locale), text)

    def _unreadable_control_characters(self, text, locale, options):
        return tables.UNREADABLE_CONTROL_CHARACTERS.sub("", text)

    def _transliterations(self, text, locale, options):
        def replace(m: re.Match) -> str:
            value = self.lookup("transliterations", m.group(0), locale)
            return m.group(0) if value is None else value

        return _NON_ASCII_RE.sub(replace, text)


_translator = Translator()


def get_translator() -> Translator:
    return _translator


def set_backend(backend: Optional[LocaleBackend]) -> Translator:
    """
    Install an external locale-data source consulted before the built-in tables.
    Pass None to go back to built-in tables only. Meant for startup code.
    """
    global _translator
    _translator = Translator(backend=backend, character_tables=_translator.builtin.tables)
    logger.debug("textslug locale backend set to %r", backend)
    return _translator
