"""
Character tables: the regular expressions that find convertible text and the
per-locale replacement strings (loaded from locales/*.yml) that replace it.
"""
from __future__ import annotations

import copy
import logging
import re
import threading
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional

import yaml

from .config import DEFAULT_LOCALE
from .errors import TableError

logger = logging.getLogger(__name__)

LOCALES_DIR = Path(__file__).parent / "locales"

# Categories that carry locale-dependent replacement text
REPLACEMENT_CATEGORIES = (
    "characters",
    "currencies",
    "ellipses",
    "html_entities",
    "numbers",
    "smart_punctuation",
    "transliterations",
    "vulgar_fractions",
)

Table = Dict[str, Dict[str, str]]

_ALPHA = r"[^\W\d_]"
_BACKREFERENCE_RE = re.compile(r"\\(\d)")


class PatternSet:
    """
    Ordered key -> regex table matched in a single pass.

    All patterns are joined into one alternation, so text produced by a
    replacement is never scanned again by a later key.
    """

    def __init__(self, patterns: Mapping[str, str]):
        self.keys: List[str] = list(patterns)
        self._offsets: Dict[str, int] = {}
        parts = []
        group = 1
        for key, source in patterns.items():
            inner = re.compile(source).groups
            parts.append(f"(?P<{key}>{source})")
            self._offsets[key] = group
            group += 1 + inner
        self.regex = re.compile("|".join(parts))

    def sub(self, replace: Callable[[str, "MatchGroups"], str], text: str) -> str:
        def _repl(m: re.Match) -> str:
            key = m.lastgroup
            return replace(key, MatchGroups(m, self._offsets[key]))

        return self.regex.sub(_repl, text)


class MatchGroups:
    """Groups of one alternative inside a PatternSet match, numbered from 1."""

    def __init__(self, match: re.Match, offset: int):
        self.match = match
        self.offset = offset

    def __getitem__(self, n: int) -> str:
        if n == 0:
            return self.match.group(self.offset)
        return self.match.group(self.offset + n) or ""

    def expand(self, template: str) -> str:
        """Substitute \\1..\\9 in a replacement template with this match's groups."""
        return _BACKREFERENCE_RE.sub(lambda t: self[int(t.group(1))], template)


def _html_tag_regex() -> re.Pattern:
    name = r"[\w:-]+"
    value = r"(?:[A-Za-z0-9]+|'[^']*?'|\"[^\"]*?\")"
    attr = rf"(?:{name}(?:\s*=\s*{value})?)"
    return re.compile(rf"<[!/?\[]?(?:{name}|--)(?:\s+{attr}(?:\s+{attr})*)?\s*(?:[!/?\]]+|--)?>")


HTML_TAG = _html_tag_regex()

ACCENTED_HTML_ENTITY = re.compile(r"&([A-Za-z])(?:grave|acute|circ|tilde|uml|ring|cedil|slash);")

# Any entity-shaped token; decoded with html.unescape when it is a real entity
HTML_ENTITY_TOKEN = re.compile(r"&#?[A-Za-z0-9]+;")

ABBREVIATION = re.compile(rf"(?:(?<=[\s(])|^){_ALPHA}(?:\.{_ALPHA})+\.?{_ALPHA}*(?=[\s)]|$)")

APOSTROPHE = re.compile(rf"(^|{_ALPHA})'|`({_ALPHA}|$)")

ELLIPSIS = re.compile(r"\s*\.\.\.\s*")

THOUSANDS_SEPARATOR = re.compile(r"(?<=\d),(?=\d)")

UNREADABLE_CONTROL_CHARACTERS = re.compile(r"[\x00-\x1f\x7f-\x9f]")

# Punctuation that is simply turned into spaces
CLEANUP_CHARACTERS = re.compile(r"[.,:;(){}\[\]?!^'ʼ\"_|<>`~]")

CHARACTERS = PatternSet({
    "and": r"\s*&\s*",
    "at": r"\s*@\s*",
    "degrees": r"\s*°\s*",
    "divide": r"\s*÷\s*",
    "dot": r"(\S|^)\.(\S)",
    "equals": r"\s*=\s*",
    "number": r"\s*#(\d*)",
    "dollars": r"\s*\$\s*",
    "percent": r"\s*%\s*",
    "plus": r"\s*\+\s*",
    "slash": r"\s*(?:\\|/|／)\s*",
    "star": r"\s*\*\s*",
})

_CURRENCY_SYMBOLS = {
    "generic": r"¤",
    "dollars": r"\$",
    "euros": r"€",
    "pounds": r"£",
    "yen": r"¥",
    "reais": r"R\$",
}
_CURRENCY_SUBUNITS = {
    "dollars": "dollars_cents",
    "euros": "euros_cents",
    "pounds": "pounds_pence",
    "reais": "reais_cents",
}
_BEFORE_AMOUNT = r"(?:(?<=\s)|^)"
_AFTER_AMOUNT = r"(?=\s|$)"


def _currency_patterns() -> Dict[str, str]:
    patterns: Dict[str, str] = {}
    # amounts with cents first so "$1.50" is not read as "$1" followed by ".50"
    for key, subunit in _CURRENCY_SUBUNITS.items():
        patterns[subunit] = rf"{_BEFORE_AMOUNT}{_CURRENCY_SYMBOLS[key]}(\d+)\.(\d+){_AFTER_AMOUNT}"
    for key, symbol in _CURRENCY_SYMBOLS.items():
        patterns[key] = rf"{_BEFORE_AMOUNT}{symbol}(\d*){_AFTER_AMOUNT}"
    return patterns


CURRENCIES = PatternSet(_currency_patterns())

HTML_ENTITIES = PatternSet({
    key: "&(?:" + "|".join(names) + ");"
    for key, names in {
        "amp": ["#38", "amp"],
        "cent": ["#162", "cent"],
        "copy": ["#169", "copy"],
        "deg": ["#176", "deg"],
        "divide": ["#247", "divide"],
        "double_quote": ["#34", "#822[012]", "quot", "ldquo", "rdquo", "dbquo"],
        "ellipsis": ["#8230", "hellip"],
        "en_dash": ["#8211", "ndash"],
        "em_dash": ["#8212", "mdash"],
        "frac14": ["#188", "frac14"],
        "frac12": ["#189", "frac12"],
        "frac34": ["#190", "frac34"],
        "gt": ["#62", "gt"],
        "lt": ["#60", "lt"],
        "nbsp": ["#160", "nbsp"],
        "pound": ["#163", "pound"],
        "reg": ["#174", "reg"],
        "single_quote": ["#39", "#821[678]", "apos", "lsquo", "rsquo", "sbquo"],
        "times": ["#215", "times"],
        "trade": ["#8482", "trade"],
        "yen": ["#165", "yen"],
    }.items()
})

# Includes the cp1252 quote bytes that show up as C1 controls in mis-decoded Word text
SMART_PUNCTUATION = PatternSet({
    "double_quote": "[“”\u0093\u0094]",
    "single_quote": "[‘’\u0091\u0092]",
    "ellipsis": "…",
})

# Ordered by denominator then numerator
VULGAR_FRACTIONS = PatternSet({
    "half": "&#189;|&frac12;|½",
    "one_third": "&#8531;|⅓",
    "two_thirds": "&#8532;|⅔",
    "one_fourth": "&#188;|&frac14;|¼",
    "three_fourths": "&#190;|&frac34;|¾",
    "one_fifth": "&#8533;|⅕",
    "two_fifths": "&#8534;|⅖",
    "three_fifths": "&#8535;|⅗",
    "four_fifths": "&#8536;|⅘",
    "one_sixth": "&#8537;|⅙",
    "five_sixths": "&#8538;|⅚",
    "one_eighth": "&#8539;|⅛",
    "three_eighths": "&#8540;|⅜",
    "five_eighths": "&#8541;|⅝",
    "seven_eighths": "&#8542;|⅞",
})


def load_locale_file(path: Path) -> Table:
    """
    Read one locale YAML file into {category: {key: replacement}}.
    Missing values become empty strings; unknown categories are rejected.
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise TableError(f"Cannot load translation table {path}: {e}") from e
    if not isinstance(data, dict):
        raise TableError(f"Translation table {path} must be a mapping of categories")
    table: Table = {}
    for category, entries in data.items():
        table[category] = _normalize_entries(category, entries or {}, source=str(path))
    return table


def _normalize_entries(category: str, entries: Mapping, *, source: str) -> Dict[str, str]:
    if category not in REPLACEMENT_CATEGORIES:
        raise TableError(f"Unknown translation category {category!r} in {source}")
    if not isinstance(entries, Mapping):
        raise TableError(f"Category {category!r} in {source} must be a mapping")
    return {str(k): "" if v is None else str(v) for k, v in entries.items()}


def locale_chain(locale: Optional[str], default_locale: str = DEFAULT_LOCALE) -> List[str]:
    """Locales to consult in order, e.g. 'pt-BR' -> ['pt-BR', 'pt', 'en']."""
    chain: List[str] = []
    if locale:
        chain.append(locale)
        base = re.split(r"[-_]", locale, maxsplit=1)[0]
        if base and base not in chain:
            chain.append(base)
    if default_locale not in chain:
        chain.append(default_locale)
    return chain


class CharacterTables:
    """
    Read-only replacement lookups with locale fallback.

    Built-in tables are loaded once from `locales_dir` on first use.
    register() publishes a new snapshot under a lock, so readers never
    see a half-applied update.
    """

    def __init__(self, locales_dir: Path = LOCALES_DIR, default_locale: str = DEFAULT_LOCALE):
        self.locales_dir = Path(locales_dir)
        self.default_locale = default_locale
        self._lock = threading.Lock()
        self._builtin: Optional[Dict[str, Table]] = None
        self._snapshot: Optional[Dict[str, Table]] = None

    def _load_builtin(self) -> Dict[str, Table]:
        tables: Dict[str, Table] = {}
        for path in sorted(self.locales_dir.glob("*.yml")):
            tables[path.stem] = load_locale_file(path)
            logger.debug("Loaded translation table %s", path.name)
        if self.default_locale not in tables:
            raise TableError(f"No translation table for default locale {self.default_locale!r} in {self.locales_dir}")
        return tables

    def _tables(self) -> Dict[str, Table]:
        snapshot = self._snapshot
        if snapshot is None:
            with self._lock:
                if self._snapshot is None:
                    self._builtin = self._load_builtin()
                    self._snapshot = self._builtin
                snapshot = self._snapshot
        return snapshot

    def get(self, category: str, key: str, locale: Optional[str] = None) -> Optional[str]:
        tables = self._tables()
        for loc in locale_chain(locale, self.default_locale):
            value = tables.get(loc, {}).get(category, {}).get(key)
            if value is not None:
                return value
        return None

    def locales(self) -> List[str]:
        return sorted(self._tables())

    def register(self, locale: str, category: str, mapping: Mapping[str, object]) -> None:
        """Add or override replacements for one locale without touching the YAML files."""
        entries = _normalize_entries(category, mapping, source=f"register({locale!r})")
        self._tables()
        with self._lock:
            updated = copy.deepcopy(self._snapshot)
            updated.setdefault(locale, {}).setdefault(category, {}).update(entries)
            self._snapshot = updated
        logger.debug("Registered %d %s replacement(s) for locale %s", len(entries), category, locale)

    def reset(self) -> None:
        """Drop everything added through register()."""
        with self._lock:
            self._snapshot = self._builtin


default_tables = CharacterTables()


def store_translations(locale: str, category: str, mapping: Mapping[str, object]) -> None:
    default_tables.register(locale, category, mapping)
