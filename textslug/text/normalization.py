"""
Text normalization stages. Each stage takes a string and returns a string,
never raises on string input, and is safe on the empty string.
remove_formatting() chains them in the order they depend on each other.
"""
import html
import re
from typing import Optional

from .. import tables
from ..config import OptionsLike, resolve_options
from ..localization import get_translator
from .transliteration import to_ascii

_WHITESPACE_RE = re.compile(r"\s+")

MISCELLANEOUS_CATEGORIES = ("ellipses", "currencies", "abbreviations", "characters", "apostrophes")


def _smart_strip(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text.strip())


def replace_whitespace(text: str, replacement: str = " ") -> str:
    """
    Replace runs of whitespace with `replacement`.
      "Foo       bar" -> "Foo bar"
      "Foo       bar", "-" -> "Foo-bar"
    """
    return _WHITESPACE_RE.sub(lambda m: replacement, text)


def collapse(text: str, char: str = " ") -> str:
    """
    Remove runs of `char` from both ends and squeeze inner runs to one.
      collapse("  a   b  ") -> "a b"
      collapse("--a--b--", "-") -> "a-b"
    """
    if not text or not char:
        return text
    unit = f"(?:{re.escape(char)})"
    text = re.sub(rf"\A{unit}+", "", text)
    text = re.sub(rf"{unit}+\Z", "", text)
    return re.sub(rf"{unit}{{2,}}", lambda m: char, text)


def strip_html_tags(text: str, leave_whitespace: bool = False) -> str:
    """
    Remove HTML tags by pattern (no DOM parsing). Whitespace runs are
    collapsed afterwards unless leave_whitespace is set.
    """
    text = tables.HTML_TAG.sub("", text)
    return text if leave_whitespace else _smart_strip(text)


def convert_smart_punctuation(text: str, locale: Optional[str] = None) -> str:
    """Convert MS Word style curly quotes and ellipsis characters to ASCII."""
    return _smart_strip(get_translator().apply("smart_punctuation", text, locale))


def convert_accented_html_entities(text: str) -> str:
    """
    Convert accented-letter HTML entities to the bare letter.
      "&aacute;" -> "a", "&ccedil;" -> "c", "&oslash;" -> "o"
    Raw Unicode letters are left alone; see to_ascii() for those.
    """
    return _smart_strip(tables.ACCENTED_HTML_ENTITY.sub(r"\1", text))


def convert_vulgar_fractions(text: str, locale: Optional[str] = None) -> str:
    """Spell out vulgar fractions given as entities or Unicode characters."""
    return _smart_strip(get_translator().translate(text, ["vulgar_fractions"], locale))


def convert_unreadable_control_characters(text: str, locale: Optional[str] = None) -> str:
    return _smart_strip(get_translator().translate(text, ["unreadable_control_characters"], locale))


def convert_miscellaneous_html_entities(text: str, locale: Optional[str] = None) -> str:
    """
    Convert the HTML entities Textile-style markup commonly produces into text,
    then decode any other well-formed entity. Unknown entities stay as they are.
    """
    text = get_translator().translate(text, ["html_entities"], locale)
    text = tables.HTML_ENTITY_TOKEN.sub(lambda m: html.unescape(m.group(0)), text)
    return _smart_strip(text)


def convert_miscellaneous_characters(text: str, options: OptionsLike = None) -> str:
    """
    Convert symbols to words:
      "foo & bar" -> "foo and bar"
      "Chanel #9" -> "Chanel number nine"
      "user@host" -> "user at host"
      "google.com" -> "google dot com"
      "$10" -> "10 dollars"
      "*69" -> "star 69"
      "100%" -> "100 percent"
      "windows/mac/linux" -> "windows slash mac slash linux"
    Currency amounts are handled before the generic symbol table, and any
    leftover punctuation becomes whitespace. Run the HTML entity stages
    first, since '&' always turns into a word here.
    """
    opts = resolve_options(options)
    # the \s* prefixed patterns rescan every blank run from each position
    text = _smart_strip(text)
    text = tables.THOUSANDS_SEPARATOR.sub("", text)
    text = get_translator().translate(text, MISCELLANEOUS_CATEGORIES, opts.locale, opts)
    text = tables.CLEANUP_CHARACTERS.sub(" ", text)
    return _smart_strip(text)


def remove_formatting(text: str, options: OptionsLike = None) -> str:
    """Run every normalization stage in order and return plain ASCII words separated by spaces."""
    opts = resolve_options(options)
    locale = opts.locale
    text = strip_html_tags(text)
    text = convert_smart_punctuation(text, locale)
    text = convert_accented_html_entities(text)
    text = convert_vulgar_fractions(text, locale)
    text = convert_unreadable_control_characters(text, locale)
    text = convert_miscellaneous_html_entities(text, locale)
    text = convert_miscellaneous_characters(text, opts)
    text = to_ascii(text, locale)
    # to_ascii can produce symbols (e.g. the fraction slash) that only the
    # ASCII patterns recognize
    text = convert_miscellaneous_characters(text, opts)
    return collapse(text)
