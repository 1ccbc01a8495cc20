"""
textslug: turn titles with markup, entities, accents and symbols into
clean ASCII text and URL slugs.
"""
from .config import (
    TransformOptions,
    configure,
    get_default_options,
    reset_configuration,
)
from .errors import ConfigurationError, TableError, TextslugError
from .localization import LocaleBackend, Translator, get_translator, set_backend
from .tables import CharacterTables, store_translations
from .text import (
    collapse,
    convert_accented_html_entities,
    convert_miscellaneous_characters,
    convert_miscellaneous_html_entities,
    convert_smart_punctuation,
    convert_unreadable_control_characters,
    convert_vulgar_fractions,
    limit,
    random_string,
    remove_formatting,
    replace_whitespace,
    strip_html_tags,
    to_ascii,
    to_html,
    to_url,
    whole_word_limit,
)

__version__ = "1.0.0"

__all__ = [
    # Configuration
    "TransformOptions",
    "configure",
    "get_default_options",
    "reset_configuration",
    # Errors
    "ConfigurationError",
    "TableError",
    "TextslugError",
    # Localization
    "CharacterTables",
    "LocaleBackend",
    "Translator",
    "get_translator",
    "set_backend",
    "store_translations",
    # Text
    "collapse",
    "convert_accented_html_entities",
    "convert_miscellaneous_characters",
    "convert_miscellaneous_html_entities",
    "convert_smart_punctuation",
    "convert_unreadable_control_characters",
    "convert_vulgar_fractions",
    "limit",
    "random_string",
    "remove_formatting",
    "replace_whitespace",
    "strip_html_tags",
    "to_ascii",
    "to_html",
    "to_url",
    "whole_word_limit",
]
