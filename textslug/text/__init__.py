"""
Text processing: normalization stages, transliteration, slugs and rendering.
"""
from .formatting import to_html
from .normalization import (
    collapse,
    convert_accented_html_entities,
    convert_miscellaneous_characters,
    convert_miscellaneous_html_entities,
    convert_smart_punctuation,
    convert_unreadable_control_characters,
    convert_vulgar_fractions,
    remove_formatting,
    replace_whitespace,
    strip_html_tags,
)
from .slug import (
    limit,
    random_string,
    to_url,
    whole_word_limit,
)
from .transliteration import to_ascii

__all__ = [
    # Normalization
    "collapse",
    "convert_accented_html_entities",
    "convert_miscellaneous_characters",
    "convert_miscellaneous_html_entities",
    "convert_smart_punctuation",
    "convert_unreadable_control_characters",
    "convert_vulgar_fractions",
    "remove_formatting",
    "replace_whitespace",
    "strip_html_tags",
    # Transliteration
    "to_ascii",
    # Slug
    "limit",
    "random_string",
    "to_url",
    "whole_word_limit",
    # Formatting
    "to_html",
]
