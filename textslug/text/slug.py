"""
Slug generation: URL-friendly identifiers built on the normalization stages.
"""
import random
import string
from typing import Any, FrozenSet, Mapping, Optional

from ..config import OptionsLike, TransformOptions, resolve_options
from .normalization import collapse, remove_formatting, replace_whitespace

# No '0', to avoid confusion with 'O'
STRONG_ALPHANUMERICS = string.ascii_lowercase + string.ascii_uppercase + "123456789"


def to_url(text: str, options: OptionsLike = None, **overrides: Any) -> str:
    """
    Convert text to a URL-friendly slug.
      to_url("Chanel #9 & user@host (100%)") -> "chanel-number-nine-and-user-at-host-100-percent"
    A string listed in the caller's `exclude` is returned untouched; this is
    checked before merging, so `exclude` set through configure() has no
    effect here. The other options are merged over the configured defaults.
    """
    if text in _caller_exclude(options, overrides):
        return text
    opts = resolve_options(options, **overrides)
    token = opts.replace_whitespace_with
    slug = remove_formatting(text, opts)
    slug = replace_whitespace(slug, token)
    slug = collapse(slug, token)
    slug = limit(slug, opts.limit, opts.truncate_words, token)
    # a hard cut can end on a separator
    slug = collapse(slug, token)
    if opts.force_downcase:
        slug = slug.lower()
    return slug


def _caller_exclude(options: OptionsLike, overrides: Mapping[str, Any]) -> FrozenSet[str]:
    if "exclude" in overrides:
        raw = overrides["exclude"]
    elif isinstance(options, TransformOptions):
        return options.exclude
    elif options:
        raw = options.get("exclude")
    else:
        return frozenset()
    return TransformOptions().merge(exclude=raw).exclude


def limit(text: str, max_length: Optional[int] = None, truncate_words: bool = True, token: str = "-") -> str:
    """
    Limit text to max_length characters.
    - max_length None: unchanged
    - truncate_words: keep whole `token`-separated words only
    - otherwise: plain cut, which may split a word
    """
    if max_length is None:
        return text
    if not truncate_words:
        return text[:max_length] if max_length > 0 else ""
    return whole_word_limit(text, max_length, token)


def whole_word_limit(text: str, max_length: int, token: str = "-") -> str:
    """
    Keep leading words while they fit. Each accepted word also uses one unit
    of the budget for its separator. Stops at the first word that does not fit.
      whole_word_limit("foo-bar-baz", 7) -> "foo-bar"
    """
    words = []
    budget = max_length
    for word in text.split(token):
        if len(word) > budget:
            break
        words.append(word)
        budget -= len(word) + 1
    return token.join(words)


def random_string(length: int) -> str:
    """
    Random letters and digits 1-9. For distinguishing suffixes only, not secrets.
    """
    if length < 0:
        raise ValueError(f"length must be >= 0, got {length}")
    return "".join(random.choice(STRONG_ALPHANUMERICS) for _ in range(length))
