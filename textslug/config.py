import logging
import os
import threading
from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Dict, FrozenSet, Mapping, Optional, Union

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"
DEFAULT_WHITESPACE_REPLACEMENT = "-"

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass(frozen=True)
class TransformOptions:
    exclude: FrozenSet[str] = frozenset()
    replace_whitespace_with: str = DEFAULT_WHITESPACE_REPLACEMENT
    force_downcase: bool = True
    limit: Optional[int] = None
    truncate_words: bool = True
    allow_slash: bool = False
    locale: Optional[str] = None

    def merge(self, overrides: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> "TransformOptions":
        """Return a copy with the given fields replaced; unspecified fields keep their value."""
        values = dict(overrides or {})
        values.update(kwargs)
        if not values:
            return self
        return replace(self, **_validate(values))


OptionsLike = Union[TransformOptions, Mapping[str, Any], None]

_FIELD_NAMES = tuple(f.name for f in fields(TransformOptions))


class Settings:
    """
    Mutable view of TransformOptions handed to configure() builders.
    Assigning an attribute that is not an option raises AttributeError.
    """
    __slots__ = _FIELD_NAMES

    def __init__(self, options: TransformOptions):
        for name in _FIELD_NAMES:
            setattr(self, name, getattr(options, name))

    def to_options(self) -> TransformOptions:
        return TransformOptions(**_validate({name: getattr(self, name) for name in _FIELD_NAMES}))


def _validate(values: Mapping[str, Any]) -> Dict[str, Any]:
    unknown = sorted(set(values) - set(_FIELD_NAMES))
    if unknown:
        raise ConfigurationError(f"Unknown option(s): {', '.join(unknown)}")
    out: Dict[str, Any] = {}
    for name, value in values.items():
        if name == "exclude":
            if value is None:
                value = frozenset()
            elif isinstance(value, str):
                value = frozenset([value])
            else:
                try:
                    value = frozenset(value)
                except TypeError:
                    raise ConfigurationError("exclude must be a string or an iterable of strings") from None
            if not all(isinstance(v, str) for v in value):
                raise ConfigurationError("exclude must only contain strings")
        elif name == "replace_whitespace_with":
            if not isinstance(value, str) or not value:
                raise ConfigurationError("replace_whitespace_with must be a non-empty string")
        elif name == "limit":
            if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
                raise ConfigurationError(f"limit must be an integer or None, got {value!r}")
        elif name == "locale":
            if value is not None and (not isinstance(value, str) or not value.strip()):
                raise ConfigurationError(f"locale must be a non-empty string or None, got {value!r}")
            if value is not None:
                value = value.strip()
        elif not isinstance(value, bool):
            raise ConfigurationError(f"{name} must be a boolean, got {value!r}")
        out[name] = value
    return out


def _env_bool(name: str) -> Optional[bool]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean flag, got {raw!r}")


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None


def load_default_options(**overrides: Any) -> TransformOptions:
    """
    Build the process-wide default options.
    Precedence: function args > env > built-in defaults.
    Recognized env vars:
      TEXTSLUG_LOCALE, TEXTSLUG_LIMIT, TEXTSLUG_REPLACE_WHITESPACE_WITH,
      TEXTSLUG_FORCE_DOWNCASE, TEXTSLUG_TRUNCATE_WORDS, TEXTSLUG_ALLOW_SLASH
    """
    env: Dict[str, Any] = {
        "locale": os.getenv("TEXTSLUG_LOCALE", "").strip() or None,
        "limit": _env_int("TEXTSLUG_LIMIT"),
        "replace_whitespace_with": os.getenv("TEXTSLUG_REPLACE_WHITESPACE_WITH") or None,
        "force_downcase": _env_bool("TEXTSLUG_FORCE_DOWNCASE"),
        "truncate_words": _env_bool("TEXTSLUG_TRUNCATE_WORDS"),
        "allow_slash": _env_bool("TEXTSLUG_ALLOW_SLASH"),
    }
    values = {k: v for k, v in env.items() if v is not None}
    values.update(overrides)
    return TransformOptions(**_validate(values))


_lock = threading.Lock()
_defaults: Optional[TransformOptions] = None


def get_default_options() -> TransformOptions:
    """Process-wide defaults, read from env on first use unless configured or reset."""
    global _defaults
    current = _defaults
    if current is None:
        with _lock:
            if _defaults is None:
                _defaults = load_default_options()
            current = _defaults
    return current


def configure(builder: Optional[Callable[[Settings], Any]] = None, **settings: Any) -> TransformOptions:
    """
    Change the process-wide default options.

    `builder` receives a mutable Settings object; keyword settings are applied
    after it. Invalid settings raise ConfigurationError and leave the current
    defaults untouched. Meant to be called during startup.
    """
    global _defaults
    with _lock:
        base = _defaults if _defaults is not None else load_default_options()
        staged = Settings(base)
        try:
            if builder is not None:
                builder(staged)
            for name, value in settings.items():
                setattr(staged, name, value)
        except AttributeError as e:
            raise ConfigurationError(f"Invalid setting: {e}") from e
        new = staged.to_options()
        _defaults = new
    logger.debug("textslug defaults configured: %s", new)
    return new


def reset_configuration() -> None:
    """
    Forget configure() changes and rebuild the defaults from env right away.
    A malformed env value raises ConfigurationError here; the defaults then
    stay unset and the next use raises the same error.
    """
    global _defaults
    with _lock:
        _defaults = None
        _defaults = load_default_options()
    logger.debug("textslug defaults reset")


def resolve_options(options: OptionsLike = None, **overrides: Any) -> TransformOptions:
    """Merge caller options (mapping or TransformOptions) over the process defaults."""
    if isinstance(options, TransformOptions):
        return options.merge(overrides)
    values = dict(options or {})
    values.update(overrides)
    return get_default_options().merge(values)
