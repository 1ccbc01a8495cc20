"""Tests for default options, configure() and environment overrides."""
import pytest

from textslug import (
    ConfigurationError,
    TransformOptions,
    configure,
    get_default_options,
    reset_configuration,
    to_url,
)
from textslug.config import load_default_options


def test_builtin_defaults():
    assert get_default_options() == TransformOptions()
    opts = get_default_options()
    assert opts.replace_whitespace_with == "-"
    assert opts.force_downcase is True
    assert opts.truncate_words is True
    assert opts.limit is None
    assert opts.exclude == frozenset()


def test_configure_with_builder():
    def settings(s):
        s.limit = 5
        s.replace_whitespace_with = "_"

    configure(settings)
    assert get_default_options().limit == 5
    assert to_url("Hello World") == "hello"


def test_configure_keywords_merge_over_current_defaults():
    configure(limit=20)
    configure(force_downcase=False)
    opts = get_default_options()
    assert opts.limit == 20
    assert opts.force_downcase is False


def test_caller_options_win_over_configured_defaults():
    configure(replace_whitespace_with="_")
    assert to_url("Hello World") == "hello_world"
    assert to_url("Hello World", replace_whitespace_with=".") == "hello.world"


def test_reset_configuration():
    configure(limit=3)
    reset_configuration()
    assert get_default_options().limit is None


def test_configure_unknown_setting():
    def settings(s):
        s.limt = 3

    with pytest.raises(ConfigurationError):
        configure(settings)


@pytest.mark.parametrize("settings", [
    {"replace_whitespace_with": ""},
    {"limit": "10"},
    {"limit": True},
    {"force_downcase": "no"},
    {"exclude": [1, 2]},
    {"locale": "  "},
])
def test_configure_rejects_malformed_settings(settings):
    with pytest.raises(ConfigurationError):
        configure(**settings)
    assert get_default_options() == TransformOptions()


def test_unknown_option_at_call_site():
    with pytest.raises(ConfigurationError):
        to_url("Hello", {"bogus": 1})


def test_environment_defaults(monkeypatch):
    monkeypatch.setenv("TEXTSLUG_LIMIT", "10")
    monkeypatch.setenv("TEXTSLUG_FORCE_DOWNCASE", "false")
    monkeypatch.setenv("TEXTSLUG_LOCALE", "de")
    reset_configuration()
    opts = get_default_options()
    assert opts.limit == 10
    assert opts.force_downcase is False
    assert opts.locale == "de"


def test_arguments_win_over_environment(monkeypatch):
    monkeypatch.setenv("TEXTSLUG_REPLACE_WHITESPACE_WITH", "_")
    assert load_default_options().replace_whitespace_with == "_"
    assert load_default_options(replace_whitespace_with="+").replace_whitespace_with == "+"


@pytest.mark.parametrize("name, value", [
    ("TEXTSLUG_LIMIT", "ten"),
    ("TEXTSLUG_TRUNCATE_WORDS", "maybe"),
])
def test_malformed_environment(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigurationError):
        load_default_options()


def test_reset_configuration_reports_malformed_environment(monkeypatch):
    monkeypatch.setenv("TEXTSLUG_LIMIT", "ten")
    with pytest.raises(ConfigurationError):
        reset_configuration()
    monkeypatch.setenv("TEXTSLUG_LIMIT", "5")
    reset_configuration()
    assert get_default_options().limit == 5


def test_options_are_immutable():
    opts = TransformOptions()
    with pytest.raises(AttributeError):
        opts.limit = 3
    assert opts.merge(limit=3).limit == 3
    assert opts.limit is None
