"""Tests for CharacterTables loading and lookups."""
import pytest

from textslug import CharacterTables, TableError
from textslug.tables import default_tables, locale_chain


def test_builtin_lookup():
    assert default_tables.get("characters", "and", "en") == "and"
    assert default_tables.get("characters", "and", "de") == "und"
    assert default_tables.get("html_entities", "gt", "de") == ">"
    assert default_tables.get("characters", "nope", "de") is None


def test_builtin_locales():
    assert {"en", "de", "fr"} <= set(default_tables.locales())


def test_locale_chain():
    assert locale_chain("pt-BR") == ["pt-BR", "pt", "en"]
    assert locale_chain("en") == ["en"]
    assert locale_chain(None) == ["en"]


def test_custom_tables_directory(tmp_path):
    (tmp_path / "en.yml").write_text("characters:\n  and: AND\n", encoding="utf-8")
    (tmp_path / "fr.yml").write_text("characters:\n  at: arobase\n", encoding="utf-8")
    tables = CharacterTables(tmp_path)
    assert tables.get("characters", "and", "fr") == "AND"
    assert tables.get("characters", "at", "fr") == "arobase"
    assert tables.get("characters", "at", "en") is None


def test_register_and_reset(tmp_path):
    (tmp_path / "en.yml").write_text("characters:\n  and: and\n", encoding="utf-8")
    tables = CharacterTables(tmp_path)
    tables.register("en", "characters", {"and": "n"})
    assert tables.get("characters", "and") == "n"
    tables.reset()
    assert tables.get("characters", "and") == "and"


def test_missing_default_locale(tmp_path):
    (tmp_path / "fr.yml").write_text("characters:\n  and: et\n", encoding="utf-8")
    with pytest.raises(TableError):
        CharacterTables(tmp_path).get("characters", "and", "fr")


def test_invalid_yaml(tmp_path):
    (tmp_path / "en.yml").write_text("characters: [unclosed\n", encoding="utf-8")
    with pytest.raises(TableError):
        CharacterTables(tmp_path).get("characters", "and")


def test_unknown_category_in_file(tmp_path):
    (tmp_path / "en.yml").write_text("glyphs:\n  a: b\n", encoding="utf-8")
    with pytest.raises(TableError):
        CharacterTables(tmp_path).locales()
