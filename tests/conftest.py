import pytest

from textslug import reset_configuration, set_backend
from textslug.tables import default_tables

ENV_VARS = (
    "TEXTSLUG_LOCALE",
    "TEXTSLUG_LIMIT",
    "TEXTSLUG_REPLACE_WHITESPACE_WITH",
    "TEXTSLUG_FORCE_DOWNCASE",
    "TEXTSLUG_TRUNCATE_WORDS",
    "TEXTSLUG_ALLOW_SLASH",
)


@pytest.fixture(autouse=True)
def clean_state(monkeypatch):
    """Isolate tests from the environment and from each other's global changes."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_configuration()
    yield
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_configuration()
    default_tables.reset()
    set_backend(None)
