"""Tests for the settings façade: name parsing, resolution and write routing."""

from __future__ import annotations

import pytest

from runtime_settings.config import TestConfig
from runtime_settings.domain.handlers import Found, Lookup
from runtime_settings.errors import InvalidHandlerError, InvalidNameError, InvalidStateError
from runtime_settings.infra.database import init_database
from runtime_settings.infra.handlers import ArrayHandler, DatabaseHandler
from runtime_settings.services.settings import Settings, parse_name


def test_settings_uses_configured_handlers(provider):
    config = TestConfig()
    config.HANDLERS = []

    settings = Settings(config, provider=provider)

    assert settings.handlers == []
    assert settings.write_handler is None


def test_gets_default_from_config(settings):
    assert settings.get("Example.siteName") == "Settings Test"
    assert settings.get("Example.maxUploads") == 3
    assert settings.get("Example.features") == ["search"]


def test_missing_default_is_none(settings):
    assert settings.get("Example.neverDeclared") is None
    assert settings.get("Nada.siteName") is None


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Example.siteName", ("Example", "siteName")),
        ("app.config.Example.siteName", ("app.config.Example", "siteName")),
    ],
)
def test_parse_name_splits_on_final_dot(name, expected):
    assert parse_name(name) == expected


@pytest.mark.parametrize("name", ["siteName", ".siteName", "Example.", ""])
def test_invalid_names_raise(settings, name):
    with pytest.raises(InvalidNameError):
        settings.get(name)
    with pytest.raises(InvalidNameError):
        settings.set(name, "value")


def test_short_and_qualified_names_are_one_slot(settings, example_class):
    settings.set("Example.siteName", "Foo")
    assert settings.get(f"{example_class}.siteName") == "Foo"


def test_set_then_get_each_type(any_settings):
    values = [True, False, None, 0, "0", "", 3.5, ["a", 1], {"nested": {"x": [1, 2]}}]
    for index, value in enumerate(values):
        name = f"Example.option{index}"
        any_settings.set(name, value)
        result = any_settings.get(name)
        assert result == value
        assert type(result) is type(value)


def test_null_override_hides_default(any_settings):
    any_settings.set("Example.siteName", None)
    assert any_settings.get("Example.siteName") is None


def test_get_with_context(any_settings):
    any_settings.set("Example.siteName", "NoContext")
    any_settings.set("Example.siteName", "YesContext", "testing:true")

    assert any_settings.get("Example.siteName") == "NoContext"
    assert any_settings.get("Example.siteName", "testing:true") == "YesContext"


def test_get_without_context_uses_global(any_settings):
    any_settings.set("Example.siteName", "NoContext")
    assert any_settings.get("Example.siteName", "testing:true") == "NoContext"


def test_contextual_write_does_not_change_global(any_settings):
    any_settings.set("Example.siteName", "Scoped", "tenant:1")

    assert any_settings.get("Example.siteName") == "Settings Test"
    assert any_settings.get("Example.siteName", "tenant:2") == "Settings Test"


def test_forget_with_context(any_settings):
    any_settings.set("Example.siteName", "Bar")
    any_settings.set("Example.siteName", "Amnesia", "category:disease")

    any_settings.forget("Example.siteName", "category:disease")

    assert any_settings.get("Example.siteName", "category:disease") == "Bar"


def test_forget_restores_default(any_settings):
    any_settings.set("Example.siteName", "Foo")

    any_settings.forget("Example.siteName")

    assert any_settings.get("Example.siteName") == "Settings Test"


def test_flush_restores_defaults(any_settings):
    assert any_settings.get("Example.siteName") == "Settings Test"
    any_settings.set("Example.siteName", "Foo")
    any_settings.set("Example.siteName", "Bar", "tenant:1")
    assert any_settings.get("Example.siteName") == "Foo"

    any_settings.flush()

    assert any_settings.get("Example.siteName") == "Settings Test"
    assert any_settings.get("Example.siteName", "tenant:1") == "Settings Test"


def test_works_without_config_class(any_settings):
    any_settings.set("Nada.siteName", "Bar")
    assert any_settings.get("Nada.siteName") == "Bar"


def test_writes_without_primary_handler_raise(provider):
    config = TestConfig()
    config.HANDLERS = []
    settings = Settings(config, provider=provider)

    with pytest.raises(InvalidStateError):
        settings.set("Example.siteName", "Foo")
    with pytest.raises(InvalidStateError):
        settings.forget("Example.siteName")
    with pytest.raises(InvalidStateError):
        settings.flush()
    assert settings.get("Example.siteName") == "Settings Test"


def test_read_only_chain_has_no_primary(provider):
    config = TestConfig()
    config.ARRAY["writeable"] = False
    settings = Settings(config, provider=provider)

    assert settings.write_handler is None
    with pytest.raises(InvalidStateError):
        settings.set("Example.siteName", "Foo")


def test_unknown_handler_raises(provider):
    config = TestConfig()
    config.HANDLERS = ["array", "redis"]

    with pytest.raises(InvalidHandlerError):
        Settings(config, provider=provider)


def test_last_writeable_handler_is_primary(provider, connections):
    config = TestConfig()
    config.HANDLERS = ["array", "database"]
    settings = Settings(config, provider=provider, connections=connections)

    array_handler, database_handler = settings.handlers
    assert isinstance(array_handler, ArrayHandler)
    assert isinstance(database_handler, DatabaseHandler)
    assert not array_handler.has_primary()
    assert database_handler.has_primary()
    assert settings.write_handler is database_handler


def test_read_only_handler_is_skipped_for_primary(provider, connections):
    config = TestConfig()
    config.HANDLERS = ["array", "database"]
    config.DATABASE["writeable"] = False
    settings = Settings(config, provider=provider, connections=connections)

    assert isinstance(settings.write_handler, ArrayHandler)
    assert not settings.handlers[1].has_primary()


def test_writes_only_reach_primary_handler(provider, connections, example_class):
    config = TestConfig()
    config.HANDLERS = ["array", "database"]
    settings = Settings(config, provider=provider, connections=connections)

    settings.set("Example.siteName", "Stored")

    array_handler, database_handler = settings.handlers
    assert array_handler.get(example_class, "siteName") is Lookup.NOT_FOUND
    assert database_handler.get(example_class, "siteName") == Found("Stored")
    assert settings.get("Example.siteName") == "Stored"


def test_tombstone_hides_downstream_value(provider, connections, example_class):
    DatabaseHandler(connections).set(example_class, "siteName", "Persisted")
    config = TestConfig()
    config.HANDLERS = ["array", "database"]
    config.DATABASE["writeable"] = False
    settings = Settings(config, provider=provider, connections=connections)
    assert settings.get("Example.siteName") == "Persisted"

    settings.set("Example.siteName", "Cached")
    assert settings.get("Example.siteName") == "Cached"

    settings.forget("Example.siteName")

    assert settings.get("Example.siteName") == "Settings Test"
    assert settings.handlers[1].get(example_class, "siteName") == Found("Persisted")


def test_forgotten_context_falls_back_to_global_only(settings):
    settings.set("Example.siteName", "Global")
    settings.set("Example.siteName", "Scoped", "tenant:1")

    settings.forget("Example.siteName", "tenant:1")
    assert settings.get("Example.siteName", "tenant:1") == "Global"

    settings.forget("Example.siteName")
    assert settings.get("Example.siteName", "tenant:1") == "Settings Test"


def test_facade_without_shared_connections_creates_its_own(provider, tmp_path):
    config = TestConfig()
    config.HANDLERS = ["database"]
    config.DATABASE_GROUPS = {"default": f"sqlite:///{tmp_path / 'owned.db'}"}

    settings = Settings(config, provider=provider)
    init_database(settings.write_handler.engine)
    settings.set("Example.siteName", "Owned")
    settings.close()

    reopened = Settings(config, provider=provider)
    assert reopened.get("Example.siteName") == "Owned"
    reopened.close()


@pytest.mark.parametrize("name", ["datetime.datetime.tzinfo", "..Example.siteName"])
def test_unsuppliable_config_class_reads_as_none(settings, name):
    assert settings.get(name) is None

    settings.set(name, "Stored")
    assert settings.get(name) == "Stored"


def test_write_is_visible_when_primary_comes_last(provider, connections, example_class):
    DatabaseHandler(connections).set(example_class, "siteName", "Persisted")
    config = TestConfig()
    config.HANDLERS = ["database", "array"]
    settings = Settings(config, provider=provider, connections=connections)
    database_handler, array_handler = settings.handlers
    assert settings.write_handler is array_handler
    assert settings.get("Example.siteName") == "Persisted"

    settings.set("Example.siteName", "Fresh")

    assert settings.get("Example.siteName") == "Fresh"
    assert database_handler.get(example_class, "siteName") == Found("Persisted")

    settings.forget("Example.siteName")

    assert settings.get("Example.siteName") == "Settings Test"
