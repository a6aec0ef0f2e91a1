"""
Tests for source registry assembly and precedence.
"""

import pytest

from propstack.config.errors import MalformedFileError
from propstack.config.resource_loader import MappingNamespace, ResourceLoader
from propstack.config.source_registry import (
    ConfigContext,
    ConfigSource,
    SourcePriority,
    SourceRegistry,
    environment_keys,
)

RESOURCES = {
    "application": "x=default\ndb.host=localhost\nonly.default=d\n",
    "environments/production": "x=profile\ndb.host=prod-db\n",
}


def _build(profile="production", resources=RESOURCES, **context):
    return SourceRegistry.build(profile, ResourceLoader(MappingNamespace(resources)), ConfigContext.capture(**context))


def test_fixed_precedence_order():
    registry = _build(environ={})
    assert registry.names() == [
        "override",
        "properties",
        "environment",
        "profile:environments/production",
        "defaults:application",
    ]
    assert [s.priority for s in registry] == [p.value for p in SourcePriority]
    assert registry.profile == "production"


def test_missing_profile_file_contributes_nothing():
    registry = _build(profile="custom", environ={})
    profile_source = registry.by_priority(SourcePriority.PROFILE)
    assert profile_source.name == "profile:environments/custom"
    assert len(profile_source.properties) == 0
    assert profile_source.lookup("x") is None


def test_missing_defaults_file_contributes_nothing():
    registry = _build(resources={}, environ={})
    assert len(registry) == 5
    assert all(len(s.properties) == 0 for s in registry)


def test_malformed_profile_file_propagates():
    resources = dict(RESOURCES)
    resources["environments/production"] = "broken line\n"
    with pytest.raises(MalformedFileError):
        _build(resources=resources, environ={})


def test_lookup_distinguishes_empty_from_absent():
    source = ConfigSource("override", 1, ConfigContext.capture(overrides={"blank": ""}, environ={}).overrides)
    assert source.lookup("blank") == ""
    assert source.lookup("unset") is None


def test_environment_keys_try_exact_then_converted():
    assert environment_keys("db.host") == ("db.host", "DB_HOST")
    assert environment_keys("api-timeout") == ("api-timeout", "API_TIMEOUT")
    assert environment_keys("HOME") == ("HOME",)

    registry = _build(environ={"DB_HOST": "env-db"})
    assert registry.source("environment").lookup("db.host") == "env-db"


def test_duplicate_priorities_rejected():
    with pytest.raises(ValueError):
        SourceRegistry([ConfigSource("a", 1), ConfigSource("b", 1)])


def test_sources_sorted_once_at_construction():
    registry = SourceRegistry([ConfigSource("low", 5), ConfigSource("high", 1)])
    assert registry.names() == ["high", "low"]
    assert registry[0].name == "high"


def test_context_capture_reads_dotenv_below_real_environment(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("FEATURE_BETA=true\nDB_HOST=dotenv-db\n", encoding="utf-8")
    context = ConfigContext.capture(environ={"DB_HOST": "real-db"}, dotenv_path=env_file)
    assert context.environ["DB_HOST"] == "real-db"
    assert context.environ["FEATURE_BETA"] == "true"


def test_context_capture_snapshots_process_environment(monkeypatch):
    monkeypatch.setenv("PROPSTACK_TEST_VAR", "before")
    context = ConfigContext.capture()
    monkeypatch.setenv("PROPSTACK_TEST_VAR", "after")
    assert context.environ["PROPSTACK_TEST_VAR"] == "before"


def test_context_capture_missing_dotenv_is_ignored(tmp_path):
    context = ConfigContext.capture(environ={"A": "1"}, dotenv_path=tmp_path / "absent.env")
    assert dict(context.environ) == {"A": "1"}
