"""
Tests for profile resolution and aliasing.
"""

from propstack.config.profile_resolver import ProfileResolver, candidates_from
from propstack.config.source_registry import ConfigContext


def test_alias_table():
    resolver = ProfileResolver()
    assert resolver.resolve(["dev"]) == "development"
    assert resolver.resolve(["prod"]) == "production"
    assert resolver.resolve(["local"]) == "local"
    assert resolver.resolve(["custom"]) == "custom"
    assert resolver.resolve([]) == "local"


def test_first_present_non_empty_candidate_wins():
    resolver = ProfileResolver()
    assert resolver.resolve([None, "", "  ", "staging", "prod"]) == "staging"
    assert resolver.resolve([None, None]) == "local"


def test_alias_lookup_ignores_case_and_whitespace():
    resolver = ProfileResolver()
    assert resolver.resolve([" DEV "]) == "development"
    assert resolver.resolve(["MyEnv"]) == "MyEnv"


def test_profile_lists_aliases():
    resolver = ProfileResolver()
    profile = resolver.profile("prod")
    assert profile.canonical_name == "production"
    assert profile.aliases == frozenset({"prod"})
    assert profile.known
    assert not resolver.profile("custom").known


def test_is_active_accepts_aliases():
    resolver = ProfileResolver()
    assert resolver.is_active("dev", "development")
    assert resolver.is_active("production", "prod")
    assert not resolver.is_active("dev", "production")


def test_candidates_follow_override_env_property_order():
    context = ConfigContext.capture(
        overrides={},
        properties={"environment": "staging"},
        environ={"ENVIRONMENT": "prod"},
    )
    assert ProfileResolver().resolve(candidates_from(context)) == "production"

    context = ConfigContext.capture(overrides={"environment": "dev"}, environ={"ENVIRONMENT": "prod"})
    assert ProfileResolver().resolve(candidates_from(context)) == "development"
