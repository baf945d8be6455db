import pytest

from dashboard_loader.cache import (
    DASHBOARD_CACHE_TTL,
    DefinitionCache,
    KeyedCache,
    NoExpiryPolicy,
    SceneCache,
    TTLPolicy,
)
from dashboard_loader.scene import transform_definition_to_scene

from conftest import FakeClock, make_definition


def test_definition_cache_ttl_boundary():
    """条目在TTL内可读，超过TTL后视为不存在"""
    clock = FakeClock()
    cache = DefinitionCache(clock=clock)
    definition = make_definition()
    cache.set("abc", definition)

    clock.advance(DASHBOARD_CACHE_TTL - 0.001)
    assert cache.get("abc") is definition

    clock.advance(0.002)
    assert cache.get("abc") is None


def test_definition_cache_entry_exactly_ttl_old_is_valid():
    clock = FakeClock()
    cache = DefinitionCache(ttl=2.0, clock=clock)
    cache.set("abc", make_definition())

    clock.advance(2.0)
    assert cache.get("abc") is not None


def test_expired_entry_is_dropped_on_read():
    clock = FakeClock()
    cache = DefinitionCache(clock=clock)
    cache.set("abc", make_definition())
    assert len(cache) == 1

    clock.advance(10)
    assert len(cache) == 1
    assert cache.get("abc") is None
    assert len(cache) == 0
    assert cache.get_stats().expired == 1


def test_set_overwrites_and_restamps():
    clock = FakeClock()
    cache = DefinitionCache(clock=clock)
    first = make_definition(title="first")
    second = make_definition(title="second")

    cache.set("abc", first)
    clock.advance(1.5)
    cache.set("abc", second)
    clock.advance(1.5)

    assert cache.get("abc") is second


def test_definition_cache_empty_key_is_absent():
    cache = DefinitionCache()
    assert cache.get("") is None


def test_scene_cache_never_expires():
    clock = FakeClock()
    cache = SceneCache(clock=clock)
    scene = transform_definition_to_scene(make_definition())
    cache.set("abc", scene)

    clock.advance(10 ** 6)
    assert cache.get("abc") is scene

    cache.clear()
    assert cache.get("abc") is None


def test_scene_cache_rejects_empty_uid():
    cache = SceneCache()
    with pytest.raises(ValueError):
        cache.set("", transform_definition_to_scene(make_definition(uid="")))


def test_keyed_cache_stats():
    cache = KeyedCache(policy=NoExpiryPolicy())
    cache.set("a", 1)
    cache.get("a")
    cache.get("b")

    stats = cache.get_stats()
    assert stats.hits == 1
    assert stats.misses == 1
    assert stats.writes == 1
    assert stats.entry_count == 1
    assert stats.calculate_hit_rate() == 0.5


def test_ttl_policy_rejects_negative_ttl():
    with pytest.raises(ValueError):
        TTLPolicy(-1)
