"""Identity cache tests - hits, TTL expiry and the no-negative-caching rule."""

from anchor_pds.services.identity_cache import IdentityCache

from tests.services.fake_identity import (
    ALICE, ALICE_TOKEN, BOB, BOB_TOKEN, FakeClock, FakeResolver,
)


def _cache(clock=None):
    resolver = FakeResolver({ALICE_TOKEN: ALICE, BOB_TOKEN: BOB})
    cache = IdentityCache(resolver, ttl_seconds=3600, clock=clock or FakeClock())
    return cache, resolver


async def test_first_resolution_calls_resolver():
    cache, resolver = _cache()

    identity = await cache.resolve(ALICE_TOKEN)

    assert identity == ALICE
    assert resolver.calls == [ALICE_TOKEN]


async def test_hit_within_ttl_skips_resolver():
    clock = FakeClock()
    cache, resolver = _cache(clock)

    await cache.resolve(ALICE_TOKEN)
    clock.advance(3599)
    identity = await cache.resolve(ALICE_TOKEN)

    assert identity == ALICE
    assert resolver.calls == [ALICE_TOKEN]


async def test_entry_expires_at_ttl_and_is_re_resolved():
    clock = FakeClock()
    cache, resolver = _cache(clock)

    await cache.resolve(ALICE_TOKEN)
    clock.advance(3600)

    assert cache.get(ALICE_TOKEN) is None
    assert await cache.resolve(ALICE_TOKEN) == ALICE
    assert resolver.calls == [ALICE_TOKEN, ALICE_TOKEN]


async def test_rejected_token_is_not_cached():
    cache, resolver = _cache()

    assert await cache.resolve("bogus") is None
    assert await cache.resolve("bogus") is None

    assert resolver.calls == ["bogus", "bogus"]
    assert len(cache) == 0


async def test_later_success_after_rejection_is_cached():
    cache, resolver = _cache()

    assert await cache.resolve("late") is None
    resolver.identities["late"] = BOB
    assert await cache.resolve("late") == BOB
    assert await cache.resolve("late") == BOB

    assert resolver.calls == ["late", "late"]


async def test_tokens_are_cached_independently():
    cache, _ = _cache()

    assert await cache.resolve(ALICE_TOKEN) == ALICE
    assert await cache.resolve(BOB_TOKEN) == BOB
    assert len(cache) == 2


def test_purge_expired_removes_only_stale_entries():
    clock = FakeClock()
    cache, _ = _cache(clock)
    cache.put(ALICE_TOKEN, ALICE)
    clock.advance(1800)
    cache.put(BOB_TOKEN, BOB)
    clock.advance(1800)

    removed = cache.purge_expired()

    assert removed == 1
    assert len(cache) == 1
    assert cache.get(BOB_TOKEN) == BOB


async def test_miss_purges_expired_entries():
    clock = FakeClock()
    cache, _ = _cache(clock)
    cache.put(ALICE_TOKEN, ALICE)
    clock.advance(4000)

    await cache.resolve(BOB_TOKEN)

    assert len(cache) == 1
