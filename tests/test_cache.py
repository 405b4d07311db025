import re
import threading

import pytest

from profilestats.cache import CACHE_TTL, SnapshotCache
from profilestats.errors import CacheMissError
from profilestats.records import StatRecord, StatsSnapshot

RECORDS = [StatRecord("github", {"followers": 5}), StatRecord("leetcode_stats", {"totalSolved": 3})]


def test_put_returns_128_bit_hex_key(cache):
    key = cache.put(RECORDS)

    assert re.fullmatch(r"[0-9a-f]{32}", key)


def test_get_after_put_returns_equal_snapshot(cache, clock):
    key = cache.put(RECORDS)
    snapshot = cache.get(key)

    assert snapshot == StatsSnapshot(RECORDS, created_at=clock.now)
    assert snapshot.to_list() == [
        {"platform": "github", "followers": 5},
        {"platform": "leetcode_stats", "totalSolved": 3},
    ]


def test_entry_is_still_valid_at_exactly_ttl(cache, clock):
    key = cache.put(RECORDS)
    clock.advance(CACHE_TTL)

    assert cache.get(key) is not None


def test_expired_entry_is_absent_without_a_sweep(cache, clock):
    key = cache.put(RECORDS)
    clock.advance(CACHE_TTL + 1)

    assert cache.get(key) is None
    # not swept yet, just hidden
    assert len(cache) == 1


def test_unknown_key_is_absent(cache):
    assert cache.get("0" * 32) is None
    assert "nope" not in cache


def test_sweep_removes_only_expired_entries(cache, clock):
    old = cache.put(RECORDS)
    clock.advance(CACHE_TTL / 2)
    fresh = cache.put(RECORDS)
    clock.advance(CACHE_TTL / 2 + 1)

    assert cache.sweep() == 1
    assert len(cache) == 1
    assert cache.get(old) is None
    assert cache.get(fresh) is not None


def test_keys_do_not_collide(cache):
    keys = {cache.put(RECORDS) for _ in range(10_000)}

    assert len(keys) == 10_000


def test_stored_snapshot_is_isolated_from_caller_mutation(cache):
    fields = {"followers": 5}
    records = [StatRecord("github", fields)]
    key = cache.put(records)

    fields["followers"] = 500
    records.append(StatRecord("leetcode_stats", {}))

    snapshot = cache.get(key)
    assert len(snapshot.records) == 1
    assert snapshot.records[0].fields == {"followers": 5}


def test_concurrent_puts_and_gets(clock):
    cache = SnapshotCache(clock=clock)
    keys, errors = [], []
    lock = threading.Lock()

    def worker():
        try:
            for _ in range(200):
                key = cache.put(RECORDS)
                assert cache.get(key) is not None
                with lock:
                    keys.append(key)
        except Exception as e:  # surfaced via `errors`
            errors.append(e)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads: t.start()
    for t in threads: t.join()

    assert not errors
    assert len(set(keys)) == 1600
    assert len(cache) == 1600


def test_background_sweeper_evicts_and_stops(clock):
    cache = SnapshotCache(clock=clock, sweep_interval=0.01)
    cache.put(RECORDS)
    clock.advance(CACHE_TTL + 1)

    swept = threading.Event()
    real_sweep = cache.sweep

    def tracking_sweep():
        removed = real_sweep()
        swept.set()
        return removed

    cache.sweep = tracking_sweep
    cache.start()
    try:
        assert swept.wait(2)
    finally:
        cache.stop(timeout=2)

    assert len(cache) == 0


def test_cached_snapshot_cannot_be_rewritten_by_readers(cache):
    key = cache.put([StatRecord("github", {"followers": 5})])

    with pytest.raises(TypeError):
        cache.get(key).records[0].fields["followers"] = 999

    assert cache.get(key).records[0].fields == {"followers": 5}
    assert cache.get(key).records[0].to_dict() == {"platform": "github", "followers": 5}


def test_require_raises_on_missing_and_expired_keys(cache, clock):
    key = cache.put(RECORDS)
    assert cache.require(key) is cache.get(key)

    clock.advance(CACHE_TTL + 1)
    with pytest.raises(CacheMissError) as exc:
        cache.require(key)
    assert exc.value.key == key

    with pytest.raises(CacheMissError):
        cache.require("f" * 32)
