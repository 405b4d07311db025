import logging
import secrets
import threading
import time

from .errors import CacheMissError
from .records import StatsSnapshot

logger = logging.getLogger(__name__)

CACHE_TTL = 3600  # 1 hour, also the sweep period
KEY_BYTES = 16    # 128-bit keys, 32 hex chars


class SnapshotCache:
    """
    Opaque key -> StatsSnapshot, valid for `ttl` seconds after insertion.

    `get` checks expiry itself, so an entry the sweeper hasn't reached yet is
    already invisible. The sweep only reclaims memory.
    """

    def __init__(self, ttl=CACHE_TTL, clock=time.time, sweep_interval=None):
        self.ttl = ttl
        self.clock = clock
        self.sweep_interval = sweep_interval or ttl
        self._entries = {}
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread = None

    def __len__(self):
        with self._lock:
            return len(self._entries)

    def __contains__(self, key):
        return self.get(key) is not None

    def put(self, records):
        """Store a fresh snapshot of `records` and return its key."""
        snapshot = StatsSnapshot(records, created_at=self.clock())
        with self._lock:
            key = secrets.token_hex(KEY_BYTES)
            while key in self._entries:
                key = secrets.token_hex(KEY_BYTES)
            self._entries[key] = snapshot

        logger.debug("Cached snapshot %s... (%d records)", key[:8], len(snapshot.records))
        return key

    def get(self, key):
        with self._lock:
            snapshot = self._entries.get(key)
        if snapshot is None: return None
        if self._expired(snapshot, self.clock()): return None
        return snapshot

    def require(self, key):
        """Like `get`, but an absent or expired key raises CacheMissError."""
        snapshot = self.get(key)
        if snapshot is None:
            raise CacheMissError(key)
        return snapshot

    def sweep(self):
        """Drop every expired entry. Returns how many were removed."""
        now = self.clock()
        with self._lock:
            items = list(self._entries.items())

        stale = [k for k, snap in items if self._expired(snap, now)]
        removed = 0
        for key in stale:
            with self._lock:
                # Entries are insert-once, so a stale key is still the same snapshot
                if self._entries.pop(key, None) is not None:
                    removed += 1

        if removed:
            logger.debug("Swept %d expired snapshot(s)", removed)
        return removed

    def _expired(self, snapshot, now):
        return now - snapshot.created_at > self.ttl

    # =======================
    #    BACKGROUND SWEEP
    # =======================

    def start(self):
        if self._thread and self._thread.is_alive(): return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="snapshot-sweeper", daemon=True)
        self._thread.start()

    def stop(self, timeout=None):
        self._stop.set()
        if self._thread:
            self._thread.join(timeout)
            self._thread = None

    def _run(self):
        while not self._stop.wait(self.sweep_interval):
            try:
                self.sweep()
            except Exception:
                logger.exception("Snapshot sweep failed")
