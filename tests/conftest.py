"""Shared test doubles: a controllable clock and an offline fetcher."""

import pytest

from app import create_app
from profilestats.cache import SnapshotCache
from profilestats.config import Config
from profilestats.errors import UnsupportedPlatformError, UpstreamError


class FakeClock:
    """Callable clock whose time only moves when a test advances it."""

    def __init__(self, start=1_700_000_000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class StubFetcher:
    """Returns canned records per platform and counts every call."""

    def __init__(self, data=None, failures=None):
        self.data = data or {}
        self.failures = failures or {}
        self.calls = []

    def supports(self, platform):
        return platform in self.data or platform in self.failures

    def fetch(self, platform, username):
        self.calls.append((platform, username))
        if platform in self.failures:
            raise UpstreamError(platform, self.failures[platform])
        if platform not in self.data:
            raise UnsupportedPlatformError(platform)
        return dict(self.data[platform])


GITHUB_PROFILE = {
    "login": "octocat",
    "name": "The Octocat",
    "public_repos": 8,
    "followers": 9000,
    "following": 9,
    "hireable": None,
    "node_id": "MDQ6VXNlcjU4MzIzMQ==",
    "total_contributions": 30,
}

LEETCODE_STATS = {
    "status": "success",
    "totalSolved": 120,
    "easySolved": 70,
    "mediumSolved": 40,
    "hardSolved": 10,
    "acceptanceRate": 61.5,
}


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return SnapshotCache(clock=clock)


@pytest.fixture
def fetcher():
    return StubFetcher({"github": GITHUB_PROFILE, "leetcode_stats": LEETCODE_STATS})


@pytest.fixture
def client(fetcher, cache):
    app = create_app(Config(SWEEP_ENABLED=False), fetcher=fetcher, cache=cache)
    app.config["TESTING"] = True
    return app.test_client()
