import logging
from urllib.parse import quote

import requests

from .config import Config
from .errors import UnsupportedPlatformError, UpstreamError

logger = logging.getLogger(__name__)

# =======================
#    UPSTREAM ENDPOINTS
# =======================
GITHUB_API = "https://api.github.com"
LEETCODE_STATS_API = "https://leetcode-stats-api.herokuapp.com"
LEETCODE_GRAPHQL = "https://leetcode.com/graphql"

CONTEST_QUERY = """
query userContestRanking($username: String!) {
  userContestRanking(username: $username) {
    attendedContestsCount
    rating
    globalRanking
    totalParticipants
    topPercentage
  }
}
"""


def path_segment(username):
    """Escape a username for use as one URL path segment, dots included."""
    segment = quote(username, safe="")
    if segment in (".", ".."):
        segment = segment.replace(".", "%2E")
    return segment


class PlatformFetcher:
    """Turns (platform, username) into a flat field mapping. No caching here."""

    def __init__(self, config=None, session=None):
        self.config = config or Config()
        self.session = session or requests.Session()
        self.session.headers.update(self.config.headers())
        self._handlers = {
            "github": self._fetch_github,
            "leetcode_stats": self._fetch_leetcode_stats,
            "leetcode_contests": self._fetch_leetcode_contests,
        }

    def supports(self, platform):
        return platform in self._handlers

    def fetch(self, platform, username):
        handler = self._handlers.get(platform)
        if handler is None:
            raise UnsupportedPlatformError(platform)

        try:
            return handler(username)
        except UpstreamError as e:
            logger.error("Error fetching data for %s: %s", platform, e.cause)
            raise
        except (requests.RequestException, ValueError, KeyError, TypeError) as e:
            logger.error("Error fetching data for %s: %s", platform, e)
            raise UpstreamError(platform, e) from e

    # --- HTTP helpers ---

    def _get_json(self, url, **kwargs):
        r = self.session.get(url, timeout=self.config.HTTP_TIMEOUT, **kwargs)
        r.raise_for_status()
        return r.json()

    def _post_json(self, url, payload, **kwargs):
        r = self.session.post(url, json=payload, timeout=self.config.HTTP_TIMEOUT, **kwargs)
        r.raise_for_status()
        return r.json()

    def _github_headers(self):
        h = {"Accept": "application/vnd.github+json"}
        if self.config.GITHUB_TOKEN:
            h["Authorization"] = f"Bearer {self.config.GITHUB_TOKEN}"
        return h

    # --- Platforms ---

    def _fetch_github(self, username):
        user_url = f"{GITHUB_API}/users/{path_segment(username)}"
        profile = self._get_json(user_url, headers=self._github_headers())
        if not isinstance(profile, dict):
            raise UpstreamError("github", "profile payload is not an object")

        # Secondary call: a failure here only costs the one derived field
        total_contributions = 0
        try:
            events = self._get_json(f"{user_url}/events", headers=self._github_headers())
            total_contributions = len(events) if isinstance(events, list) else 0
        except (requests.RequestException, ValueError) as e:
            logger.warning("Could not fetch total contributions for %s: %s", username, e)

        return {**profile, "total_contributions": total_contributions}

    def _fetch_leetcode_stats(self, username):
        data = self._get_json(f"{LEETCODE_STATS_API}/{path_segment(username)}")
        if not isinstance(data, dict):
            raise UpstreamError("leetcode_stats", "stats payload is not an object")
        if data.get("status") == "error":
            raise UpstreamError("leetcode_stats", data.get("message") or "upstream reported an error")
        return data

    def _fetch_leetcode_contests(self, username):
        body = self._post_json(LEETCODE_GRAPHQL, {
            "query": CONTEST_QUERY,
            "variables": {"username": username},
        })
        if not isinstance(body, dict):
            raise UpstreamError("leetcode_contests", "graphql payload is not an object")
        if body.get("errors"):
            first = body["errors"][0]
            raise UpstreamError("leetcode_contests", first.get("message") if isinstance(first, dict) else first)

        ranking = body["data"]["userContestRanking"]
        # null ranking: the account exists but never entered a contest
        return dict(ranking) if ranking else {}
