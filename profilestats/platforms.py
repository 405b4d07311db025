from dataclasses import dataclass, field
from types import MappingProxyType

# =======================
#    PLATFORM REGISTRY
# =======================

@dataclass(frozen=True)
class PlatformDescriptor:
    """Static description of one stats source. Never mutated after import."""
    id: str
    name: str
    features: tuple
    labels: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))

    def label_for(self, feature):
        return self.labels.get(feature, feature)

    def to_dict(self):
        return {
            "name": self.name,
            "features": list(self.features),
            "labels": dict(self.labels),
        }


def _descriptor(pid, name, labels):
    return PlatformDescriptor(
        id=pid,
        name=name,
        features=tuple(labels),
        labels=MappingProxyType(dict(labels)),
    )


# Feature order here is the order the UI offers them in
PLATFORMS = MappingProxyType({
    "github": _descriptor("github", "GitHub", {
        "avatar_url": "Avatar URL",
        "name": "Name",
        "login": "Username",
        "bio": "Bio",
        "public_repos": "Public Repositories",
        "followers": "Followers",
        "following": "Following",
        "created_at": "Joined",
        "total_contributions": "Recent Contributions",
        "html_url": "Profile URL",
        "company": "Company",
        "blog": "Website",
        "location": "Location",
        "email": "Email",
        "hireable": "Hireable",
    }),
    "leetcode_stats": _descriptor("leetcode_stats", "LeetCode Stats", {
        "totalSolved": "Total Solved",
        "totalQuestions": "Total Questions",
        "easySolved": "Easy Solved",
        "totalEasy": "Total Easy",
        "mediumSolved": "Medium Solved",
        "totalMedium": "Total Medium",
        "hardSolved": "Hard Solved",
        "totalHard": "Total Hard",
        "acceptanceRate": "Acceptance Rate",
        "ranking": "Ranking",
        "contributionPoints": "Contribution Points",
        "reputation": "Reputation",
    }),
    "leetcode_contests": _descriptor("leetcode_contests", "LeetCode Contests", {
        "attendedContestsCount": "Contests Attended",
        "rating": "Contest Rating",
        "globalRanking": "Global Ranking",
        "totalParticipants": "Total Participants",
        "topPercentage": "Top Percentage",
    }),
})

# Badge swatch colours (hex, no leading '#')
PLATFORM_COLORS = MappingProxyType({
    "github": "24292e",
    "leetcode_stats": "0a84ff",
    "leetcode_contests": "ffd700",
})
DEFAULT_COLOR = "4a4a4a"


def get_descriptor(platform):
    return PLATFORMS.get(platform)


def color_for(platform):
    return PLATFORM_COLORS.get(platform, DEFAULT_COLOR)


def describe_all():
    """JSON-ready view of every descriptor, keyed by platform id."""
    return {pid: d.to_dict() for pid, d in PLATFORMS.items()}
