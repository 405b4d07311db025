import json
import time
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class StatRecord:
    """One platform's result: the platform id plus a flat feature -> value map."""
    platform: str
    fields: MappingProxyType = field(default_factory=dict)

    def __post_init__(self):
        # Read-only private copy; cached snapshots are shared between requests
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def feature_count(self):
        return len(self.fields)

    def to_dict(self):
        return {"platform": self.platform, **dict(self.fields)}


@dataclass(frozen=True)
class StatsSnapshot:
    records: tuple
    created_at: float = field(default_factory=time.time)

    def __post_init__(self):
        object.__setattr__(self, "records", tuple(self.records))

    def to_list(self):
        return [r.to_dict() for r in self.records]


def format_value(value):
    """Text form of a stat value, shared by the badge and Markdown output."""
    if value is None: return "null"
    if isinstance(value, bool): return "true" if value else "false"
    if isinstance(value, float) and value.is_integer(): return str(int(value))
    if isinstance(value, (dict, list)): return json.dumps(value, separators=(",", ":"))
    return str(value)
