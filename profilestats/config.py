import os

# =======================
#    CONFIGURATION
# =======================

def _flag(name, default):
    raw = os.environ.get(name)
    if raw is None: return default
    return raw.strip().lower() not in ("0", "false", "no", "off", "")


class Config:
    """Runtime settings, read from the environment once per app."""

    def __init__(self, **overrides):
        self.HOST = os.environ.get('HOST', '0.0.0.0')
        self.PORT = int(os.environ.get('PORT', 8000))
        self.HTTP_TIMEOUT = float(os.environ.get('STATS_HTTP_TIMEOUT', 10))
        self.USER_AGENT = os.environ.get('STATS_USER_AGENT', 'ProfileStats/1.0 (Badge-Aggregator)')
        self.GITHUB_TOKEN = os.environ.get('GITHUB_TOKEN', '').strip() or None
        self.LOG_LEVEL = os.environ.get('STATS_LOG_LEVEL', 'INFO').upper()
        self.SWEEP_ENABLED = _flag('STATS_SWEEP_ENABLED', True)

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise AttributeError(f"Unknown setting: {key}")
            setattr(self, key, value)

    def headers(self):
        return {'User-Agent': self.USER_AGENT}
