"""Error taxonomy shared by the fetcher, renderers and the HTTP layer."""


class ProfileStatsError(Exception):
    """Base class for every error this package raises on purpose."""


class ValidationError(ProfileStatsError):
    """The request payload is missing, empty or malformed."""


class UnsupportedPlatformError(ProfileStatsError):
    def __init__(self, platform):
        self.platform = platform
        super().__init__(f"Unsupported platform: {platform}")


class UpstreamError(ProfileStatsError):
    """A platform data source failed (network, status code or payload)."""

    def __init__(self, platform, cause):
        self.platform = platform
        self.cause = cause
        super().__init__(f"Error fetching data for {platform}: {cause}")


class UnknownPlatformError(ProfileStatsError):
    def __init__(self, platform):
        self.platform = platform
        super().__init__(f"No descriptor for platform: {platform}")


class CacheMissError(ProfileStatsError):
    def __init__(self, key):
        self.key = key
        super().__init__("Badge not found or expired")
