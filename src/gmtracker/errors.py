"""Exception hierarchy shared by the provider, cache and web layers."""


class GMTrackerError(Exception):
    """Base class for all gmtracker errors."""


class ConfigError(GMTrackerError):
    """Startup configuration is missing or invalid."""


class ProviderError(GMTrackerError):
    """The upstream server list could not be obtained.

    Raised on the refresh path only; callers fall back to the last good
    snapshot.
    """


class TransportError(ProviderError):
    """Network failure, timeout or HTTP error status talking to upstream."""


class DecodeError(ProviderError):
    """Upstream answered with a payload that does not match the expected shape."""


class RenderError(GMTrackerError):
    """The server list page could not be rendered."""
