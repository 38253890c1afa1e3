class MarineError(Exception):
    """Base class for fetcher errors."""


class MissingCredentialError(MarineError):
    """The Stormglass API key is not configured."""


class FetchError(MarineError):
    """The upstream returned no usable samples for a window."""
