"""Exceptions raised while resolving download URLs."""


class ResolutionError(Exception):
    """Base exception for download URL resolution errors."""

    pass


class PageContextRequiredError(ResolutionError):
    """A strategy needs a live page context and none was supplied."""

    pass


class StrategiesExhaustedError(ResolutionError):
    """Every applicable strategy was attempted and none produced a URL."""

    pass


class ScrapeFailedError(ResolutionError):
    """The page context answered, but could not find a download URL."""

    pass


class ScrapeTimeoutError(ResolutionError):
    """The page context did not answer within the bounded wait."""

    pass


class UnsupportedServiceError(ResolutionError):
    """No registered service recognises the URL."""

    pass
