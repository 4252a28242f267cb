from __future__ import annotations


class BuienradarError(RuntimeError):
    """Base error for everything raised by the client."""


class InvalidLocation(BuienradarError, ValueError):
    """Raised when a coordinate is not a finite number."""


class LocationNotSet(BuienradarError):
    """Raised when a location dependent request is made without coordinates."""


class ProviderError(BuienradarError):
    """Base upstream error."""


class TransportError(ProviderError):
    """Raised when an HTTP request fails or returns an error status."""


class RequestTimeout(ProviderError):
    """Raised when no rain endpoint answered in time."""


class InvalidFeedResponse(ProviderError):
    """Raised when the XML feed cannot be parsed or lacks its envelope."""


class NoRainData(BuienradarError):
    """Raised when no usable rain forecast could be obtained."""


class NoStationFound(BuienradarError):
    """Raised when no weather station matches the request."""


__all__ = [
    "BuienradarError",
    "InvalidLocation",
    "LocationNotSet",
    "ProviderError",
    "TransportError",
    "RequestTimeout",
    "InvalidFeedResponse",
    "NoRainData",
    "NoStationFound",
]
