"""Client for the Buienradar rain nowcast and weather feed."""
from __future__ import annotations

from .entities import (
    DayForecast,
    FeedData,
    Location,
    RainIndication,
    RainSample,
    WeatherForecast,
    WeatherStation,
)
from .exceptions import (
    BuienradarError,
    InvalidFeedResponse,
    InvalidLocation,
    LocationNotSet,
    NoRainData,
    NoStationFound,
    ProviderError,
    RequestTimeout,
    TransportError,
)
from .rain import classify, minutes_until_rain
from .services.client import BuienradarClient, ClientConfig

__version__ = "0.1.0"

__all__ = [
    "BuienradarClient",
    "ClientConfig",
    "DayForecast",
    "FeedData",
    "Location",
    "RainIndication",
    "RainSample",
    "WeatherForecast",
    "WeatherStation",
    "BuienradarError",
    "InvalidFeedResponse",
    "InvalidLocation",
    "LocationNotSet",
    "NoRainData",
    "NoStationFound",
    "ProviderError",
    "RequestTimeout",
    "TransportError",
    "classify",
    "minutes_until_rain",
]
