from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from ..cache import FEED_KEY, RAIN_KEY, RequestCache
from ..entities import FeedData, Location, RainIndication, RainSample, WeatherForecast, WeatherStation
from ..exceptions import (
    InvalidFeedResponse,
    InvalidLocation,
    LocationNotSet,
    NoRainData,
    NoStationFound,
    ProviderError,
)
from ..feed import has_field, is_rain_field
from ..geo import distance_km
from ..providers.base import RequestConfig
from ..providers.feed import FeedProvider
from ..providers.rain import RainTextProvider
from ..rain import classify, parse_rain_text, rain_data_from_array


@dataclass
class ClientConfig:
    lat: Optional[float] = None
    lon: Optional[float] = None
    request_cache_timeout: float = 1000


class BuienradarClient:
    """Rain nowcast and weather station data for a single location.

    Responses are kept for ``request_cache_timeout`` milliseconds, a timeout of
    0 disables caching. Rain data and the nearest station are tied to the
    location and are dropped as soon as it changes.
    """

    RAIN_KEY = RAIN_KEY
    FEED_KEY = FEED_KEY

    def __init__(
        self,
        lat: Optional[float] = None,
        lon: Optional[float] = None,
        *,
        request_cache_timeout: float = 1000,
        request_config: Optional[RequestConfig] = None,
        rain_provider: Optional[RainTextProvider] = None,
        feed_provider: Optional[FeedProvider] = None,
        cache: Optional[RequestCache] = None,
        now_func: Callable[[], datetime] = datetime.now,
        distance_func: Callable[[float, float, float, float], float] = distance_km,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.lat: Optional[float] = None
        self.lon: Optional[float] = None
        if lat is not None or lon is not None:
            self.lat, self.lon = _round_location(lat, lon)
        self.request_cache_timeout = request_cache_timeout
        self.rain_provider = rain_provider or RainTextProvider(request_config=request_config)
        self.feed_provider = feed_provider or FeedProvider(request_config=request_config)
        self.cache = cache or RequestCache()
        self._now_func = now_func
        self._distance_func = distance_func
        self._log = logger or logging.getLogger(self.__class__.__name__)
        self._last_location: Optional[Tuple[Optional[float], Optional[float]]] = None
        self._nearest_station_id: Optional[str] = None

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs) -> "BuienradarClient":
        if config.lat is None or config.lon is None:
            raise InvalidLocation("Buienradar should be initiated with lat and lon config")
        return cls(config.lat, config.lon, request_cache_timeout=config.request_cache_timeout, **kwargs)

    # Location -----------------------------------------------------------
    @property
    def location(self) -> Optional[Location]:
        if not self.has_location():
            return None
        return Location(lat=self.lat, lon=self.lon)

    def set_location(self, lat: Any, lon: Optional[float] = None) -> None:
        """Change the location, accepts two numbers or one object with lat/lon."""
        if lon is None and lat is not None and not isinstance(lat, (int, float, str)):
            lat, lon = _location_parts(lat)
        self.lat, self.lon = _round_location(lat, lon)
        self._log.debug("Location set to %s, %s", self.lat, self.lon)
        self.reset_cache()
        self._last_location = (self.lat, self.lon)

    def has_location(self) -> bool:
        return isinstance(self.lat, float) and isinstance(self.lon, float)

    def check_location_change(self) -> None:
        current = (self.lat, self.lon)
        if current != self._last_location:
            self._last_location = current
            self.reset_cache()

    def reset_cache(self) -> None:
        """Drop everything that depends on the location."""
        self.cache.invalidate_location()
        self._nearest_station_id = None

    # Rain ---------------------------------------------------------------
    @staticmethod
    def get_rain_indication(amount: Any) -> Optional[RainIndication]:
        return classify(amount)

    def fetch_raw_rain_data(self) -> str:
        if not self.has_location():
            raise LocationNotSet("Location is not set properly, please check location settings and try again.")
        return self.rain_provider.fetch(self.lat, self.lon)

    def get_rain_data(self, force_refresh: bool = False) -> List[RainSample]:
        """Rain forecast for the next two hours in five minute steps."""
        self.check_location_change()
        if not force_refresh and self.caching_enabled:
            cached = self.cache.get(self.RAIN_KEY)
            if cached is not None:
                self._log.debug("Serving rain data from cache")
                return cached

        try:
            data = self.fetch_raw_rain_data()
            result = parse_rain_text(data, now=self._now_func())
        except (NoRainData, ProviderError) as exc:
            self._log.warning("Could not get rain data: %s", exc)
            self.cache.invalidate(self.RAIN_KEY)
            raise
        if self.caching_enabled:
            self.cache.set(self.RAIN_KEY, result, self.cache_ttl)
        return result

    def get_rain_data_from_array(self, codes: Iterable[float]) -> List[RainSample]:
        return rain_data_from_array(codes, now=self._now_func())

    # Feed ---------------------------------------------------------------
    def fetch_raw_feed_data(self) -> str:
        return self.feed_provider.fetch_raw()

    def get_feed_data(self) -> FeedData:
        if self.caching_enabled:
            cached = self.cache.get(self.FEED_KEY)
            if cached is not None:
                return cached
        try:
            feed = self.feed_provider.fetch()
        except InvalidFeedResponse:
            self.cache.invalidate(self.FEED_KEY)
            raise
        if self.caching_enabled:
            self.cache.set(self.FEED_KEY, feed, self.cache_ttl)
        return feed

    def get_nearest_station_data(self, required_fields: Optional[Sequence[str]] = None) -> WeatherStation:
        """Observation of the closest weather station.

        ``required_fields`` lists values the station must report, e.g.
        ``["luchtdruk"]`` when the closest station lacks a pressure sensor. The
        rain rate is never treated as missing.
        """
        self.check_location_change()
        feed = self.get_feed_data()

        if required_fields:
            required = [field for field in required_fields if not is_rain_field(field)]
            return self._find_nearest_station(feed.stations, required)

        station = feed.station(self._nearest_station_id) if self._nearest_station_id else None
        if station is None:
            station = self._find_nearest_station(feed.stations, ())
            self._nearest_station_id = station.id
        return station

    def get_weather_forecast(self) -> WeatherForecast:
        return self.get_feed_data().forecast

    def get_current_weather(self) -> Any:
        return self.get_feed_data().today

    # Helpers ------------------------------------------------------------
    def now(self) -> datetime:
        return self._now_func()

    @property
    def caching_enabled(self) -> bool:
        return bool(self.request_cache_timeout) and self.request_cache_timeout > 0

    @property
    def cache_ttl(self) -> float:
        return self.request_cache_timeout / 1000

    def _find_nearest_station(
        self, stations: Iterable[WeatherStation], required_fields: Sequence[str]
    ) -> WeatherStation:
        if not self.has_location():
            raise LocationNotSet("Location is not set properly, please check location settings and try again.")
        result: Optional[WeatherStation] = None
        nearest_distance: Optional[float] = None
        for station in stations:
            if station.lat is None or station.lon is None:
                continue
            if any(not has_field(station, field) for field in required_fields):
                continue
            dist = self._distance_func(self.lat, self.lon, station.lat, station.lon)
            if nearest_distance is None or dist < nearest_distance:
                nearest_distance = dist
                result = station
        if result is None:
            raise NoStationFound("Could not get nearest weather station from data")
        self._log.debug("Nearest station %s at %.1f km", result.id, nearest_distance)
        return result


def _location_parts(value: Any) -> Tuple[Any, Any]:
    if isinstance(value, dict):
        return value.get("lat"), value.get("lon")
    return getattr(value, "lat", None), getattr(value, "lon", None)


def _coordinate(value: Any) -> float:
    if isinstance(value, bool) or value is None:
        raise InvalidLocation("new location is incorrect!")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidLocation("new location is incorrect!") from exc
    if not math.isfinite(number):
        raise InvalidLocation("new location is incorrect!")
    return number


def _round_location(lat: Any, lon: Any) -> Tuple[float, float]:
    return round(_coordinate(lat), 2), round(_coordinate(lon), 2)


__all__ = ["BuienradarClient", "ClientConfig"]
