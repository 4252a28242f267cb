from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any, Dict, List, Mapping, Optional


class RainIndication(IntEnum):
    """Coarse rain intensity buckets, ordered so they can be compared.

    e.g. ``sample.indication >= RainIndication.MODERATE_RAIN``
    """

    NO_RAIN = 0
    LIGHT_RAIN = 1
    MODERATE_RAIN = 2
    HEAVY_RAIN = 3
    VIOLENT_RAIN = 4


@dataclass(frozen=True)
class Location:
    lat: float
    lon: float


@dataclass(frozen=True)
class RainSample:
    """One five minute step of the precipitation nowcast.

    - value: raw intensity code as sent by Buienradar
    - amount: rain in millimetres per hour
    - time: moment the prediction applies to
    """

    value: int
    amount: float
    time: datetime
    indication: Optional[RainIndication]


@dataclass(frozen=True)
class WeatherStation:
    """Latest observation of a single Buienradar weather station.

    Values the station does not measure are ``None``, except the rain rate
    which is reported as ``0.0``.
    """

    id: str
    name: Optional[str]
    region: Optional[str]
    lat: Optional[float]
    lon: Optional[float]
    date: Optional[datetime]
    humidity: Optional[float]
    temperature: Optional[float]
    wind_speed_ms: Optional[float]
    wind_speed_bf: Optional[float]
    wind_direction_deg: Optional[float]
    wind_direction_text: Optional[str]
    pressure: Optional[float]
    visibility: Optional[float]
    wind_gust_ms: Optional[float]
    rain_mm_per_hour: float
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)


@dataclass(frozen=True)
class DayForecast:
    date_text: Optional[str]
    weekday: Optional[str]
    sun_chance: Optional[float]
    rain_chance: Optional[float]
    min_rain_mm: Optional[float]
    max_rain_mm: Optional[float]
    min_temp: Optional[float]
    min_temp_max: Optional[float]
    max_temp: Optional[float]
    max_temp_max: Optional[float]
    wind_direction: Optional[str]
    wind_force: Optional[float]
    snow_cm: Optional[float]
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)


@dataclass(frozen=True)
class WeatherForecast:
    days: List[DayForecast]
    text_medium_term: Optional[str]
    text_long_term: Optional[str]
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)


@dataclass(frozen=True)
class FeedData:
    """Parsed Buienradar XML feed.

    ``raw`` is the nested mapping of the ``weergegevens`` element, the other
    attributes are typed views on top of it.
    """

    raw: Mapping[str, Any]
    stations: List[WeatherStation]
    forecast: WeatherForecast
    today: Any
    _stations_by_id: Dict[str, WeatherStation] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._stations_by_id.update({station.id: station for station in self.stations})

    def station(self, station_id: str) -> Optional[WeatherStation]:
        return self._stations_by_id.get(station_id)


__all__ = [
    "RainIndication",
    "Location",
    "RainSample",
    "WeatherStation",
    "DayForecast",
    "WeatherForecast",
    "FeedData",
]
