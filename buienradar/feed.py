"""Parsing of the Buienradar XML feed.

The document is first turned into a plain nested mapping: attributes are
stored under ``'$'``, element text under ``'_'`` when the element also has
attributes or children, and repeated child elements become lists. The typed
records are mapped from that structure, which keeps every provider specific
key in this module.
"""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from .entities import DayForecast, FeedData, WeatherForecast, WeatherStation
from .exceptions import InvalidFeedResponse


logger = logging.getLogger(__name__)

MISSING = "-"
RAIN_FIELD = "regenMMPU"
STATION_DATE_FORMAT = "%m/%d/%Y %H:%M:%S"

# provider key -> WeatherStation attribute
STATION_FIELDS: Dict[str, str] = {
    "stationcode": "id",
    "lat": "lat",
    "lon": "lon",
    "datum": "date",
    "luchtvochtigheid": "humidity",
    "temperatuurGC": "temperature",
    "windsnelheidMS": "wind_speed_ms",
    "windsnelheidBF": "wind_speed_bf",
    "windrichtingGR": "wind_direction_deg",
    "windrichting": "wind_direction_text",
    "luchtdruk": "pressure",
    "zichtmeters": "visibility",
    "windstotenMS": "wind_gust_ms",
    "regenMMPU": "rain_mm_per_hour",
}
_ATTRIBUTE_FIELDS = {attribute: key for key, attribute in STATION_FIELDS.items()}


def element_to_value(element: ET.Element) -> Any:
    children = list(element)
    text = (element.text or "").strip()
    if not children and not element.attrib:
        return text

    node: Dict[str, Any] = {}
    if element.attrib:
        node["$"] = dict(element.attrib)
    for child in children:
        value = element_to_value(child)
        if child.tag not in node:
            node[child.tag] = value
        elif isinstance(node[child.tag], list):
            node[child.tag].append(value)
        else:
            node[child.tag] = [node[child.tag], value]
    if text:
        node["_"] = text
    return node


def parse_document(data: str) -> Dict[str, Any]:
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        logger.error("Failed to parse feed", exc_info=exc)
        raise InvalidFeedResponse("invalid xml") from exc
    return {root.tag: element_to_value(root)}


def parse_feed(data: str) -> FeedData:
    document = parse_document(data)
    envelope = document.get("buienradarnl")
    payload = envelope.get("weergegevens") if isinstance(envelope, dict) else None
    if not isinstance(payload, dict):
        raise InvalidFeedResponse("Got invalid response from server")
    return build_feed_data(payload)


def build_feed_data(payload: Mapping[str, Any]) -> FeedData:
    stations = [map_station(raw) for raw in _station_list(payload)]
    return FeedData(
        raw=payload,
        stations=[station for station in stations if station.id],
        forecast=map_forecast(payload.get("verwachting_meerdaags") or {}),
        today=payload.get("verwachting_vandaag"),
    )


def map_station(raw: Mapping[str, Any]) -> WeatherStation:
    name = raw.get("stationnaam")
    region = name.get("$", {}).get("regio") if isinstance(name, dict) else None
    station_id = _text(raw.get("stationcode"))
    if station_id is None and isinstance(raw.get("$"), dict):
        station_id = raw["$"].get("id")
    return WeatherStation(
        id=station_id or "",
        name=_text(name),
        region=region,
        lat=_number(raw.get("lat")),
        lon=_number(raw.get("lon")),
        date=_parse_date(_text(raw.get("datum"))),
        humidity=_number(raw.get("luchtvochtigheid")),
        temperature=_number(raw.get("temperatuurGC")),
        wind_speed_ms=_number(raw.get("windsnelheidMS")),
        wind_speed_bf=_number(raw.get("windsnelheidBF")),
        wind_direction_deg=_number(raw.get("windrichtingGR")),
        wind_direction_text=_text(raw.get("windrichting")),
        pressure=_number(raw.get("luchtdruk")),
        visibility=_number(raw.get("zichtmeters")),
        wind_gust_ms=_number(raw.get("windstotenMS")),
        rain_mm_per_hour=_number(raw.get(RAIN_FIELD)) or 0.0,
        raw=raw,
    )


def map_forecast(block: Mapping[str, Any]) -> WeatherForecast:
    days: List[DayForecast] = []
    index = 1
    while block.get(f"dag-plus{index}"):
        days.append(map_day(block[f"dag-plus{index}"]))
        index += 1
    return WeatherForecast(
        days=days,
        text_medium_term=_text(block.get("tekst_middellang")),
        text_long_term=_text(block.get("tekst_lang")),
        raw=block,
    )


def map_day(raw: Mapping[str, Any]) -> DayForecast:
    return DayForecast(
        date_text=_text(raw.get("datum")),
        weekday=_text(raw.get("dagweek")),
        sun_chance=_number(raw.get("kanszon")),
        rain_chance=_number(raw.get("kansregen")),
        min_rain_mm=_number(raw.get("minmmregen")),
        max_rain_mm=_number(raw.get("maxmmregen")),
        min_temp=_number(raw.get("mintemp")),
        min_temp_max=_number(raw.get("mintempmax")),
        max_temp=_number(raw.get("maxtemp")),
        max_temp_max=_number(raw.get("maxtempmax")),
        wind_direction=_text(raw.get("windrichting")),
        wind_force=_number(raw.get("windkracht")),
        snow_cm=_number(raw.get("sneeuwcms")),
        raw=raw,
    )


def is_rain_field(field: str) -> bool:
    return field in (RAIN_FIELD, STATION_FIELDS[RAIN_FIELD])


def has_field(station: WeatherStation, field: str) -> bool:
    """Whether the station reports a value for ``field``.

    ``field`` is either a provider key such as ``luchtdruk`` or the matching
    attribute name such as ``pressure``.
    """
    key = _ATTRIBUTE_FIELDS.get(field, field)
    if key in station.raw:
        return _text(station.raw.get(key)) is not None
    if hasattr(station, field) and field != "raw":
        return getattr(station, field) is not None
    return False


def _station_list(payload: Mapping[str, Any]) -> List[Mapping[str, Any]]:
    current = payload.get("actueel_weer")
    stations = current.get("weerstations") if isinstance(current, dict) else None
    stations = stations.get("weerstation") if isinstance(stations, dict) else None
    if stations is None:
        return []
    if isinstance(stations, dict):
        return [stations]
    return [station for station in stations if isinstance(station, dict)]


def _text(value: Any) -> Optional[str]:
    if isinstance(value, dict):
        value = value.get("_")
    if value is None:
        return None
    value = str(value).strip()
    if not value or value == MISSING:
        return None
    return value


def _number(value: Any) -> Optional[float]:
    text = _text(value)
    if text is None:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _parse_date(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.strptime(value, STATION_DATE_FORMAT)
    except ValueError:
        logger.debug("Unexpected station date %r", value)
        return None


__all__ = [
    "STATION_FIELDS",
    "build_feed_data",
    "element_to_value",
    "has_field",
    "is_rain_field",
    "map_day",
    "map_forecast",
    "map_station",
    "parse_document",
    "parse_feed",
]
