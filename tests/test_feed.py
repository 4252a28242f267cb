from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import datetime

import pytest

from buienradar.exceptions import InvalidFeedResponse
from buienradar.feed import element_to_value, has_field, parse_feed

from conftest import FEED_XML


def test_element_to_value_follows_nested_mapping_conventions():
    element = ET.fromstring(
        '<root><name region="Twente">Twenthe</name><item>1</item><item>2</item><empty/></root>'
    )

    assert element_to_value(element) == {
        "name": {"$": {"region": "Twente"}, "_": "Twenthe"},
        "item": ["1", "2"],
        "empty": "",
    }


def test_parse_feed_maps_stations():
    feed = parse_feed(FEED_XML)

    assert [station.id for station in feed.stations] == ["6290", "6283", "6260"]
    twenthe = feed.station("6290")
    assert twenthe.name == "Meetstation Twenthe"
    assert twenthe.region == "Twente"
    assert twenthe.lat == 52.27
    assert twenthe.lon == 6.89
    assert twenthe.date == datetime(2026, 10, 18, 14, 50)
    assert twenthe.temperature == 11.4
    assert twenthe.wind_direction_text == "ZW"
    assert twenthe.visibility == 25300
    assert twenthe.pressure is None
    assert twenthe.rain_mm_per_hour == 0.0
    assert twenthe.raw["luchtdruk"] == "-"

    hupsel = feed.station("6283")
    assert hupsel.rain_mm_per_hour == 0.4
    assert hupsel.visibility is None


def test_parse_feed_collapses_forecast_days():
    forecast = parse_feed(FEED_XML).forecast

    assert [day.weekday for day in forecast.days] == ["ma", "di"]
    assert forecast.days[0].rain_chance == 70
    assert forecast.days[0].max_temp_max == 15
    assert forecast.days[1].wind_direction == "W"
    assert forecast.text_medium_term == "Wisselvallig met af en toe regen."
    assert forecast.text_long_term == "Droger en iets warmer."


def test_parse_feed_keeps_today_verbatim():
    feed = parse_feed(FEED_XML)

    assert feed.today == {
        "titel": "Vandaag wisselend bewolkt",
        "tekst": "Eerst zon, later enkele buien.",
    }


def test_has_field_accepts_provider_and_attribute_names():
    feed = parse_feed(FEED_XML)
    twenthe = feed.station("6290")

    assert not has_field(twenthe, "luchtdruk")
    assert not has_field(twenthe, "pressure")
    assert has_field(twenthe, "temperatuurGC")
    assert has_field(twenthe, "region")
    assert not has_field(twenthe, "unknown")


@pytest.mark.parametrize(
    "data",
    [
        "",
        "<buienradarnl><weergegevens>",
        "<buienradarnl><titel>Onderhoud</titel></buienradarnl>",
        "<other><weergegevens><titel>x</titel></weergegevens></other>",
    ],
)
def test_parse_feed_rejects_invalid_documents(data):
    with pytest.raises(InvalidFeedResponse):
        parse_feed(data)
