from __future__ import annotations

from datetime import datetime

import pytest

from requests_mock import Mocker


LAT = 52.221537
LON = 6.893662

RAIN_URLS = (
    "https://br-gpsgadget-new.azurewebsites.net/data/raintext?lat=52.22&lon=6.89",
    "http://gps.buienradar.nl/getrr.php?lat=52.22&lon=6.89",
)
FEED_URL = "https://xml.buienradar.nl/"

RAIN_TEXT = "\r\n".join(
    [
        "000|14:30",
        "077|14:35",
        "110|14:40",
        "140|14:45",
        "000|14:50",
    ]
)

FEED_XML = """<?xml version="1.0" encoding="utf-8"?>
<buienradarnl>
  <weergegevens>
    <titel>Buienradar</titel>
    <actueel_weer>
      <weerstations>
        <weerstation id="6290">
          <stationcode>6290</stationcode>
          <stationnaam regio="Twente">Meetstation Twenthe</stationnaam>
          <lat>52.27</lat>
          <lon>6.89</lon>
          <datum>10/18/2026 14:50:00</datum>
          <luchtvochtigheid>81</luchtvochtigheid>
          <temperatuurGC>11.4</temperatuurGC>
          <windsnelheidMS>4.12</windsnelheidMS>
          <windsnelheidBF>3</windsnelheidBF>
          <windrichtingGR>225.0</windrichtingGR>
          <windrichting>ZW</windrichting>
          <luchtdruk>-</luchtdruk>
          <zichtmeters>25300</zichtmeters>
          <windstotenMS>6.3</windstotenMS>
          <regenMMPU>-</regenMMPU>
        </weerstation>
        <weerstation id="6283">
          <stationcode>6283</stationcode>
          <stationnaam regio="Groenlo">Meetstation Hupsel</stationnaam>
          <lat>52.07</lat>
          <lon>6.65</lon>
          <datum>10/18/2026 14:50:00</datum>
          <luchtvochtigheid>77</luchtvochtigheid>
          <temperatuurGC>12.1</temperatuurGC>
          <windsnelheidMS>3.20</windsnelheidMS>
          <windsnelheidBF>2</windsnelheidBF>
          <windrichtingGR>210.3</windrichtingGR>
          <windrichting>ZZW</windrichting>
          <luchtdruk>1012.3</luchtdruk>
          <zichtmeters>-</zichtmeters>
          <windstotenMS>5.1</windstotenMS>
          <regenMMPU>0.4</regenMMPU>
        </weerstation>
        <weerstation id="6260">
          <stationcode>6260</stationcode>
          <stationnaam regio="Utrecht">Meetstation De Bilt</stationnaam>
          <lat>52.10</lat>
          <lon>5.18</lon>
          <datum>10/18/2026 14:50:00</datum>
          <luchtvochtigheid>70</luchtvochtigheid>
          <temperatuurGC>13.0</temperatuurGC>
          <windsnelheidMS>2.10</windsnelheidMS>
          <windsnelheidBF>2</windsnelheidBF>
          <windrichtingGR>200.0</windrichtingGR>
          <windrichting>ZZW</windrichting>
          <luchtdruk>1011.0</luchtdruk>
          <zichtmeters>31000</zichtmeters>
          <windstotenMS>4.0</windstotenMS>
          <regenMMPU>-</regenMMPU>
        </weerstation>
      </weerstations>
    </actueel_weer>
    <verwachting_meerdaags>
      <tekst_middellang periode="maandag t/m woensdag">Wisselvallig met af en toe regen.</tekst_middellang>
      <tekst_lang periode="donderdag t/m zondag">Droger en iets warmer.</tekst_lang>
      <dag-plus1>
        <datum>maandag 19 oktober 2026</datum>
        <dagweek>ma</dagweek>
        <kanszon>40</kanszon>
        <kansregen>70</kansregen>
        <minmmregen>1</minmmregen>
        <maxmmregen>6</maxmmregen>
        <mintemp>7</mintemp>
        <mintempmax>9</mintempmax>
        <maxtemp>13</maxtemp>
        <maxtempmax>15</maxtempmax>
        <windrichting>ZW</windrichting>
        <windkracht>4</windkracht>
        <sneeuwcms>0</sneeuwcms>
      </dag-plus1>
      <dag-plus2>
        <datum>dinsdag 20 oktober 2026</datum>
        <dagweek>di</dagweek>
        <kanszon>60</kanszon>
        <kansregen>20</kansregen>
        <minmmregen>0</minmmregen>
        <maxmmregen>1</maxmmregen>
        <mintemp>6</mintemp>
        <mintempmax>8</mintempmax>
        <maxtemp>14</maxtemp>
        <maxtempmax>16</maxtempmax>
        <windrichting>W</windrichting>
        <windkracht>3</windkracht>
        <sneeuwcms>0</sneeuwcms>
      </dag-plus2>
      <dag-plus4>
        <datum>donderdag 22 oktober 2026</datum>
        <dagweek>do</dagweek>
      </dag-plus4>
    </verwachting_meerdaags>
    <verwachting_vandaag>
      <titel>Vandaag wisselend bewolkt</titel>
      <tekst>Eerst zon, later enkele buien.</tekst>
    </verwachting_vandaag>
  </weergegevens>
</buienradarnl>
"""


class TimeController:
    def __init__(self) -> None:
        self.now = 0.0

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


def fixed_now(value: datetime):
    return lambda: value


@pytest.fixture
def requests_mock():
    with Mocker() as mock:
        yield mock


@pytest.fixture
def clock() -> TimeController:
    return TimeController()
