"""Parsing of the Buienradar precipitation nowcast.

The rain endpoints answer with plain text lines like ``077|14:35``: a coded
intensity and the time the value applies to, one line per five minutes for
the next two hours.
"""
from __future__ import annotations

import math
import re
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from .entities import RainIndication, RainSample
from .exceptions import NoRainData

RAIN_LINE_PATTERN = re.compile(r"(\d+)\|(\d{1,2}):(\d{2})(?::(\d{2}))?")

SAMPLE_INTERVAL = timedelta(minutes=5)
DAY_ROLLOVER_THRESHOLD = timedelta(hours=12)

# Upper bound (exclusive) of every indication, VIOLENT_RAIN has none.
_INDICATION_LADDER = (
    (0.1, RainIndication.NO_RAIN),
    (2.5, RainIndication.LIGHT_RAIN),
    (10.0, RainIndication.MODERATE_RAIN),
    (50.0, RainIndication.HEAVY_RAIN),
)


def is_rain_text(body: Optional[str]) -> bool:
    return bool(body) and RAIN_LINE_PATTERN.search(body) is not None


def code_to_amount(value: float) -> float:
    """Convert a Buienradar intensity code into mm/h."""
    try:
        return round(10 ** ((float(value) - 109) / 32), 2)
    except OverflowError:
        return math.inf


def classify(amount) -> Optional[RainIndication]:
    """Map an amount of rain in mm/h on a :class:`RainIndication`.

    Returns ``None`` when ``amount`` is not a number.
    """
    if isinstance(amount, bool):
        return None
    try:
        amount = float(amount)
    except (TypeError, ValueError):
        return None
    if math.isnan(amount):
        return None
    for upper, indication in _INDICATION_LADDER:
        if amount < upper:
            return indication
    return RainIndication.VIOLENT_RAIN


def parse_rain_text(data: str, now: Optional[datetime] = None) -> List[RainSample]:
    """Turn the raw rain text into samples.

    Only the time of the first line is used. It is placed on the date of
    ``now`` and moved to the next day when that puts it more than twelve hours
    in the past, every next sample is five minutes later than the previous.
    """
    now = now or datetime.now()
    result: List[RainSample] = []
    previous_time: Optional[datetime] = None
    for match in RAIN_LINE_PATTERN.finditer(data or ""):
        value = int(match.group(1))
        if previous_time is None:
            previous_time = _first_sample_time(match, now)
        else:
            previous_time = previous_time + SAMPLE_INTERVAL
        result.append(_build_sample(value, previous_time))

    if len(result) < 2:
        raise NoRainData("Could not get data from buienradar service, please try again later.")
    return result


def rain_data_from_array(codes: Iterable[float], now: Optional[datetime] = None) -> List[RainSample]:
    """Build samples from already known intensity codes, starting at ``now``."""
    now = now or datetime.now()
    return [_build_sample(value, now + SAMPLE_INTERVAL * index) for index, value in enumerate(codes)]


def minutes_until_rain(
    samples: Iterable[RainSample],
    now: Optional[datetime] = None,
    horizon_minutes: int = 30,
) -> Optional[int]:
    """Minutes until the first sample with rain within the horizon, if any."""
    now = now or datetime.now()
    horizon = now + timedelta(minutes=horizon_minutes)
    for sample in samples:
        if sample.time > horizon:
            break
        if sample.indication is None or sample.indication <= RainIndication.NO_RAIN:
            continue
        minutes = math.ceil((sample.time - now).total_seconds() / 60)
        return max(minutes, 0)
    return None


def _first_sample_time(match: "re.Match[str]", now: datetime) -> datetime:
    hour, minute, second = match.group(2), match.group(3), match.group(4) or 0
    try:
        first = now.replace(hour=int(hour), minute=int(minute), second=int(second), microsecond=0)
    except ValueError as exc:
        raise NoRainData(f"invalid sample time {match.group(0)!r}") from exc
    if now - first > DAY_ROLLOVER_THRESHOLD:
        first += timedelta(days=1)
    return first


def _build_sample(value, time: datetime) -> RainSample:
    amount = code_to_amount(value)
    return RainSample(value=value, amount=amount, time=time, indication=classify(amount))


__all__ = [
    "RAIN_LINE_PATTERN",
    "classify",
    "code_to_amount",
    "is_rain_text",
    "minutes_until_rain",
    "parse_rain_text",
    "rain_data_from_array",
]
