from __future__ import annotations

import logging
from typing import Optional

from .base import BuienradarProvider
from ..entities import FeedData
from ..feed import parse_feed


class FeedProvider(BuienradarProvider):
    base_url = "https://xml.buienradar.nl/"

    def __init__(self, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.base_url = base_url or self.base_url
        self._log = logging.getLogger(self.__class__.__name__)

    def fetch_raw(self) -> str:
        response = self._request("GET", self.base_url)
        return response.text

    def fetch(self) -> FeedData:
        data = self.fetch_raw()
        feed = parse_feed(data)
        self._log.debug("Parsed feed with %d stations", len(feed.stations))
        return feed


__all__ = ["FeedProvider"]
