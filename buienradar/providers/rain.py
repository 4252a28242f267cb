from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError, as_completed
from typing import List, Optional, Sequence

from .base import BuienradarProvider
from ..exceptions import NoRainData, RequestTimeout, TransportError
from ..rain import is_rain_text


RAIN_URL_TEMPLATES = (
    "https://br-gpsgadget-new.azurewebsites.net/data/raintext?lat={lat}&lon={lon}",
    "http://gps.buienradar.nl/getrr.php?lat={lat}&lon={lon}",
)


class RainTextProvider(BuienradarProvider):
    """Fetches the raw precipitation nowcast text.

    All endpoints are queried at once and the first well formed answer wins.
    Endpoints that are still busy when a winner is known keep running in the
    background and their answers are ignored.
    """

    def __init__(self, url_templates: Optional[Sequence[str]] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.url_templates = tuple(url_templates or RAIN_URL_TEMPLATES)
        self._log = logging.getLogger(self.__class__.__name__)

    def urls(self, lat: float, lon: float) -> List[str]:
        return [template.format(lat=lat, lon=lon) for template in self.url_templates]

    def fetch(self, lat: float, lon: float) -> str:
        urls = self.urls(lat, lon)
        executor = ThreadPoolExecutor(max_workers=len(urls), thread_name_prefix="buienradar-rain")
        try:
            futures = {executor.submit(self._fetch_one, url): url for url in urls}
            try:
                for future in as_completed(futures, timeout=self.request_config.race_timeout):
                    url = futures[future]
                    try:
                        body = future.result()
                    except TransportError as exc:
                        self._log.warning("Rain endpoint %s failed: %s", url, exc)
                        continue
                    if is_rain_text(body):
                        self._log.debug("Got rain data from %s", url)
                        return body
                    self._log.warning("Rain endpoint %s returned no rain data", url)
            except FuturesTimeoutError as exc:
                self._log.error("Unable to get rain data within %ss", self.request_config.race_timeout)
                raise RequestTimeout("timeout") from exc
        finally:
            executor.shutdown(wait=False)
        raise NoRainData("No url received rain data")

    def _fetch_one(self, url: str) -> str:
        self._log.debug("Requesting rain data from %s", url)
        response = self._request("GET", url)
        return response.text


__all__ = ["RainTextProvider", "RAIN_URL_TEMPLATES"]
