from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict
import logging
import math
from decimal import Decimal, ROUND_HALF_UP
import httpx

from .config import Configuration

BASE_URL = "https://api.openweathermap.org/data/2.5"


class WeatherError(Exception):
    """Base class for failures while fetching weather data."""


class TransportError(WeatherError):
    def __init__(self, detail: Any):
        super().__init__(f"Failed to query OpenWeatherMap: {detail}")


class InvalidResponse(WeatherError):
    def __init__(self, detail: str | None = None):
        message = "Invalid response format from OpenWeatherMap"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (10.5 -> 11, -10.5 -> -11)."""
    return int(Decimal(repr(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


class QueryType(Enum):
    CURRENT = "/weather"
    FORECAST = "/forecast"

    @property
    def path(self) -> str:
        return self.value


@dataclass(frozen=True)
class WeatherInfo:
    temperature: int
    icon: str


class WeatherClient:
    """Synchronous OpenWeatherMap client returning temperature and icon code."""

    def __init__(self, http_client: httpx.Client | None = None):
        # No explicit timeout: the httpx default applies
        if http_client is None:
            http_client = httpx.Client(follow_redirects=True)
        self._client = http_client
        self._log = logging.getLogger(__name__)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> 'WeatherClient':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ---------------- Internal Helpers -----------------
    @staticmethod
    def _params(config: Configuration, query_type: QueryType) -> Dict[str, Any]:
        params = {
            'id': config.city_id,
            'appid': config.api_key,
            'lang': config.lang,
            'units': config.units.api_value,
        }
        if query_type is QueryType.FORECAST:
            params['cnt'] = 1  # next period only
        return params

    def _get(self, query_type: QueryType, params: Dict[str, Any]) -> Any:
        url = f"{BASE_URL}{query_type.path}"
        self._log.debug("Requesting %s for city %s", url, params.get('id'))
        try:
            resp = self._client.get(url, params=params)
        except httpx.HTTPError as e:
            self._log.warning("Request to %s failed: %s", url, e)
            raise TransportError(repr(e)) from e
        if not 200 <= resp.status_code < 300:
            self._log.warning("Request to %s returned %s", url, resp.status_code)
            raise TransportError(f"Error {resp.status_code}: {resp.text}")
        try:
            return resp.json()
        except ValueError as e:  # JSON decode error
            raise InvalidResponse(f"non-JSON body {resp.text[:200]!r}") from e

    @staticmethod
    def _decode(payload: Any, query_type: QueryType) -> WeatherInfo:
        """Pull temperature and icon code out of a decoded response.

        Current conditions carry ``main.temp`` and ``weather[0].icon`` at the top
        level; forecast responses nest the same shape under ``list[0]``.
        """
        try:
            entry = payload['list'][0] if query_type is QueryType.FORECAST else payload
            temp = entry['main']['temp']
            icon = entry['weather'][0]['icon']
        except (KeyError, IndexError, TypeError) as e:
            raise InvalidResponse(f"missing field {e}") from e
        if isinstance(temp, bool) or not isinstance(temp, (int, float)):
            raise InvalidResponse(f"temperature is {type(temp).__name__}")
        if isinstance(temp, float) and not math.isfinite(temp):
            raise InvalidResponse(f"temperature is {temp}")
        if not isinstance(icon, str) or not icon:
            raise InvalidResponse("icon is not a non-empty string")
        return WeatherInfo(temperature=round_half_away(temp), icon=icon)

    def get_info(self, config: Configuration, query_type: QueryType) -> WeatherInfo:
        data = self._get(query_type, self._params(config, query_type))
        return self._decode(data, query_type)
