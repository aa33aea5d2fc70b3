"""Thin async wrappers for the external soil and weather APIs.

Each client issues exactly one request per call and never retries. Any
non-2xx status, transport error, timeout or unparseable body is raised as
:class:`~reforester.errors.SourceFailure`. Clients accept an injected
``httpx.AsyncClient`` so tests can mount an ``httpx.MockTransport``.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from reforester.environment.fallback import soil_for_class
from reforester.environment.models import Coordinate, SoilComposition, WeatherSnapshot
from reforester.errors import SourceFailure
from reforester.utils import safe_float

logger = logging.getLogger(__name__)

_USER_AGENT = "ReForester/0.1 (reforestation potential estimator)"


class _BaseClient:
    """Shared HTTP plumbing for external API clients."""

    source_name = "external API"

    def __init__(
        self,
        base_url: str,
        timeout: float,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = http_client
        self._owns_http = http_client is None

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(headers={"User-Agent": _USER_AGENT})
        return self._http

    async def aclose(self) -> None:
        if self._http is not None and self._owns_http:
            await self._http.aclose()
            self._http = None

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Issue a single GET and decode its JSON body."""
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            resp = await self._client().get(url, params=params, timeout=self.timeout)
        except httpx.TimeoutException as exc:
            raise SourceFailure(self.source_name, "timeout", str(exc) or "request timed out") from exc
        except httpx.RequestError as exc:
            raise SourceFailure(self.source_name, "network", str(exc)) from exc

        if not resp.is_success:
            raise SourceFailure(self.source_name, "http_status", f"HTTP {resp.status_code} from {url}")
        try:
            return resp.json()
        except (json.JSONDecodeError, ValueError) as exc:
            logger.warning("Non-JSON response from %s (status %d)", url, resp.status_code)
            raise SourceFailure(self.source_name, "bad_payload", "response body is not JSON") from exc


class SoilGridsClient(_BaseClient):
    """Client for the ISRIC SoilGrids classification endpoint.

    Docs: https://rest.isric.org/soilgrids/v2.0/docs
    """

    source_name = "SoilGrids API"

    def __init__(
        self,
        base_url: str = "https://rest.isric.org/soilgrids/v2.0",
        timeout: float = 4.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(base_url, timeout, http_client)

    @staticmethod
    def extract_soil_class(payload: Any) -> str | None:
        """Read the dominant WRB class from a classification response."""
        if not isinstance(payload, dict):
            return None
        name = payload.get("wrb_class_name")
        if name:
            return str(name)
        props = payload.get("properties")
        if isinstance(props, list) and props and isinstance(props[0], dict):
            value = props[0].get("value")
            return str(value) if value else None
        return None

    async def get_soil(self, coordinate: Coordinate) -> SoilComposition:
        payload = await self._get_json(
            "classification/query",
            params={"lon": coordinate.lon, "lat": coordinate.lat, "number_classes": 1},
        )
        soil_class = self.extract_soil_class(payload)
        composition = soil_for_class(soil_class)
        if composition is None:
            raise SourceFailure(
                self.source_name, "bad_payload", f"unrecognised soil class {soil_class!r}"
            )
        logger.debug("SoilGrids class %s at %s", soil_class, coordinate.cache_fragment())
        return composition


class OpenMeteoClient(_BaseClient):
    """Client for the Open-Meteo forecast API (current + today's range).

    Docs: https://open-meteo.com/en/docs
    """

    source_name = "Open-Meteo API"

    def __init__(
        self,
        base_url: str = "https://api.open-meteo.com/v1",
        timeout: float = 5.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(base_url, timeout, http_client)

    @staticmethod
    def parse_forecast(payload: Any) -> WeatherSnapshot:
        """Map a forecast payload onto a snapshot, defaulting missing values."""
        if not isinstance(payload, dict):
            raise SourceFailure(OpenMeteoClient.source_name, "bad_payload", "forecast is not an object")
        current = payload.get("current") or {}
        daily = payload.get("daily") or {}

        def first(series: Any) -> Any:
            return series[0] if isinstance(series, list) and series else None

        return WeatherSnapshot(
            temperature=safe_float(current.get("temperature_2m"), 20.0),
            precipitation=safe_float(current.get("precipitation"), 0.0),
            max_temperature=safe_float(first(daily.get("temperature_2m_max")), 25.0),
            min_temperature=safe_float(first(daily.get("temperature_2m_min")), 15.0),
        )

    async def get_weather(self, coordinate: Coordinate) -> WeatherSnapshot:
        payload = await self._get_json(
            "forecast",
            params={
                "latitude": coordinate.lat,
                "longitude": coordinate.lon,
                "current": "temperature_2m,precipitation",
                "daily": "temperature_2m_max,temperature_2m_min",
                "timezone": "auto",
                "forecast_days": 1,
            },
        )
        return self.parse_forecast(payload)
