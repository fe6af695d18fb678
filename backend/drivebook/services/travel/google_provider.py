"""Google Maps Distance Matrix travel provider (traffic-aware driving estimates)."""

from datetime import datetime
from typing import Any, Optional

import httpx

from ...core.constants import GOOGLE_MAPS_API_BASE_URL
from ...core.exceptions import TravelProviderError
from ...schemas.availability import Location, TravelEstimate
from ...utils.time_utils import ensure_utc
from .base import TravelProvider


def _metric_value(element: dict[str, Any], key: str) -> Any:
    metric = element.get(key)
    if isinstance(metric, dict):
        return metric.get("value")
    return None


def parse_distance_matrix_response(data: Any) -> TravelEstimate:
    """
    Extract the single origin/destination element of a Distance Matrix reply.

    ``duration_in_traffic`` wins over ``duration`` when Google returns both.
    """
    if not isinstance(data, dict) or not isinstance(data.get("rows"), list):
        raise TravelProviderError("Unexpected distance matrix response")

    rows = data["rows"]
    row = rows[0] if rows and isinstance(rows[0], dict) else {}
    elements = row.get("elements")
    if not isinstance(elements, list):
        elements = []
    element = elements[0] if elements and isinstance(elements[0], dict) else None
    if not element or element.get("status") != "OK":
        raise TravelProviderError("Distance matrix element missing")

    distance_meters = _metric_value(element, "distance")
    duration_seconds = _metric_value(element, "duration_in_traffic")
    if duration_seconds is None:
        duration_seconds = _metric_value(element, "duration")

    if distance_meters is None or duration_seconds is None:
        raise TravelProviderError("Distance matrix element missing distance or duration")

    try:
        return TravelEstimate(
            distance_km=float(distance_meters) / 1000,
            time_minutes=float(duration_seconds) / 60,
        )
    except (TypeError, ValueError) as exc:
        raise TravelProviderError("Distance matrix returned non-numeric values") from exc


class GoogleMapsTravelProvider(TravelProvider):
    name = "google"

    def __init__(
        self,
        api_key: str,
        base_url: str = GOOGLE_MAPS_API_BASE_URL,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def travel(
        self, origin: Location, destination: Location, departure: datetime
    ) -> TravelEstimate:
        params = {
            "origins": f"{origin.latitude},{origin.longitude}",
            "destinations": f"{destination.latitude},{destination.longitude}",
            "departure_time": str(int(ensure_utc(departure).timestamp())),
            "mode": "driving",
            "key": self.api_key,
        }
        try:
            resp = await self.client.get(f"{self.base_url}/distancematrix/json", params=params)
        except httpx.HTTPError as exc:
            raise TravelProviderError(f"Distance matrix request failed: {exc}") from exc

        if resp.status_code >= 400:
            raise TravelProviderError(f"Failed to fetch travel data ({resp.status_code})")

        try:
            data = resp.json()
        except ValueError as exc:
            raise TravelProviderError("Distance matrix returned invalid JSON") from exc

        if isinstance(data, dict) and data.get("status") not in (None, "OK"):
            raise TravelProviderError(f"Distance matrix status {data.get('status')}")
        return parse_distance_matrix_response(data)
