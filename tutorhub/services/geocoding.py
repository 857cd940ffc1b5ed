"""
TutorHub Backend — Geocoder Adapter
====================================

What:  Converts a free-text location into a GeoJSON point.
How:   `Geocoder` is the narrow interface registration depends on;
       `MapboxGeocoder` implements it against the Mapbox Places API with a
       shared httpx.AsyncClient.
When:  Once per registration, after the presence checks and before hashing.

Failure policy:
    No retries. Transport errors and non-2xx answers raise
    GeocodingServiceError (503); an answer with zero features is a client
    problem and becomes LocationNotFoundError (400) in `first_geometry`.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from tutorhub.exceptions import GeocodingServiceError, LocationNotFoundError

logger = logging.getLogger(__name__)

Feature = Dict[str, Any]


class Geocoder(ABC):
    """
    Forward geocoding interface.

    Contract:
        - forward_geocode() returns provider features best match first,
          each carrying a `geometry` `{"type": ..., "coordinates": [...]}`
        - provider failures are wrapped in GeocodingServiceError
    """

    @abstractmethod
    async def forward_geocode(self, query: str, limit: int = 1) -> List[Feature]:
        ...

    @property
    def configured(self) -> bool:
        return True

    async def aclose(self) -> None:
        """Release network resources. Called on application shutdown."""
        return None


def first_geometry(features: List[Feature], query: Optional[str] = None) -> Dict[str, Any]:
    """Geometry of the best match, or LocationNotFoundError when nothing matched."""
    if not features or not features[0].get("geometry"):
        raise LocationNotFoundError(query)
    return features[0]["geometry"]


class MapboxGeocoder(Geocoder):
    """
    Mapbox Places forward geocoding.

    Request:
        GET {base_url}/geocoding/v5/mapbox.places/{query}.json?access_token=...&limit=1
    Response (abridged):
        {"features": [{"place_name": "Paris, France",
                       "geometry": {"type": "Point", "coordinates": [2.35, 48.86]}}]}
    """

    def __init__(
        self,
        access_token: str,
        base_url: str = "https://api.mapbox.com",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._access_token = access_token
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        logger.info("MapboxGeocoder initialized with base_url=%s", base_url)

    @property
    def configured(self) -> bool:
        return bool(self._access_token)

    async def forward_geocode(self, query: str, limit: int = 1) -> List[Feature]:
        path = f"/geocoding/v5/mapbox.places/{quote(query, safe='')}.json"
        start_time = time.perf_counter()

        try:
            response = await self._client.get(
                path,
                params={"access_token": self._access_token, "limit": limit},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Mapbox geocoding returned %d for query of %d chars",
                e.response.status_code,
                len(query),
            )
            raise GeocodingServiceError(
                context={"status": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            logger.error("Mapbox geocoding request failed: %s", type(e).__name__)
            raise GeocodingServiceError(context={"error_type": type(e).__name__}) from e

        try:
            features = response.json().get("features") or []
        except (ValueError, AttributeError) as e:
            logger.error("Mapbox geocoding returned an unreadable body: %s", type(e).__name__)
            raise GeocodingServiceError(context={"error_type": type(e).__name__}) from e
        logger.info(
            "Mapbox geocoding completed in %.0fms with %d feature(s)",
            (time.perf_counter() - start_time) * 1000,
            len(features),
        )
        return features[:limit]

    async def aclose(self) -> None:
        await self._client.aclose()
