"""
TutorHub Backend — Mapbox Geocoder Unit Tests
==============================================

What:  The Mapbox adapter against a mocked transport (no network).
How:   httpx.MockTransport records each request and answers from a handler.

What we test:
    ✅ URL shape, query escaping, access_token and limit parameters
    ✅ Features returned best match first, truncated to the limit
    ✅ Non-2xx and transport failures become GeocodingServiceError, no retry
    ✅ first_geometry() maps an empty answer to LocationNotFoundError
"""

import httpx
import pytest

from tutorhub.exceptions import GeocodingServiceError, LocationNotFoundError
from tutorhub.services.geocoding import MapboxGeocoder, first_geometry

PARIS = {
    "place_name": "Paris, France",
    "geometry": {"type": "Point", "coordinates": [2.3522, 48.8566]},
}
PARIS_TX = {
    "place_name": "Paris, Texas, United States",
    "geometry": {"type": "Point", "coordinates": [-95.5555, 33.6609]},
}


def make_geocoder(handler) -> tuple:
    requests = []

    def recording_handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    client = httpx.AsyncClient(
        base_url="https://api.mapbox.test",
        transport=httpx.MockTransport(recording_handler),
    )
    return MapboxGeocoder(access_token="pk.test", client=client), requests


class TestForwardGeocode:

    @pytest.mark.asyncio
    async def test_request_shape(self):
        geocoder, requests = make_geocoder(
            lambda request: httpx.Response(200, json={"features": [PARIS]})
        )

        await geocoder.forward_geocode("Paris", limit=1)

        assert len(requests) == 1
        request = requests[0]
        assert request.method == "GET"
        assert request.url.path == "/geocoding/v5/mapbox.places/Paris.json"
        assert request.url.params["access_token"] == "pk.test"
        assert request.url.params["limit"] == "1"

    @pytest.mark.asyncio
    async def test_query_is_escaped(self):
        geocoder, requests = make_geocoder(
            lambda request: httpx.Response(200, json={"features": []})
        )

        await geocoder.forward_geocode("Jl. Sudirman 1/2, Jakarta")

        raw_path = requests[0].url.raw_path.decode()
        assert "Jl.%20Sudirman%201%2F2%2C%20Jakarta.json" in raw_path

    @pytest.mark.asyncio
    async def test_returns_features_up_to_limit(self):
        geocoder, _ = make_geocoder(
            lambda request: httpx.Response(200, json={"features": [PARIS, PARIS_TX]})
        )

        assert await geocoder.forward_geocode("Paris", limit=1) == [PARIS]
        assert await geocoder.forward_geocode("Paris", limit=5) == [PARIS, PARIS_TX]

    @pytest.mark.asyncio
    async def test_empty_answer(self):
        geocoder, _ = make_geocoder(lambda request: httpx.Response(200, json={}))
        assert await geocoder.forward_geocode("Nowhere") == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 429, 500, 503])
    async def test_error_status_is_service_error_without_retry(self, status):
        geocoder, requests = make_geocoder(lambda request: httpx.Response(status))

        with pytest.raises(GeocodingServiceError) as exc_info:
            await geocoder.forward_geocode("Paris")

        assert exc_info.value.status_code == 503
        assert len(requests) == 1

    @pytest.mark.asyncio
    async def test_transport_failure_is_service_error(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        geocoder, requests = make_geocoder(refuse)

        with pytest.raises(GeocodingServiceError):
            await geocoder.forward_geocode("Paris")
        assert len(requests) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, text="<html>maintenance</html>"),
            httpx.Response(200, json=["not", "an", "object"]),
        ],
    )
    async def test_unreadable_body_is_service_error(self, response):
        geocoder, _ = make_geocoder(lambda request: response)

        with pytest.raises(GeocodingServiceError) as exc_info:
            await geocoder.forward_geocode("Paris")

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_token_not_leaked_into_error(self):
        geocoder, _ = make_geocoder(lambda request: httpx.Response(500))
        with pytest.raises(GeocodingServiceError) as exc_info:
            await geocoder.forward_geocode("Paris")
        assert "pk.test" not in exc_info.value.message
        assert "pk.test" not in str(exc_info.value.context)

    @pytest.mark.asyncio
    async def test_aclose_closes_client(self):
        geocoder, _ = make_geocoder(lambda request: httpx.Response(200, json={}))
        await geocoder.aclose()
        assert geocoder._client.is_closed

    def test_configured_flag(self):
        assert MapboxGeocoder(access_token="pk.test").configured is True
        assert MapboxGeocoder(access_token="").configured is False


class TestFirstGeometry:

    def test_best_match_geometry(self):
        assert first_geometry([PARIS, PARIS_TX]) == PARIS["geometry"]

    def test_no_match(self):
        with pytest.raises(LocationNotFoundError, match="Location not found"):
            first_geometry([], "Atlantis")

    def test_match_without_geometry(self):
        with pytest.raises(LocationNotFoundError):
            first_geometry([{"place_name": "Somewhere"}])
