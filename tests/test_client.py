"""Tests for the astronomy API client. All HTTP goes through httpx.MockTransport."""

import logging
from datetime import date

import httpx
import pytest

from lunaralmanac.client import (
    AstronomyClient,
    AstronomyFetchError,
    coordinates_from_position,
    fetch_with_fallback,
)

BODY = {
    "location": {
        "latitude": "35.17944",
        "longitude": "129.07556",
        "city": "Busan",
        "country_name": "South Korea",
    },
    "astronomy": {
        "date": "2025-03-14",
        "current_time": "21:14:07.512",
        "sunrise": "06:38",
        "sunset": "18:31",
        "moon_phase": "WANING_GIBBOUS",
        "moon_illumination_percentage": "-97.1",
    },
}


def _client(handler, api_key="test-key"):
    return AstronomyClient(api_key, transport=httpx.MockTransport(handler))


def _recording_handler(requests, status=200, json=BODY):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status, json=json)

    return handler


def test_by_coordinates_sends_lat_long_and_normalizes():
    requests: list[httpx.Request] = []
    record = _client(_recording_handler(requests)).by_coordinates(35.17944, 129.07556)

    params = requests[0].url.params
    assert params["apiKey"] == "test-key"
    assert params["lat"] == "35.17944"
    assert params["long"] == "129.07556"
    assert "date" not in params
    assert requests[0].url.path == "/v2/astronomy"

    assert record.location.city == "Busan"
    assert record.location.region == ""
    assert record.moon.phase == "Waning Gibbous"
    assert record.moon.illumination == 97.1


def test_by_ip_with_date():
    requests: list[httpx.Request] = []
    _client(_recording_handler(requests)).by_ip("8.8.8.8", when=date(2025, 3, 14))

    params = requests[0].url.params
    assert params["ip"] == "8.8.8.8"
    assert params["date"] == "2025-03-14"


def test_by_ip_without_ip_lets_the_api_locate_the_caller():
    requests: list[httpx.Request] = []
    _client(_recording_handler(requests)).by_ip()
    assert "ip" not in requests[0].url.params


def test_by_location():
    requests: list[httpx.Request] = []
    _client(_recording_handler(requests)).by_location("Busan, South Korea")
    assert requests[0].url.params["location"] == "Busan, South Korea"


def test_http_error_status_is_reported():
    client = _client(_recording_handler([], status=401, json={"message": "bad key"}))
    with pytest.raises(AstronomyFetchError, match="status: 401") as excinfo:
        client.by_location("Busan")
    assert isinstance(excinfo.value.__cause__, httpx.HTTPStatusError)


def test_transport_error_is_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(AstronomyFetchError, match="by IP"):
        _client(handler).by_ip()


def test_invalid_json_is_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    with pytest.raises(AstronomyFetchError, match="invalid JSON"):
        _client(handler).by_ip()


def test_malformed_coordinate_becomes_fetch_error():
    body = {"location": {"latitude": "not-a-number", "longitude": "0"}, "astronomy": {}}
    client = _client(_recording_handler([], json=body))
    with pytest.raises(AstronomyFetchError, match="latitude"):
        client.by_ip()


def test_missing_api_key_fails_without_a_request():
    requests: list[httpx.Request] = []
    with pytest.raises(AstronomyFetchError, match="IPGEOLOCATION_API_KEY"):
        _client(_recording_handler(requests), api_key="").by_ip()
    assert requests == []


def test_from_env_reads_api_key(monkeypatch):
    monkeypatch.setenv("IPGEOLOCATION_API_KEY", "env-key")
    assert AstronomyClient.from_env().api_key == "env-key"
    monkeypatch.delenv("IPGEOLOCATION_API_KEY")
    assert AstronomyClient.from_env().api_key == ""


def test_fallback_uses_coordinates_when_they_work():
    requests: list[httpx.Request] = []
    fetch_with_fallback(_client(_recording_handler(requests)), lat=1.5, lng=2.5)
    assert len(requests) == 1
    assert requests[0].url.params["lat"] == "1.5"


def test_fallback_to_ip_after_coordinate_failure(caplog):
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if "lat" in request.url.params:
            return httpx.Response(500)
        return httpx.Response(200, json=BODY)

    with caplog.at_level(logging.WARNING, logger="lunaralmanac.client"):
        record = fetch_with_fallback(_client(handler), lat=1.5, lng=2.5)

    assert record.location.city == "Busan"
    assert len(requests) == 2
    assert "lat" not in requests[1].url.params
    assert "falling back to IP" in caplog.text


def test_fallback_without_coordinates_goes_straight_to_ip():
    requests: list[httpx.Request] = []
    fetch_with_fallback(_client(_recording_handler(requests)))
    assert len(requests) == 1
    assert "lat" not in requests[0].url.params


def test_fallback_propagates_ip_failure():
    client = _client(_recording_handler([], status=503))
    with pytest.raises(AstronomyFetchError):
        fetch_with_fallback(client, lat=1.5, lng=2.5)


def test_coordinates_from_browser_position():
    position = {"coords": {"latitude": 35.17944, "longitude": 129, "accuracy": 20}}
    assert coordinates_from_position(position) == (35.17944, 129.0)


@pytest.mark.parametrize(
    "position",
    [
        None,
        {"error": {"code": 1, "message": "User denied Geolocation"}},
        {"coords": None},
        {"coords": {"latitude": "35.1", "longitude": 129.0}},
        {"coords": {"latitude": True, "longitude": 129.0}},
    ],
)
def test_coordinates_from_unanswered_or_denied_position(position):
    assert coordinates_from_position(position) is None


def test_browser_position_drives_coordinate_lookup():
    """Once the browser answers, the fetch goes by coordinates instead of IP."""
    requests: list[httpx.Request] = []
    client = _client(_recording_handler(requests))

    fetch_with_fallback(client, *(coordinates_from_position(None) or (None, None)))
    lat, lng = coordinates_from_position({"coords": {"latitude": 1.5, "longitude": 2.5}})
    fetch_with_fallback(client, lat=lat, lng=lng)

    assert "lat" not in requests[0].url.params
    assert requests[1].url.params["lat"] == "1.5"
    assert requests[1].url.params["long"] == "2.5"
