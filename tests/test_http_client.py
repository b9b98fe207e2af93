"""Tests for the HTTP client service."""

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import httpx
import pytest

from gamepage.services.http_client import HttpClientService


URL = "https://example.org/API/API_GetGame.php"


def make_response(status_code: int, headers: dict[str, str] | None = None, **kwargs) -> httpx.Response:
    return httpx.Response(status_code, headers=headers, request=httpx.Request("GET", URL), **kwargs)


@pytest.fixture
def client() -> Iterator[HttpClientService]:
    service = HttpClientService(max_retries=2, base_delay=1.0, rate_limit_delay=0.0)
    yield service
    service.close()


@pytest.fixture
def sleep() -> Iterator[MagicMock]:
    with patch("gamepage.services.http_client.time.sleep") as mock_sleep:
        yield mock_sleep


class TestHttpClientService:
    def test_get_json(self, client: HttpClientService, sleep: MagicMock) -> None:
        with patch.object(client._client, "get", return_value=make_response(200, json={"Title": "Tetris"})) as get:
            assert client.get_json(URL, params={"i": "1"}) == {"Title": "Tetris"}

        assert get.call_args.kwargs["params"] == {"i": "1"}
        assert get.call_args.kwargs["headers"]["Accept"] == "application/json"
        sleep.assert_not_called()

    def test_retries_server_errors(self, client: HttpClientService, sleep: MagicMock) -> None:
        responses = [make_response(503), make_response(502), make_response(200, json=[])]

        with patch.object(client._client, "get", side_effect=responses) as get:
            assert client.get_json(URL) == []

        assert get.call_count == 3
        assert [call.args[0] for call in sleep.call_args_list] == [1.0, 2.0]

    def test_gives_up_after_max_retries(self, client: HttpClientService, sleep: MagicMock) -> None:
        with patch.object(client._client, "get", return_value=make_response(500)) as get:
            with pytest.raises(httpx.HTTPStatusError):
                client.get(URL)

        assert get.call_count == 3

    def test_client_errors_are_not_retried(self, client: HttpClientService, sleep: MagicMock) -> None:
        with patch.object(client._client, "get", return_value=make_response(404)) as get:
            with pytest.raises(httpx.HTTPStatusError):
                client.get(URL)

        assert get.call_count == 1
        sleep.assert_not_called()

    def test_rate_limit_honours_retry_after(self, client: HttpClientService, sleep: MagicMock) -> None:
        responses = [make_response(429, headers={"retry-after": "5"}), make_response(200, json={})]

        with patch.object(client._client, "get", side_effect=responses):
            assert client.get_json(URL) == {}

        sleep.assert_called_once_with(5.0)

    def test_transport_errors_are_retried(self, client: HttpClientService, sleep: MagicMock) -> None:
        responses = [httpx.ConnectError("Connection refused"), make_response(200, json={})]

        with patch.object(client._client, "get", side_effect=responses) as get:
            assert client.get_json(URL) == {}

        assert get.call_count == 2

    def test_invalid_json_raises_value_error(self, client: HttpClientService, sleep: MagicMock) -> None:
        with patch.object(client._client, "get", return_value=make_response(200, content=b"<html>")):
            with pytest.raises(ValueError):
                client.get_json(URL)

    def test_rate_limit_between_requests(self, sleep: MagicMock) -> None:
        service = HttpClientService(rate_limit_delay=10.0)
        try:
            with patch.object(service._client, "get", return_value=make_response(200, json={})):
                service.get(URL)
                sleep.assert_not_called()
                service.get(URL)

            sleep.assert_called_once()
            assert 0 < sleep.call_args.args[0] <= 10.0
        finally:
            service.close()

    def test_context_manager_closes_client(self) -> None:
        with HttpClientService() as service:
            pass

        assert service._client.is_closed
