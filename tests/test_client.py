"""Tests for the analysis API client."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from src.api.client import AnalysisApiClient, AnalysisApiError, AnalysisRateLimitError, retry_request


def _response(status_code: int = 200, json_data=None, reason: str = "OK") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.reason = reason
    response.json.return_value = json_data if json_data is not None else {}
    return response


class TestRetryRequest:
    """Tests for retry_request."""

    @patch("src.api.client.time.sleep")
    def test_succeeds_after_failures(self, mock_sleep) -> None:
        func = MagicMock(side_effect=[AnalysisApiError("x"), AnalysisApiError("y"), "ok"])

        assert retry_request(func, max_retries=3, backoff_seconds=1.0) == "ok"
        assert func.call_count == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1.0, 2.0]

    @patch("src.api.client.time.sleep")
    def test_gives_up_after_max_retries(self, mock_sleep) -> None:
        func = MagicMock(side_effect=AnalysisApiError("down"))

        with pytest.raises(AnalysisApiError):
            retry_request(func, max_retries=2, backoff_seconds=0.5)

        assert func.call_count == 3
        assert mock_sleep.call_count == 2

    def test_other_errors_not_retried(self) -> None:
        func = MagicMock(side_effect=KeyError("bad"))

        with pytest.raises(KeyError):
            retry_request(func, max_retries=3)

        assert func.call_count == 1


class TestAnalysisApiClient:
    """Tests for AnalysisApiClient."""

    @pytest.fixture
    def session(self) -> MagicMock:
        session = MagicMock(spec=requests.Session)
        session.headers = {}
        return session

    @pytest.fixture
    def client(self, settings, session) -> AnalysisApiClient:
        settings.api.analysis_api_key = "secret"
        settings.api.retry_backoff_seconds = 0
        return AnalysisApiClient(settings, session=session)

    def test_api_key_header(self, client, session) -> None:
        assert session.headers["X-Api-Key"] == "secret"

    def test_analyze_keywords(self, client, session) -> None:
        session.request.return_value = _response(json_data=[{"keyword": "yoga", "searchVolume": 100}])

        data = client.analyze_keywords(["yoga"])

        assert data[0]["keyword"] == "yoga"
        method, url = session.request.call_args.args
        assert method == "POST"
        assert url.endswith("/keywords/analyze")
        assert session.request.call_args.kwargs["json"] == {"keywords": ["yoga"]}

    def test_campaign_data_payload(self, client, session) -> None:
        session.request.return_value = _response(json_data={"campaigns": []})

        client.get_campaign_data("2024-01-01", "2024-01-31", campaign_id=7)

        assert session.request.call_args.kwargs["json"] == {
            "startDate": "2024-01-01",
            "endDate": "2024-01-31",
            "campaignId": 7,
        }

    @patch("src.api.client.time.sleep")
    def test_rate_limit_is_retried_then_raised(self, mock_sleep, client, session) -> None:
        session.request.return_value = _response(429, reason="Too Many Requests")

        with pytest.raises(AnalysisRateLimitError):
            client.get_asin_data("B001")

        assert session.request.call_count == client.settings.api.max_retries + 1

    @patch("src.api.client.time.sleep")
    def test_server_error(self, mock_sleep, client, session) -> None:
        session.request.return_value = _response(500, reason="Server Error")

        with pytest.raises(AnalysisApiError) as exc_info:
            client.analyze_competition("B001")

        assert exc_info.value.status_code == 500

    @patch("src.api.client.time.sleep")
    def test_connection_error_wrapped(self, mock_sleep, client, session) -> None:
        session.request.side_effect = [requests.ConnectionError("refused"), _response(json_data={"ok": True})]

        assert client.estimate_sales("Books", 1200, 9.99) == {"ok": True}
