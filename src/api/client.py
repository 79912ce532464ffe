"""Remote analysis API client with retry and backoff."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, TypeVar

import requests

from src.core.config import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AnalysisApiError(Exception):
    """Raised when the analysis API returns an error or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AnalysisRateLimitError(AnalysisApiError):
    """Raised when the analysis API rate limit is hit."""


def retry_request(
    func: Callable[[], T],
    max_retries: int = 3,
    backoff_seconds: float = 1.0,
    retry_on: tuple[type[Exception], ...] = (AnalysisApiError,),
) -> T:
    """Call ``func``, retrying on ``retry_on`` with exponential backoff.

    The delay doubles after each failed attempt. The last error is re-raised
    once ``max_retries`` retries have been used up.
    """
    attempt = 0
    while True:
        try:
            return func()
        except retry_on as e:
            if attempt >= max_retries:
                raise
            delay = backoff_seconds * (2 ** attempt)
            attempt += 1
            logger.warning(f"Request failed ({e}); retry {attempt}/{max_retries} in {delay:.1f}s")
            time.sleep(delay)


class AnalysisApiClient:
    """JSON client for the remote seller analysis service."""

    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        self.settings = settings
        self.base_url = settings.api.analysis_base_url.rstrip("/")
        self.timeout = settings.api.timeout_seconds

        self.session = session or requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
        })
        if settings.api.analysis_api_key:
            self.session.headers["X-Api-Key"] = settings.api.analysis_api_key

    def _make_request(self, method: str, endpoint: str, payload: dict | None = None) -> Any:
        url = f"{self.base_url}{endpoint}"
        start_time = time.time()
        try:
            response = self.session.request(method, url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise AnalysisApiError(f"Request to {endpoint} failed: {e}") from e
        duration_ms = int((time.time() - start_time) * 1000)

        if response.status_code == 429:
            raise AnalysisRateLimitError(f"Rate limited on {endpoint}", status_code=429)
        if not response.ok:
            raise AnalysisApiError(
                f"API Error: {response.status_code} {response.reason} - {endpoint}",
                status_code=response.status_code,
            )

        logger.debug(f"{method} {endpoint} -> {response.status_code} in {duration_ms}ms")
        try:
            return response.json()
        except ValueError as e:
            raise AnalysisApiError(f"Invalid JSON from {endpoint}") from e

    def request(self, method: str, endpoint: str, payload: dict | None = None) -> Any:
        """Make a request, retrying transient failures."""
        logger.info(f"API Request: {method} {endpoint}")
        return retry_request(
            lambda: self._make_request(method, endpoint, payload),
            max_retries=self.settings.api.max_retries,
            backoff_seconds=self.settings.api.retry_backoff_seconds,
        )

    def analyze_keywords(self, keywords: list[str]) -> list[dict]:
        return self.request("POST", "/keywords/analyze", {"keywords": keywords})

    def get_asin_data(self, asin: str) -> dict:
        return self.request("GET", f"/asin/{asin}")

    def analyze_competition(self, asin: str) -> dict:
        return self.request("GET", f"/competition/{asin}")

    def estimate_sales(self, category: str, bsr: int, price: float) -> dict:
        return self.request(
            "POST", "/sales/estimate", {"category": category, "bsr": bsr, "price": price}
        )

    def get_campaign_data(
        self,
        start_date: str,
        end_date: str,
        campaign_id: int | None = None,
        ad_group_id: int | None = None,
    ) -> dict:
        """Fetch PPC campaign data for remote analysis."""
        payload: dict[str, Any] = {"startDate": start_date, "endDate": end_date}
        if campaign_id is not None:
            payload["campaignId"] = campaign_id
        if ad_group_id is not None:
            payload["adGroupId"] = ad_group_id
        return self.request("POST", "/ppc/campaign-data", payload)
