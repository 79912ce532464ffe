"""API clients for Seller Tools."""

from .client import AnalysisApiClient, AnalysisApiError, AnalysisRateLimitError, retry_request

__all__ = [
    "AnalysisApiClient",
    "AnalysisApiError",
    "AnalysisRateLimitError",
    "retry_request",
]
