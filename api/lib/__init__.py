"""Shared API library initialization."""

from .config import AmendmentsConfig, ConfigurationError, MissingAPIKeyError
from .congress_api_client import (
    CongressAPIClient,
    CongressAPIError,
    CongressAPINotFoundError,
)
from .response_formatter import (
    json_response,
    success_response,
    error_response,
    preflight_response,
)
from .amendments import collect_amendments

__all__ = [
    "AmendmentsConfig",
    "ConfigurationError",
    "MissingAPIKeyError",
    "CongressAPIClient",
    "CongressAPIError",
    "CongressAPINotFoundError",
    "json_response",
    "success_response",
    "error_response",
    "preflight_response",
    "collect_amendments",
]
