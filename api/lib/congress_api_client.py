"""Congress.gov API client for joint resolution lookups.

This module provides a thin Python client for the Congress.gov API v3 with:
- Typed exceptions for HTTP and decode failures
- Optional per-request timeout
- Optional retry with exponential backoff on network errors

Example usage:
    from api.lib.congress_api_client import CongressAPIClient

    client = CongressAPIClient(api_key="your_key_here")
    bills = client.list_bills(congress=119, bill_type="hjres", limit=250)
    detail = client.get_bill_by_url(bills["bills"][0]["url"])
"""

import logging
from typing import Any, Dict, Optional

import requests
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://api.congress.gov/v3"


class CongressAPIError(Exception):
    """Base exception for Congress API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class CongressAPINotFoundError(CongressAPIError):
    """Raised when resource not found (HTTP 404)."""

    pass


class CongressAPIClient:
    """Client for Congress.gov API v3.

    Attributes:
        api_key: Congress.gov API key
        base_url: API base URL (default: https://api.congress.gov/v3)
        timeout: Request timeout in seconds (default: None, no timeout)
        max_retries: Extra attempts on network errors (default: 0)

    Example:
        >>> client = CongressAPIClient(api_key=os.environ["CONGRESS_API_KEY"])
        >>> data = client.get_bill_cosponsors(119, "hjres", 1)
        >>> print(len(data["cosponsors"]))
    """

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: int = 0,
    ):
        """Initialize Congress API client.

        Args:
            api_key: Congress.gov API key
            base_url: API base URL (defaults to https://api.congress.gov/v3)
            timeout: Request timeout in seconds (None waits indefinitely)
            max_retries: Number of retries on network errors

        Raises:
            ValueError: If API key is empty
        """
        if not api_key:
            raise ValueError("Congress API key required.")

        self.api_key = api_key
        self.base_url = (base_url or DEFAULT_API_BASE_URL).rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries

        logger.debug(
            f"Initialized CongressAPIClient: base_url={self.base_url}, "
            f"timeout={self.timeout}, max_retries={self.max_retries}"
        )

    def _retrying(self) -> Retrying:
        return Retrying(
            retry=retry_if_exception_type(requests.exceptions.RequestException),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            stop=stop_after_attempt(self.max_retries + 1),
            reraise=True,
        )

    def _make_request(
        self, url: str, params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Make HTTP GET request to Congress.gov API.

        The API key is added as the ``api_key`` query parameter; requests
        merges it with any query string already present on ``url``.

        Args:
            url: Absolute URL
            params: Optional query parameters

        Returns:
            Parsed JSON response as dict

        Raises:
            CongressAPINotFoundError: If resource not found (HTTP 404)
            CongressAPIError: For other non-success statuses or invalid JSON
            requests.exceptions.RequestException: For network errors
        """
        params = dict(params or {})
        safe_params = dict(params)
        params["api_key"] = self.api_key

        logger.debug(f"GET {url} params={safe_params}")

        for attempt in self._retrying():
            with attempt:
                return self._send(url, params)

    def _send(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        response = requests.get(url, params=params, timeout=self.timeout)

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            if status_code == 404:
                raise CongressAPINotFoundError(
                    f"Resource not found: {url}", status_code=404
                ) from e
            raise CongressAPIError(
                f"API error {status_code} for {url}", status_code=status_code
            ) from e

        try:
            data = response.json()
        except ValueError as e:
            raise CongressAPIError(f"Invalid JSON response from {url}: {e}") from e

        if not isinstance(data, dict):
            raise CongressAPIError(f"Unexpected JSON payload from {url}")

        return data

    # ==========================================================================
    # Bill Endpoints
    # ==========================================================================

    def list_bills(
        self, congress: int, bill_type: str, limit: int = 250
    ) -> Dict[str, Any]:
        """List one page of bills of a given type for a Congress.

        Args:
            congress: Congress number (e.g., 119)
            bill_type: Bill type ("hjres", "sjres", etc.)
            limit: Page size (Congress.gov max is 250)

        Returns:
            Response dict with a "bills" list

        Example:
            >>> data = client.list_bills(119, "hjres")
            >>> print(data["bills"][0]["title"])
        """
        url = f"{self.base_url}/bill/{congress}/{bill_type}"
        return self._make_request(url, {"limit": limit})

    def get_bill_by_url(self, url: str) -> Dict[str, Any]:
        """Get bill details from the self-referential URL of a list item.

        Args:
            url: Bill detail URL as returned by the list endpoint
                (e.g., ".../bill/119/hjres/1?format=json")

        Returns:
            Response dict with a "bill" record
        """
        return self._make_request(url)

    def get_bill_cosponsors(
        self, congress: int, bill_type: str, bill_number: Any
    ) -> Dict[str, Any]:
        """Get bill cosponsors.

        Args:
            congress: Congress number
            bill_type: Bill type (case-insensitive)
            bill_number: Bill number

        Returns:
            Cosponsors data dict

        Example:
            >>> cosponsors = client.get_bill_cosponsors(119, "HJRES", 1)
            >>> print(len(cosponsors["cosponsors"]))
        """
        url = f"{self.base_url}/bill/{congress}/{bill_type.lower()}/{bill_number}/cosponsors"
        return self._make_request(url)
