"""Shared test fixtures for amendment pipeline and handler tests."""
import threading
from unittest.mock import Mock, patch

import pytest
import requests

from api.lib.config import AmendmentsConfig
from api.lib.congress_api_client import CongressAPIClient

BASE_URL = "https://api.congress.gov/v3"
CONGRESS = 119

TERM_LIMITS_TITLE = (
    "Proposing an amendment to the Constitution of the United States relative to term limits"
)


class FakeCongressAPI:
    """Routes requests.get calls to canned Congress.gov payloads by URL.

    Unknown URLs answer 404. Safe to call from worker threads.
    """

    def __init__(self):
        self.routes = {}
        self.calls = []
        self._lock = threading.Lock()

    def add(self, url, payload=None, status=200, error=None, invalid_json=False):
        self.routes[url] = (payload, status, error, invalid_json)

    def add_list(self, bill_type, bills, status=200):
        self.add(f"{BASE_URL}/bill/{CONGRESS}/{bill_type}", {"bills": bills}, status=status)

    def add_detail(self, summary, bill=None, status=200, error=None, invalid_json=False):
        payload = {"bill": bill} if bill is not None else {}
        self.add(summary["url"], payload, status=status, error=error, invalid_json=invalid_json)

    def add_cosponsors(self, bill_type, number, count=0, status=200, error=None):
        url = f"{BASE_URL}/bill/{CONGRESS}/{bill_type.lower()}/{number}/cosponsors"
        cosponsors = [{"bioguideId": f"C{i:06d}"} for i in range(count)]
        self.add(url, {"cosponsors": cosponsors}, status=status, error=error)

    def urls_called(self):
        with self._lock:
            return [url for url, _params in self.calls]

    def get(self, url, params=None, timeout=None):
        with self._lock:
            self.calls.append((url, dict(params or {})))

        payload, status, error, invalid_json = self.routes.get(url, ({}, 404, None, False))
        if error is not None:
            raise error

        response = Mock()
        response.status_code = status
        if status >= 400:
            response.raise_for_status.side_effect = requests.exceptions.HTTPError(
                response=response
            )
        else:
            response.raise_for_status.return_value = None
        if invalid_json:
            response.json.side_effect = ValueError("Expecting value: line 1 column 1")
        else:
            response.json.return_value = payload
        return response


@pytest.fixture
def fake_api():
    """FakeCongressAPI patched in for requests.get."""
    api = FakeCongressAPI()
    with patch("api.lib.congress_api_client.requests.get") as mock_get:
        mock_get.side_effect = api.get
        yield api


@pytest.fixture
def client():
    """Client pointed at the default Congress.gov base URL."""
    return CongressAPIClient(api_key="test-key", base_url=BASE_URL)


@pytest.fixture
def config():
    """Minimal handler configuration."""
    return AmendmentsConfig(api_key="test-key", base_url=BASE_URL, congress=CONGRESS)


@pytest.fixture
def make_summary():
    """Factory for list-endpoint bill summaries."""

    def _make(bill_type="HJRES", number="1", title=TERM_LIMITS_TITLE):
        summary = {
            "type": bill_type,
            "number": number,
            "url": f"{BASE_URL}/bill/{CONGRESS}/{bill_type.lower()}/{number}?format=json",
        }
        if title is not None:
            summary["title"] = title
        return summary

    return _make


@pytest.fixture
def make_detail():
    """Factory for detail-endpoint bill records."""

    def _make(introduced_date="2025-01-10", sponsor=None, latest_action=None):
        bill = {"introducedDate": introduced_date}
        if sponsor is not None:
            bill["sponsors"] = [sponsor]
        if latest_action is not None:
            bill["latestAction"] = latest_action
        return bill

    return _make


@pytest.fixture
def mock_lambda_context():
    """Mock Lambda context object."""
    context = Mock()
    context.function_name = 'get-constitutional-amendments'
    context.memory_limit_in_mb = 128
    context.invoked_function_arn = 'arn:aws:lambda:us-east-1:123456789012:function:test'
    context.aws_request_id = 'test-request-id'
    return context
