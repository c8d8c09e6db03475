"""
Unit tests for the get_constitutional_amendments Lambda

Tests response shape, caching headers, configuration errors and the
top-level failure path.
"""

import json
import os
from unittest.mock import patch

import pytest

from api.lambdas.get_constitutional_amendments import handler as handler_module
from api.lambdas.get_constitutional_amendments.handler import AmendmentsHandler, handler
from api.lib.config import AmendmentsConfig

from conftest import TERM_LIMITS_TITLE

GET_EVENT = {
    "httpMethod": "GET",
    "path": "/v1/congress/amendments",
    "queryStringParameters": None,
    "pathParameters": None,
}


def _body(response):
    return json.loads(response["body"])


class TestAmendmentsHandler:
    """Test the handler built from an explicit configuration."""

    def test_success_response(self, fake_api, config, make_summary, make_detail, mock_lambda_context):
        """Test the digest body, status and headers."""
        amendment = make_summary("HJRES", "1", TERM_LIMITS_TITLE)
        fake_api.add_list("hjres", [amendment, make_summary("HJRES", "2", "Providing for congressional review")])
        fake_api.add_list("sjres", [])
        fake_api.add_detail(
            amendment,
            make_detail("2025-01-10", sponsor={"fullName": "Jane Doe", "party": "D", "state": "CA"}),
        )
        fake_api.add_cosponsors("HJRES", "1", count=12)

        response = AmendmentsHandler(config)(GET_EVENT, mock_lambda_context)

        assert response["statusCode"] == 200
        assert response["headers"]["Cache-Control"] == "s-maxage=3600, stale-while-revalidate"
        assert response["headers"]["Content-Type"] == "application/json"
        assert response["headers"]["Access-Control-Allow-Origin"] == "*"

        body = _body(response)
        assert set(body) == {"count", "congress", "lastUpdated", "amendments"}
        assert body["count"] == 1
        assert body["congress"] == 119
        assert body["amendments"] == [{
            "number": "HJRES 1",
            "title": TERM_LIMITS_TITLE,
            "introducedDate": "2025-01-10",
            "sponsor": {"name": "Jane Doe", "party": "D", "state": "CA", "district": None},
            "status": "Introduced",
            "statusDate": "2025-01-10",
            "cosponsorsCount": 12,
            "congressUrl": "https://www.congress.gov/bill/119th-congress/hjres/1",
        }]

    def test_sorted_output(self, fake_api, config, make_summary, make_detail, mock_lambda_context):
        """Test amendments come back newest first across chambers."""
        older = make_summary("HJRES", "3")
        newer = make_summary("SJRES", "8")
        fake_api.add_list("hjres", [older])
        fake_api.add_list("sjres", [newer])
        fake_api.add_detail(older, make_detail("2025-01-03"))
        fake_api.add_detail(newer, make_detail("2025-04-22"))
        fake_api.add_cosponsors("HJRES", "3")
        fake_api.add_cosponsors("SJRES", "8")

        body = _body(AmendmentsHandler(config)(GET_EVENT, mock_lambda_context))

        assert [a["number"] for a in body["amendments"]] == ["SJRES 8", "HJRES 3"]

    def test_unexpected_exception(self, config, mock_lambda_context):
        """Test unexpected failures surface as a generic 500."""
        with patch.object(handler_module, "collect_amendments", side_effect=RuntimeError("boom")):
            response = AmendmentsHandler(config)(GET_EVENT, mock_lambda_context)

        assert response["statusCode"] == 500
        assert _body(response) == {"error": "Failed to fetch amendments"}
        assert "Cache-Control" not in response["headers"]

    def test_options_preflight(self, fake_api, config, mock_lambda_context):
        """Test CORS preflight makes no upstream calls."""
        response = AmendmentsHandler(config)({"httpMethod": "OPTIONS"}, mock_lambda_context)

        assert response["statusCode"] == 200
        assert response["body"] == ""
        assert fake_api.calls == []

    def test_uses_configured_congress(self, fake_api, mock_lambda_context):
        """Test the configured congress scopes the list requests."""
        handler_118 = AmendmentsHandler(AmendmentsConfig(api_key="test-key", congress=118))

        body = _body(handler_118(GET_EVENT, mock_lambda_context))

        assert body["congress"] == 118
        assert all("/bill/118/" in url for url in fake_api.urls_called())


class TestLambdaEntryPoint:
    """Test the module-level Lambda handler."""

    @patch("api.lib.config.load_dotenv")
    def test_missing_api_key(self, mock_load_dotenv, fake_api, mock_lambda_context):
        """Test missing credential returns 500 without calling upstream."""
        with patch.dict(os.environ, {}, clear=True):
            response = handler(GET_EVENT, mock_lambda_context)

        assert response["statusCode"] == 500
        assert _body(response) == {"error": "API key not configured"}
        assert fake_api.calls == []

    @patch("api.lib.config.load_dotenv")
    def test_invalid_configuration(self, mock_load_dotenv, fake_api, mock_lambda_context):
        """Test malformed settings return 500 without calling upstream."""
        env = {"CONGRESS_API_KEY": "test-key", "CONGRESS_NUMBER": "latest"}
        with patch.dict(os.environ, env, clear=True):
            response = handler(GET_EVENT, mock_lambda_context)

        assert response["statusCode"] == 500
        assert _body(response) == {"error": "Invalid configuration"}
        assert fake_api.calls == []

    @patch("api.lib.config.load_dotenv")
    def test_configured_from_environment(self, mock_load_dotenv, fake_api, mock_lambda_context):
        """Test the key from the environment is sent upstream."""
        fake_api.add_list("hjres", [])
        fake_api.add_list("sjres", [])

        with patch.dict(os.environ, {"CONGRESS_API_KEY": "env-key"}, clear=True):
            response = handler(GET_EVENT, mock_lambda_context)

        assert response["statusCode"] == 200
        assert _body(response)["count"] == 0
        assert len(fake_api.calls) == 2
        assert all(params["api_key"] == "env-key" for _url, params in fake_api.calls)

    @pytest.mark.parametrize('event', [None, {}, GET_EVENT])
    @patch("api.lib.config.load_dotenv")
    def test_event_shapes(self, mock_load_dotenv, fake_api, mock_lambda_context, event):
        """Test the handler needs no request parameters."""
        fake_api.add_list("hjres", [])
        fake_api.add_list("sjres", [])

        with patch.dict(os.environ, {"CONGRESS_API_KEY": "env-key"}, clear=True):
            response = handler(event, mock_lambda_context)

        assert response["statusCode"] == 200
