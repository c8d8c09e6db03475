"""
Response formatting utilities for the constitutional amendments API

Builds API Gateway proxy responses with JSON bodies and CORS headers.
"""

from typing import Dict, Any, Optional, Union
import json
import logging

from pydantic import BaseModel

from .response_models import ErrorBody

logger = logging.getLogger(__name__)


def json_response(
    body: Union[BaseModel, Dict[str, Any]],
    status_code: int = 200,
    headers: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """
    Build a JSON response.

    Args:
        body: Response body (dict or Pydantic model)
        status_code: HTTP status code (default 200)
        headers: Extra headers merged over the CORS defaults

    Returns:
        API Gateway response dict with CORS headers

    Example:
        json_response(digest, headers={"Cache-Control": "s-maxage=3600"})
    """
    if isinstance(body, BaseModel):
        body = body.model_dump(mode="json", by_alias=True)

    response_headers = _get_cors_headers()
    if headers:
        response_headers.update(headers)

    return {
        "statusCode": status_code,
        "headers": response_headers,
        "body": json.dumps(body, default=str),
    }


def success_response(
    body: Union[BaseModel, Dict[str, Any]], cache_control: Optional[str] = None
) -> Dict[str, Any]:
    """
    Build a 200 response, optionally with a Cache-Control directive.
    """
    headers = {"Cache-Control": cache_control} if cache_control else None
    return json_response(body, status_code=200, headers=headers)


def error_response(message: str, status_code: int = 500) -> Dict[str, Any]:
    """
    Build error response with body ``{"error": message}``.

    Args:
        message: Error message
        status_code: HTTP status code (400, 404, 500, etc.)

    Returns:
        API Gateway response dict
    """
    return json_response(ErrorBody(error=message), status_code=status_code)


def preflight_response() -> Dict[str, Any]:
    """Empty 200 response for CORS preflight (OPTIONS) requests."""
    return {"statusCode": 200, "headers": _get_cors_headers(), "body": ""}


def _get_cors_headers() -> Dict[str, str]:
    """
    Get CORS headers for API responses.

    Returns:
        Dict of CORS headers
    """
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": "GET, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token",
        "Content-Type": "application/json",
    }
