"""
Lambda handler: GET /v1/congress/amendments

Proposed constitutional amendments in the current Congress:
- House and Senate joint resolutions whose title proposes an amendment
- Sponsor, latest action and cosponsor count for each
- Sorted by introduction date, most recent first
"""

import os
import logging
from typing import Any, Dict, Optional

from api.lib import (
    AmendmentsConfig,
    ConfigurationError,
    MissingAPIKeyError,
    CongressAPIClient,
    collect_amendments,
    success_response,
    error_response,
    preflight_response,
)

logger = logging.getLogger()
logger.setLevel(os.environ.get("LOG_LEVEL", "INFO"))

MISSING_KEY_MESSAGE = "API key not configured"
INVALID_CONFIG_MESSAGE = "Invalid configuration"
FETCH_FAILED_MESSAGE = "Failed to fetch amendments"


class AmendmentsHandler:
    """Serves the amendments digest for one resolved configuration."""

    def __init__(self, config: AmendmentsConfig, client: Optional[CongressAPIClient] = None):
        self.config = config
        self.client = client or CongressAPIClient(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
            max_retries=config.max_retries,
        )

    def __call__(self, event: Optional[Dict[str, Any]], context: Any) -> Dict[str, Any]:
        if (event or {}).get("httpMethod") == "OPTIONS":
            return preflight_response()

        try:
            digest = collect_amendments(
                self.client,
                self.config.congress,
                list_limit=self.config.list_limit,
                max_workers=self.config.max_workers,
            )
            return success_response(digest, cache_control=self.config.cache_control)

        except Exception as e:
            logger.error(f"Error fetching amendments: {e}", exc_info=True)
            return error_response(FETCH_FAILED_MESSAGE, status_code=500)


def handler(event, context):
    """
    GET /v1/congress/amendments
    """
    try:
        config = AmendmentsConfig.from_env()
    except MissingAPIKeyError:
        logger.error("CONGRESS_API_KEY not set")
        return error_response(MISSING_KEY_MESSAGE, status_code=500)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return error_response(INVALID_CONFIG_MESSAGE, status_code=500)

    return AmendmentsHandler(config)(event, context)
