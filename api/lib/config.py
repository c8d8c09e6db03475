"""
Runtime configuration for the constitutional amendments API.

Values are resolved once (typically per Lambda cold start) and passed
explicitly into the handler. A ``.env`` file is honoured for local runs.
"""

import os
import math
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://api.congress.gov/v3"
DEFAULT_CONGRESS = 119
DEFAULT_LIST_LIMIT = 250
DEFAULT_MAX_WORKERS = 16
DEFAULT_CACHE_CONTROL = "s-maxage=3600, stale-while-revalidate"


class ConfigurationError(Exception):
    """Raised when required configuration is missing or malformed."""

    pass


class MissingAPIKeyError(ConfigurationError):
    """Raised when no Congress.gov API key is configured."""

    pass


@dataclass(frozen=True)
class AmendmentsConfig:
    """Settings for one deployment of the amendments handler.

    Attributes:
        api_key: Congress.gov API key
        base_url: Congress.gov API root (default: https://api.congress.gov/v3)
        congress: Congress number all queries are scoped to (default: 119)
        list_limit: Page size for the joint resolution list requests
        timeout: Per-request timeout in seconds (None = wait indefinitely)
        max_retries: Retries on network errors per request (default: 0)
        max_workers: Thread pool size for the outbound fan-out
        cache_control: Cache-Control header sent with successful responses
    """

    api_key: str
    base_url: str = DEFAULT_API_BASE_URL
    congress: int = DEFAULT_CONGRESS
    list_limit: int = DEFAULT_LIST_LIMIT
    timeout: Optional[float] = None
    max_retries: int = 0
    max_workers: int = DEFAULT_MAX_WORKERS
    cache_control: str = DEFAULT_CACHE_CONTROL

    def __post_init__(self):
        if not self.api_key:
            raise MissingAPIKeyError("CONGRESS_API_KEY not set")
        if self.congress <= 0:
            raise ConfigurationError(f"Invalid congress number: {self.congress}")
        if self.list_limit <= 0:
            raise ConfigurationError(f"Invalid list limit: {self.list_limit}")
        if self.max_retries < 0:
            raise ConfigurationError(f"Invalid max retries: {self.max_retries}")
        if self.max_workers <= 0:
            raise ConfigurationError(f"Invalid max workers: {self.max_workers}")
        if self.timeout is not None and (not math.isfinite(self.timeout) or self.timeout <= 0):
            raise ConfigurationError(f"Invalid timeout: {self.timeout}")

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, use_dotenv: bool = True
    ) -> "AmendmentsConfig":
        """Build configuration from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)
            use_dotenv: Load a .env file into os.environ first

        Raises:
            MissingAPIKeyError: If CONGRESS_API_KEY is absent or empty
            ConfigurationError: If a numeric setting cannot be parsed
        """
        if use_dotenv:
            load_dotenv()
        env = os.environ if environ is None else environ

        return cls(
            api_key=env.get("CONGRESS_API_KEY", ""),
            base_url=env.get("CONGRESS_API_BASE_URL") or DEFAULT_API_BASE_URL,
            congress=_parse_number(env, "CONGRESS_NUMBER", int, DEFAULT_CONGRESS),
            list_limit=_parse_number(env, "CONGRESS_LIST_LIMIT", int, DEFAULT_LIST_LIMIT),
            timeout=_parse_number(env, "CONGRESS_API_TIMEOUT", float, None),
            max_retries=_parse_number(env, "CONGRESS_API_MAX_RETRIES", int, 0),
            max_workers=_parse_number(env, "AMENDMENTS_MAX_WORKERS", int, DEFAULT_MAX_WORKERS),
            cache_control=env.get("AMENDMENTS_CACHE_CONTROL") or DEFAULT_CACHE_CONTROL,
        )


def _parse_number(env: Mapping[str, str], name: str, cast, default):
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e
