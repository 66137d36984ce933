"""
HTTP plumbing for web-service name resolvers.

Lookups go through a disk-cached session, a per-client rate limit and a
retry-with-backoff wrapper. Failures surface as APIError so that resolvers
can turn them into "unresolvable" without catching requests exceptions.
"""
import json
import time
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple, Type

import requests
import requests_cache
from loguru import logger
from ratelimit import limits, sleep_and_retry

DEFAULT_CACHE_ROOT = Path("data/cache/name_resolution")


class APIError(Exception):
    """A lookup request failed (network, timeout or HTTP status)."""


class RateLimitExceeded(APIError):
    """The service answered 429 Too Many Requests."""


def exponential_backoff_retry(
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    retry_on: Tuple[Type[Exception], ...] = (APIError,),
) -> Callable:
    """
    Retry the wrapped call with doubling delays.

    Args:
        max_retries: Attempts after the first one
        base_delay: Delay before the first retry, in seconds
        max_delay: Upper bound on any single delay
        retry_on: Exception types that trigger a retry; others propagate at once
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            attempt = 0
            while True:
                try:
                    return func(*args, **kwargs)
                except retry_on as e:
                    if attempt >= max_retries:
                        logger.error(f"Giving up after {attempt + 1} attempts: {e}")
                        raise
                    delay = min(base_delay * (2 ** attempt), max_delay)
                    logger.warning(f"Attempt {attempt + 1} failed ({e}); retrying in {delay:.1f}s")
                    time.sleep(delay)
                    attempt += 1

        return wrapper

    return decorator


class BaseAPIClient:
    """
    Cached, rate-limited GET client shared by web-service resolvers.

    Responses (including 404 "no such name" answers) are cached in a sqlite
    file under <cache_dir>/<source_name>/, so a name that is unknown to the
    service is only asked about once per cache lifetime.

    Args:
        cache_dir: Root cache directory (default data/cache/name_resolution)
        cache_expire_after: Cache lifetime in seconds
        timeout: Per-request timeout in seconds
    """

    # Calls per period for the rate limiter
    RATE_LIMIT_CALLS = 5
    RATE_LIMIT_PERIOD = 1

    def __init__(
        self,
        cache_dir: Optional[Path] = None,
        cache_expire_after: int = 86400,
        timeout: int = 30,
    ):
        self.timeout = timeout
        self.source_name = self.__class__.__name__.replace("NameResolver", "").lower()

        self.cache_dir = Path(cache_dir or DEFAULT_CACHE_ROOT) / self.source_name
        self.cache_dir.mkdir(parents=True, exist_ok=True)

        self.session = requests_cache.CachedSession(
            cache_name=str(self.cache_dir / "http_cache"),
            backend="sqlite",
            expire_after=cache_expire_after,
            allowable_methods=["GET"],
            allowable_codes=[200, 404],
            stale_if_error=True,
        )
        self.session.headers.update({
            "User-Agent": "reactionxref/1.0",
            "Accept": "application/json",
        })

        logger.info(f"{self.source_name} resolver caching lookups in {self.cache_dir}")

    @sleep_and_retry
    @limits(calls=RATE_LIMIT_CALLS, period=RATE_LIMIT_PERIOD)
    def _rate_limited_get(self, url: str, params: Optional[Dict] = None) -> requests.Response:
        return self.session.get(url, params=params, timeout=self.timeout)

    @exponential_backoff_retry(max_retries=3)
    def _make_request(self, url: str, params: Optional[Dict] = None) -> requests.Response:
        """
        GET a URL, mapping every failure onto APIError.

        Returns:
            The response; a 404 is returned rather than raised

        Raises:
            RateLimitExceeded: on HTTP 429
            APIError: on network errors, timeouts and other HTTP errors
        """
        try:
            response = self._rate_limited_get(url, params=params)
        except requests.Timeout as e:
            raise APIError(f"Timed out after {self.timeout}s: {url}") from e
        except requests.RequestException as e:
            raise APIError(f"Request failed for {url}: {e}") from e

        if getattr(response, "from_cache", False):
            logger.trace(f"Cache hit for {url}")

        status = response.status_code
        if status == 404:
            return response
        if status == 429:
            raise RateLimitExceeded(f"Rate limited by {self.source_name}: {url}")
        if status >= 400:
            raise APIError(f"HTTP {status} from {self.source_name}: {url}")
        return response

    @staticmethod
    def _parse_json_response(response: requests.Response) -> Optional[Dict[str, Any]]:
        """Decoded JSON body, or None for a 404 or a body that is not JSON."""
        if response.status_code == 404:
            return None
        try:
            return response.json()
        except json.JSONDecodeError as e:
            logger.warning(f"Response is not valid JSON: {e}")
            return None

    def clear_cache(self) -> None:
        self.session.cache.clear()
        logger.info(f"Cleared {self.source_name} lookup cache")

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
