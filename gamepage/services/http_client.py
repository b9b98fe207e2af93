"""HTTP client service with retry logic and rate limiting."""

import time
from typing import Any

import httpx
import structlog

log = structlog.stdlib.get_logger()


class HttpClientService:
    """Synchronous HTTP client with retry logic, rate limiting, and timeout handling.

    Page renders are synchronous, so lookups block on a plain ``httpx.Client``.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        max_retries: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 60.0,
        rate_limit_delay: float = 1.0,
        verify_ssl: bool = True
    ) -> None:
        """Initialize the HTTP client service.

        Args:
            timeout: Request timeout in seconds
            max_retries: Maximum number of retry attempts
            base_delay: Base delay for exponential backoff in seconds
            max_delay: Maximum delay between retries in seconds
            rate_limit_delay: Minimum delay between requests in seconds
            verify_ssl: Whether to verify SSL certificates
        """
        self.timeout = timeout
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.rate_limit_delay = rate_limit_delay
        self._last_request_time: float | None = None

        self._client = httpx.Client(
            timeout=httpx.Timeout(timeout),
            headers={
                "User-Agent": "gamepage/0.1.0"
            },
            follow_redirects=True,
            limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
            verify=verify_ssl
        )

        log.debug(
            "HTTP client service initialized",
            timeout=timeout,
            max_retries=max_retries,
            rate_limit_delay=rate_limit_delay,
        )

    def get(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None
    ) -> httpx.Response:
        """Make a GET request with retry logic and rate limiting.

        Args:
            url: The URL to request
            headers: Optional additional headers
            params: Optional query parameters

        Returns:
            HTTP response object

        Raises:
            httpx.HTTPError: If all retry attempts fail
        """
        self._enforce_rate_limit()

        merged_headers = self._client.headers.copy()
        if headers:
            merged_headers.update(headers)

        for attempt in range(self.max_retries + 1):
            try:
                log.debug(
                    "Making HTTP GET request",
                    url=url,
                    attempt=attempt + 1,
                    max_attempts=self.max_retries + 1
                )

                response = self._client.get(
                    url,
                    headers=merged_headers,
                    params=params
                )
                response.raise_for_status()

                log.debug(
                    "HTTP GET request successful",
                    url=url,
                    status_code=response.status_code,
                    content_length=len(response.content)
                )

                return response

            except httpx.HTTPError as e:
                log.warning(
                    "HTTP GET request failed",
                    url=url,
                    attempt=attempt + 1,
                    error=str(e),
                    error_type=type(e).__name__
                )

                # Client errors (4xx) are final, except rate limiting
                if isinstance(e, httpx.HTTPStatusError):
                    if e.response.status_code == 429:
                        retry_after = e.response.headers.get("retry-after")
                        if retry_after and attempt < self.max_retries:
                            try:
                                delay = float(retry_after)
                                log.info("Rate limited, waiting", delay=delay)
                                time.sleep(delay)
                                continue
                            except ValueError:
                                pass
                    elif 400 <= e.response.status_code < 500:
                        log.error("Client error, not retrying", status_code=e.response.status_code)
                        raise

                if attempt == self.max_retries:
                    log.error(
                        "HTTP GET request failed after all retries",
                        url=url,
                        total_attempts=self.max_retries + 1
                    )
                    raise

                delay = min(self.base_delay * (2 ** attempt), self.max_delay)
                log.info("Retrying after delay", delay=delay)
                time.sleep(delay)

        raise RuntimeError("Unexpected end of retry loop")

    def get_json(
        self,
        url: str,
        params: dict[str, str] | None = None
    ) -> Any:
        """GET a URL and decode its JSON body.

        Raises:
            httpx.HTTPError: If the request fails
            ValueError: If the body is not valid JSON
        """
        response = self.get(url, headers={"Accept": "application/json"}, params=params)
        return response.json()

    def _enforce_rate_limit(self) -> None:
        """Enforce rate limiting between requests."""
        if self._last_request_time is not None:
            time_since_last = time.monotonic() - self._last_request_time
        else:
            time_since_last = self.rate_limit_delay

        if time_since_last < self.rate_limit_delay:
            sleep_time = self.rate_limit_delay - time_since_last
            log.debug("Rate limiting: sleeping", sleep_time=sleep_time)
            time.sleep(sleep_time)

        self._last_request_time = time.monotonic()

    def close(self) -> None:
        """Close the HTTP client and clean up resources."""
        self._client.close()
        log.debug("HTTP client closed")

    def __enter__(self) -> "HttpClientService":
        return self

    def __exit__(self, exc_type: type[Exception] | None, exc_val: Exception | None, exc_tb: Any) -> None:
        self.close()
