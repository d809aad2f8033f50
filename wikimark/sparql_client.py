"""SPARQL endpoint client: runs a query and returns the JSON results payload."""

from typing import Any, Dict, Optional
from urllib.parse import urlsplit

import requests

from .config import WikimarkConfig
from .exceptions import QueryFailedError
from .logger import get_logger
from .retry import RetryError, RetryableStatusError, exponential_backoff, should_retry_http_status
from .schema import validate_response

SPARQL_RESULTS_JSON = "application/sparql-results+json"


def origin_only(url: str) -> str:
    """Apply the "origin" referrer policy: keep scheme and host only."""
    parsed = urlsplit(url)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError(f"Referrer must be an absolute URL: {url}")
    return f"{parsed.scheme}://{parsed.netloc}/"


class SparqlClient:
    """
    Runs queries against a SPARQL endpoint.

    Timeouts, connection errors and retryable statuses (429, 5xx) are
    retried with exponential backoff; anything else fails immediately.
    """

    def __init__(self, config: WikimarkConfig, session: Optional[requests.Session] = None, retry_base_delay: float = 1.0):
        self.config = config
        self.session = session or requests.Session()
        self.retry_base_delay = retry_base_delay

    def headers(self) -> Dict[str, str]:
        headers = {
            "Accept": SPARQL_RESULTS_JSON,
            "User-Agent": self.config.user_agent,
        }
        if self.config.referrer:
            headers["Referer"] = origin_only(self.config.referrer)
        return headers

    def _get(self, query: str) -> requests.Response:
        resp = self.session.get(
            self.config.sparql_endpoint,
            params={"query": query},
            headers=self.headers(),
            timeout=self.config.timeout,
        )
        if should_retry_http_status(resp.status_code):
            raise RetryableStatusError(resp.status_code)
        return resp

    def _on_retry(self, attempt: int, error: Exception, delay: float):
        get_logger().warning(
            "Retrying SPARQL query",
            attempt=attempt,
            delay=delay,
            error=str(error),
        )

    def fetch_bindings(self, query: str) -> Dict[str, Any]:
        """
        Run ``query`` and return the decoded SPARQL JSON results.

        Raises:
            QueryFailedError: On a non-success status, a transport error that
                survived retries, or a payload that is not SPARQL JSON results.
        """
        logger = get_logger()
        fetch = exponential_backoff(
            max_retries=self.config.max_retries,
            base_delay=self.retry_base_delay,
            exceptions=(requests.exceptions.Timeout, requests.exceptions.ConnectionError, RetryableStatusError),
            on_retry=self._on_retry,
        )(self._get)

        try:
            resp = fetch(query)
            resp.raise_for_status()
        except RetryError as e:
            cause = e.__cause__
            status = cause.status_code if isinstance(cause, RetryableStatusError) else None
            logger.error("SPARQL endpoint unavailable", endpoint=self.config.sparql_endpoint, status=status, error=str(cause))
            raise QueryFailedError(f"SPARQL endpoint unavailable: {cause}", status=status) from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.error("SPARQL query rejected", endpoint=self.config.sparql_endpoint, status=status)
            raise QueryFailedError(f"SPARQL query failed ({status})", status=status) from e
        except requests.exceptions.RequestException as e:
            logger.error("SPARQL request error", endpoint=self.config.sparql_endpoint, error=str(e))
            raise QueryFailedError(f"SPARQL request error: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            logger.error("SPARQL response is not JSON", status=resp.status_code)
            raise QueryFailedError("SPARQL response is not JSON", status=resp.status_code) from e

        errors = validate_response(data)
        if errors:
            logger.error("Malformed SPARQL response", errors=errors[:5])
            raise QueryFailedError(f"Malformed SPARQL response: {errors[0]}", status=resp.status_code)

        logger.debug("SPARQL query succeeded", rows=len(data["results"]["bindings"]))
        return data
