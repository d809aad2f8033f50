"""
Runtime configuration for the resolver.

The configuration is built once (usually from the environment) and passed
explicitly into the pipeline; nothing in the package reads globals.
"""

import os
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

from . import __version__
from .env import load_env
from .exceptions import ConfigurationError

DEFAULT_BASE_HOST = "localhost:8080"
DEFAULT_SPARQL_ENDPOINT = "https://query.wikidata.org/sparql"
DEFAULT_USER_AGENT = f"wikimark/{__version__} (https://wikimark.net) python-requests"


@dataclass(frozen=True)
class WikimarkConfig:
    # Host suffix stripped from incoming hosts, e.g. "wikimark.net"
    base_host: str = DEFAULT_BASE_HOST
    sparql_endpoint: str = DEFAULT_SPARQL_ENDPOINT

    # Search results wait this long before redirecting; lookups never wait
    redirect_delay_ms: int = 1000

    # Query shape
    row_limit: int = 20
    language: str = "en"

    # Transport
    timeout: float = 20.0
    max_retries: int = 2
    referrer: Optional[str] = None
    user_agent: str = DEFAULT_USER_AGENT

    log_level: str = "INFO"

    def __post_init__(self):
        if not self.base_host:
            raise ConfigurationError("base_host must not be empty")
        if self.redirect_delay_ms < 0:
            raise ConfigurationError("redirect_delay_ms must be >= 0")
        if self.row_limit <= 0:
            raise ConfigurationError("row_limit must be positive")
        if self.max_retries < 0:
            raise ConfigurationError("max_retries must be >= 0")
        if self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")
        if self.referrer is not None:
            parsed = urlsplit(self.referrer)
            if not parsed.scheme or not parsed.netloc:
                raise ConfigurationError(f"referrer must be an absolute URL, got {self.referrer!r}")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")


def load_config() -> WikimarkConfig:
    """
    Build a WikimarkConfig from WIKIMARK_* environment variables.

    A .env file in the working directory is loaded first.

    Raises:
        ConfigurationError: If a numeric variable cannot be parsed or a value
            is out of range.
    """
    load_env()
    return WikimarkConfig(
        base_host=os.getenv("WIKIMARK_BASE_HOST", DEFAULT_BASE_HOST),
        sparql_endpoint=os.getenv("WIKIMARK_SPARQL_ENDPOINT", DEFAULT_SPARQL_ENDPOINT),
        redirect_delay_ms=_int_env("WIKIMARK_REDIRECT_DELAY_MS", 1000),
        row_limit=_int_env("WIKIMARK_ROW_LIMIT", 20),
        language=os.getenv("WIKIMARK_LANGUAGE", "en"),
        timeout=_float_env("WIKIMARK_TIMEOUT", 20.0),
        max_retries=_int_env("WIKIMARK_MAX_RETRIES", 2),
        referrer=os.getenv("WIKIMARK_REFERRER") or None,
        user_agent=os.getenv("WIKIMARK_USER_AGENT", DEFAULT_USER_AGENT),
        log_level=os.getenv("WIKIMARK_LOG_LEVEL", "INFO"),
    )
