"""
Resolve a request host to a redirect decision.

Steps run strictly in order: classify the token, build the query, run it,
normalize the rows, decide. Fetching, presenting, scheduling and navigating
are injected so the pipeline runs the same in the CLI and in tests.
"""

import time
import webbrowser
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from .classify import classify_token, strip_base_host
from .config import WikimarkConfig
from .decision import STATUS_FOUND, STATUS_SEARCHING, RedirectDecision, RedirectDecisionEngine
from .exceptions import QueryFailedError
from .logger import get_logger
from .models import Classification, EntityMap
from .normalize import transform_sparql_response
from .presentation import Presenter
from .sparql import build_query

Fetcher = Callable[[str], Dict[str, Any]]
Navigator = Callable[[str], None]


class SleepScheduler:
    """Runs the callback after the delay by sleeping; nothing else is pending."""

    def __init__(self, sleep: Callable[[float], None] = time.sleep):
        self.sleep = sleep

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> None:
        if delay_ms > 0:
            self.sleep(delay_ms / 1000.0)
        callback()


def open_in_browser(url: str) -> None:
    webbrowser.open(url)


@dataclass
class Resolution:
    token: str
    classification: Classification
    query: str
    decision: RedirectDecision
    entities: Optional[EntityMap] = None


def resolve(
    host: str,
    navigated_back: bool,
    now: float,
    *,
    config: WikimarkConfig,
    fetch: Fetcher,
    presenter: Presenter,
    navigate: Optional[Navigator] = None,
    scheduler: Optional[SleepScheduler] = None,
) -> Resolution:
    """
    Resolve ``host`` (e.g. "q42.wikimark.net" or "python.wikimark.net").

    Args:
        host: Request host, including the configured base host
        navigated_back: True if the page was reached through browser history
        now: Current time in seconds
        config: Resolver configuration
        fetch: Runs a SPARQL query and returns the results payload; raises
            QueryFailedError on failure
        presenter: Receives progress, status text and result cards
        navigate: Called with the destination URL when a redirect fires
        scheduler: Defers the navigation; without one no navigation happens

    Returns:
        Resolution with the decision and, unless the query failed, the entities
    """
    logger = get_logger()
    token = strip_base_host(host, config.base_host)
    classification = classify_token(token)
    query = build_query(token, classification, limit=config.row_limit, language=config.language)
    engine = RedirectDecisionEngine(search_delay_ms=config.redirect_delay_ms)

    logger.info("Resolving token", token=token, classification=classification.value)
    logger.record_query_attempt(classification.value)
    presenter.update_progress(None)
    presenter.update_status(STATUS_SEARCHING)

    try:
        payload = fetch(query)
    except QueryFailedError as e:
        logger.record_query_failure(classification.value, type(e).__name__ if e.status is None else f"HTTP_{e.status}")
        logger.error("Search failed", token=token, error=str(e))
        decision = engine.on_failure(e)
        presenter.update_status(decision.status)
        return Resolution(token, classification, query, decision)

    entities = transform_sparql_response(payload)
    logger.record_query_success(classification.value, len(entities))
    presenter.update_progress(100)

    if entities:
        presenter.update_status(STATUS_FOUND)
        presenter.display_results(entities)

    decision = engine.on_results(entities, classification, navigated_back, now)
    presenter.update_status(decision.status)
    logger.info(
        "Decision made",
        token=token,
        outcome=decision.outcome.value,
        entities=len(entities),
        url=decision.url,
        delay_ms=decision.delay_ms,
    )

    if decision.navigates:
        logger.record_redirect()
        if scheduler is not None and navigate is not None:
            url = decision.url
            scheduler.schedule(decision.delay_ms, lambda: navigate(url))
    elif navigated_back and entities:
        logger.record_redirect(suppressed=True)

    return Resolution(token, classification, query, decision, entities)
