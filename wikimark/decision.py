"""
Redirect decision engine.

Decides, once per resolved token, whether the browser should be sent to the
top result and how long to wait first.

States:
- AWAITING_RESULT: query submitted, nothing decided yet
- RESOLVED: a decision was made; the engine accepts no further input
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .models import Classification, EntityMap

STATUS_SEARCHING = "Searching..."
STATUS_FAILED = "Search failed!"
STATUS_NOT_FOUND = "Not found."
STATUS_FOUND = "Found."
STATUS_REDIRECTING = "Redirecting..."


class Outcome(str, Enum):
    REDIRECT = "redirect"
    SUPPRESSED = "suppressed"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class RedirectDecision:
    outcome: Outcome
    status: str
    url: Optional[str] = None
    delay_ms: Optional[int] = None
    navigate_at: Optional[float] = None
    error: Optional[str] = None

    @property
    def navigates(self) -> bool:
        return self.outcome == Outcome.REDIRECT


class RedirectDecisionEngine:
    """
    One-shot state machine turning an EntityMap into a RedirectDecision.

    Args:
        search_delay_ms: Delay before redirecting to a search result, so the
            user gets a glimpse of the alternatives. Lookups redirect at once.
    """

    AWAITING_RESULT = "awaiting_result"
    RESOLVED = "resolved"

    def __init__(self, search_delay_ms: int = 1000):
        self.search_delay_ms = search_delay_ms
        self.state = self.AWAITING_RESULT
        self.decision: Optional[RedirectDecision] = None

    def delay_for(self, classification: Classification) -> int:
        if classification is Classification.LOOKUP:
            return 0
        return self.search_delay_ms

    def on_results(
        self,
        entities: EntityMap,
        classification: Classification,
        navigated_back: bool,
        now: float,
    ) -> RedirectDecision:
        """
        Decide what to do with a finished query.

        Args:
            entities: Normalized results; the first entry is the top result
            classification: How the token was resolved
            navigated_back: True when the user came back to this page via
                browser history; automatic navigation is then suppressed
            now: Current time in seconds, used to compute navigate_at

        Returns:
            RedirectDecision
        """
        self._check_awaiting()

        top = entities.top()
        if top is None:
            return self._resolve(RedirectDecision(Outcome.NOT_FOUND, STATUS_NOT_FOUND))

        if navigated_back:
            return self._resolve(RedirectDecision(Outcome.SUPPRESSED, STATUS_FOUND))

        delay_ms = self.delay_for(classification)
        return self._resolve(RedirectDecision(
            outcome=Outcome.REDIRECT,
            status=STATUS_REDIRECTING,
            url=top.destinations[0].url,
            delay_ms=delay_ms,
            navigate_at=now + delay_ms / 1000.0,
        ))

    def on_failure(self, error: Exception) -> RedirectDecision:
        self._check_awaiting()
        return self._resolve(RedirectDecision(Outcome.FAILED, STATUS_FAILED, error=str(error)))

    def _check_awaiting(self):
        if self.state != self.AWAITING_RESULT:
            raise RuntimeError(f"Decision already made ({self.decision.outcome.value})")

    def _resolve(self, decision: RedirectDecision) -> RedirectDecision:
        self.decision = decision
        self.state = self.RESOLVED
        return decision
