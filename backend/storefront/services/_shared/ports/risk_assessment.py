from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

from storefront.services._shared.errors import AssessmentUnavailableError

if TYPE_CHECKING:
    from storefront.services.registration.events import SignupAssessmentEvent


@dataclass(frozen=True, slots=True)
class AssessmentDecision:
    """
    Result returned by the risk service for one signup event.

    Treated as untrusted input: only ``risk_score`` is interpreted.

    :ivar risk_score: Numeric score, or ``None`` when the response had none.
    :ivar details: Raw result details, kept for diagnostics only.
    """

    risk_score: float | None
    details: Mapping[str, Any] = field(default_factory=dict)

    @property
    def has_usable_score(self) -> bool:
        score = self.risk_score
        if isinstance(score, bool) or not isinstance(score, int | float):
            return False
        return math.isfinite(score)


class RiskAssessmentClient(Protocol):
    """Port for the external fraud-risk scoring service."""

    def submit_signup_event(self, event: SignupAssessmentEvent) -> AssessmentDecision:
        """
        Submit ``event`` and return the decision.

        :raises AssessmentUnavailableError: On any transport or service failure.
        """


class StubRiskAssessmentClient(RiskAssessmentClient):
    """
    Scripted risk client used in unit tests.

    Each call consumes the next scripted item: a number becomes the score,
    ``None`` a decision without score, and an exception instance is raised.
    The last item repeats once the script is exhausted.
    """

    def __init__(self, script: Iterable[float | None | Exception] = (0.0,)) -> None:
        self.script = list(script) or [0.0]
        self.events: list[SignupAssessmentEvent] = []

    @property
    def calls(self) -> int:
        return len(self.events)

    def submit_signup_event(self, event: SignupAssessmentEvent) -> AssessmentDecision:
        self.events.append(event)
        item = self.script.pop(0) if len(self.script) > 1 else self.script[0]
        if isinstance(item, Exception):
            raise item
        return AssessmentDecision(risk_score=item, details={"riskScore": item})


__all__ = [
    "AssessmentDecision",
    "AssessmentUnavailableError",
    "RiskAssessmentClient",
    "StubRiskAssessmentClient",
]
