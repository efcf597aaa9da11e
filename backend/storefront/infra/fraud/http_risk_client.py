# storefront/infra/fraud/http_risk_client.py
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import urljoin

import requests

from storefront.services._shared.errors import AssessmentUnavailableError
from storefront.services._shared.ports import AssessmentDecision, RiskAssessmentClient
from storefront.services.registration.events import SignupAssessmentEvent

logger = logging.getLogger(__name__)

DEFAULT_SIGNUP_PATH = "/events/SignUp"
DEFAULT_TIMEOUT = 5.0


def _extract_score(body: Any) -> tuple[Any, Mapping[str, Any]]:
    """Pull ``resultDetails.riskScore`` out of a response body, tolerating shape drift."""
    if not isinstance(body, Mapping):
        return None, {}
    details = body.get("resultDetails")
    if not isinstance(details, Mapping):
        return None, {}
    return details.get("riskScore"), details


class HttpRiskAssessmentClient(RiskAssessmentClient):
    """
    HTTP adapter for the fraud-protection signup assessment API.

    One POST per event, no retries. Every failure to obtain a response body
    is reported as :class:`AssessmentUnavailableError`; interpreting the
    score is left to the caller.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_token: str | None = None,
        signup_path: str = DEFAULT_SIGNUP_PATH,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.url = urljoin(base_url.rstrip("/") + "/", signup_path.lstrip("/"))
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"Accept": "application/json"})
        if api_token:
            self._session.headers["Authorization"] = f"Bearer {api_token}"

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> HttpRiskAssessmentClient:
        base_url = config.get("FRAUD_PROTECTION_BASE_URL")
        if not base_url:
            raise RuntimeError("FRAUD_PROTECTION_BASE_URL is not configured.")
        return cls(
            base_url,
            api_token=config.get("FRAUD_PROTECTION_API_TOKEN"),
            signup_path=config.get("FRAUD_PROTECTION_SIGNUP_PATH", DEFAULT_SIGNUP_PATH),
            timeout=float(config.get("FRAUD_PROTECTION_TIMEOUT", DEFAULT_TIMEOUT)),
        )

    def submit_signup_event(self, event: SignupAssessmentEvent) -> AssessmentDecision:
        headers = {"x-ms-correlation-id": event.signup_id}
        try:
            resp = self._session.post(
                self.url,
                json=event.to_payload(),
                headers=headers,
                timeout=self.timeout,
            )
            resp.raise_for_status()
            body = resp.json()
        except requests.exceptions.RequestException as exc:
            # JSON decode errors derive from RequestException in requests >= 2.27
            logger.warning(
                "Risk service call failed",
                extra={"assessment_id": event.signup_id, "endpoint": self.url},
            )
            raise AssessmentUnavailableError(f"Risk service call failed: {type(exc).__name__}") from exc
        except ValueError as exc:
            raise AssessmentUnavailableError("Risk service returned an undecodable body") from exc

        score, details = _extract_score(body)
        return AssessmentDecision(risk_score=score, details=dict(details))
