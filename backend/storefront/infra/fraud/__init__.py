from .http_risk_client import HttpRiskAssessmentClient

__all__ = ["HttpRiskAssessmentClient"]
