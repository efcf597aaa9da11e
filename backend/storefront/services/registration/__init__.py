"""Fraud-gated self-registration."""
