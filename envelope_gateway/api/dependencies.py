"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from envelope_gateway.config import settings
from envelope_gateway.domain.prediction import PredictionEngine
from envelope_gateway.infrastructure.clients.payoff_webhook import PayoffWebhookClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_prediction_engine() -> PredictionEngine:
    """Provide prediction engine bound to the configured policy"""
    return PredictionEngine(settings.prediction_policy())


def get_payoff_webhook_client() -> PayoffWebhookClient:
    """Provide payoff webhook client instance"""
    return PayoffWebhookClient()
