"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from gpay_gateway.config import Settings
from gpay_gateway.infrastructure.clients.processor import StripeClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_settings(request: Request) -> Settings:
    """Provide the settings the application was built with"""
    return request.app.state.settings


def get_processor_client(request: Request) -> StripeClient:
    """Provide the processor client constructed by the application factory"""
    return request.app.state.processor_client
