"""Pytest fixtures for testing"""

import httpx
import pytest
import stripe
from typing import Any, Callable, Dict, List, Mapping, Tuple
from urllib.parse import parse_qsl
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient
from gpay_gateway.api.main import create_app
from gpay_gateway.api.dependencies import get_processor_client
from gpay_gateway.config import Settings
from gpay_gateway.domain.models import PaymentMethod, Customer, Subscription
from gpay_gateway.infrastructure.clients.processor import StripeClient
from gpay_gateway.wallet.page import ButtonPlaceholder, StaticPage
from stubs.processor_server.main import app as processor_stub


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the environment's .env values"""
    return Settings(
        _env_file=None,
        stripe_secret_key="sk_test_dummy",
        stripe_api_base="http://stripe.test",
        subscription_price_id="price_monthly",
        merchant_id="MERCHANT123",
        merchant_name="Example Store",
        gateway="stripe",
        gateway_merchant_id="acct_test",
        backend_url="http://gateway.test",
    )


@pytest.fixture
def processor() -> MagicMock:
    """Processor stub that succeeds on all three calls"""
    stub = MagicMock()
    stub.create_payment_method = AsyncMock(return_value=PaymentMethod(payment_method_id="pm_123"))
    stub.create_customer = AsyncMock(
        return_value=Customer(customer_id="cus_123", email="a@b.com", default_payment_method_id="pm_123")
    )
    stub.create_subscription = AsyncMock(
        return_value=Subscription(
            subscription_id="sub_123", customer_id="cus_123", price_id="price_monthly", status="active"
        )
    )
    return stub


@pytest.fixture
def client(test_settings: Settings, processor: MagicMock) -> TestClient:
    """Create FastAPI test client with the stubbed processor"""
    app = create_app(test_settings)
    app.dependency_overrides[get_processor_client] = lambda: processor
    return TestClient(app)


class FakePaymentsClient:
    """Records requests and replays canned wallet responses"""

    def __init__(self, environment: str, merchant_info: Dict[str, Any]):
        self.environment = environment
        self.merchant_info = merchant_info
        self.ready_response: Dict[str, Any] = {"result": True}
        self.ready_error: Exception | None = None
        self.payment_data: Dict[str, Any] = {
            "email": "a@b.com",
            "paymentMethodData": {"tokenizationData": {"type": "PAYMENT_GATEWAY", "token": "tok_valid"}},
        }
        self.payment_error: Exception | None = None
        self.ready_requests: List[Dict[str, Any]] = []
        self.payment_requests: List[Dict[str, Any]] = []

    async def is_ready_to_pay(self, request: Dict[str, Any]) -> Dict[str, Any]:
        self.ready_requests.append(request)
        if self.ready_error:
            raise self.ready_error
        return self.ready_response

    async def load_payment_data(self, request: Dict[str, Any]) -> Dict[str, Any]:
        self.payment_requests.append(request)
        if self.payment_error:
            raise self.payment_error
        return self.payment_data

    def create_button(self, on_click):
        return {"kind": "gpay-button", "on_click": on_click}


class FakeClientFactory:
    """Counts how many SDK clients get built"""

    def __init__(self):
        self.created: List[FakePaymentsClient] = []

    def __call__(self, environment: str, merchant_info: Dict[str, Any]) -> FakePaymentsClient:
        payments_client = FakePaymentsClient(environment, merchant_info)
        self.created.append(payments_client)
        return payments_client


@pytest.fixture
def client_factory() -> FakeClientFactory:
    return FakeClientFactory()


@pytest.fixture
def page() -> StaticPage:
    """Two priced placeholders, each holding stale content"""
    return StaticPage(
        placeholders=[
            ButtonPlaceholder(dataset={"price": "10.00", "description": "Widget"}, children=["Loading..."]),
            ButtonPlaceholder(dataset={"price": "29.00", "description": "Monthly plan"}, children=["Loading..."]),
        ]
    )


def decode_form(post_data: str | bytes | None) -> Dict[str, str]:
    """Form body sent by the Stripe SDK as a flat dict of bracketed keys"""
    if not post_data:
        return {}
    if isinstance(post_data, bytes):
        post_data = post_data.decode()
    return dict(parse_qsl(post_data))


class CannedHTTPClient(stripe.HTTPClient):
    """Stripe transport answering from a handler and recording each request"""

    name = "canned"

    def __init__(self, handler: Callable[[str, str, Dict[str, str]], Tuple[int, Dict[str, Any]]]):
        super().__init__()
        self.handler = handler
        self.requests: List[Dict[str, Any]] = []

    async def request_async(self, method, url, headers, post_data=None) -> Tuple[bytes, int, Mapping[str, str]]:
        form = decode_form(post_data)
        self.requests.append({"method": method, "url": url, "headers": dict(headers), "form": form})
        status, body = self.handler(method, url, form)
        return httpx.Response(status, json=body).content, status, {"request-id": "req_test"}

    async def close_async(self):
        pass


class ASGIHTTPClient(stripe.HTTPClient):
    """Stripe transport that serves requests from an in-process ASGI app"""

    name = "asgi"

    def __init__(self, app):
        super().__init__()
        self.app = app

    async def request_async(self, method, url, headers, post_data=None) -> Tuple[bytes, int, Mapping[str, str]]:
        async with httpx.AsyncClient(transport=httpx.ASGITransport(app=self.app)) as client:
            response = await client.request(method, url, headers=headers, content=post_data)
        return response.content, response.status_code, response.headers

    async def close_async(self):
        pass


@pytest.fixture
def make_stripe_client(test_settings: Settings):
    """Build a StripeClient whose SDK traffic is answered by a handler"""

    def build(handler) -> Tuple[StripeClient, CannedHTTPClient]:
        transport = CannedHTTPClient(handler)
        stripe_client = StripeClient(
            secret_key=test_settings.stripe_secret_key,
            base_url=test_settings.stripe_api_base,
            http_client=transport,
        )
        return stripe_client, transport

    return build


@pytest.fixture
def stub_stripe_client(test_settings: Settings) -> StripeClient:
    """StripeClient talking to the in-process processor stub"""
    return StripeClient(
        secret_key=test_settings.stripe_secret_key,
        base_url=test_settings.stripe_api_base,
        http_client=ASGIHTTPClient(processor_stub),
    )
