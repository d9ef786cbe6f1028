"""
E2E checkout tests: button adapter → gateway → Stripe client → processor stub.

Everything runs in-process; the gateway and the processor stub are reached
through httpx's ASGI transport, so no servers need to be started.

Scenarios:
- approved card: subscription created, success page shown
- declined card: error relayed, user stays on the page
"""

import httpx
import pytest
from gpay_gateway.api.main import create_app
from gpay_gateway.config import Settings
from gpay_gateway.infrastructure.clients.processor import StripeClient
from gpay_gateway.wallet.adapter import create_wallet_adapter
from gpay_gateway.wallet.backend import SubscriptionBackendClient
from gpay_gateway.wallet.page import StaticPage
from stubs.processor_server.main import DECLINED_TOKEN

pytestmark = [pytest.mark.asyncio, pytest.mark.integration]


@pytest.fixture
def adapter(test_settings: Settings, client_factory, page: StaticPage, stub_stripe_client: StripeClient):
    gateway = create_app(test_settings, processor_client=stub_stripe_client)
    backend = SubscriptionBackendClient(
        base_url=test_settings.backend_url,
        transport=httpx.ASGITransport(app=gateway),
    )
    return create_wallet_adapter(test_settings, client_factory, page, backend=backend)


async def test_approved_card_creates_subscription(adapter, page: StaticPage):
    """
    Approved card
    Expected: subscription id returned and browser sent to success page
    """
    readiness = await adapter.check_readiness()
    assert readiness.ready is True

    outcome = await page.placeholders[0].children[0]["on_click"]()

    assert outcome.success is True, outcome.error
    assert outcome.subscription_id.startswith("sub_")
    assert page.location == "./success.html"


async def test_declined_card_stays_on_page(adapter, page: StaticPage):
    """
    Declined card
    Expected: processor message relayed and no navigation
    """
    adapter.get_client().payment_data = {
        "email": "a@b.com",
        "paymentMethodData": {"tokenizationData": {"token": DECLINED_TOKEN}},
    }

    outcome = await adapter.on_button_clicked("10.00", "Widget")

    assert outcome.success is False
    assert outcome.error == "card_declined"
    assert page.location is None


async def test_missing_email_is_reported(adapter, page: StaticPage):
    """
    Wallet returned no email
    Expected: checkout stops before the gateway and the user stays on the page
    """
    adapter.get_client().payment_data = {"paymentMethodData": {"tokenizationData": {"token": "tok_visa"}}}

    outcome = await adapter.on_button_clicked("10.00", "Widget")

    assert outcome.success is False
    assert outcome.error == "Payment data has no email"
    assert page.location is None


async def test_gateway_rejects_missing_email(stub_stripe_client: StripeClient, test_settings: Settings):
    """
    Body without email posted straight to the gateway
    Expected: success=false naming the field, HTTP 200
    """
    gateway = create_app(test_settings, processor_client=stub_stripe_client)
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=gateway), base_url="http://gateway.test") as client:
        response = await client.post("/create-subscription", json={"token": "tok_visa", "email": None})

    assert response.status_code == 200
    assert response.json()["success"] is False
    assert response.json()["error"].startswith("email:")
