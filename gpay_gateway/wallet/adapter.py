"""Google Pay button adapter: readiness check, button rendering and checkout"""

import logging
from dataclasses import dataclass
from functools import partial
from typing import Optional

from pydantic import ValidationError

from gpay_gateway.config import Settings
from gpay_gateway.wallet.backend import SubscriptionBackendClient
from gpay_gateway.wallet.client import PaymentsClient, PaymentsClientFactory, extract_email, extract_token
from gpay_gateway.wallet.page import Page
from gpay_gateway.wallet.request import PaymentRequest, build_base_request, build_transaction_info

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadinessResult:
    """Whether the wallet can pay, with the error when the check itself failed"""

    ready: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class PaymentOutcome:
    """Result of one checkout: the new subscription id or the error"""

    success: bool
    subscription_id: Optional[str] = None
    error: Optional[str] = None


class WalletAdapter:
    """Mediates between the page, the Google Pay SDK and the subscription backend.

    The SDK client is created on first use and kept for the adapter's
    lifetime; changing ``environment`` afterwards does not rebuild it.
    None of the coroutines raise: failures are logged and returned.
    """

    def __init__(
        self,
        base_request: PaymentRequest,
        client_factory: PaymentsClientFactory,
        page: Page,
        backend: SubscriptionBackendClient,
        environment: str = "TEST",
        country_code: str = "US",
        currency_code: str = "USD",
        success_url: str = "./success.html",
    ):
        self.base_request = base_request
        self.client_factory = client_factory
        self.page = page
        self.backend = backend
        self.environment = environment
        self.country_code = country_code
        self.currency_code = currency_code
        self.success_url = success_url
        self._client: Optional[PaymentsClient] = None

    def get_client(self) -> PaymentsClient:
        if self._client is None:
            self._client = self.client_factory(
                environment=self.environment,
                merchant_info=self.base_request.merchant_info.to_wire(),
            )
        return self._client

    async def check_readiness(self) -> ReadinessResult:
        """Ask the wallet whether the user can pay; render or hide buttons accordingly"""
        request = self.base_request.clone()
        try:
            response = await self.get_client().is_ready_to_pay(request.to_wire())
        except Exception as e:
            logger.error(f"Error checking isReadyToPay: {e}")
            return ReadinessResult(ready=False, error=str(e))

        if response.get("result"):
            self.render_buttons()
            logger.info("Google Pay is ready to pay.")
            return ReadinessResult(ready=True)

        for placeholder in self.page.button_placeholders():
            placeholder.hide()
        logger.info("Google Pay is not ready to pay.")
        return ReadinessResult(ready=False)

    def render_buttons(self) -> int:
        """Replace each placeholder's content with a wallet button; returns buttons rendered"""
        client = self.get_client()
        rendered = 0
        for placeholder in self.page.button_placeholders():
            price, description = placeholder.price, placeholder.description
            if price is None or description is None:
                logger.warning("Skipping button placeholder without price/description data")
                continue
            button = client.create_button(on_click=partial(self.on_button_clicked, price, description))
            placeholder.replace_content(button)
            rendered += 1
        return rendered

    async def on_button_clicked(self, price: str, description: str) -> PaymentOutcome:
        """
        Run checkout for one button.

        Flow:
        1. Derive a request from the base with this price and label
        2. Load payment data (token and payer email) from the wallet
        3. POST token and email to the subscription backend
        4. Navigate to the success page only if the backend succeeded
        """
        try:
            transaction_info = build_transaction_info(
                price, description, country_code=self.country_code, currency_code=self.currency_code
            )
        except ValidationError as e:
            logger.error(f"Invalid button data: {e}")
            return PaymentOutcome(success=False, error=str(e))

        request = self.base_request.for_transaction(transaction_info, email_required=True)
        logger.debug("onGooglePaymentButtonClicked", extra={"transaction_info": transaction_info.to_wire()})

        try:
            payment_data = await self.get_client().load_payment_data(request.to_wire())
        except Exception as e:
            logger.error(f"Error loading payment data: {e}")
            return PaymentOutcome(success=False, error=str(e))

        try:
            token = extract_token(payment_data)
            email = extract_email(payment_data)
            result = await self.backend.create_subscription(token, email)
        except Exception as e:
            logger.error(f"Checkout failed: {e}")
            return PaymentOutcome(success=False, error=str(e))

        if not result.success:
            logger.error(f"Subscription was not created: {result.error}")
            return PaymentOutcome(success=False, error=result.error)

        self.page.navigate(self.success_url)
        return PaymentOutcome(success=True, subscription_id=result.subscription_id)


def create_wallet_adapter(
    settings: Settings,
    client_factory: PaymentsClientFactory,
    page: Page,
    backend: SubscriptionBackendClient | None = None,
) -> WalletAdapter:
    """Composition root for the browser side"""
    return WalletAdapter(
        base_request=build_base_request(settings),
        client_factory=client_factory,
        page=page,
        backend=backend
        or SubscriptionBackendClient(base_url=settings.backend_url, timeout=settings.http_timeout_seconds),
        environment=settings.wallet_environment,
        country_code=settings.country_code,
        currency_code=settings.currency_code,
        success_url=settings.success_url,
    )
