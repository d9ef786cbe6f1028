"""Stripe client for payment methods, customers and subscriptions"""

import stripe
from typing import Any, Awaitable, Callable, Dict
from gpay_gateway.domain.models import PaymentMethod, Customer, Subscription
from gpay_gateway.domain.exceptions import ProcessorAPIError
from gpay_gateway.config import settings
from gpay_gateway.infrastructure.observability.metrics import processor_latency_histogram, processor_failures_counter


class StripeClient:
    """Wrapper around the Stripe SDK exposing the three subscription steps"""

    def __init__(
        self,
        secret_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: stripe.HTTPClient | None = None,
    ):
        self.secret_key = secret_key or settings.stripe_secret_key
        self.base_url = (base_url or settings.stripe_api_base).rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds
        # No retries: a failed step is reported, never replayed
        self.sdk = stripe.StripeClient(
            self.secret_key,
            base_addresses={"api": self.base_url},
            http_client=http_client or stripe.HTTPXClient(timeout=self.timeout),
            max_network_retries=0,
        )

    async def _call(
        self,
        step: str,
        operation: Callable[..., Awaitable[Any]],
        params: Dict[str, Any],
    ) -> Any:
        """
        Run one SDK call with latency and failure metrics.

        Raises:
            ProcessorAPIError: On any Stripe error (declines, invalid params, timeouts, connection failures)
        """
        try:
            with processor_latency_histogram.labels(step=step).time():
                return await operation(params=params)
        except stripe.StripeError as e:
            processor_failures_counter.labels(step=step).inc()
            raise ProcessorAPIError(e.user_message or str(e), code=e.code, step=step) from e

    async def create_payment_method(self, token: str) -> PaymentMethod:
        """Exchange a wallet token for a card payment method"""
        payment_method = await self._call(
            "payment_method",
            self.sdk.v1.payment_methods.create_async,
            {"type": "card", "card": {"token": token}},
        )
        return PaymentMethod(payment_method_id=payment_method.id, type=payment_method.get("type") or "card")

    async def create_customer(self, email: str, payment_method_id: str) -> Customer:
        """Create a customer with the payment method attached and set as default"""
        customer = await self._call(
            "customer",
            self.sdk.v1.customers.create_async,
            {
                "email": email,
                "payment_method": payment_method_id,
                "invoice_settings": {"default_payment_method": payment_method_id},
            },
        )
        return Customer(
            customer_id=customer.id,
            email=customer.get("email") or email,
            default_payment_method_id=payment_method_id,
        )

    async def create_subscription(self, customer_id: str, price_id: str) -> Subscription:
        """Subscribe a customer to a single price"""
        subscription = await self._call(
            "subscription",
            self.sdk.v1.subscriptions.create_async,
            {
                "customer": customer_id,
                "items": [{"price": price_id}],
                "expand": ["latest_invoice.payment_intent"],
            },
        )
        return Subscription(
            subscription_id=subscription.id,
            customer_id=customer_id,
            price_id=price_id,
            status=subscription.get("status"),
        )
