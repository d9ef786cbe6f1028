"""Subscription creation flow - turns a wallet token into an active subscription"""

import logging
from typing import Protocol
from gpay_gateway.domain.models import PaymentMethod, Customer, Subscription

logger = logging.getLogger(__name__)


class PaymentProcessor(Protocol):
    """Processor operations the subscription flow depends on"""

    async def create_payment_method(self, token: str) -> PaymentMethod: ...

    async def create_customer(self, email: str, payment_method_id: str) -> Customer: ...

    async def create_subscription(self, customer_id: str, price_id: str) -> Subscription: ...


async def create_subscription(
    processor: PaymentProcessor,
    token: str,
    email: str,
    price_id: str,
) -> Subscription:
    """
    Create a customer and subscription from a wallet payment token.

    Steps run strictly in sequence and each depends on the previous one:
    1. Exchange the token for a card payment method
    2. Create a customer with that payment method as default
    3. Subscribe the customer to the configured price

    A new customer is created on every call, even for a known email.
    Records created before a failing step are left in place.

    Raises:
        ProcessorAPIError: From whichever step failed; later steps are skipped
    """
    payment_method = await processor.create_payment_method(token)
    logger.debug("Payment method created", extra={"payment_method_id": payment_method.payment_method_id})

    customer = await processor.create_customer(email, payment_method.payment_method_id)
    logger.debug("Customer created", extra={"customer_id": customer.customer_id})

    subscription = await processor.create_subscription(customer.customer_id, price_id)
    logger.debug("Subscription created", extra={"subscription_id": subscription.subscription_id})

    return subscription
