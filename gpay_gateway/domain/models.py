"""Domain models - pure Python dataclasses representing processor records"""

from dataclasses import dataclass


@dataclass
class PaymentMethod:
    """Processor payment method created from a wallet token"""

    payment_method_id: str
    type: str = "card"


@dataclass
class Customer:
    """Processor customer with a default payment method"""

    customer_id: str
    email: str
    default_payment_method_id: str


@dataclass
class Subscription:
    """Recurring subscription for a customer against a price"""

    subscription_id: str
    customer_id: str
    price_id: str
    status: str | None = None
