"""Wallet provider SDK contract and payment data helpers"""

from typing import Any, Awaitable, Callable, Dict, Protocol

from gpay_gateway.domain.exceptions import WalletResponseError

ClickHandler = Callable[[], Awaitable[Any]]


class PaymentsClient(Protocol):
    """Subset of the Google Pay PaymentsClient used by the adapter"""

    async def is_ready_to_pay(self, request: Dict[str, Any]) -> Dict[str, Any]: ...

    async def load_payment_data(self, request: Dict[str, Any]) -> Dict[str, Any]: ...

    def create_button(self, on_click: ClickHandler) -> Any: ...


class PaymentsClientFactory(Protocol):
    """Builds a PaymentsClient for an environment (TEST or PRODUCTION)"""

    def __call__(self, environment: str, merchant_info: Dict[str, Any]) -> PaymentsClient: ...


def extract_token(payment_data: Dict[str, Any]) -> str:
    """
    Pull the gateway token out of a PaymentData response.

    Raises:
        WalletResponseError: When the tokenization data is missing or empty
    """
    try:
        token = payment_data["paymentMethodData"]["tokenizationData"]["token"]
    except (KeyError, TypeError) as e:
        raise WalletResponseError(f"Payment data has no token: missing {e}") from e
    if not isinstance(token, str) or not token:
        raise WalletResponseError("Payment data has an empty token")
    return token


def extract_email(payment_data: Dict[str, Any]) -> str:
    """
    Payer email returned because purchase requests set emailRequired.

    Raises:
        WalletResponseError: When the wallet sent no email
    """
    email = payment_data.get("email")
    if not isinstance(email, str) or not email:
        raise WalletResponseError("Payment data has no email")
    return email
