"""Google Pay request descriptors.

The base request is built once from configuration and is never modified.
Per-transaction requests are derived from it with ``for_transaction``,
which returns a new object; every model is frozen and list fields are
tuples, so a derived request cannot reach back into the base.

Serialized with ``to_wire`` into the camelCase shape the Google Pay API
expects (https://developers.google.com/pay/api/web/reference/request-objects).
"""

from typing import Any, Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from gpay_gateway.config import Settings

DEFAULT_AUTH_METHODS = ("PAN_ONLY", "CRYPTOGRAM_3DS")
DEFAULT_CARD_NETWORKS = ("AMEX", "DISCOVER", "INTERAC", "JCB", "MASTERCARD", "VISA")


class WalletModel(BaseModel):
    """Frozen model serialized with camelCase keys"""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class MerchantInfo(WalletModel):
    merchant_id: str
    merchant_name: str


class CardParameters(WalletModel):
    allowed_auth_methods: Tuple[str, ...] = DEFAULT_AUTH_METHODS
    allowed_card_networks: Tuple[str, ...] = DEFAULT_CARD_NETWORKS


class TokenizationParameters(WalletModel):
    gateway: str
    gateway_merchant_id: str


class TokenizationSpecification(WalletModel):
    type: Literal["PAYMENT_GATEWAY"] = "PAYMENT_GATEWAY"
    parameters: TokenizationParameters


class PaymentMethodSpec(WalletModel):
    type: Literal["CARD"] = "CARD"
    parameters: CardParameters = CardParameters()
    tokenization_specification: TokenizationSpecification


class TransactionInfo(WalletModel):
    """Price and label for a single purchase"""

    country_code: str
    currency_code: str
    total_price_status: Literal["FINAL", "ESTIMATED"] = "FINAL"
    total_price_label: str
    total_price: str


class PaymentRequest(WalletModel):
    """Full request descriptor; transaction fields are only set on derived copies"""

    api_version: int = 2
    api_version_minor: int = 0
    allowed_payment_methods: Tuple[PaymentMethodSpec, ...]
    merchant_info: MerchantInfo
    transaction_info: Optional[TransactionInfo] = None
    email_required: Optional[bool] = None

    def clone(self) -> "PaymentRequest":
        return self.model_copy(deep=True)

    def for_transaction(
        self,
        transaction_info: TransactionInfo,
        email_required: Optional[bool] = None,
    ) -> "PaymentRequest":
        """Copy of this request carrying the given transaction"""
        update: Dict[str, Any] = {"transaction_info": transaction_info}
        if email_required is not None:
            update["email_required"] = email_required
        return self.model_copy(update=update, deep=True)


def build_base_request(settings: Settings) -> PaymentRequest:
    """Base request for readiness checks and as the template for purchases.

    Merchant and gateway identifiers are taken as-is from settings; the
    shipped defaults are placeholders and must be replaced per deployment.
    """
    return PaymentRequest(
        allowed_payment_methods=(
            PaymentMethodSpec(
                tokenization_specification=TokenizationSpecification(
                    parameters=TokenizationParameters(
                        gateway=settings.gateway,
                        gateway_merchant_id=settings.gateway_merchant_id,
                    ),
                ),
            ),
        ),
        merchant_info=MerchantInfo(
            merchant_id=settings.merchant_id,
            merchant_name=settings.merchant_name,
        ),
    )


def build_transaction_info(
    price: str,
    description: str,
    country_code: str = "US",
    currency_code: str = "USD",
) -> TransactionInfo:
    return TransactionInfo(
        country_code=country_code,
        currency_code=currency_code,
        total_price_status="FINAL",
        total_price_label=description,
        total_price=price,
    )
