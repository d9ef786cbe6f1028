"""HTTP client for the subscription backend, used after the wallet returns a token"""

import httpx
from dataclasses import dataclass
from typing import Optional
from gpay_gateway.domain.exceptions import SubscriptionBackendError
from gpay_gateway.config import settings


@dataclass(frozen=True)
class SubscriptionResult:
    """Decoded body of POST /create-subscription"""

    success: bool
    subscription_id: Optional[str] = None
    error: Optional[str] = None


class SubscriptionBackendClient:
    """Client for the gateway's /create-subscription endpoint"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.backend_url).rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def create_subscription(self, token: str, email: str | None) -> SubscriptionResult:
        """
        Forward a wallet token and payer email to the backend.

        A processor failure comes back as ``success=False`` rather than an exception.

        Raises:
            SubscriptionBackendError: On timeout, HTTP errors, or invalid response
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.post(
                    f"{self.base_url}/create-subscription",
                    json={"token": token, "email": email},
                )
                response.raise_for_status()
                data = response.json()

                return SubscriptionResult(
                    success=bool(data["success"]),
                    subscription_id=data.get("subscriptionId"),
                    error=data.get("error"),
                )

            except httpx.TimeoutException as e:
                raise SubscriptionBackendError(f"Subscription backend timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise SubscriptionBackendError(f"Subscription backend error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise SubscriptionBackendError(f"Subscription backend unreachable: {e}") from e
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                raise SubscriptionBackendError(f"Invalid response from subscription backend: {e}") from e
