"""POST /create-subscription - wallet token to processor subscription endpoint"""

import time
import logging
from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from gpay_gateway.api.routes.schemas import CreateSubscriptionRequest, SubscriptionResponse
from gpay_gateway.api.dependencies import get_processor_client, get_request_id, get_settings
from gpay_gateway.config import Settings
from gpay_gateway.domain.exceptions import DomainException, InvalidRequestError
from gpay_gateway.domain.subscriptions import PaymentProcessor, create_subscription
from gpay_gateway.infrastructure.observability.metrics import record_subscription
from gpay_gateway.infrastructure.observability.logging import log_subscription

router = APIRouter()


async def parse_subscription_request(request: Request) -> CreateSubscriptionRequest:
    """
    Decode and validate the JSON body.

    Raises:
        InvalidRequestError: Body is not JSON or lacks token/email
    """
    try:
        payload = await request.json()
    except ValueError as e:
        raise InvalidRequestError("Request body must be valid JSON") from e

    try:
        return CreateSubscriptionRequest.model_validate(payload)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "body"
        raise InvalidRequestError(f"{field}: {first['msg']}") from e


@router.post(
    "/create-subscription",
    response_model=SubscriptionResponse,
    response_model_exclude_none=True,
)
async def create_subscription_endpoint(
    request: Request,
    processor: PaymentProcessor = Depends(get_processor_client),
    settings: Settings = Depends(get_settings),
):
    """
    Create a customer and subscription from a wallet token.

    Flow:
    1. Parse {token, email} from the body
    2. Exchange token for a processor payment method
    3. Create customer with that payment method as default
    4. Create subscription against the configured price
    5. Return {success, subscriptionId} or {success: false, error}

    Failures never change the status code; callers must inspect `success`.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    email = None

    try:
        body = await parse_subscription_request(request)
        email = body.email
        subscription = await create_subscription(
            processor,
            token=body.token,
            email=body.email,
            price_id=settings.subscription_price_id,
        )

    except DomainException as e:
        logging.error(
            f"Subscription failed: {e}",
            extra={"request_id": request_id, "step": getattr(e, "step", None)},
        )
        response = SubscriptionResponse(success=False, error=str(e))

    except Exception as e:
        logging.exception(f"Unexpected error: {e}", extra={"request_id": request_id})
        response = SubscriptionResponse(success=False, error=str(e) or e.__class__.__name__)

    else:
        response = SubscriptionResponse(success=True, subscription_id=subscription.subscription_id)

    duration_ms = (time.time() - start_time) * 1000
    record_subscription(response.success)
    log_subscription(
        request_id,
        email,
        response.success,
        duration_ms,
        subscription_id=response.subscription_id,
        error=response.error,
    )
    return response
