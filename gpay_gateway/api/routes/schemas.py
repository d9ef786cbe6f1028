"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class CreateSubscriptionRequest(BaseModel):
    """Request body for POST /create-subscription"""

    token: str = Field(..., description="Opaque wallet payment token")
    email: str = Field(..., description="Customer email, forwarded unvalidated")


class SubscriptionResponse(BaseModel):
    """Response for POST /create-subscription, always sent with HTTP 200"""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    subscription_id: Optional[str] = Field(default=None, alias="subscriptionId")
    error: Optional[str] = None
