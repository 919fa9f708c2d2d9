# src/subscription/routes.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from auth.dependencies import get_current_user, require_admin
from auth.schemas import TokenClaims
from core.responses import ApiResponse
from database import get_db
from subscription.schemas import (
    SubscriptionCreate,
    SubscriptionData,
    SubscriptionList,
    SubscriptionResponse,
    SubscriptionStatusUpdate,
)
from subscription.services import SubscriptionService

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@router.get("", response_model=ApiResponse[SubscriptionList])
def get_subscriptions(
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
):
    """Retrieve subscriptions visible to the caller."""
    subscriptions = SubscriptionService.list_subscriptions(current_user, db)
    return ApiResponse(
        data=SubscriptionList(subscriptions=[SubscriptionResponse.model_validate(s) for s in subscriptions]),
        message="Subscriptions retrieved",
    )


@router.post("", response_model=ApiResponse[SubscriptionData], status_code=status.HTTP_201_CREATED)
def create_subscription(
    subscription_data: SubscriptionCreate,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
):
    """Subscribe to a license."""
    subscription = SubscriptionService.create_subscription(current_user, subscription_data, db)
    return ApiResponse(
        data=SubscriptionData(subscription=SubscriptionResponse.model_validate(subscription)),
        message="Subscription created",
    )


@router.put("", response_model=ApiResponse[SubscriptionData])
def update_subscription_status(
    status_data: SubscriptionStatusUpdate,
    subscription_id: str = Query(..., alias="id"),
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(require_admin),
):
    subscription = SubscriptionService.update_status(current_user, subscription_id, status_data.status, db)
    return ApiResponse(
        data=SubscriptionData(subscription=SubscriptionResponse.model_validate(subscription)),
        message="Subscription updated",
    )


@router.delete("", response_model=ApiResponse[None])
def cancel_subscription(
    subscription_id: str = Query(..., alias="id"),
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
):
    """Cancel a subscription; the row is kept with status cancelled."""
    SubscriptionService.cancel_subscription(current_user, subscription_id, db)
    return ApiResponse(data=None, message="Subscription cancelled")
