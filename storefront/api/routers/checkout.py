# storefront/api/routers/checkout.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import EmptyCart, InsufficientStock
from storefront.domain.schemas import CheckoutOut, OrderOut, StockShortageOut
from storefront.services.checkout_service import CheckoutService
from storefront.services.notification_service import NotificationService

router = APIRouter(prefix="/checkout", tags=["checkout"])


def get_notification_service():
    return NotificationService()


@router.post("", response_model=CheckoutOut, status_code=201)
def checkout(
    user_id: int = Query(...),
    db: Session = Depends(get_db),
    notifications: NotificationService = Depends(get_notification_service),
):
    """
    Creates an order from the user's cart. The cart is left untouched on any failure.
    """
    result = CheckoutService(db, notification_service=notifications).process_checkout(user_id)

    if result.ok:
        return CheckoutOut(order=OrderOut.model_validate(result.order), total=result.total)

    error = result.error
    if isinstance(error, EmptyCart):
        raise HTTPException(status_code=400, detail={"error": error.kind, "message": error.message})
    if isinstance(error, InsufficientStock):
        raise HTTPException(
            status_code=409,
            detail={
                "error": error.kind,
                "message": error.message,
                "items": [StockShortageOut.model_validate(s).model_dump() for s in error.shortages],
            },
        )
    raise HTTPException(status_code=503, detail={"error": error.kind, "message": error.message})
