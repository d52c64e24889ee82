# storefront/api/routers/orders.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import OrderOut, OrderPageOut, PageMeta
from storefront.services.order_service import OrderService
from storefront.utils.settings import ORDERS_PER_PAGE

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.get("", response_model=OrderPageOut)
def list_orders(
    user_id: int = Query(...),
    page: int = Query(1, ge=1),
    per_page: int = Query(ORDERS_PER_PAGE, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """
    Order history of the user, newest first.
    """
    result = get_service(db).list_orders(user_id, page=page, per_page=per_page)
    return OrderPageOut(
        data=[OrderOut.model_validate(o) for o in result.items],
        meta=PageMeta(**result.meta()),
    )


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    user_id: int = Query(...),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return OrderOut.model_validate(svc.get_order(order_id, user_id))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
