# storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.enums import AddStatus
from storefront.domain.schemas import (
    ItemIn,
    QuantityIn,
    CartOut,
    CartWriteOut,
    CartValidationOut,
    ClearOut,
)
from storefront.services.cart_service import CartService
from storefront.services.checkout_service import CheckoutService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


def _write_response(svc: CartService, user_id: int, result) -> CartWriteOut:
    if result.status is AddStatus.ERROR:
        raise HTTPException(status_code=409, detail=result.message)
    return CartWriteOut(
        status=result.status,
        quantity=result.quantity,
        message=result.message,
        cart=CartOut.model_validate(svc.get_cart(user_id)),
    )


@router.get("", response_model=CartOut)
def get_cart(user_id: int = Query(...), db: Session = Depends(get_db)):
    return CartOut.model_validate(get_service(db).get_cart(user_id))


@router.get("/validate", response_model=CartValidationOut)
def validate_cart(user_id: int = Query(...), db: Session = Depends(get_db)):
    return CartValidationOut.model_validate(CheckoutService(db).validate_cart(user_id))


@router.post("/items", response_model=CartWriteOut)
def add_item(
    payload: ItemIn,
    user_id: int = Query(...),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        result = svc.add_or_update(user_id, payload.product_id, payload.quantity)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _write_response(svc, user_id, result)


@router.patch("/items/{line_id}", response_model=CartWriteOut)
def update_item(
    line_id: int,
    payload: QuantityIn,
    user_id: int = Query(...),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        result = svc.update_quantity(user_id, line_id, payload.quantity)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _write_response(svc, user_id, result)


@router.delete("/items/{line_id}", response_model=CartOut)
def remove_item(
    line_id: int,
    user_id: int = Query(...),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        svc.remove(user_id, line_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return CartOut.model_validate(svc.get_cart(user_id))


@router.delete("", response_model=ClearOut)
def clear_cart(user_id: int = Query(...), db: Session = Depends(get_db)):
    return ClearOut(cleared=get_service(db).clear(user_id))
