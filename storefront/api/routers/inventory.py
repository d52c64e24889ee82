# storefront/api/routers/inventory.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import RestockIn, StockOut
from storefront.repos.inventory_repo import InventoryRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/products", tags=["inventory"])


def _stock(repo: InventoryRepo, product_id: int) -> StockOut:
    available = repo.available_quantity(product_id)
    if available is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return StockOut(
        product_id=product_id,
        available_quantity=available,
        low_stock=repo.is_low_stock(product_id),
    )


@router.get("/{product_id}/stock", response_model=StockOut)
def get_stock(product_id: int, db: Session = Depends(get_db)):
    return _stock(InventoryRepo(db), product_id)


@router.post("/{product_id}/restock", response_model=StockOut)
def restock(product_id: int, payload: RestockIn, db: Session = Depends(get_db)):
    repo = InventoryRepo(db)
    if not repo.increase_stock(product_id, payload.quantity):
        repo.rollback()
        raise HTTPException(status_code=404, detail="Product not found")
    repo.commit()
    logger.info(f"Restocked product {product_id} with {payload.quantity} units")
    return _stock(repo, product_id)
