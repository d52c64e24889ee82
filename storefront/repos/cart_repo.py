# storefront/repos/cart_repo.py
from sqlalchemy import select, delete
from sqlalchemy.orm import Session, joinedload

from storefront.data.models.cart_item import CartItemModel
from storefront.domain.records import CartLine
from storefront.repos.inventory_repo import to_snapshot


def to_line(item: CartItemModel) -> CartLine:
    return CartLine(
        id=item.id,
        user_id=item.user_id,
        product_id=item.product_id,
        quantity=item.quantity,
        product=to_snapshot(item.product) if item.product is not None else None,
    )


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def lines_for_user(self, user_id: int) -> list[CartLine]:
        items = self.db.execute(
            select(CartItemModel)
            .options(joinedload(CartItemModel.product))
            .where(CartItemModel.user_id == user_id)
            .order_by(CartItemModel.id)
            .execution_options(populate_existing=True)
        ).scalars().all()
        return [to_line(i) for i in items]

    def get_line(self, line_id: int) -> CartLine | None:
        item = self.db.get(CartItemModel, line_id, populate_existing=True)
        return to_line(item) if item else None

    def find_line(self, user_id: int, product_id: int) -> CartLine | None:
        item = self.db.execute(
            select(CartItemModel).where(
                CartItemModel.user_id == user_id,
                CartItemModel.product_id == product_id,
            ).execution_options(populate_existing=True)
        ).scalar_one_or_none()
        return to_line(item) if item else None

    def create_line(self, user_id: int, product_id: int, qty: int) -> CartLine:
        if qty <= 0:
            raise ValueError("Quantity must be greater than 0")
        item = CartItemModel(user_id=user_id, product_id=product_id, quantity=qty)
        self.db.add(item)
        self.db.flush()
        return to_line(item)

    def update_quantity(self, line_id: int, new_qty: int) -> CartLine:
        if new_qty <= 0:
            raise ValueError("Quantity must be greater than 0")
        item = self.db.get(CartItemModel, line_id, populate_existing=True)
        if item is None:
            raise LookupError(f"Cart line {line_id} does not exist")
        item.quantity = new_qty
        self.db.flush()
        return to_line(item)

    def remove(self, line_id: int) -> bool:
        result = self.db.execute(delete(CartItemModel).where(CartItemModel.id == line_id))
        return result.rowcount > 0

    def clear_all(self, user_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def owns_line(self, line_id: int, user_id: int) -> bool:
        owner = self.db.execute(
            select(CartItemModel.user_id).where(CartItemModel.id == line_id)
        ).scalar_one_or_none()
        return owner is not None and owner == user_id

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
