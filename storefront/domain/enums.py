# storefront/domain/enums.py
from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "pending"
    REJECTED = "rejected"
    COMPLETED = "completed"

    @classmethod
    def values(cls) -> list[str]:
        return [s.value for s in cls]

    def is_pending(self) -> bool:
        return self is OrderStatus.PENDING

    def is_completed(self) -> bool:
        return self is OrderStatus.COMPLETED

    def is_rejected(self) -> bool:
        return self is OrderStatus.REJECTED

    @property
    def label(self) -> str:
        return self.value.capitalize()


class AddStatus(str, Enum):
    """Outcome of a cart write under the clamp-to-stock policy."""

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
