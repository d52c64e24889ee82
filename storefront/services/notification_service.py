# storefront/services/notification_service.py
from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    "Order placed" notifications, delivered by a Celery worker after the
    checkout transaction has committed.
    """

    @staticmethod
    def send_order_notification(user_id: int, order_id: int, total: str, line_count: int):
        # total travels as a string, Decimal is not JSON serializable
        send_order_notification_task.delay(user_id, order_id, total, line_count)


def order_placed_message(order_id: int, total: str, line_count: int) -> str:
    noun = "item" if line_count == 1 else "items"
    return f"Order #{order_id} placed: {line_count} {noun}, total {total}"


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_id: int, total: str, line_count: int):
    """No delivery channel yet, the message only goes to the log."""
    message = order_placed_message(order_id, total, line_count)
    logger.info(f"[NOTIFICATION] User {user_id}: {message}")

    return {"user_id": user_id, "order_id": order_id, "message": message, "status": "sent"}
