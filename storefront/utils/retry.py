# storefront/utils/retry.py
from sqlalchemy.exc import OperationalError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from storefront.utils.settings import CHECKOUT_RETRY_ATTEMPTS


def db_retry(attempts: int | None = None):
    """
    Retries a whole unit of work on transient database errors
    (serialization failure, deadlock, sqlite "database is locked").
    The wrapped callable must roll back before re-raising.
    """
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts or CHECKOUT_RETRY_ATTEMPTS),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(OperationalError),
    )
