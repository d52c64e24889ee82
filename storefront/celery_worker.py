# storefront/celery_worker.py
from celery import Celery
from celery.schedules import crontab

from storefront.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND, SALES_REPORT_HOUR

celery_app = Celery(
    "storefront",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# tasks have to be imported explicitly so the worker registers them
celery_app.conf.imports = (
    "storefront.tasks.sales_report",
    "storefront.services.notification_service",
)

celery_app.conf.beat_schedule = {
    "daily-sales-report": {
        "task": "storefront.tasks.sales_report.daily_sales_report_task",
        "schedule": crontab(hour=SALES_REPORT_HOUR, minute=0),
    },
}

celery_app.conf.timezone = "UTC"
