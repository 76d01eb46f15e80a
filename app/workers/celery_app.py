"""
Celery application: broker, task settings and the beat schedule.

Start a worker with beat embedded:
    celery -A app.workers.celery_app worker --beat --loglevel=info
"""

from datetime import timedelta

from celery import Celery
from celery.signals import after_setup_logger

from app.config import settings
from app.logging_config import configure_logging

celery_app = Celery(
    "shashikala",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["app.workers.payment_reconciliation"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    result_expires=timedelta(days=1),
    timezone="UTC",
    enable_utc=True,
    # Reconciliation talks to Razorpay once per pending payment
    task_time_limit=600,
    task_soft_time_limit=540,
    task_acks_late=True,
    worker_prefetch_multiplier=1,
)

celery_app.conf.beat_schedule = {
    "reconcile-pending-payments": {
        "task": "app.workers.payment_reconciliation.reconcile_pending_payments",
        "schedule": timedelta(minutes=settings.reconcile_after_minutes),
        # A run that has not started before the next one is due is skipped
        "options": {"expires": settings.reconcile_after_minutes * 60},
    },
}


@after_setup_logger.connect
def use_app_logging(logger, **kwargs):
    configure_logging()
