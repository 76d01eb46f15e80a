"""
Pending Payment Reconciliation Worker.

Runs on the beat schedule to settle payments the client never confirmed.
"""

import logging
from datetime import timedelta

from app.config import settings
from app.workers.celery_app import celery_app
from app.database import close_db, get_db_context

logger = logging.getLogger(__name__)


async def run_reconciliation() -> dict:
    from app.services.payment_gateway import get_payment_gateway
    from app.services.payment_service import PaymentService

    try:
        async with get_db_context() as db:
            service = PaymentService(db, get_payment_gateway())
            return await service.reconcile_pending(
                older_than=timedelta(minutes=settings.reconcile_after_minutes),
                expire_after=timedelta(hours=settings.payment_expiry_hours),
            )
    finally:
        # Pooled connections are bound to this event loop
        await close_db()


@celery_app.task(bind=True, max_retries=3)
def reconcile_pending_payments(self):
    """
    Check pending payments against Razorpay.

    Paid orders are completed; orders unpaid past the expiry window are failed.
    """
    import asyncio

    try:
        counts = asyncio.run(run_reconciliation())
        logger.info(f"Payment reconciliation finished: {counts}")
        return {"success": True, **counts}
    except Exception as e:
        logger.error(f"Payment reconciliation failed: {e}")
        self.retry(exc=e, countdown=60)
