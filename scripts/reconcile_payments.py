"""
Run pending-payment reconciliation once, outside Celery.

Usage: python scripts/reconcile_payments.py [--older-than-minutes N]
"""
import argparse
import asyncio
import os
import sys
from datetime import timedelta

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.config import settings
from app.database import close_db, get_db_context
from app.services.payment_gateway import get_payment_gateway
from app.services.payment_service import PaymentService


async def reconcile(older_than_minutes: int):
    async with get_db_context() as db:
        service = PaymentService(db, get_payment_gateway())
        counts = await service.reconcile_pending(
            older_than=timedelta(minutes=older_than_minutes),
            expire_after=timedelta(hours=settings.payment_expiry_hours),
        )
        print(f"Completed: {counts['completed']}, failed: {counts['failed']}, still pending: {counts['pending']}")

    await close_db()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--older-than-minutes", type=int, default=settings.reconcile_after_minutes)
    args = parser.parse_args()

    if sys.platform == "win32":
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())
    asyncio.run(reconcile(args.older_than_minutes))
