# src/scheduler/tasks.py
import logging
from datetime import datetime
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import Database
from subscription.services import SubscriptionService

logger = logging.getLogger(__name__)


def expire_subscriptions(database: Database, now: Optional[datetime] = None) -> int:
    """Expire active subscriptions whose end date has passed."""
    logger.info("Starting expire_subscriptions task")
    db: Session = database.session()
    expired = 0
    try:
        expired = SubscriptionService.expire_due(db, now)
        logger.info(f"Marked {expired} subscriptions as expired")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error in expire_subscriptions: {str(e)}", exc_info=True)
    finally:
        db.close()
    logger.info("Finished expire_subscriptions task")
    return expired


def start_scheduler(database: Database, interval_minutes: int) -> BackgroundScheduler:
    """Start the background scheduler."""
    scheduler = BackgroundScheduler()
    scheduler.add_job(expire_subscriptions, 'interval', minutes=interval_minutes, args=[database])
    scheduler.start()
    return scheduler
