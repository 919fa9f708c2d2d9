# src/subscription/services.py
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Query, Session, joinedload

from admin.services import AdminService
from auth.models import User
from auth.schemas import TokenClaims
from core.errors import AuthorizationError, NotFoundError, ValidationError
from core.time import add_months, utcnow
from license.services import LicenseService
from subscription.models import SUBSCRIPTION_STATUSES, Subscription
from subscription.schemas import SubscriptionCreate

logger = logging.getLogger(__name__)


class SubscriptionService:
    @staticmethod
    def _with_relations(db: Session) -> Query:
        return db.query(Subscription).options(
            joinedload(Subscription.user),
            joinedload(Subscription.license),
            joinedload(Subscription.institution),
        )

    @staticmethod
    def get_subscription(subscription_id: str, db: Session) -> Subscription:
        subscription = SubscriptionService._with_relations(db).filter(Subscription.id == subscription_id).first()
        if subscription is None:
            raise NotFoundError("Subscription not found")
        return subscription

    @staticmethod
    def create_subscription(
            caller: TokenClaims,
            subscription_data: SubscriptionCreate,
            db: Session,
            now: Optional[datetime] = None,
    ) -> Subscription:
        """Subscribe a user to an active license.

        Only admins may name another user; for everyone else the subscriber is
        the caller, whatever the request body says.
        """
        if caller.role == "admin" and subscription_data.user_id:
            target_user_id = subscription_data.user_id
        else:
            target_user_id = caller.id

        license = LicenseService.get_license(subscription_data.license_id, db, active_only=True)
        user = db.query(User).filter(User.id == target_user_id).first()
        if user is None:
            raise NotFoundError("User not found")

        start_date = now or utcnow()
        subscription = Subscription(
            user_id=user.id,
            license_id=license.id,
            institution_id=user.institution_id,
            start_date=start_date,
            end_date=add_months(start_date, license.duration_months),
            status="active",
            payment_amount=license.price,
            created_at=start_date,
            updated_at=start_date,
        )
        db.add(subscription)
        db.commit()
        logger.info(
            f"Subscription {subscription.id} created: user {user.id}, license {license.id}, "
            f"until {subscription.end_date.isoformat()}"
        )
        return SubscriptionService.get_subscription(subscription.id, db)

    @staticmethod
    def list_subscriptions(caller: TokenClaims, db: Session) -> List[Subscription]:
        """Admins see all subscriptions, users only their own."""
        query = SubscriptionService._with_relations(db)
        if caller.role != "admin":
            query = query.filter(Subscription.user_id == caller.id)
        return query.order_by(Subscription.created_at.desc()).all()

    @staticmethod
    def update_status(caller: TokenClaims, subscription_id: str, new_status: str, db: Session) -> Subscription:
        if caller.role != "admin":
            raise AuthorizationError("Admin access required")
        if new_status not in SUBSCRIPTION_STATUSES:
            raise ValidationError(f"Invalid subscription status: {new_status}")

        subscription = SubscriptionService.get_subscription(subscription_id, db)
        previous = subscription.status
        subscription.status = new_status
        AdminService.log_action(caller, f"Changed subscription {subscription_id} status {previous} -> {new_status}", db)
        db.commit()
        db.refresh(subscription)
        return subscription

    @staticmethod
    def cancel_subscription(caller: TokenClaims, subscription_id: str, db: Session) -> None:
        """Cancel a subscription. Owners may cancel their own; admins may cancel any."""
        subscription = SubscriptionService.get_subscription(subscription_id, db)
        is_admin = caller.role == "admin"
        if not is_admin and subscription.user_id != caller.id:
            raise AuthorizationError("You can only cancel your own subscriptions")
        if subscription.status == "cancelled":
            return

        subscription.status = "cancelled"
        if is_admin:
            AdminService.log_action(caller, f"Cancelled subscription {subscription_id}", db)
        db.commit()
        logger.info(f"Subscription {subscription_id} cancelled by {caller.id}")

    @staticmethod
    def expire_due(db: Session, now: Optional[datetime] = None) -> int:
        """Mark active subscriptions whose window has closed as expired."""
        cutoff = now or utcnow()
        expired = db.query(Subscription).filter(
            Subscription.status == "active",
            Subscription.end_date <= cutoff,
        ).update({Subscription.status: "expired", Subscription.updated_at: cutoff}, synchronize_session=False)
        db.commit()
        return expired
