"""
Cafe and subscription plan administration (SUPER_ADMIN).
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from cafe_api.models import Cafe, SubscriptionPlan
from cafe_api.services.base_service import BaseCRUDService
from shared.config.constants import CafeStatus
from shared.utils.admin_schemas import CafeOutput, CafePublicOutput, PlanOutput
from shared.utils.exceptions import NotFoundError, ValidationError


def get_active_cafe(db: Session, cafe_id: int) -> Cafe:
    """
    Raises:
        NotFoundError: cafe missing or soft-deleted.
    """
    cafe = db.scalar(select(Cafe).where(Cafe.id == cafe_id, Cafe.is_active.is_(True)))
    if cafe is None:
        raise NotFoundError("Cafe", cafe_id)
    return cafe


class PlanService(BaseCRUDService[SubscriptionPlan, PlanOutput]):
    """Subscription plans; limits are informational only."""

    def __init__(self, db: Session):
        super().__init__(
            db,
            SubscriptionPlan,
            PlanOutput,
            "Subscription plan",
            order_by=[SubscriptionPlan.price_cents, SubscriptionPlan.id],
        )


class CafeService(BaseCRUDService[Cafe, CafeOutput]):
    """Cafe tenants."""

    def __init__(self, db: Session):
        super().__init__(db, Cafe, CafeOutput, "Cafe", order_by=[Cafe.name, Cafe.id])

    def get_public(self, cafe_id: int) -> CafePublicOutput:
        """Branding for the customer page."""
        return CafePublicOutput.model_validate(get_active_cafe(self._db, cafe_id))

    def _validate_create(self, data: dict[str, Any]) -> None:
        self._check_plan(data.get("subscription_plan_id"))

    def _validate_update(self, entity: Cafe, data: dict[str, Any]) -> None:
        if "subscription_plan_id" in data:
            self._check_plan(data["subscription_plan_id"])

    def _before_delete(self, entity: Cafe) -> None:
        entity.status = CafeStatus.DELETED

    def _check_plan(self, plan_id: int | None) -> None:
        if plan_id is None:
            return
        plan = self._db.scalar(
            select(SubscriptionPlan).where(
                SubscriptionPlan.id == plan_id,
                SubscriptionPlan.is_active.is_(True),
            )
        )
        if plan is None:
            raise ValidationError(f"Unknown subscription plan {plan_id}", field="subscription_plan_id")
