"""
Tests for OrderService: placement, staff listing, transitions and public
cancellation against the database.
"""

import pytest

from cafe_api.models import MenuItem, Table
from cafe_api.services.domain import OrderService, PaymentService
from shared.config.constants import OrderStatus, Roles
from shared.utils.exceptions import (
    CafeAccessError,
    CannotCancelError,
    ForbiddenError,
    InvalidTransitionError,
    OrderNotFoundError,
    TableNotFoundError,
    ValidationError,
)
from shared.utils.admin_schemas import (
    CafeOutput,
    CafePublicOutput,
    MenuItemOutput,
    PlanOutput,
    TableOutput,
    UserOutput,
)
from shared.utils.schemas import OrderCreate, OrderLineInput, OrderLineOutput, OrderOutput, PaymentOutput


class TestCreateOrder:

    def test_snapshots_items_and_computes_totals(self, db_session, seed_table, seed_menu, place_order):
        order = place_order([("dosa", 2), ("chai", 1)])

        assert order.id is not None
        assert order.status == OrderStatus.NEW
        assert order.cafe_id == seed_table.cafe_id
        assert order.table_slug == "table-1"
        assert [(l.name_snapshot, l.price_snapshot_cents, l.quantity) for l in order.lines] == [
            ("Masala Dosa", 120_00, 2),
            ("Chai", 30_00, 1),
        ]
        assert order.subtotal_cents == 270_00
        assert order.tax_cents == 13_50
        assert order.total_cents == 283_50
        assert order.paid_cents == 0

    def test_menu_edits_do_not_change_existing_orders(self, db_session, seed_menu, place_order):
        order = place_order([("chai", 2)])

        chai = db_session.get(MenuItem, seed_menu["chai"].id)
        chai.name = "Masala Chai"
        chai.price_cents = 45_00
        db_session.commit()

        reloaded = OrderService(db_session).get_order(order.id)
        assert reloaded.lines[0].name_snapshot == "Chai"
        assert reloaded.lines[0].price_snapshot_cents == 30_00
        assert reloaded.total_cents == 63_00

    def test_unknown_table_is_invalid(self, db_session, seed_menu):
        data = OrderCreate(
            table_slug="no-such-table",
            items=[OrderLineInput(menu_item_id=seed_menu["chai"].id, quantity=1)],
        )

        with pytest.raises(ValidationError) as exc_info:
            OrderService(db_session).create_order(data)

        assert exc_info.value.detail == "Invalid table"

    def test_unavailable_item_rejected(self, place_order):
        with pytest.raises(ValidationError) as exc_info:
            place_order([("thali", 1)])

        assert "not available" in exc_info.value.detail

    def test_item_of_another_cafe_rejected(self, db_session, other_cafe, seed_table):
        foreign = MenuItem(cafe_id=other_cafe.id, name="Croissant", price_cents=90_00)
        db_session.add(foreign)
        db_session.commit()

        data = OrderCreate(
            table_slug=seed_table.slug,
            items=[OrderLineInput(menu_item_id=foreign.id, quantity=1)],
        )
        with pytest.raises(ValidationError):
            OrderService(db_session).create_order(data)

    def test_deleted_table_is_invalid(self, db_session, seed_table, seed_menu, place_order):
        table = db_session.get(Table, seed_table.id)
        table.soft_delete(None, None)
        db_session.commit()

        with pytest.raises(ValidationError):
            place_order()


class TestListOrders:

    @pytest.fixture
    def mixed_orders(self, db_session, place_order, ctx_for, seed_cafe):
        """One order per status NEW, IN_PROGRESS, COMPLETED, PAID."""
        service = OrderService(db_session)
        admin = ctx_for(Roles.ADMIN, seed_cafe.id)
        new = place_order()
        in_progress = place_order()
        completed = place_order()
        paid = place_order()
        service.update_status(in_progress.id, OrderStatus.IN_PROGRESS, admin)
        service.update_status(completed.id, OrderStatus.COMPLETED, admin)
        service.update_status(paid.id, OrderStatus.PAID, admin)
        return {"new": new.id, "in_progress": in_progress.id, "completed": completed.id, "paid": paid.id}

    def test_kitchen_sees_only_kitchen_statuses(self, db_session, mixed_orders, ctx_for, seed_cafe):
        orders = OrderService(db_session).list_orders(ctx_for(Roles.KITCHEN, seed_cafe.id), seed_cafe.id)

        assert {o.id for o in orders} == {mixed_orders["new"], mixed_orders["in_progress"]}

    def test_delivery_sees_only_completed(self, db_session, mixed_orders, ctx_for, seed_cafe):
        orders = OrderService(db_session).list_orders(ctx_for(Roles.DELIVERY, seed_cafe.id), seed_cafe.id)

        assert [o.id for o in orders] == [mixed_orders["completed"]]

    def test_admin_sees_everything_newest_first(self, db_session, mixed_orders, ctx_for, seed_cafe):
        orders = OrderService(db_session).list_orders(ctx_for(Roles.ADMIN, seed_cafe.id), seed_cafe.id)

        assert [o.id for o in orders] == sorted(mixed_orders.values(), reverse=True)

    def test_status_filter_outside_role_view_is_empty(self, db_session, mixed_orders, ctx_for, seed_cafe):
        orders = OrderService(db_session).list_orders(
            ctx_for(Roles.KITCHEN, seed_cafe.id), seed_cafe.id, status=OrderStatus.PAID
        )

        assert list(orders) == []

    def test_status_filter_for_admin(self, db_session, mixed_orders, ctx_for, seed_cafe):
        orders = OrderService(db_session).list_orders(
            ctx_for(Roles.ADMIN, seed_cafe.id), seed_cafe.id, status=OrderStatus.PAID
        )

        assert [o.id for o in orders] == [mixed_orders["paid"]]

    def test_list_for_table(self, db_session, place_order, seed_table):
        first = place_order()
        second = place_order()

        orders = OrderService(db_session).list_for_table(seed_table.slug)

        assert [o.id for o in orders] == [second.id, first.id]

    def test_list_for_unknown_table(self, db_session):
        with pytest.raises(TableNotFoundError):
            OrderService(db_session).list_for_table("missing")


class TestUpdateStatus:

    def test_returns_previous_status(self, db_session, place_order, ctx_for, seed_cafe):
        order = place_order()

        updated, previous = OrderService(db_session).update_status(
            order.id, OrderStatus.ACCEPTED, ctx_for(Roles.WAITER, seed_cafe.id, user_id=42)
        )

        assert previous == OrderStatus.NEW
        assert updated.status == OrderStatus.ACCEPTED
        assert updated.accepted_by_id == 42
        assert updated.updated_by_id == 42

    def test_invalid_transition_is_not_persisted(self, db_session, place_order, ctx_for, seed_cafe):
        order = place_order()
        service = OrderService(db_session)

        with pytest.raises(InvalidTransitionError):
            service.update_status(order.id, OrderStatus.DELIVERED, ctx_for(Roles.KITCHEN, seed_cafe.id))

        db_session.expire_all()
        assert service.get_order(order.id).status == OrderStatus.NEW

    def test_staff_of_other_cafe_forbidden(self, db_session, place_order, ctx_for, other_cafe):
        order = place_order()

        with pytest.raises(CafeAccessError):
            OrderService(db_session).update_status(
                order.id, OrderStatus.ACCEPTED, ctx_for(Roles.ADMIN, other_cafe.id)
            )

    def test_missing_order(self, db_session, ctx_for):
        with pytest.raises(OrderNotFoundError):
            OrderService(db_session).update_status(999, OrderStatus.ACCEPTED, ctx_for(Roles.SUPER_ADMIN, None))


class TestCancelByTable:

    def test_cancel_new_order(self, db_session, place_order, seed_table):
        order = place_order()

        cancelled, previous = OrderService(db_session).cancel_by_table(order.id, seed_table.slug)

        assert previous == OrderStatus.NEW
        assert cancelled.status == OrderStatus.CANCELLED

    def test_cancel_in_progress_fails(self, db_session, place_order, seed_table, ctx_for, seed_cafe):
        order = place_order()
        service = OrderService(db_session)
        service.update_status(order.id, OrderStatus.IN_PROGRESS, ctx_for(Roles.KITCHEN, seed_cafe.id))

        with pytest.raises(CannotCancelError):
            service.cancel_by_table(order.id, seed_table.slug)

    def test_missing_slug(self, db_session, place_order):
        order = place_order()

        with pytest.raises(ValidationError) as exc_info:
            OrderService(db_session).cancel_by_table(order.id, None)

        assert exc_info.value.detail == "Missing table_slug"

    def test_other_table_slug(self, db_session, place_order, seed_cafe):
        other = Table(cafe_id=seed_cafe.id, table_number=2, slug="table-2")
        db_session.add(other)
        db_session.commit()
        order = place_order()

        with pytest.raises(ForbiddenError):
            OrderService(db_session).cancel_by_table(order.id, "table-2")

    def test_missing_order(self, db_session):
        with pytest.raises(OrderNotFoundError):
            OrderService(db_session).cancel_by_table(12345, "table-1")


class TestOrderSerialization:

    @pytest.mark.parametrize(
        "schema",
        [
            OrderOutput, OrderLineOutput, PaymentOutput,
            PlanOutput, CafeOutput, CafePublicOutput, UserOutput, TableOutput, MenuItemOutput,
        ],
        ids=lambda s: s.__name__,
    )
    def test_output_schemas_read_attributes(self, schema):
        assert schema.model_config["from_attributes"] is True

    def test_order_snapshot_from_model(self, db_session, place_order, ctx_for, seed_cafe):
        order = place_order([("dosa", 1)])
        order, _ = PaymentService(db_session).record_payment(
            order.id, "CASH", 50_00, ctx_for(Roles.ADMIN, seed_cafe.id)
        )

        out = OrderOutput.model_validate(order)

        assert out.table_slug == "table-1"
        assert out.total_cents == 126_00
        assert out.balance_cents == 76_00
        assert [(l.name_snapshot, l.line_total_cents) for l in out.lines] == [("Masala Dosa", 120_00)]
        assert [(p.method, p.amount_cents) for p in out.payments] == [("CASH", 50_00)]
