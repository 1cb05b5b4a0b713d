"""
Tests for the order lifecycle rules: totals, transitions, public
cancellation and payments. No database involved.
"""

import pytest

from cafe_api.models import Order, OrderLine, Table
from cafe_api.services.domain.order_lifecycle import (
    allowed_next_statuses,
    apply_payment,
    apply_public_cancel,
    apply_totals,
    apply_transition,
    compute_tax_cents,
    compute_totals,
)
from shared.config.constants import OrderStatus, Roles
from shared.utils.exceptions import (
    CannotCancelError,
    ForbiddenError,
    InvalidTransitionError,
    PaymentAmountError,
    ValidationError,
)


def make_order(status: str = OrderStatus.NEW, total_cents: int = 100_00, slug: str = "table-1") -> Order:
    return Order(
        id=1,
        cafe_id=1,
        table_id=1,
        status=status,
        subtotal_cents=total_cents,
        tax_cents=0,
        total_cents=total_cents,
        paid_cents=0,
        table=Table(cafe_id=1, table_number=1, slug=slug),
    )


class TestTotals:

    @pytest.mark.parametrize(
        "subtotal, expected_tax",
        [
            (0, 0),
            (9, 0),  # 0.45 rounds down
            (10, 1),  # 0.5 rounds half-up
            (30, 2),  # 1.5 rounds half-up
            (100_00, 5_00),
            (9524, 476),
        ],
    )
    def test_tax_is_five_percent_rounded_half_up(self, subtotal, expected_tax):
        assert compute_tax_cents(subtotal) == expected_tax

    def test_compute_totals_sums_snapshot_price_times_quantity(self):
        lines = [
            OrderLine(name_snapshot="Masala Dosa", price_snapshot_cents=120_00, quantity=2),
            OrderLine(name_snapshot="Chai", price_snapshot_cents=30_00, quantity=1),
        ]

        totals = compute_totals(lines)

        assert totals.subtotal_cents == 270_00
        assert totals.tax_cents == 13_50
        assert totals.total_cents == 283_50

    def test_apply_totals_writes_amounts_on_order(self):
        order = Order(
            lines=[OrderLine(name_snapshot="Chai", price_snapshot_cents=30_00, quantity=3)]
        )

        apply_totals(order)

        assert order.subtotal_cents == 90_00
        assert order.tax_cents == 4_50
        assert order.total_cents == order.subtotal_cents + order.tax_cents


class TestTransitions:

    def test_allowed_transition_by_kitchen(self):
        """Should move NEW to ACCEPTED and record who accepted."""
        order = make_order()

        previous = apply_transition(order, OrderStatus.ACCEPTED, Roles.KITCHEN, actor_id=7)

        assert previous == OrderStatus.NEW
        assert order.status == OrderStatus.ACCEPTED
        assert order.accepted_by_id == 7

    def test_completed_and_delivered_record_actor(self):
        order = make_order(status=OrderStatus.IN_PROGRESS)

        apply_transition(order, OrderStatus.COMPLETED, Roles.KITCHEN, actor_id=3)
        apply_transition(order, OrderStatus.DELIVERED, Roles.DELIVERY, actor_id=4)

        assert order.completed_by_id == 3
        assert order.delivered_by_id == 4

    def test_disallowed_transition_by_kitchen_leaves_status(self):
        """NEW -> DELIVERED by KITCHEN fails and the order stays NEW."""
        order = make_order()

        with pytest.raises(InvalidTransitionError) as exc_info:
            apply_transition(order, OrderStatus.DELIVERED, Roles.KITCHEN, actor_id=7)

        assert exc_info.value.status_code == 400
        assert "Invalid transition" in exc_info.value.detail
        assert order.status == OrderStatus.NEW
        assert order.delivered_by_id is None

    def test_super_admin_overrides_transition_table(self):
        """NEW -> DELIVERED by SUPER_ADMIN succeeds."""
        order = make_order()

        apply_transition(order, OrderStatus.DELIVERED, Roles.SUPER_ADMIN, actor_id=1)

        assert order.status == OrderStatus.DELIVERED

    def test_admin_may_reopen_terminal_order(self):
        order = make_order(status=OrderStatus.CANCELLED)

        apply_transition(order, OrderStatus.NEW, Roles.ADMIN, actor_id=1)

        assert order.status == OrderStatus.NEW

    @pytest.mark.parametrize("role", [Roles.MANAGER, Roles.WAITER, Roles.KITCHEN, Roles.DELIVERY])
    def test_terminal_states_are_final_for_non_privileged(self, role):
        for terminal in OrderStatus.TERMINAL:
            order = make_order(status=terminal)
            with pytest.raises(InvalidTransitionError):
                apply_transition(order, OrderStatus.NEW, role, actor_id=1)
            assert order.status == terminal

    def test_unknown_status_rejected_even_for_admin(self):
        order = make_order()

        with pytest.raises(ValidationError):
            apply_transition(order, "SERVED", Roles.SUPER_ADMIN, actor_id=1)

        assert order.status == OrderStatus.NEW

    def test_allowed_next_statuses(self):
        assert allowed_next_statuses(OrderStatus.DELIVERED) == [OrderStatus.PAID]
        assert allowed_next_statuses(OrderStatus.PAID) == []


class TestPublicCancel:

    @pytest.mark.parametrize("status", [OrderStatus.NEW, OrderStatus.ACCEPTED])
    def test_cancel_within_window(self, status):
        order = make_order(status=status)

        previous = apply_public_cancel(order, "table-1")

        assert previous == status
        assert order.status == OrderStatus.CANCELLED

    @pytest.mark.parametrize(
        "status",
        [OrderStatus.IN_PROGRESS, OrderStatus.COMPLETED, OrderStatus.DELIVERED, OrderStatus.PAID],
    )
    def test_cancel_after_kitchen_started_fails(self, status):
        order = make_order(status=status)

        with pytest.raises(CannotCancelError) as exc_info:
            apply_public_cancel(order, "table-1")

        assert exc_info.value.detail == "Cannot cancel at this stage"
        assert order.status == status

    def test_cancel_with_other_table_slug_forbidden(self):
        order = make_order()

        with pytest.raises(ForbiddenError):
            apply_public_cancel(order, "table-2")

        assert order.status == OrderStatus.NEW


class TestPayments:

    def test_split_payment_marks_order_paid(self):
        """Total 100.00; CASH 60 then UPI 40 -> paid 60 then 100 and PAID."""
        order = make_order(status=OrderStatus.DELIVERED, total_cents=100_00)

        apply_payment(order, "CASH", 60_00)
        assert order.paid_cents == 60_00
        assert order.status == OrderStatus.DELIVERED

        apply_payment(order, "UPI", 40_00)
        assert order.paid_cents == 100_00
        assert order.status == OrderStatus.PAID
        assert [p.method for p in order.payments] == ["CASH", "UPI"]

    def test_full_payment_promotes_from_any_status(self):
        """Payment bypasses the transition table."""
        order = make_order(status=OrderStatus.NEW, total_cents=50_00)

        apply_payment(order, "CARD", 50_00, reference="txn-1", recorded_by_id=2)

        assert order.status == OrderStatus.PAID
        assert order.payments[0].reference == "txn-1"
        assert order.payments[0].recorded_by_id == 2

    def test_overpayment_is_accepted(self):
        order = make_order(total_cents=50_00)

        apply_payment(order, "CASH", 70_00)

        assert order.paid_cents == 70_00
        assert order.balance_cents == 0
        assert order.status == OrderStatus.PAID

    def test_invalid_method_rejected(self):
        order = make_order()

        with pytest.raises(ValidationError):
            apply_payment(order, "CHEQUE", 10_00)

        assert order.paid_cents == 0
        assert order.payments == []

    @pytest.mark.parametrize("amount", [0, -100])
    def test_non_positive_amount_rejected(self, amount):
        order = make_order()

        with pytest.raises(PaymentAmountError):
            apply_payment(order, "CASH", amount)

        assert order.paid_cents == 0
