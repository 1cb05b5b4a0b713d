"""
Property-based tests with Hypothesis for the order money and lifecycle rules.
"""

from decimal import Decimal

import pytest
from hypothesis import given, settings, strategies as st

from cafe_api.models import Order, OrderLine
from cafe_api.services.domain.order_lifecycle import (
    apply_payment,
    apply_transition,
    compute_tax_cents,
    compute_totals,
)
from shared.config.constants import ORDER_TRANSITIONS, OrderStatus, PaymentMethod, Roles
from shared.utils.exceptions import InvalidTransitionError
from shared.utils.validators import slugify

statuses = st.sampled_from(OrderStatus.ALL)
staff_roles = st.sampled_from([Roles.MANAGER, Roles.KITCHEN, Roles.WAITER, Roles.DELIVERY])
privileged_roles = st.sampled_from([Roles.SUPER_ADMIN, Roles.ADMIN])
line_strategy = st.tuples(
    st.integers(min_value=0, max_value=100_000_00),
    st.integers(min_value=1, max_value=99),
)


def make_order(status: str, total_cents: int = 0) -> Order:
    return Order(id=1, cafe_id=1, table_id=1, status=status, total_cents=total_cents, paid_cents=0)


class TestTotalsProperties:

    @given(subtotal=st.integers(min_value=0, max_value=10_000_000_00))
    def test_tax_is_rounded_five_percent(self, subtotal):
        tax = compute_tax_cents(subtotal)

        assert abs(Decimal(tax) - Decimal(subtotal) * Decimal("0.05")) <= Decimal("0.5")
        assert 0 <= tax <= subtotal

    @given(lines=st.lists(line_strategy, min_size=1, max_size=20))
    def test_total_is_subtotal_plus_tax(self, lines):
        totals = compute_totals(
            OrderLine(name_snapshot="x", price_snapshot_cents=price, quantity=qty) for price, qty in lines
        )

        assert totals.subtotal_cents == sum(price * qty for price, qty in lines)
        assert totals.total_cents == totals.subtotal_cents + totals.tax_cents


class TestTransitionProperties:

    @given(current=statuses, requested=statuses, role=staff_roles)
    def test_staff_follow_the_table(self, current, requested, role):
        order = make_order(current)

        if requested in ORDER_TRANSITIONS[current]:
            assert apply_transition(order, requested, role, 7) == current
            assert order.status == requested
        else:
            with pytest.raises(InvalidTransitionError):
                apply_transition(order, requested, role, 7)
            assert order.status == current

    @given(current=statuses, requested=statuses, role=privileged_roles)
    def test_privileged_roles_force_any_move(self, current, requested, role):
        order = make_order(current)

        apply_transition(order, requested, role, 1)

        assert order.status == requested


class TestPaymentProperties:

    @settings(max_examples=50)
    @given(
        total=st.integers(min_value=1, max_value=1_000_000),
        amounts=st.lists(st.integers(min_value=1, max_value=500_000), min_size=1, max_size=10),
        method=st.sampled_from(PaymentMethod.ALL),
    )
    def test_paid_grows_and_settles(self, total, amounts, method):
        order = make_order(OrderStatus.DELIVERED, total_cents=total)
        previous_paid = 0

        for amount in amounts:
            apply_payment(order, method, amount)
            assert order.paid_cents == previous_paid + amount
            previous_paid = order.paid_cents

        assert len(order.payments) == len(amounts)
        assert (order.status == OrderStatus.PAID) == (order.paid_cents >= total)


class TestSlugProperties:

    @given(text=st.text(max_size=40))
    def test_slugify_output_is_url_safe(self, text):
        slug = slugify(text)

        assert slug == slug.lower()
        assert all(ch.isalnum() or ch == "-" for ch in slug)
        assert not slug.startswith("-") and not slug.endswith("-")
