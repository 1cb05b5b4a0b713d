"""
Seed data for a freshly provisioned cafe: eight tables and a starter menu.
Safe to run repeatedly; existing tables and items are left alone.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from cafe_api.models import MenuItem, Table
from cafe_api.services.domain.cafe_service import get_active_cafe
from cafe_api.services.domain.table_service import TableService
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.utils.admin_schemas import SeedResult

logger = get_logger(__name__)

SEED_TABLE_COUNT = 8

# (name, category, price_cents, vegetarian)
SEED_MENU_ITEMS = [
    ("Margherita Pizza", "Mains", 250_00, True),
    ("Paneer Tikka", "Starters", 180_00, True),
    ("Masala Dosa", "Mains", 120_00, True),
    ("Chai", "Beverages", 30_00, True),
]


def seed_basic(db: Session, cafe_id: int, user_id: int | None = None) -> SeedResult:
    """
    Create tables 1..8 and the starter menu for a cafe.

    Raises:
        NotFoundError: the cafe does not exist.
    """
    get_active_cafe(db, cafe_id)
    tables = TableService(db)

    existing_numbers = set(
        db.scalars(select(Table.table_number).where(Table.cafe_id == cafe_id)).all()
    )
    tables_created = 0
    for number in range(1, SEED_TABLE_COUNT + 1):
        if number in existing_numbers:
            continue
        table = Table(
            cafe_id=cafe_id,
            table_number=number,
            slug=tables.generate_slug(cafe_id, number),
        )
        table.set_created_by(user_id, None)
        db.add(table)
        # Flush so the next generated slug sees this one
        db.flush()
        tables_created += 1

    existing_names = set(
        db.scalars(select(MenuItem.name).where(MenuItem.cafe_id == cafe_id)).all()
    )
    items_created = 0
    for name, category, price_cents, vegetarian in SEED_MENU_ITEMS:
        if name in existing_names:
            continue
        item = MenuItem(
            cafe_id=cafe_id,
            name=name,
            category=category,
            price_cents=price_cents,
            is_vegetarian=vegetarian,
        )
        item.set_created_by(user_id, None)
        db.add(item)
        items_created += 1

    safe_commit(db)
    logger.info(
        "Cafe seeded",
        cafe_id=cafe_id,
        tables_created=tables_created,
        menu_items_created=items_created,
    )
    return SeedResult(cafe_id=cafe_id, tables_created=tables_created, menu_items_created=items_created)
