"""
Repositories: data access with eager loading and cafe scoping.
"""

from .base import BaseRepository, EntityRepository, RepositoryFilters
from .order import OrderRepository, OrderFilters
from .menu_item import MenuItemRepository, MenuItemFilters

__all__ = [
    "BaseRepository",
    "EntityRepository",
    "RepositoryFilters",
    "OrderRepository",
    "OrderFilters",
    "MenuItemRepository",
    "MenuItemFilters",
]
