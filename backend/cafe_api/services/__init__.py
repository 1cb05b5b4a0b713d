"""
Services package: CRUD base plus domain services.
"""

from .base_service import BaseCRUDService

__all__ = ["BaseCRUDService"]
