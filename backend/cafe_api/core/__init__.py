"""
Application wiring: CORS, middlewares and lifespan.
"""

from .cors import configure_cors
from .middlewares import register_middlewares
from .lifespan import lifespan

__all__ = ["configure_cors", "register_middlewares", "lifespan"]
