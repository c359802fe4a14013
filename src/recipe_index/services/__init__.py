"""Services package for recipe_index.

Modules:
    factory: ServiceFactory for centralized dependency management
"""

from .factory import ServiceFactory

__all__ = ["ServiceFactory"]
