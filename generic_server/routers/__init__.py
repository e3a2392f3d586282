"""
Routers package.

- crud: Generic CRUD controller and registration helper
- health: Service health endpoints
"""

from .crud import CrudController, parse_entity_id, register_crud_controller
from .health import router as health_router

__all__ = [
    "CrudController",
    "parse_entity_id",
    "register_crud_controller",
    "health_router",
]
