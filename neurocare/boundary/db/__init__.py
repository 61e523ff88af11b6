"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - create_tables(): Schema bootstrap
  - TherapySessionModel: Completed therapy session entity
  - therapy_session_crud: CRUD operation singleton

Dependencies: sqlalchemy, neurocare.configs
System role: Database adapter providing persistent storage for therapy
session history.
"""

from neurocare.boundary.db.base import Base, TimestampMixin, UUIDMixin
from neurocare.boundary.db.connection import (
    create_tables,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from neurocare.boundary.db.models.therapy_session_model import TherapySessionModel
from neurocare.boundary.db.CRUD import (
    BaseCRUD,
    TherapySessionCRUD,
    therapy_session_crud,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "create_tables",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "TherapySessionModel",
    # CRUD
    "BaseCRUD",
    "TherapySessionCRUD",
    "therapy_session_crud",
]
