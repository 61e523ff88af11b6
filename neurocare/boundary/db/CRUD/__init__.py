"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from neurocare.boundary.db.CRUD import therapy_session_crud

    rows = await therapy_session_crud.get_by_user(db, user_id, limit=5)
"""

from neurocare.boundary.db.CRUD.base_crud import BaseCRUD
from neurocare.boundary.db.CRUD.therapy_session_crud import (
    TherapySessionCRUD,
    therapy_session_crud,
)

__all__ = [
    "BaseCRUD",
    "TherapySessionCRUD",
    "therapy_session_crud",
]
