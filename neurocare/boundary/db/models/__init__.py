"""
Database models package.

Exports:
  - TherapySessionModel: Completed therapy session ORM model

Dependencies: sqlalchemy, neurocare.boundary.db.base
System role: Database model definitions for domain entities
"""

from neurocare.boundary.db.models.therapy_session_model import TherapySessionModel

__all__ = ["TherapySessionModel"]
