"""
Common response models.

Shared response schemas.

Dependencies: pydantic
System role: Common API response structures
"""

from pydantic import BaseModel


class DeleteResult(BaseModel):
    """Outcome of a bulk delete."""

    deleted: int
