"""
Citation domain model.

Reference entry attached to a recommendation report.

Dependencies: pydantic
System role: Citation data structure
"""

from pydantic import BaseModel, ConfigDict, Field


class Citation(BaseModel):
    """Citation model for recommendation sources."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(description="Source title")
    reference: str = Field(description="Bibliographic reference")
