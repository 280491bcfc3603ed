"""Schemas shared by endpoints that reference catalog items by (type, id)."""
from uuid import UUID

from pydantic import BaseModel

from models.enums import TargetType


class TargetRef(BaseModel):
    """A reference to any catalog item."""

    target_type: TargetType
    target_id: UUID
