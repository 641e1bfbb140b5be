"""
Pydantic schemas for access grants
"""

from pydantic import BaseModel, Field
from typing import List
from datetime import datetime


class AccessGrantResponse(BaseModel):
    """One group a user has access to"""

    id: int = Field(..., description="Access grant identifier")
    user_id: int = Field(..., alias="userId")
    group_bkey: int = Field(..., alias="groupBkey")
    group_name: str = Field(..., alias="groupName")
    creation_date: datetime = Field(..., alias="creationDate")

    class Config:
        from_attributes = True
        populate_by_name = True


class AddAccessRequest(BaseModel):
    """Body of a grant request"""

    group_bkeys: List[int] = Field(
        default_factory=list,
        alias="groupBkeys",
        description="Business keys of the groups to grant"
    )

    class Config:
        populate_by_name = True
