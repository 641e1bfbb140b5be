"""
Pydantic schemas for group search
"""

from pydantic import BaseModel, Field


class GroupSearchResult(BaseModel):
    group_bkey: int = Field(..., alias="groupBkey")
    group_name: str = Field(..., alias="groupName")
    matched_on: str = Field(
        ...,
        alias="matchedOn",
        description="Hierarchy column that matched: level2name or level3name"
    )

    class Config:
        from_attributes = True
        populate_by_name = True
