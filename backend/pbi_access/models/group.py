"""
Reporting group dimension, maintained upstream by the warehouse loads
"""

from sqlalchemy import Column, Integer, String

from pbi_access.models.base import BaseModel, DIMENSION_SCHEMA


class Group(BaseModel):
    """
    A reporting group with its hierarchy names

    level2_name is the coarse grouping, level3_name the finer one.
    Both are only used for searching.
    """
    __tablename__ = "Group"
    __table_args__ = {"schema": DIMENSION_SCHEMA}

    group_bkey = Column("Group_Bkey", Integer, primary_key=True, autoincrement=False)
    group_name = Column("GroupName", String(255), nullable=False)
    level2_name = Column("level2name", String(255), nullable=True)
    level3_name = Column("level3name", String(255), nullable=True)
