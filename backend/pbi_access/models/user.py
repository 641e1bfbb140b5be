"""
Power BI user model
"""

from sqlalchemy import Column, Integer, String

from pbi_access.models.base import BaseModel, ACCESS_SCHEMA


class User(BaseModel):
    """
    A Power BI user identified by e-mail address
    """
    __tablename__ = "Users"
    __table_args__ = {"schema": ACCESS_SCHEMA}

    id = Column(
        "PowerBIUserID",
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    email = Column(
        "PowerBIUser",
        String(255),
        nullable=False,
        comment="User e-mail address used to sign in to Power BI"
    )
