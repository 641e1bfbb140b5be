"""
User access grant model
"""

from sqlalchemy import Column, DateTime, Integer, func

from pbi_access.models.base import BaseModel, ACCESS_SCHEMA


class UserAccess(BaseModel):
    """
    Grants a user access to one reporting group

    UserID and Group_Bkey are not declared as foreign keys: the
    warehouse does not enforce them and duplicates are prevented
    by the API layer.
    """
    __tablename__ = "UserAccess"
    __table_args__ = {"schema": ACCESS_SCHEMA}

    id = Column("UserAccessID", Integer, primary_key=True, autoincrement=True)
    user_id = Column("UserID", Integer, nullable=False)
    group_bkey = Column("Group_Bkey", Integer, nullable=False)
    creation_date = Column(
        "CreationDate",
        DateTime,
        server_default=func.now(),
        nullable=False,
    )
