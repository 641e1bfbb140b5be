"""
Database models package
"""

from .base import Base, BaseModel
from .user import User
from .group import Group
from .access import UserAccess

__all__ = ["Base", "BaseModel", "User", "Group", "UserAccess"]
