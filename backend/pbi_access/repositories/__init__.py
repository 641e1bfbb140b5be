"""
Data access layer
"""

from .users import UserRepository
from .access import AccessRepository
from .groups import GroupRepository

__all__ = ["UserRepository", "AccessRepository", "GroupRepository"]
