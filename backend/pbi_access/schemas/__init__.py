"""
Pydantic schemas for API request/response validation
"""

from .user import UserWrite, UserResponse, UserCreated
from .access import AccessGrantResponse, AddAccessRequest
from .group import GroupSearchResult

__all__ = [
    "UserWrite", "UserResponse", "UserCreated",
    "AccessGrantResponse", "AddAccessRequest",
    "GroupSearchResult",
]
