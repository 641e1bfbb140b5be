"""
User management endpoints
"""

from fastapi import APIRouter, Depends, Response, status
from typing import List
import logging

from pbi_access.api.deps import get_user_repository
from pbi_access.repositories import UserRepository
from pbi_access.schemas import UserCreated, UserResponse, UserWrite

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[UserResponse])
def list_users(
    filter: str = "",
    sort: str = "email",
    dir: str = "asc",
    users: UserRepository = Depends(get_user_repository),
):
    """
    List users

    `sort` accepts id or email, `dir` accepts asc or desc; anything
    else falls back to email / asc.
    """
    return users.list(filter, sort, dir)


@router.post("", response_model=UserCreated, status_code=status.HTTP_201_CREATED)
def create_user(body: UserWrite, users: UserRepository = Depends(get_user_repository)):
    user_id = users.create(body.email)
    logger.info("Created user %d", user_id)
    return UserCreated(id=user_id)


@router.put("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_user(user_id: int, body: UserWrite, users: UserRepository = Depends(get_user_repository)):
    users.update(user_id, body.email)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, users: UserRepository = Depends(get_user_repository)):
    """Delete a user and all of its access grants"""
    users.delete(user_id)
    logger.info("Deleted user %d", user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
