"""
Access grant endpoints
"""

from fastapi import APIRouter, Depends, Response, status
from typing import List
import logging

from pbi_access.api.deps import get_access_repository
from pbi_access.core.exceptions import ValidationError
from pbi_access.repositories import AccessRepository
from pbi_access.schemas import AccessGrantResponse, AddAccessRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/users/{user_id}/access", response_model=List[AccessGrantResponse])
def list_user_access(user_id: int, access: AccessRepository = Depends(get_access_repository)):
    return access.list_by_user(user_id)


@router.post("/users/{user_id}/access", status_code=status.HTTP_204_NO_CONTENT)
def add_user_access(
    user_id: int,
    body: AddAccessRequest,
    access: AccessRepository = Depends(get_access_repository),
):
    """
    Grant groups to a user

    Groups the user already has are skipped.
    """
    if not body.group_bkeys:
        raise ValidationError("At least one group is required")

    new_group_bkeys = []
    for group_bkey in body.group_bkeys:
        if group_bkey in new_group_bkeys:
            continue
        if not access.exists(user_id, group_bkey):
            new_group_bkeys.append(group_bkey)

    if new_group_bkeys:
        access.add_groups(user_id, new_group_bkeys)
        logger.info("Granted %d group(s) to user %d", len(new_group_bkeys), user_id)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/access/{access_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_access(access_id: int, access: AccessRepository = Depends(get_access_repository)):
    access.remove(access_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
