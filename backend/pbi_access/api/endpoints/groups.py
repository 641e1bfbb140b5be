"""
Group search endpoint
"""

from fastapi import APIRouter, Depends
from typing import List

from pbi_access.api.deps import get_database
from pbi_access.core.database import DatabaseManager
from pbi_access.repositories import GroupRepository
from pbi_access.schemas import GroupSearchResult

router = APIRouter()


@router.get("/search", response_model=List[GroupSearchResult])
def search_groups(q: str = "", database: DatabaseManager = Depends(get_database)):
    # An empty term needs no connection
    if not q:
        return []

    db = database.session()
    try:
        return GroupRepository(db).search(q)
    finally:
        db.close()
