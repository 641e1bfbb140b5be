"""
User access grant queries
"""

from typing import Iterable, List

from sqlalchemy import delete, func, insert, select
from sqlalchemy.engine import Row

from pbi_access.core.exceptions import NotFound
from pbi_access.models import Group, UserAccess
from pbi_access.repositories.base import BaseRepository


class AccessRepository(BaseRepository):

    def list_by_user(self, user_id: int) -> List[Row]:
        """Grants of one user with their group names, ordered by group name"""
        stmt = (
            select(
                UserAccess.id,
                UserAccess.user_id,
                UserAccess.group_bkey,
                Group.group_name,
                UserAccess.creation_date,
            )
            .join(Group, UserAccess.group_bkey == Group.group_bkey)
            .where(UserAccess.user_id == user_id)
            .order_by(Group.group_name)
        )
        with self._statement("query user access"):
            return list(self.db.execute(stmt).all())

    def exists(self, user_id: int, group_bkey: int) -> bool:
        stmt = (
            select(func.count())
            .select_from(UserAccess)
            .where(UserAccess.user_id == user_id, UserAccess.group_bkey == group_bkey)
        )
        with self._statement("check access existence"):
            return self.db.scalar(stmt) > 0

    def add_groups(self, user_id: int, group_bkeys: Iterable[int]) -> None:
        """Insert one grant per group key, committing each insert"""
        for group_bkey in group_bkeys:
            with self._statement(f"add group {group_bkey} for user {user_id}"):
                self.db.execute(
                    insert(UserAccess).values(user_id=user_id, group_bkey=group_bkey)
                )
                self.db.commit()

    def remove(self, access_id: int) -> None:
        with self._statement("remove access"):
            result = self.db.execute(delete(UserAccess).where(UserAccess.id == access_id))
            self.db.commit()
        if result.rowcount == 0:
            raise NotFound("access record not found")
