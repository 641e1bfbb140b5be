"""
Power BI user queries
"""

from typing import List, Optional

from sqlalchemy import delete, select, update

from pbi_access.core.exceptions import NotFound
from pbi_access.models import User, UserAccess
from pbi_access.repositories.base import BaseRepository

# Only these columns may appear in ORDER BY
SORT_COLUMNS = {
    "id": User.id,
    "email": User.email,
}
DEFAULT_SORT_FIELD = "email"
SORT_DIRECTIONS = ("asc", "desc")


class UserRepository(BaseRepository):

    def list(self, filter: str = "", sort_field: str = DEFAULT_SORT_FIELD, sort_dir: str = "asc") -> List[User]:
        """
        List users, optionally filtered on a substring of the e-mail

        Unknown sort fields fall back to email, unknown directions to asc.
        """
        stmt = select(User)
        if filter:
            stmt = stmt.where(User.email.like(f"%{filter}%"))

        column = SORT_COLUMNS.get(sort_field, SORT_COLUMNS[DEFAULT_SORT_FIELD])
        if sort_dir not in SORT_DIRECTIONS:
            sort_dir = "asc"
        stmt = stmt.order_by(column.desc() if sort_dir == "desc" else column.asc())

        with self._statement("query users"):
            return list(self.db.scalars(stmt).all())

    def get_by_id(self, user_id: int) -> Optional[User]:
        with self._statement("get user"):
            return self.db.get(User, user_id)

    def create(self, email: str) -> int:
        """Insert a user and return the identifier assigned by the database"""
        user = User(email=email)
        with self._statement("create user"):
            self.db.add(user)
            self.db.commit()
        return user.id

    def update(self, user_id: int, email: str) -> None:
        stmt = update(User).where(User.id == user_id).values(email=email)
        with self._statement("update user"):
            result = self.db.execute(stmt)
            self.db.commit()
        if result.rowcount == 0:
            raise NotFound("user not found")

    def delete(self, user_id: int) -> None:
        """
        Delete a user together with its access grants

        The grants are removed first, in a separate statement.
        """
        with self._statement("delete user access records"):
            self.db.execute(delete(UserAccess).where(UserAccess.user_id == user_id))
            self.db.commit()

        with self._statement("delete user"):
            result = self.db.execute(delete(User).where(User.id == user_id))
            self.db.commit()
        if result.rowcount == 0:
            raise NotFound("user not found")
