"""
Reporting group search
"""

from typing import List, Optional

from sqlalchemy import literal_column, select
from sqlalchemy.engine import Row

from pbi_access.models import Group
from pbi_access.repositories.base import BaseRepository

# Fixed set of searchable columns, keyed by the name reported in results
SEARCH_COLUMNS = {
    "level2name": Group.level2_name,
    "level3name": Group.level3_name,
}


class GroupRepository(BaseRepository):

    def search(self, term: str) -> List[Row]:
        """
        Search groups by hierarchy name

        Matches on level2name first; level3name is only searched when
        level2name has no matches. An empty term matches nothing.
        """
        if not term:
            return []

        pattern = f"%{term}%"
        results = self._search_in_column("level2name", pattern)
        if not results:
            results = self._search_in_column("level3name", pattern)
        return results

    def _search_in_column(self, column_name: str, pattern: str) -> List[Row]:
        column = SEARCH_COLUMNS.get(column_name)
        if column is None:
            raise ValueError(f"invalid search column: {column_name}")

        stmt = (
            select(
                Group.group_bkey,
                Group.group_name,
                literal_column(f"'{column_name}'").label("matched_on"),
            )
            .where(column.like(pattern))
            .distinct()
            .order_by(Group.group_name)
        )
        with self._statement(f"search groups in {column_name}"):
            return list(self.db.execute(stmt).all())

    def get_by_bkey(self, group_bkey: int) -> Optional[Group]:
        with self._statement("get group"):
            return self.db.get(Group, group_bkey)
