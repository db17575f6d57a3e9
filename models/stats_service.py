import logging
from typing import Any, Iterator

import pymysql
from pydantic import BaseModel, ValidationError, field_validator
from pymysql.cursors import SSDictCursor

from models.database import Database
from models.errors import (
    CursorIterationError,
    DatabaseConnectionError,
    QueryExecutionError,
    RowDecodeError,
)
from models.query_builder import QueryBuilder, validate_table_prefix
from models.user_stat import UserStat

logger = logging.getLogger(__name__)


class StatsService(BaseModel):
    database: Database
    table_prefix: str

    # noinspection PyMethodParameters
    @field_validator("table_prefix")
    def check_table_prefix(cls, v):
        return validate_table_prefix(v)

    def get_user_stats(self, username: str | None = None) -> list[UserStat]:
        """
        Return publishing stats per user, ordered by post_count descending.

        Args:
            username (str, optional): Only return the user with this login.
                None or an empty string returns every user.

        Returns:
            list[UserStat]: One entry per matching user, empty if nobody matched.

        Raises:
            QueryExecutionError: The query could not be run.
            RowDecodeError: A row did not decode into a UserStat.
            CursorIterationError: The cursor failed while streaming rows.
        """
        builder = QueryBuilder(table_prefix=self.table_prefix, username=username)
        sql, params_list = builder.build()
        logger.debug("Fetching user stats (username=%r)", username)

        try:
            db = self.database.connect()
        except DatabaseConnectionError as e:
            raise QueryExecutionError() from e
        try:
            cursor = db.cursor(SSDictCursor)
            try:
                try:
                    if builder.filters_by_username:
                        cursor.execute(sql, params_list)
                    else:
                        cursor.execute(sql)
                except pymysql.MySQLError as e:
                    raise QueryExecutionError() from e

                stats = []
                for row in self._rows(cursor):
                    stats.append(self._decode(row))
            finally:
                self._release(cursor, "cursor")
        finally:
            self._release(db, "connection")

        logger.debug("Fetched stats for %d user(s)", len(stats))
        return stats

    @staticmethod
    def _rows(cursor) -> Iterator[dict[str, Any]]:
        try:
            yield from cursor
        except pymysql.MySQLError as e:
            raise CursorIterationError() from e

    @staticmethod
    def _decode(row: dict[str, Any]) -> UserStat:
        try:
            return UserStat.model_validate(row)
        except ValidationError as e:
            raise RowDecodeError() from e

    @staticmethod
    def _release(resource, name: str) -> None:
        # An unbuffered cursor drains the rest of the result on close, which
        # fails with AttributeError once pymysql has dropped a broken socket.
        try:
            resource.close()
        except (pymysql.MySQLError, AttributeError, OSError):
            logger.warning("Failed to close %s", name, exc_info=True)
