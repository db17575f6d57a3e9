from pydantic import BaseModel, field_validator

import config


def validate_table_prefix(v: str) -> str:
    # fullmatch: "$" would let a trailing newline through
    if not config.TABLE_PREFIX_PATTERN.fullmatch(v):
        raise ValueError(f"Invalid table prefix: {v!r}")
    return v


class QueryBuilder(BaseModel):
    """
    Builds the per-user publishing stats query.

    The table prefix is operator configuration and is interpolated into
    the table names, the username is always passed as a bound parameter.
    An empty username means no filter.
    """

    table_prefix: str
    username: str | None = None

    # noinspection PyMethodParameters
    @field_validator("table_prefix")
    def check_table_prefix(cls, v):
        return validate_table_prefix(v)

    @property
    def filters_by_username(self) -> bool:
        return bool(self.username)

    def build(self) -> tuple[str, list[str]]:
        posts = f"{self.table_prefix}posts"
        users = f"{self.table_prefix}users"
        sql = f"""
            SELECT
                u.user_login AS username,
                COUNT(p.ID) AS post_count,
                COALESCE(
                    (SELECT post_title
                     FROM {posts}
                     WHERE post_author = u.ID
                       AND post_status = '{config.PUBLISHED_STATUS}'
                       AND post_type = '{config.POST_TYPE}'
                     ORDER BY post_date DESC
                     LIMIT 1),
                    ''
                ) AS last_post_title
            FROM {users} u
            LEFT JOIN {posts} p ON u.ID = p.post_author
                AND p.post_status = '{config.PUBLISHED_STATUS}'
                AND p.post_type = '{config.POST_TYPE}'
        """
        params_list = []
        if self.filters_by_username:
            sql += " WHERE u.user_login = %s"
            params_list.append(self.username)
        sql += " GROUP BY u.ID, u.user_login ORDER BY post_count DESC"
        return sql, params_list
