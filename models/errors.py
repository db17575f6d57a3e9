class StatsRetrievalError(Exception):
    """Raised when user stats could not be read from the database.

    The driver exception is chained as __cause__ so it can be logged,
    the message itself is safe to show to a client."""

    def __init__(self, detail: str = "stats retrieval failed"):
        self.detail = detail
        super().__init__(self.detail)


class QueryExecutionError(StatsRetrievalError):
    """The statement could not be run (connection lost, bad SQL, schema mismatch)."""


class RowDecodeError(StatsRetrievalError):
    """A result row did not have the expected columns or types."""


class CursorIterationError(StatsRetrievalError):
    """The cursor reported an error while streaming rows."""


class DatabaseConnectionError(Exception):
    """The database could not be reached or refused our credentials."""
