class DatabaseError(Exception):
    """Base for all database errors."""


class NotFoundError(DatabaseError):
    """Round not found, or the id is not a valid round id."""


class IntegrityError(DatabaseError):
    """Check or not-null constraint violation on a round row."""
