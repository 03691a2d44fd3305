"""Exceptions raised by tabledao itself. Database errors come from psycopg."""


class DaoError(Exception):
    """Base class for tabledao errors."""


class MissingPrimaryKeyError(DaoError):
    """Raised when an operation needs a primary-key value the entity does not carry."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Please determine `{field}` for update")
