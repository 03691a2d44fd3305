"""
Entity: a loosely-typed database record.

An Entity is an ordered mapping of column name to value, optionally tagged
with the table it belongs to. The same type is used both as a record to
write and as a condition to match, e.g.:

    Entity.create("users").set("name", "alice").set("active", True)

Field order is insertion order and is kept in generated statements.
"""

from typing import Any, Mapping


class Entity(dict):
    """A dict of field name to value carrying an optional table_name tag."""

    def __init__(self, *args, table_name: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.table_name = table_name

    @classmethod
    def create(cls, table_name: str | None = None) -> "Entity":
        """Create an empty entity for the given table."""
        return cls(table_name=table_name)

    @classmethod
    def parse(cls, data: Mapping[str, Any] = None, table_name: str | None = None, **fields) -> "Entity":
        """
        Build an entity from an existing mapping and/or keyword fields.

        Args:
            data: Mapping of field names to values, copied in its own order
            table_name: Table to tag the entity with
            **fields: Extra fields, applied after data

        Returns:
            A new Entity
        """
        entity = cls(table_name=table_name)
        if data:
            entity.update(data)
        entity.update(fields)
        return entity

    def set(self, field: str, value: Any) -> "Entity":
        self[field] = value
        return self

    def remove(self, field: str) -> None:
        self.pop(field, None)

    def is_empty(self) -> bool:
        return len(self) == 0

    @property
    def field_names(self) -> list[str]:
        return list(self.keys())

    def fill_table_name(self, table_name: str) -> "Entity":
        """Tag the entity with table_name unless it already names a table."""
        if not self.table_name or not self.table_name.strip():
            self.table_name = table_name
        return self

    def clone(self) -> "Entity":
        return type(self)(self, table_name=self.table_name)

    def without_none(self) -> "Entity":
        """Return a copy holding only the fields whose value is not None."""
        return type(self)(
            {k: v for k, v in self.items() if v is not None}, table_name=self.table_name
        )

    def copy(self) -> "Entity":
        return self.clone()

    def __repr__(self) -> str:
        return f"Entity(table_name={self.table_name!r}, {dict.__repr__(self)})"
