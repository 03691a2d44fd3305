"""
DaoTemplate: CRUD access to a single table.

The table name and primary-key field are given once, at construction, so
callers never repeat them:

    users = DaoTemplate("users")
    users.add(Entity.parse(name="alice"))
    users.get(1)
    users.delete_by("name", "alice")

Records and conditions are Entity objects. Any entity reaching the executor
without a table name is tagged with the template's table first; an entity
that already names a table keeps it, which lets a template reach a related
table now and then.
"""

from typing import Any, List, Optional

from tabledao.entity import Entity
from tabledao.errors import MissingPrimaryKeyError
from tabledao.executor import Executor
from tabledao.handlers import to_entity, to_entity_list
from tabledao.runner import SqlRunner


class DaoTemplate:
    def __init__(
        self,
        table_name: str,
        primary_key_field: str = "id",
        executor: Optional[Executor] = None,
    ):
        if not table_name or not table_name.strip():
            raise ValueError("table_name is required")
        if executor is None:
            executor = SqlRunner()
        self._table_name = table_name
        self._primary_key_field = primary_key_field
        self._executor = executor

    @property
    def table_name(self) -> str:
        return self._table_name

    @property
    def primary_key_field(self) -> str:
        return self._primary_key_field

    @property
    def executor(self) -> Executor:
        return self._executor

    def _bind(self, entity: Entity) -> Entity:
        """Tag entity with this template's table unless it names one already."""
        return entity.fill_table_name(self._table_name)

    def _condition(self, field: str, value: Any) -> Entity:
        return Entity.create(self._table_name).set(field, value)

    # Add

    def add(self, entity: Entity) -> int:
        """Insert entity. Returns the number of rows inserted."""
        return self._executor.insert(self._bind(entity))

    def add_for_generated_keys(self, entity: Entity) -> List[Any]:
        """Insert entity. Returns the generated key values."""
        return self._executor.insert_for_generated_keys(self._bind(entity))

    def add_for_generated_key(self, entity: Entity) -> Optional[Any]:
        """Insert entity. Returns the auto-generated key, or None."""
        return self._executor.insert_for_generated_key(self._bind(entity))

    # Delete

    def delete(self, pk: Any) -> int:
        """Delete the row with primary key pk. A None key deletes nothing."""
        if pk is None:
            return 0
        return self.delete_where(self._condition(self._primary_key_field, pk))

    def delete_by(self, field: str, value: Any) -> int:
        """Delete rows where field equals value. A blank field deletes nothing."""
        if not field or not field.strip():
            return 0
        return self.delete_where(self._condition(field, value))

    def delete_where(self, where: Optional[Entity]) -> int:
        """
        Delete rows matching where.

        An empty or None condition deletes nothing and returns 0; a whole
        table is never wiped through this call.
        """
        if not where:
            return 0
        return self._executor.delete(self._bind(where))

    # Update

    def update(self, entity: Entity) -> int:
        """
        Update the row identified by the entity's primary key.

        The key selects the row and is left out of the SET fields.

        Raises:
            MissingPrimaryKeyError: If entity has no primary-key value
        """
        self._bind(entity)
        pk = entity.get(self._primary_key_field)
        if pk is None:
            raise MissingPrimaryKeyError(self._primary_key_field)

        where = Entity.create(entity.table_name).set(self._primary_key_field, pk)
        record = entity.clone()
        record.remove(self._primary_key_field)

        return self._executor.update(record, where)

    def add_or_update(self, entity: Entity) -> int:
        """
        Insert entity when it has no primary-key value, otherwise update it.

        No lookup is made: the decision rests on the key alone. On insert the
        generated key is written back into the entity and 1 is returned; on
        update the updated row count is returned. A None key is dropped before
        the insert so the column default applies.

        The key written back is the executor's first generated key; with
        SqlRunner that is the table's first column, so the primary key should
        come first in the table.
        """
        if entity.get(self._primary_key_field) is None:
            entity.remove(self._primary_key_field)
            key = self.add_for_generated_key(entity)
            if key is not None:
                entity[self._primary_key_field] = key
            return 1
        return self.update(entity)

    # Get

    def get(self, pk: Any) -> Optional[Entity]:
        """Get the row with primary key pk."""
        return self.get_by(self._primary_key_field, pk)

    def get_by(self, field: str, value: Any) -> Optional[Entity]:
        """Get one row where field equals value. Best used on unique fields."""
        return self.get_where(self._condition(field, value))

    def get_where(self, where: Optional[Entity] = None) -> Optional[Entity]:
        """
        Get one row matching where, None matching any row.
        If several rows match, only the first is returned.
        """
        if where is None:
            where = Entity.create(self._table_name)
        return self._executor.find(None, self._bind(where), to_entity)

    # Find

    def find_by(self, field: str, value: Any) -> List[Entity]:
        return self.find(self._condition(field, value))

    def find_all(self) -> List[Entity]:
        return self.find(Entity.create(self._table_name))

    def find(self, where: Optional[Entity] = None) -> List[Entity]:
        """All rows matching where, an empty list when none do."""
        if where is None:
            where = Entity.create(self._table_name)
        return self._executor.find(None, self._bind(where), to_entity_list)

    def count(self, where: Optional[Entity] = None) -> int:
        """Number of rows matching where, the whole table for None."""
        if where is None:
            where = Entity.create(self._table_name)
        return self._executor.count(self._bind(where))

    def exist(self, where: Optional[Entity] = None) -> bool:
        return self.count(where) > 0

    def __repr__(self) -> str:
        return f"DaoTemplate(table_name={self._table_name!r}, primary_key_field={self._primary_key_field!r})"
