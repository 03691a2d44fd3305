"""
Executor: the contract a DaoTemplate delegates statement execution to.

Anything providing these methods can back a template. SqlRunner is the
PostgreSQL implementation; tests use a mock.
"""

from typing import Any, Callable, Protocol

from tabledao.entity import Entity

Handler = Callable[[list[dict], str], Any]


class Executor(Protocol):
    def insert(self, entity: Entity) -> int: ...

    def insert_for_generated_keys(self, entity: Entity) -> list: ...

    def insert_for_generated_key(self, entity: Entity) -> Any | None: ...

    def delete(self, where: Entity) -> int: ...

    def update(self, record: Entity, where: Entity) -> int: ...

    def find(self, columns: list[str] | None, where: Entity, handler: Handler) -> Any: ...

    def count(self, where: Entity) -> int: ...
