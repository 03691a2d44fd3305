"""
SqlRunner: the PostgreSQL executor behind DaoTemplate.

Translates Entity records and conditions into composed psycopg statements.
Table and column names go through sql.Identifier; values are always bound
as %s parameters.
"""

import logging
from typing import Any, List, Optional

from psycopg import sql

from tabledao import db
from tabledao.entity import Entity
from tabledao.executor import Handler

logger = logging.getLogger(__name__)


def _table(entity: Entity) -> sql.Identifier:
    if not entity.table_name or not entity.table_name.strip():
        raise ValueError(f"No table name given for {entity!r}")
    return sql.Identifier(*entity.table_name.split("."))


def _where_clause(where: Entity) -> tuple[sql.Composable, list]:
    """
    Build a WHERE clause from a condition entity.

    None values match with IS NULL, list/tuple/set values with = ANY(%s),
    everything else with equality. An empty condition yields no clause.
    """
    if not where:
        return sql.SQL(""), []

    terms = []
    params = []
    for field, value in where.items():
        column = sql.Identifier(field)
        if value is None:
            terms.append(sql.SQL("{} IS NULL").format(column))
        elif isinstance(value, (list, tuple, set)):
            terms.append(sql.SQL("{} = ANY(%s)").format(column))
            params.append(list(value))
        else:
            terms.append(sql.SQL("{} = %s").format(column))
            params.append(value)

    return sql.SQL(" WHERE ") + sql.SQL(" AND ").join(terms), params


class SqlRunner:
    """
    Executes Entity-based CRUD statements against PostgreSQL.
    Every call runs on its own connection from db.get_connection().
    """

    def __init__(self, database_url: str | None = None):
        self.database_url = database_url

    def _insert_statement(self, entity: Entity, returning: bool = False) -> tuple[sql.Composable, list]:
        if entity:
            query = sql.SQL("INSERT INTO {} ({}) VALUES ({})").format(
                _table(entity),
                sql.SQL(", ").join(map(sql.Identifier, entity.keys())),
                sql.SQL(", ").join(sql.Placeholder() * len(entity)),
            )
        else:
            query = sql.SQL("INSERT INTO {} DEFAULT VALUES").format(_table(entity))
        if returning:
            query += sql.SQL(" RETURNING *")
        return query, list(entity.values())

    def insert(self, entity: Entity) -> int:
        """Insert a record. Returns the number of rows inserted."""
        query, params = self._insert_statement(entity)
        logger.debug("INSERT into %s: %s", entity.table_name, params)
        return db.execute(query, tuple(params), self.database_url)

    def insert_for_generated_keys(self, entity: Entity) -> List[Any]:
        """
        Insert a record and return the values of the inserted row.

        Values come back in the table's column order, as the database
        reports the generated keys of a RETURNING * insert.
        """
        query, params = self._insert_statement(entity, returning=True)
        logger.debug("INSERT into %s returning keys: %s", entity.table_name, params)
        row = db.fetch_one(query, tuple(params), self.database_url)
        return list(row.values()) if row else []

    def insert_for_generated_key(self, entity: Entity) -> Optional[Any]:
        """Insert a record and return its first generated key, typically a serial id."""
        keys = self.insert_for_generated_keys(entity)
        return keys[0] if keys else None

    def delete(self, where: Entity) -> int:
        clause, params = _where_clause(where)
        query = sql.SQL("DELETE FROM {}").format(_table(where)) + clause
        logger.debug("DELETE from %s where %s", where.table_name, dict(where))
        return db.execute(query, tuple(params), self.database_url)

    def update(self, record: Entity, where: Entity) -> int:
        """
        Update the rows matching where with the fields of record.

        The table comes from where, falling back to record. An empty record
        updates nothing and returns 0.
        """
        if not record:
            return 0
        table_source = where if where.table_name else record
        assignments = sql.SQL(", ").join(
            sql.SQL("{} = %s").format(sql.Identifier(field)) for field in record.keys()
        )
        clause, where_params = _where_clause(where)
        query = (
            sql.SQL("UPDATE {} SET {}").format(_table(table_source), assignments) + clause
        )
        params = list(record.values()) + where_params
        logger.debug("UPDATE %s set %s where %s", table_source.table_name, dict(record), dict(where))
        return db.execute(query, tuple(params), self.database_url)

    def find(self, columns: Optional[List[str]], where: Entity, handler: Handler) -> Any:
        """
        Select rows matching where and shape them with handler.

        Args:
            columns: Columns to select, None for all
            where: Condition entity, empty for every row
            handler: Result handler, e.g. handlers.to_entity_list

        Returns:
            Whatever handler builds from the fetched rows
        """
        if columns:
            selected = sql.SQL(", ").join(map(sql.Identifier, columns))
        else:
            selected = sql.SQL("*")
        clause, params = _where_clause(where)
        query = sql.SQL("SELECT {} FROM {}").format(selected, _table(where)) + clause
        logger.debug("SELECT from %s where %s", where.table_name, dict(where))
        rows = db.fetch_all(query, tuple(params), self.database_url)
        return handler(rows, where.table_name)

    def count(self, where: Entity) -> int:
        clause, params = _where_clause(where)
        query = sql.SQL("SELECT COUNT(*) AS count FROM {}").format(_table(where)) + clause
        logger.debug("COUNT from %s where %s", where.table_name, dict(where))
        row = db.fetch_one(query, tuple(params), self.database_url)
        return int(row["count"]) if row else 0
