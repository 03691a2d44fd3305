"""
Result handlers: give raw dict rows their result shape.

Each handler takes the fetched rows and the table they came from.
"""

from typing import List, Optional

from tabledao.entity import Entity


def to_entity(rows: List[dict], table_name: str) -> Optional[Entity]:
    """First row as an Entity, or None when nothing matched."""
    if not rows:
        return None
    return Entity(rows[0], table_name=table_name)


def to_entity_list(rows: List[dict], table_name: str) -> List[Entity]:
    """All rows as Entities, in fetch order."""
    return [Entity(row, table_name=table_name) for row in rows]
