"""
tabledao

Single-table data access: a DaoTemplate bound to one table and primary key,
working on loosely-typed Entity records through a pluggable executor.
"""

from tabledao.entity import Entity
from tabledao.errors import DaoError, MissingPrimaryKeyError
from tabledao.executor import Executor
from tabledao.runner import SqlRunner
from tabledao.template import DaoTemplate

__all__ = [
    "DaoError",
    "DaoTemplate",
    "Entity",
    "Executor",
    "MissingPrimaryKeyError",
    "SqlRunner",
]
