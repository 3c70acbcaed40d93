from crudgen.db.engine import get_engine
from crudgen.db.memory import ForeignKey, InMemoryStore
from crudgen.db.sql import SqlAlchemyStore

__all__ = [
    "ForeignKey",
    "InMemoryStore",
    "SqlAlchemyStore",
    "get_engine",
]
