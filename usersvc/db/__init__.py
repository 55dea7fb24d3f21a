from .fields import (
    BooleanColumn,
    CreatedAtColumn,
    DateTimeColumn,
    IntegerColumn,
    StringColumn,
    UpdatedAtColumn,
)
from .manager import DatabaseManager, Repository, init_database
from .models import Model

__all__ = [
    "DatabaseManager",
    "Model",
    "Repository",
    "init_database",
    "StringColumn",
    "IntegerColumn",
    "BooleanColumn",
    "DateTimeColumn",
    "CreatedAtColumn",
    "UpdatedAtColumn",
]
