"""
usersvc - CRUD service layer for user records on async SQLAlchemy
"""

from .db import DatabaseManager, Model, Repository, init_database
from .exceptions import DuplicateEmailError, UserNotFoundError, UserServiceException
from .models import PRIVATE_FIELDS, User
from .repositories import UserRepository
from .schemas import QueryOptions, UserCreate, UserPage, UserPublic, UserUpdate
from .services import BaseService, UserService
from .settings import Settings, get_settings

__version__ = "0.1.0"

__all__ = [
    "BaseService",
    "DatabaseManager",
    "DuplicateEmailError",
    "Model",
    "PRIVATE_FIELDS",
    "QueryOptions",
    "Repository",
    "Settings",
    "User",
    "UserCreate",
    "UserNotFoundError",
    "UserPage",
    "UserPublic",
    "UserRepository",
    "UserService",
    "UserServiceException",
    "UserUpdate",
    "get_settings",
    "init_database",
]
