"""Service layer package"""

from .base import BaseService
from .user_service import UserService

__all__ = ["BaseService", "UserService"]
