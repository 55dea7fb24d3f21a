"""
Custom exceptions for the user service layer
"""

from typing import Any, Dict, Optional


class UserServiceException(Exception):
    """Base exception for usersvc"""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class DuplicateEmailError(UserServiceException):
    """Raised when an email is already held by another user"""

    def __init__(self, email: Optional[str] = None, message: str = "Email already taken"):
        super().__init__(message, status_code=400, details={"email": email} if email else None)
        self.email = email


class UserNotFoundError(UserServiceException):
    """Raised when the target user of an operation does not exist"""

    def __init__(self, user_id: Any = None, message: str = "User not found"):
        super().__init__(message, status_code=404, details={"user_id": user_id} if user_id is not None else None)
        self.user_id = user_id
