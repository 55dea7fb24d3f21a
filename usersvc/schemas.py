"""
User schemas
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .settings import get_settings

Role = Literal["user", "admin"]


class UserCreate(BaseModel):
    """User creation data"""

    model_config = ConfigDict(extra="forbid")

    email: str = Field(..., min_length=3, max_length=255, description="User email address")
    password: str = Field(..., min_length=8, max_length=128)
    name: Optional[str] = Field(None, max_length=100)
    role: Role = "user"
    is_email_verified: bool = False


class UserUpdate(BaseModel):
    """User update data; only the fields that are set get written"""

    model_config = ConfigDict(extra="forbid")

    email: Optional[str] = Field(None, min_length=3, max_length=255)
    password: Optional[str] = Field(None, min_length=8, max_length=128)
    name: Optional[str] = Field(None, max_length=100)
    role: Optional[Role] = None
    is_email_verified: Optional[bool] = None

    @field_validator("email", "password", "role", "is_email_verified")
    @classmethod
    def not_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("This field cannot be null.")
        return value

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class UserPublic(BaseModel):
    """Redacted user representation: no password, no timestamps"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: Optional[str] = None
    role: str = "user"
    is_email_verified: bool = False

    @classmethod
    def from_orm_user(cls, user: Any) -> "UserPublic":
        return cls.model_validate(user)


def _default_limit() -> int:
    return get_settings().pagination.default_limit


def _default_offset() -> int:
    return get_settings().pagination.default_offset


class QueryOptions(BaseModel):
    """Query options

    ``order`` uses the format ``field:(desc|asc)[,field:(desc|asc)...]``.
    """

    model_config = ConfigDict(extra="forbid")

    order: Optional[str] = None
    limit: int = Field(default_factory=_default_limit, ge=1)
    offset: int = Field(default_factory=_default_offset, ge=0)


class UserPage(BaseModel):
    """One page of a user query plus the total number of matching users"""

    total: int
    rows: List[UserPublic]
