from sqlalchemy import UniqueConstraint

from .db.fields import BooleanColumn, CreatedAtColumn, IntegerColumn, StringColumn, UpdatedAtColumn
from .db.models import Model
from .security import verify_password

# Columns stripped from every representation that leaves the service.
PRIVATE_FIELDS = ("password", "created_at", "updated_at")

EMAIL_CONSTRAINT = "uq_users_email"


class User(Model):
    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("email", name=EMAIL_CONSTRAINT),)

    id = IntegerColumn(primary_key=True, index=True)
    name = StringColumn(max_length=100, nullable=True)
    email = StringColumn(max_length=255, index=True, nullable=False)
    password = StringColumn(max_length=255, nullable=False)
    role = StringColumn(max_length=20, nullable=False, default="user")
    is_email_verified = BooleanColumn(nullable=False, default=False)
    created_at = CreatedAtColumn()
    updated_at = UpdatedAtColumn()

    def is_password_match(self, password: str) -> bool:
        return verify_password(password, self.password)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
