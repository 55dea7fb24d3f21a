from sqlalchemy.orm import DeclarativeBase


class Model(DeclarativeBase):
    """Declarative base shared by every mapped table"""

    pass
