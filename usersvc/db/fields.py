from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def StringColumn(max_length: int = 255, **kwargs):
    """A string column with a max length."""
    return Column(String(max_length), **kwargs)


def IntegerColumn(**kwargs):
    """An integer column."""
    return Column(Integer, **kwargs)


def BooleanColumn(**kwargs):
    """A boolean column."""
    return Column(Boolean, **kwargs)


def DateTimeColumn(**kwargs):
    """A timezone-aware datetime column."""
    return Column(DateTime(timezone=True), **kwargs)


def CreatedAtColumn(**kwargs):
    """A datetime column filled in by the store on insert."""
    kwargs.setdefault("nullable", False)
    return DateTimeColumn(default=utcnow, **kwargs)


def UpdatedAtColumn(**kwargs):
    """A datetime column filled in by the store on insert and refreshed on every update."""
    kwargs.setdefault("nullable", False)
    return DateTimeColumn(default=utcnow, onupdate=utcnow, **kwargs)
