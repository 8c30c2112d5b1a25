"""Declarative base and shared column helpers for ORM models."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, mapped_column


class Base(DeclarativeBase):
    """Base class for every ORM model in the application."""


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def uuid_pk():
    """String UUID primary key column."""
    return mapped_column(String(36), primary_key=True, default=generate_uuid)


def created_at_column():
    return mapped_column(DateTime(timezone=True), nullable=False, default=utc_now)
