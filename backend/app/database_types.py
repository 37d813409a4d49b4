"""
Custom SQLAlchemy types for cross-database compatibility.
"""
import enum
from typing import Type

from sqlalchemy import JSON, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import JSONB


# JSON documents: JSONB on PostgreSQL, JSON text on SQLite.
# Keeps SQLAlchemy's JSON comparator so `column["key"].as_string()`
# compiles to `->>` on PostgreSQL and JSON_EXTRACT on SQLite.
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


def enum_by_value(enum_cls: Type[enum.Enum], name: str) -> SQLEnum:
    """
    Enum column type that stores member values ("job_seeker") instead of
    member names ("JOB_SEEKER"), so rows stay readable from raw SQL and
    match the values used in the JSON API.
    """
    return SQLEnum(
        enum_cls,
        name=name,
        values_callable=lambda members: [member.value for member in members],
        validate_strings=True,
    )
