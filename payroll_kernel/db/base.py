"""
Module: payroll_kernel.db.base
Responsibility: Declarative base for all SQLAlchemy ORM models, the type
    annotation map that keeps column types consistent, and portable column
    types for values the registry does not bound.
Architecture position: Kernel > DB.  This is the lowest-level import target
    within the persistence layer.  MUST NOT import from models/ or store.py.

Invariants enforced:
    - int maps to BigInteger: ids and counters are stored at 64 bits.
    - datetime maps to DateTime(timezone=True).
    - Salaries use IntegerString: exact at any magnitude, on every backend.
"""

from datetime import datetime
from typing import ClassVar

from sqlalchemy import BigInteger, DateTime, Text
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator


class IntegerString(TypeDecorator):
    """
    Arbitrary-precision integer stored as its decimal text.

    Contract:
        Transparently converts between Python ``int`` and a base-10 string,
        so values beyond 64 bits round-trip exactly (SQLite INTEGER and
        PostgreSQL BIGINT both stop at 2**63 - 1, and Numeric on SQLite
        goes through float).

    Guarantees:
        - process_bind_param: int -> str on INSERT/UPDATE.
        - process_result_value: str -> int on SELECT.
        - cache_ok=True enables SQLAlchemy statement caching.
    """

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None:
            return str(int(value))
        return None

    def process_result_value(self, value, dialect):
        if value is not None:
            return int(value)
        return None


class Base(DeclarativeBase):
    """
    Declarative base for all payroll models.

    Unlike a UUID-keyed schema, registry rows keep the integer ids the
    registry assigned, so each model declares its own primary key.
    """

    type_annotation_map: ClassVar[dict] = {
        datetime: DateTime(timezone=True),
        int: BigInteger,
    }
