"""
Module: payroll_kernel.models.employee
Responsibility: ORM persistence for registry snapshots -- one row per present
    employee plus a single state row carrying the id counter.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - employee_id is the id the registry assigned; rows never renumber.
    - payroll_registry_state holds exactly one row (id = 1) whose next_id is
      the registry counter.  Retired ids stay retired across save/load
      because the counter is stored, not recomputed from max(employee_id).
"""

from sqlalchemy import JSON, BigInteger, CheckConstraint, Text
from sqlalchemy.orm import Mapped, mapped_column

from payroll_kernel.db.base import Base, IntegerString

REGISTRY_STATE_ROW_ID = 1


class EmployeeRow(Base):
    """A present employee as stored."""

    __tablename__ = "payroll_employees"

    __table_args__ = (
        CheckConstraint("employee_id >= 1", name="ck_payroll_employee_id_positive"),
    )

    employee_id: Mapped[int] = mapped_column(
        BigInteger,
        primary_key=True,
        autoincrement=False,
    )

    # Primary disbursement account
    account: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    # Annual salary in the smallest currency unit; unbounded, sign checked on load
    salary: Mapped[int] = mapped_column(
        IntegerString,
        nullable=False,
    )

    # Allocation accounts, in creation order (JSON array of strings)
    allocations: Mapped[list[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
    )

    def __repr__(self) -> str:
        return f"<EmployeeRow {self.employee_id}: {self.account}>"


class RegistryStateRow(Base):
    """Single-row table holding the registry id counter."""

    __tablename__ = "payroll_registry_state"

    __table_args__ = (
        CheckConstraint("next_id >= 1", name="ck_payroll_registry_next_id_positive"),
    )

    id: Mapped[int] = mapped_column(
        BigInteger,
        primary_key=True,
        autoincrement=False,
        default=REGISTRY_STATE_ROW_ID,
    )

    next_id: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        default=1,
    )
