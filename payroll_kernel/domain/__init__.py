"""
Pure domain layer.

Value objects, validation and arithmetic with NO dependencies on
SQLAlchemy, the database, or I/O (other than SystemClock).
"""

from payroll_kernel.domain.accounts import (
    account_problem,
    validate_account,
    validate_allocations,
    validate_salary,
)
from payroll_kernel.domain.burnrate import monthly_burn_rate, total_yearly_salary
from payroll_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from payroll_kernel.domain.employee import Employee

__all__ = [
    "Clock",
    "DeterministicClock",
    "Employee",
    "SystemClock",
    "account_problem",
    "monthly_burn_rate",
    "total_yearly_salary",
    "validate_account",
    "validate_allocations",
    "validate_salary",
]
