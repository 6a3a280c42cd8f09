"""
Account identifier validation.

Pure checks with no I/O.  Used at the registry's mutation boundary so that
malformed accounts, allocations and salaries never reach stored state.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

from payroll_kernel.exceptions import (
    InvalidAccountError,
    InvalidAllocationError,
    InvalidSalaryError,
)


def account_problem(account: Any, pattern: re.Pattern[str] | None = None) -> str | None:
    """
    Return why ``account`` is not a well-formed identifier, or None if it is.

    An identifier is a non-blank ``str`` without whitespace.  When
    ``pattern`` is given the whole identifier must match it.
    """
    if not isinstance(account, str):
        return f"must be a string, not {type(account).__name__}"
    if not account.strip():
        return "must not be empty"
    if any(ch.isspace() for ch in account):
        return "must not contain whitespace"
    if pattern is not None and pattern.fullmatch(account) is None:
        return f"does not match pattern {pattern.pattern!r}"
    return None


def validate_account(account: Any, pattern: re.Pattern[str] | None = None) -> str:
    """Return ``account`` unchanged or raise InvalidAccountError."""
    problem = account_problem(account, pattern)
    if problem is not None:
        raise InvalidAccountError(account, problem)
    return account


def validate_allocations(
    allocations: Any,
    pattern: re.Pattern[str] | None = None,
) -> tuple[str, ...]:
    """
    Normalize ``allocations`` to a tuple, preserving order and duplicates.

    A bare string is rejected rather than iterated character by character.

    Raises:
        InvalidAllocationError: the sequence itself or one entry is malformed.
    """
    if allocations is None:
        raise InvalidAllocationError(None, allocations, "must be a sequence, not None")
    if isinstance(allocations, (str, bytes, bytearray)):
        raise InvalidAllocationError(
            None, allocations, "must be a sequence of accounts, not a single string"
        )
    if not isinstance(allocations, Iterable):
        raise InvalidAllocationError(
            None, allocations, f"must be a sequence, not {type(allocations).__name__}"
        )

    normalized = tuple(allocations)
    for index, allocation in enumerate(normalized):
        problem = account_problem(allocation, pattern)
        if problem is not None:
            raise InvalidAllocationError(index, allocation, problem)
    return normalized


def validate_salary(salary: Any, max_salary: int | None = None) -> int:
    """Return ``salary`` unchanged or raise InvalidSalaryError."""
    # bool is an int subclass; True is not a salary
    if isinstance(salary, bool) or not isinstance(salary, int):
        raise InvalidSalaryError(salary, f"must be an integer, not {type(salary).__name__}")
    if salary < 0:
        raise InvalidSalaryError(salary, "cannot be negative")
    if max_salary is not None and salary > max_salary:
        raise InvalidSalaryError(salary, f"exceeds maximum of {max_salary}")
    return salary
