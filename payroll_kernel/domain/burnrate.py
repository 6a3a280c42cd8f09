"""
Burn Rate Helpers (``payroll_kernel.domain.burnrate``).

Responsibility
--------------
Pure aggregation over yearly salaries.  No I/O, no registry access.

Invariants enforced
-------------------
* Integer arithmetic only.  Python ints are unbounded, so large payrolls
  cannot overflow the accumulator.
* The burn rate is floor(sum / months); salaries are summed before dividing,
  never divided individually.
"""

from __future__ import annotations

from collections.abc import Iterable


def total_yearly_salary(salaries: Iterable[int]) -> int:
    """Sum of ``salaries``; 0 for an empty iterable."""
    return sum(salaries, 0)


def monthly_burn_rate(salaries: Iterable[int], months_per_year: int = 12) -> int:
    """
    Floor of the total yearly salary divided by ``months_per_year``.

    >>> monthly_burn_rate([105000, 85000, 133000])
    26916
    """
    if months_per_year <= 0:
        raise ValueError("months_per_year must be positive")
    return total_yearly_salary(salaries) // months_per_year
