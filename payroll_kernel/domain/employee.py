"""
Employee value object (``payroll_kernel.domain.employee``).

Frozen dataclass with ZERO I/O.  The registry replaces records instead of
mutating them, so a record handed to a caller never changes underneath it.
"""

from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class Employee:
    """A payroll recipient as stored in the registry."""
    id: int
    account: str
    salary: int  # annual, smallest currency unit
    allocations: tuple[str, ...] = field(default_factory=tuple)

    def with_salary(self, salary: int) -> "Employee":
        """Return a copy carrying ``salary``; id, account and allocations unchanged."""
        return replace(self, salary=salary)

    def as_tuple(self) -> tuple[str, int, tuple[str, ...]]:
        """The ``(account, salary, allocations)`` shape returned by lookups."""
        return (self.account, self.salary, self.allocations)
