"""
EmployeeRegistry -- the payroll registry aggregate.

Responsibility:
    Owns the set of present employees, assigns their ids, validates every
    mutation at the boundary, and derives the monthly burn rate from live
    state.

Architecture position:
    Kernel -- in-memory aggregate root.  Persistence lives in
    ``payroll_kernel.store``; this module has no database dependency.

Invariants enforced:
    - Ids come from a monotonic counter starting at 1.  The counter advances
      on every successful add and never goes back, so a removed id is
      retired for good.
    - ``employee_count`` always equals the number of present records.
    - Every present id lies in ``[1, next_id)``.
    - Stored accounts, allocations and salaries were validated on the way in;
      reads never re-validate.
    - All-or-nothing: each operation validates its whole input before it
      touches state.  A raised error means nothing changed.

Failure modes:
    - InvalidAccountError / InvalidAllocationError / InvalidSalaryError
      (all InvalidInputError) on malformed arguments.
    - EmployeeNotFoundError on any id that is not present, including a
      second remove of the same id.
    - RegistryCorruptedError from ``restore()`` when a snapshot breaks the
      invariants above.

Concurrency:
    No internal locks.  The hosting substrate serializes operations; callers
    sharing an instance across threads must do the same.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Any

from payroll_kernel.config import RegistryConfig
from payroll_kernel.domain.accounts import (
    validate_account,
    validate_allocations,
    validate_salary,
)
from payroll_kernel.domain.burnrate import monthly_burn_rate, total_yearly_salary
from payroll_kernel.domain.clock import Clock, SystemClock
from payroll_kernel.domain.employee import Employee
from payroll_kernel.events import EventLog, RegistryAction, RegistryEvent
from payroll_kernel.exceptions import (
    EmployeeNotFoundError,
    InvalidInputError,
    PayrollKernelError,
    RegistryCorruptedError,
)
from payroll_kernel.logging_config import LogContext, get_logger

logger = get_logger("registry")

FIRST_EMPLOYEE_ID = 1


class EmployeeRegistry:
    """
    Indexed collection of Employee records with stable integer ids.

    Contract:
        ``add_employee`` returns 1 for the first employee, 2 for the second,
        and so on, regardless of intervening removals.  Lookups on an absent
        id raise EmployeeNotFoundError rather than returning a default
        record.  ``calculate_payroll_burnrate`` is recomputed from the
        present records on every call.

    Usage:
        registry = EmployeeRegistry()
        employee_id = registry.add_employee("0xca35...", ["0xd122..."], 105000)
        registry.set_employee_salary(employee_id, 95000)
        registry.calculate_payroll_burnrate()
    """

    def __init__(
        self,
        config: RegistryConfig | None = None,
        clock: Clock | None = None,
    ):
        self._config = config or RegistryConfig()
        self._clock = clock or SystemClock()
        self._account_pattern = self._config.compiled_account_pattern
        self._employees: dict[int, Employee] = {}
        self._next_id = FIRST_EMPLOYEE_ID
        self._employee_count = 0
        self._events = EventLog()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_employee(
        self,
        account: str,
        allocations: Sequence[str],
        salary: int,
    ) -> int:
        """
        Register a new employee and return its id.

        Validation order is account, then each allocation, then salary; the
        first failure is raised and no id is consumed.

        Raises:
            InvalidAccountError: ``account`` is malformed.
            InvalidAllocationError: ``allocations`` or one of its entries is malformed.
            InvalidSalaryError: ``salary`` is negative, not an int, or over the ceiling.
        """
        with LogContext.bind(operation="add_employee"):
            try:
                account = validate_account(account, self._account_pattern)
                allocations = validate_allocations(allocations, self._account_pattern)
                salary = validate_salary(salary, self._config.max_salary)
            except InvalidInputError as exc:
                self._log_rejected("employee_add_rejected", exc)
                raise

            employee_id = self._next_id
            employee = Employee(
                id=employee_id,
                account=account,
                salary=salary,
                allocations=allocations,
            )
            self._employees[employee_id] = employee
            self._employee_count += 1
            self._next_id += 1

            self._record(
                RegistryAction.EMPLOYEE_ADDED,
                employee_id,
                {
                    "account": account,
                    "allocations": allocations,
                    "salary": salary,
                },
            )
            logger.info(
                "employee_added",
                extra={
                    "employee_id": employee_id,
                    "salary": salary,
                    "allocation_count": len(allocations),
                    "employee_count": self._employee_count,
                },
            )
            return employee_id

    def remove_employee(self, employee_id: int) -> None:
        """
        Delete a present employee.  The id is retired permanently.

        Raises:
            EmployeeNotFoundError: ``employee_id`` is not present, including
                when it was already removed.
        """
        with LogContext.bind(operation="remove_employee", employee_id=str(employee_id)):
            try:
                employee = self._require(employee_id)
            except EmployeeNotFoundError as exc:
                self._log_rejected("employee_remove_rejected", exc)
                raise

            del self._employees[employee.id]
            self._employee_count -= 1

            self._record(
                RegistryAction.EMPLOYEE_REMOVED,
                employee.id,
                {"account": employee.account, "salary": employee.salary},
            )
            logger.info(
                "employee_removed",
                extra={
                    "employee_id": employee.id,
                    "employee_count": self._employee_count,
                },
            )

    def set_employee_salary(self, employee_id: int, salary: int) -> None:
        """
        Overwrite the salary of a present employee.

        Presence is checked before the salary, so an absent id reports
        EmployeeNotFoundError even when the salary is also invalid.

        Raises:
            EmployeeNotFoundError: ``employee_id`` is not present.
            InvalidSalaryError: ``salary`` is negative, not an int, or over the ceiling.
        """
        with LogContext.bind(operation="set_employee_salary", employee_id=str(employee_id)):
            try:
                employee = self._require(employee_id)
                salary = validate_salary(salary, self._config.max_salary)
            except PayrollKernelError as exc:
                self._log_rejected("employee_salary_change_rejected", exc)
                raise

            old_salary = employee.salary
            self._employees[employee.id] = employee.with_salary(salary)

            self._record(
                RegistryAction.EMPLOYEE_SALARY_CHANGED,
                employee.id,
                {"old_salary": old_salary, "new_salary": salary},
            )
            logger.info(
                "employee_salary_changed",
                extra={
                    "employee_id": employee.id,
                    "old_salary": old_salary,
                    "new_salary": salary,
                },
            )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_employee(self, employee_id: int) -> tuple[str, int, tuple[str, ...]]:
        """
        Return ``(account, salary, allocations)`` for a present employee.

        Raises:
            EmployeeNotFoundError: ``employee_id`` is not present.
        """
        return self._require(employee_id).as_tuple()

    def get_employee_record(self, employee_id: int) -> Employee:
        """Return the full frozen record for a present employee."""
        return self._require(employee_id)

    def get_employee_count(self) -> int:
        return self._employee_count

    def calculate_payroll_burnrate(self) -> int:
        """
        Monthly burn rate: floor(sum of present salaries / months_per_year).

        Recomputed from the present records on every call.  An empty
        registry yields 0.
        """
        salaries = [e.salary for e in self._employees.values()]
        total = total_yearly_salary(salaries)
        burn_rate = monthly_burn_rate(salaries, self._config.months_per_year)
        logger.debug(
            "payroll_burnrate_calculated",
            extra={
                "employee_count": self._employee_count,
                "total_yearly_salary": total,
                "burn_rate": burn_rate,
            },
        )
        return burn_rate

    def calculate_total_yearly_salary(self) -> int:
        return total_yearly_salary(e.salary for e in self._employees.values())

    def has_employee(self, employee_id: Any) -> bool:
        return self._lookup(employee_id) is not None

    def employee_ids(self) -> list[int]:
        """Present ids in ascending order."""
        return sorted(self._employees)

    def list_employees(self) -> list[Employee]:
        """Present records in ascending id order."""
        return [self._employees[i] for i in sorted(self._employees)]

    def events(self) -> tuple[RegistryEvent, ...]:
        """Mutation history, oldest first.  Empty when events are disabled."""
        return self._events.snapshot()

    def events_for(self, employee_id: int) -> tuple[RegistryEvent, ...]:
        return self._events.for_employee(employee_id)

    @property
    def next_id(self) -> int:
        """The id the next successful ``add_employee`` will return."""
        return self._next_id

    @property
    def config(self) -> RegistryConfig:
        return self._config

    def __len__(self) -> int:
        return self._employee_count

    def __contains__(self, employee_id: object) -> bool:
        return self.has_employee(employee_id)

    def __iter__(self) -> Iterator[Employee]:
        return iter(self.list_employees())

    def __repr__(self) -> str:
        return (
            f"EmployeeRegistry(employee_count={self._employee_count}, "
            f"next_id={self._next_id})"
        )

    # ------------------------------------------------------------------
    # Restoration
    # ------------------------------------------------------------------

    @classmethod
    def restore(
        cls,
        employees: Iterable[Employee],
        next_id: int,
        config: RegistryConfig | None = None,
        clock: Clock | None = None,
    ) -> "EmployeeRegistry":
        """
        Rebuild a registry from a snapshot of present records.

        Every record is re-validated against ``config`` and every id must lie
        in ``[1, next_id)``.  The mutation history starts empty.

        Raises:
            RegistryCorruptedError: the snapshot breaks a registry invariant.
        """
        registry = cls(config=config, clock=clock)

        if isinstance(next_id, bool) or not isinstance(next_id, int):
            raise RegistryCorruptedError(f"next_id must be an integer, got {next_id!r}")
        if next_id < FIRST_EMPLOYEE_ID:
            raise RegistryCorruptedError(f"next_id must be at least {FIRST_EMPLOYEE_ID}, got {next_id}")

        restored: dict[int, Employee] = {}
        for employee in employees:
            if isinstance(employee.id, bool) or not isinstance(employee.id, int):
                raise RegistryCorruptedError(f"employee id must be an integer, got {employee.id!r}")
            if not FIRST_EMPLOYEE_ID <= employee.id < next_id:
                raise RegistryCorruptedError(
                    f"employee id {employee.id} outside [{FIRST_EMPLOYEE_ID}, {next_id})"
                )
            if employee.id in restored:
                raise RegistryCorruptedError(f"duplicate employee id {employee.id}")
            try:
                account = validate_account(employee.account, registry._account_pattern)
                allocations = validate_allocations(employee.allocations, registry._account_pattern)
                salary = validate_salary(employee.salary, registry._config.max_salary)
            except InvalidInputError as exc:
                raise RegistryCorruptedError(
                    f"employee {employee.id}: {exc}"
                ) from exc
            restored[employee.id] = Employee(
                id=employee.id,
                account=account,
                salary=salary,
                allocations=allocations,
            )

        registry._employees = restored
        registry._employee_count = len(restored)
        registry._next_id = next_id

        logger.info(
            "registry_restored",
            extra={"employee_count": registry._employee_count, "next_id": next_id},
        )
        return registry

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _lookup(self, employee_id: Any) -> Employee | None:
        # True == 1 and hashes alike; a bool is never an employee id
        if isinstance(employee_id, bool) or not isinstance(employee_id, int):
            return None
        return self._employees.get(employee_id)

    def _require(self, employee_id: Any) -> Employee:
        employee = self._lookup(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return employee

    def _record(
        self,
        action: RegistryAction,
        employee_id: int,
        payload: dict[str, Any],
    ) -> None:
        if self._config.record_events:
            self._events.append(action, employee_id, self._clock.now(), payload)

    def _log_rejected(self, message: str, exc: PayrollKernelError) -> None:
        logger.warning(
            message,
            extra={"error_code": exc.code, "error": str(exc)},
        )
