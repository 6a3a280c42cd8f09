"""
RegistryStore -- snapshot persistence for EmployeeRegistry.

Responsibility:
    Writes the present employees and the id counter of a registry to the
    database, and rebuilds a registry from those rows.

Architecture position:
    Kernel > Services -- imperative shell around the in-memory registry.
    The registry never imports this module.

Invariants enforced:
    - Transaction boundaries belong to the caller: the store flushes within
      the caller's transaction and never commits or rolls back.
    - The counter is stored explicitly, so ids retired before a save stay
      retired after a load.
    - Loaded state passes through ``EmployeeRegistry.restore``, which
      re-validates every record.

Failure modes:
    - RegistryCorruptedError: stored rows violate the registry invariants
      (e.g. an employee id at or above the stored next_id).
    - SQLAlchemy errors propagate unchanged.

Non-goals:
    - The mutation history is not persisted.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from payroll_kernel.config import RegistryConfig
from payroll_kernel.domain.clock import Clock
from payroll_kernel.domain.employee import Employee
from payroll_kernel.logging_config import get_logger
from payroll_kernel.models.employee import (
    REGISTRY_STATE_ROW_ID,
    EmployeeRow,
    RegistryStateRow,
)
from payroll_kernel.registry import FIRST_EMPLOYEE_ID, EmployeeRegistry

logger = get_logger("store")


class RegistryStore:
    """
    Save/load an EmployeeRegistry snapshot through a SQLAlchemy session.

    Usage:
        with session_scope() as session:
            RegistryStore(session).save(registry)

        with session_scope() as session:
            registry = RegistryStore(session).load()
    """

    def __init__(self, session: Session):
        """
        Args:
            session: SQLAlchemy session (should be in a transaction).
        """
        self._session = session

    def save(self, registry: EmployeeRegistry) -> None:
        """
        Replace the stored snapshot with the current state of ``registry``.

        Postconditions:
            - One EmployeeRow per present employee.
            - The state row's next_id equals ``registry.next_id``.
        """
        employees = registry.list_employees()
        present_ids = {e.id for e in employees}

        existing = {
            row.employee_id: row
            for row in self._session.execute(select(EmployeeRow)).scalars()
        }
        for employee_id, row in existing.items():
            if employee_id not in present_ids:
                self._session.delete(row)

        for e in employees:
            row = existing.get(e.id)
            if row is None:
                self._session.add(
                    EmployeeRow(
                        employee_id=e.id,
                        account=e.account,
                        salary=e.salary,
                        allocations=list(e.allocations),
                    )
                )
            else:
                row.account = e.account
                row.salary = e.salary
                row.allocations = list(e.allocations)

        state = self._session.get(RegistryStateRow, REGISTRY_STATE_ROW_ID)
        if state is None:
            state = RegistryStateRow(id=REGISTRY_STATE_ROW_ID, next_id=registry.next_id)
            self._session.add(state)
        else:
            state.next_id = registry.next_id

        self._session.flush()
        logger.info(
            "registry_saved",
            extra={"employee_count": len(employees), "next_id": registry.next_id},
        )

    def load(
        self,
        config: RegistryConfig | None = None,
        clock: Clock | None = None,
    ) -> EmployeeRegistry:
        """
        Rebuild a registry from the stored snapshot.

        An empty database yields an empty registry whose next id is 1.

        Raises:
            RegistryCorruptedError: stored rows violate registry invariants.
        """
        state = self._session.get(RegistryStateRow, REGISTRY_STATE_ROW_ID)
        next_id = state.next_id if state is not None else FIRST_EMPLOYEE_ID

        rows = self._session.execute(
            select(EmployeeRow).order_by(EmployeeRow.employee_id)
        ).scalars().all()

        employees = [
            Employee(
                id=row.employee_id,
                account=row.account,
                salary=row.salary,
                allocations=tuple(row.allocations or ()),
            )
            for row in rows
        ]

        registry = EmployeeRegistry.restore(
            employees, next_id, config=config, clock=clock
        )
        logger.info(
            "registry_loaded",
            extra={"employee_count": len(employees), "next_id": next_id},
        )
        return registry

    def stored_next_id(self) -> int | None:
        """The persisted id counter, or None if nothing was ever saved."""
        state = self._session.get(RegistryStateRow, REGISTRY_STATE_ROW_ID)
        return state.next_id if state is not None else None
