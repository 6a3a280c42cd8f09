"""
Registry mutation history (``payroll_kernel.events``).

Every successful mutation of an EmployeeRegistry appends exactly one
RegistryEvent.  Failed operations append nothing.  Sequence numbers are
strictly increasing from 1 and never reused, mirroring the way the
hosting ledger records one event per state transition.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class RegistryAction(str, Enum):
    """Types of registry mutations."""

    EMPLOYEE_ADDED = "employee_added"
    EMPLOYEE_REMOVED = "employee_removed"
    EMPLOYEE_SALARY_CHANGED = "employee_salary_changed"


@dataclass(frozen=True)
class RegistryEvent:
    """One committed registry mutation.  The payload is a read-only view."""
    sequence: int
    action: RegistryAction
    employee_id: int
    occurred_at: datetime
    payload: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


class EventLog:
    """Append-only in-memory list of RegistryEvents."""

    def __init__(self) -> None:
        self._events: list[RegistryEvent] = []

    def append(
        self,
        action: RegistryAction,
        employee_id: int,
        occurred_at: datetime,
        payload: dict[str, Any],
    ) -> RegistryEvent:
        event = RegistryEvent(
            sequence=len(self._events) + 1,
            action=action,
            employee_id=employee_id,
            occurred_at=occurred_at,
            payload=MappingProxyType(dict(payload)),
        )
        self._events.append(event)
        return event

    def snapshot(self) -> tuple[RegistryEvent, ...]:
        return tuple(self._events)

    def for_employee(self, employee_id: int) -> tuple[RegistryEvent, ...]:
        return tuple(e for e in self._events if e.employee_id == employee_id)

    def __len__(self) -> int:
        return len(self._events)
