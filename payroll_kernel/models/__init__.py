"""ORM models for the payroll registry store."""

from payroll_kernel.models.employee import (
    REGISTRY_STATE_ROW_ID,
    EmployeeRow,
    RegistryStateRow,
)

__all__ = [
    "REGISTRY_STATE_ROW_ID",
    "EmployeeRow",
    "RegistryStateRow",
]
