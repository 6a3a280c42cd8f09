"""
Typed Exception Hierarchy for the Payroll Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers of the registry must be able to tell "you sent bad data" apart from
"that employee does not exist" without parsing message strings.  Every error
therefore has:

  1. A TYPED exception class (catch by type, not message)
  2. A CODE class attribute (machine-readable, API-safe)
  3. Structured DATA attributes (not just a message string)

Example:
    try:
        registry.set_employee_salary(employee_id, salary)
    except EmployeeNotFoundError as e:
        api_response(code=e.code, employee_id=e.employee_id)
    except InvalidSalaryError as e:
        api_response(code=e.code, reason=e.reason)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    PayrollKernelError (base)
    |
    +-- InvalidInputError
    |   +-- InvalidAccountError
    |   +-- InvalidAllocationError
    |   +-- InvalidSalaryError
    |
    +-- NotFoundError
    |   +-- EmployeeNotFoundError
    |
    +-- RegistryStateError
        +-- RegistryCorruptedError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                 | When Raised
----------------|----------------------|------------------------------------------
Input           | INVALID_ACCOUNT      | Account identifier empty / malformed
                | INVALID_ALLOCATION   | An allocation entry is malformed
                | INVALID_SALARY       | Salary negative, non-integer, over ceiling
----------------|----------------------|------------------------------------------
Lookup          | EMPLOYEE_NOT_FOUND   | Id absent, removed, or never assigned
----------------|----------------------|------------------------------------------
State           | REGISTRY_CORRUPTED   | Restored state violates registry invariants

===============================================================================
HANDLING NOTES
===============================================================================

* Input and lookup errors are caller errors.  The registry never retries and
  never applies a partial mutation before raising.
* RegistryCorruptedError means a persisted snapshot cannot be trusted.  Do
  not continue processing against it.
"""


class PayrollKernelError(Exception):
    """
    Base exception for all payroll kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "PAYROLL_KERNEL_ERROR"


# Input validation exceptions


class InvalidInputError(PayrollKernelError):
    """Base exception for rejected operation arguments."""

    code: str = "INVALID_INPUT"


class InvalidAccountError(InvalidInputError):
    """Primary account identifier is malformed."""

    code: str = "INVALID_ACCOUNT"

    def __init__(self, account: object, reason: str):
        self.account = account
        self.reason = reason
        super().__init__(f"Invalid account {account!r}: {reason}")


class InvalidAllocationError(InvalidInputError):
    """An allocation account (or the allocation sequence itself) is malformed."""

    code: str = "INVALID_ALLOCATION"

    def __init__(self, index: int | None, allocation: object, reason: str):
        self.index = index
        self.allocation = allocation
        self.reason = reason
        if index is None:
            super().__init__(f"Invalid allocations {allocation!r}: {reason}")
        else:
            super().__init__(
                f"Invalid allocation at position {index} ({allocation!r}): {reason}"
            )


class InvalidSalaryError(InvalidInputError):
    """Salary is not a non-negative integer within the configured ceiling."""

    code: str = "INVALID_SALARY"

    def __init__(self, salary: object, reason: str):
        self.salary = salary
        self.reason = reason
        super().__init__(f"Invalid salary {salary!r}: {reason}")


# Lookup exceptions


class NotFoundError(PayrollKernelError):
    """Base exception for references to records that are not present."""

    code: str = "NOT_FOUND"


class EmployeeNotFoundError(NotFoundError):
    """No present employee has the given id."""

    code: str = "EMPLOYEE_NOT_FOUND"

    def __init__(self, employee_id: object):
        self.employee_id = employee_id
        super().__init__(f"Employee not found: {employee_id!r}")


# Registry state exceptions


class RegistryStateError(PayrollKernelError):
    """Base exception for registry-level state problems."""

    code: str = "REGISTRY_STATE_ERROR"


class RegistryCorruptedError(RegistryStateError):
    """
    Restored registry state violates the registry invariants.

    Raised when a snapshot holds an id outside ``[1, next_id)``, a duplicate
    id, or a record that would have been rejected at the mutation boundary.
    """

    code: str = "REGISTRY_CORRUPTED"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Registry state is corrupted: {reason}")
