"""
Payroll Kernel

An in-memory employee payroll registry with:
- Stable, never-reused integer employee ids
- Boundary validation of accounts, allocations and salaries
- All-or-nothing mutations with an append-only mutation history
- Monthly burn rate derived from live state
- Optional SQLAlchemy snapshot persistence
"""

__version__ = "0.1.0"
