"""
Registry Configuration Schema.

Defines the structure and defaults for employee registry settings.
Values may be supplied directly, from a dict, or from a YAML file.
"""

import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Self

import yaml

from payroll_kernel.logging_config import get_logger

logger = get_logger("config")

# Ledger-style 20-byte hex address, e.g. 0xca35b7d915458ef540ade6068dfe2f44e8fa733c
HEX_ADDRESS_PATTERN = r"0x[0-9a-fA-F]{40}"


@dataclass
class RegistryConfig:
    """
    Configuration schema for the employee registry.

    Field defaults accept any non-blank account token and compute a
    calendar-month burn rate.  Override at instantiation:

        config = RegistryConfig(
            account_pattern=HEX_ADDRESS_PATTERN,
            max_salary=10_000_000,
        )
    """

    # Burn rate divisor
    months_per_year: int = 12

    # Optional full-match regex for account identifiers
    account_pattern: str | None = None

    # Optional inclusive salary ceiling
    max_salary: int | None = None

    # Keep the in-memory mutation history
    record_events: bool = True

    def __post_init__(self):
        if isinstance(self.months_per_year, bool) or not isinstance(self.months_per_year, int):
            raise ValueError(
                f"months_per_year must be an integer, got {type(self.months_per_year).__name__}"
            )
        if self.months_per_year <= 0:
            raise ValueError("months_per_year must be positive")

        if self.account_pattern is not None:
            if not isinstance(self.account_pattern, str) or not self.account_pattern:
                raise ValueError("account_pattern must be a non-empty string")
            try:
                re.compile(self.account_pattern)
            except re.error as exc:
                raise ValueError(f"account_pattern is not a valid regex: {exc}") from exc

        if self.max_salary is not None:
            if isinstance(self.max_salary, bool) or not isinstance(self.max_salary, int):
                raise ValueError("max_salary must be an integer")
            if self.max_salary < 0:
                raise ValueError("max_salary cannot be negative")

        logger.debug(
            "registry_config_initialized",
            extra={
                "months_per_year": self.months_per_year,
                "account_pattern": self.account_pattern,
                "max_salary": self.max_salary,
                "record_events": self.record_events,
            },
        )

    @property
    def compiled_account_pattern(self) -> re.Pattern[str] | None:
        if self.account_pattern is None:
            return None
        return re.compile(self.account_pattern)

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with defaults."""
        logger.info("registry_config_created_with_defaults")
        return cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create config from dictionary (e.g., loaded from database/file)."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown registry config keys: {unknown}")
        logger.info(
            "registry_config_loading_from_dict",
            extra={"keys": sorted(data.keys())},
        )
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Path | str) -> Self:
        """
        Load config from a YAML file.

        The mapping may sit at the top level or under a ``registry:`` key.
        An empty file yields the defaults.

        Raises:
            FileNotFoundError: if the file does not exist.
            yaml.YAMLError: if the file contains invalid YAML.
            ValueError: if the content is not a mapping or fails validation.
        """
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping in {path}, got {type(data).__name__}")
        if "registry" in data:
            data = data["registry"] or {}
            if not isinstance(data, dict):
                raise ValueError(f"'registry' in {path} must be a mapping")
        logger.info("registry_config_loading_from_yaml", extra={"path": str(path)})
        return cls.from_dict(data)
