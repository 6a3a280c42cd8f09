"""Tests for boundary validation helpers (payroll_kernel/domain/accounts.py)."""

import re

import pytest

from payroll_kernel.config import HEX_ADDRESS_PATTERN
from payroll_kernel.domain.accounts import (
    account_problem,
    validate_account,
    validate_allocations,
    validate_salary,
)
from payroll_kernel.exceptions import (
    InvalidAccountError,
    InvalidAllocationError,
    InvalidSalaryError,
)

HEX = re.compile(HEX_ADDRESS_PATTERN)


class TestAccountProblem:

    @pytest.mark.parametrize(
        "account",
        [
            "0xca35b7d915458ef540ade6068dfe2f44e8fa733c",
            "payroll-treasury",
            "a",
        ],
    )
    def test_well_formed(self, account):
        assert account_problem(account) is None

    @pytest.mark.parametrize(
        "account, reason",
        [
            ("", "must not be empty"),
            ("\t\n", "must not be empty"),
            ("two words", "must not contain whitespace"),
            (None, "must be a string, not NoneType"),
            (123, "must be a string, not int"),
        ],
    )
    def test_malformed(self, account, reason):
        assert account_problem(account) == reason

    def test_pattern_applies_to_whole_identifier(self):
        assert account_problem("0xca35b7d915458ef540ade6068dfe2f44e8fa733c", HEX) is None
        assert account_problem("0xca35b7d915458ef540ade6068dfe2f44e8fa733cff", HEX) is not None
        assert account_problem("ca35b7d915458ef540ade6068dfe2f44e8fa733c", HEX) is not None


class TestValidateAccount:

    def test_returns_account(self):
        assert validate_account("acct-1") == "acct-1"

    def test_raises_with_reason(self):
        with pytest.raises(InvalidAccountError) as exc_info:
            validate_account(" ")
        assert exc_info.value.reason == "must not be empty"


class TestValidateAllocations:

    def test_list_becomes_tuple(self):
        assert validate_allocations(["a", "b", "a"]) == ("a", "b", "a")

    def test_empty(self):
        assert validate_allocations([]) == ()
        assert validate_allocations(()) == ()

    def test_reports_first_bad_position(self):
        with pytest.raises(InvalidAllocationError) as exc_info:
            validate_allocations(["a", "b", "", None])
        assert exc_info.value.index == 2

    @pytest.mark.parametrize("allocations", ["abc", b"abc", bytearray(b"abc")])
    def test_string_like_rejected(self, allocations):
        with pytest.raises(InvalidAllocationError):
            validate_allocations(allocations)


class TestValidateSalary:

    @pytest.mark.parametrize("salary", [0, 1, 105000, 10**30])
    def test_valid(self, salary):
        assert validate_salary(salary) == salary

    @pytest.mark.parametrize("salary", [-1, 1.0, "1", None, False])
    def test_invalid(self, salary):
        with pytest.raises(InvalidSalaryError):
            validate_salary(salary)

    def test_ceiling_is_inclusive(self):
        assert validate_salary(100, max_salary=100) == 100
        with pytest.raises(InvalidSalaryError, match="exceeds maximum of 100"):
            validate_salary(101, max_salary=100)
