# accounting/policies.py
"""
Business policy functions for accounting operations.

Policies answer: "Is this action allowed given the current state?"
They do NOT perform the action; that's the command's job.

Usage:
    from accounting.policies import can_delete_account

    # Option 1: Check and get boolean + reason
    allowed, reason = can_delete_account(account)
    if not allowed:
        return CommandResult.fail(reason)

    # Option 2: Assert and raise on failure
    assert_can_delete_account(account)  # raises PolicyViolation

Policies are pure functions returning (bool, str) tuples.
"""
from decimal import Decimal


class PolicyViolation(Exception):
    """Raised when a business policy is violated."""
    pass


# =============================================================================
# Account Policies
# =============================================================================

def can_delete_account(account) -> tuple[bool, str]:
    """
    Check if an account can be deleted.

    Rules:
    - System accounts cannot be deleted

    Accounts with postings CAN be deleted; their lines stay behind and
    render as "Account removed".
    """
    if account.is_system:
        return False, "System accounts cannot be deleted."
    return True, ""


def can_change_account_type(account) -> tuple[bool, str]:
    """
    Check if account type can be changed.

    Rules:
    - Cannot change type once the account has journal lines
    """
    if account.journal_lines.exists():
        return False, "Cannot change type of an account with transactions."
    return True, ""


# =============================================================================
# Journal Entry Policies
# =============================================================================

def check_entry_balanced(
    total_debit: Decimal,
    total_credit: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> tuple[bool, str]:
    """Debits must equal credits within the tolerance."""
    if abs(total_debit - total_credit) >= tolerance:
        return False, (
            f"Entry is not balanced: debits {total_debit:.2f} "
            f"!= credits {total_credit:.2f}."
        )
    return True, ""


def check_line_amounts(debit: Decimal, credit: Decimal) -> tuple[bool, str]:
    """A line carries a non-negative debit or credit."""
    if debit < 0 or credit < 0:
        return False, "Debit and credit amounts cannot be negative."
    return True, ""


# =============================================================================
# Assert helpers
# =============================================================================

def _assert(result: tuple[bool, str]) -> None:
    allowed, reason = result
    if not allowed:
        raise PolicyViolation(reason)


def assert_can_delete_account(account) -> None:
    _assert(can_delete_account(account))


def assert_can_change_account_type(account) -> None:
    _assert(can_change_account_type(account))


def assert_entry_balanced(total_debit: Decimal, total_credit: Decimal) -> None:
    _assert(check_entry_balanced(total_debit, total_credit))
