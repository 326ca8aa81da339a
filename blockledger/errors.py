from __future__ import annotations


class ContractViolation(Exception):
    """Raised when a caller breaks a precondition of the block or ledger API.

    Kept apart from ValueError so callers can treat it as fatal without
    catching ordinary bad-input errors alongside it.
    """


__all__ = ["ContractViolation"]
