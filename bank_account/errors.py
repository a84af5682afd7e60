"""Exception classes for bank account operations."""


class BankAccountError(Exception):
    """Base exception for bank account operations."""
    pass


class InvalidArgumentError(BankAccountError, ValueError):
    """The caller supplied a value that violates a precondition."""
    pass


class InvalidOperationError(BankAccountError, RuntimeError):
    """A state-dependent business rule rejected the operation."""
    pass
