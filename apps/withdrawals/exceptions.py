"""Domain exceptions for the withdrawals app."""


class WithdrawalServiceError(Exception):
    """Base exception for withdrawal service errors."""
    pass


class WithdrawalNotFoundError(WithdrawalServiceError):
    pass


class FutureDateError(WithdrawalServiceError):
    """Raised when a record is dated more than one day ahead."""
    pass
