"""Domain exceptions for the reports app."""


class ReportsServiceError(Exception):
    """Base exception for reports service errors."""
    pass


class SummaryMismatchError(ReportsServiceError):
    """Raised when submitted cash and GCash amounts do not cover the item total."""
    pass
