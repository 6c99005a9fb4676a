"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InsightAPIError(DomainException):
    """Insight text API returned an error or is unavailable"""

    pass


class InvalidReportRequestError(DomainException):
    """Report mode or month parameter is malformed"""

    pass
