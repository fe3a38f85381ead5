"""
DomainValidationError - Raised when input breaks a business rule.
Maps to: HTTP 400 Bad Request
"""


class DomainValidationError(Exception):
    """Exception raised for domain validation errors."""

    def __init__(self, message: str, **details):
        super().__init__(message)
        self.message = message
        self.details = details
