"""
UnauthorizedError - Raised when the acting identity is missing, invalid or inactive.
Maps to: HTTP 401 Unauthorized
"""


class UnauthorizedError(Exception):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)
        self.message = message
