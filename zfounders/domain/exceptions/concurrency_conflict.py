"""
ConcurrencyConflictError - Raised by persistence adapters when a unique key
was taken by a concurrent unit of work. Handlers retry the whole unit once,
at which point the competing row is visible and the outcome is "already true".
"""


class ConcurrencyConflictError(Exception):
    def __init__(self, message: str = "Concurrent update detected"):
        super().__init__(message)
        self.message = message
