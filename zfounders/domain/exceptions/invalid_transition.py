"""
InvalidTransitionError - Raised when a conversation event is not allowed in its current state.
Maps to: HTTP 409 Conflict
"""


class InvalidTransitionError(Exception):
    def __init__(self, current: str, event: str):
        message = f"Cannot {event} a conversation in {current} state"
        super().__init__(message)
        self.message = message
        self.current = current
        self.event = event
