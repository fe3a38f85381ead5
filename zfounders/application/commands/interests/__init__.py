"""Express-interest commands."""

from .express_interest import ExpressInterestCommand, ExpressInterestHandler
from .respond_to_interest import RespondToInterestCommand, RespondToInterestHandler

__all__ = [
    "ExpressInterestCommand",
    "ExpressInterestHandler",
    "RespondToInterestCommand",
    "RespondToInterestHandler",
]
