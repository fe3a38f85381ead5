"""
DOMAIN EXCEPTIONS - Business rule violations

These exceptions are raised by domain logic and caught by presentation layer.
Presentation layer maps them to HTTP status codes.
"""

from zfounders.domain.exceptions.entity_not_found import EntityNotFoundError
from zfounders.domain.exceptions.access_denied import AccessDeniedError
from zfounders.domain.exceptions.validation_error import DomainValidationError
from zfounders.domain.exceptions.unauthorized import UnauthorizedError
from zfounders.domain.exceptions.quota_exceeded import QuotaExceededError
from zfounders.domain.exceptions.invalid_transition import InvalidTransitionError
from zfounders.domain.exceptions.concurrency_conflict import ConcurrencyConflictError

__all__ = [
    "EntityNotFoundError",
    "AccessDeniedError",
    "DomainValidationError",
    "UnauthorizedError",
    "QuotaExceededError",
    "InvalidTransitionError",
    "ConcurrencyConflictError",
]
