"""User and social-graph queries."""

from zfounders.application.queries.users.get_profile import GetProfileQuery, GetProfileHandler
from zfounders.application.queries.users.list_blocked import (
    ListBlockedUsersQuery,
    ListBlockedUsersHandler,
)

__all__ = [
    "GetProfileQuery",
    "GetProfileHandler",
    "ListBlockedUsersQuery",
    "ListBlockedUsersHandler",
]
