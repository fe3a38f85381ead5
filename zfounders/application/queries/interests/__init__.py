"""Express-interest queries."""

from zfounders.application.queries.interests.list_interests import (
    ListReceivedInterestsQuery,
    ListReceivedInterestsHandler,
    ListSentInterestsQuery,
    ListSentInterestsHandler,
)

__all__ = [
    "ListReceivedInterestsQuery",
    "ListReceivedInterestsHandler",
    "ListSentInterestsQuery",
    "ListSentInterestsHandler",
]
