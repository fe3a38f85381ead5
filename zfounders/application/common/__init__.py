from zfounders.application.common.interfaces import (
    Command,
    CommandHandler,
    Query,
    QueryHandler,
)
from zfounders.application.common.policy import (
    PolicyEngine,
    enforce,
    load_actor,
    run_in_unit_of_work,
)

__all__ = [
    "Command",
    "CommandHandler",
    "Query",
    "QueryHandler",
    "PolicyEngine",
    "enforce",
    "load_actor",
    "run_in_unit_of_work",
]
