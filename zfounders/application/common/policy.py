"""
Glue between handlers and the policy core.

``PolicyEngine`` bundles the stateless policy objects a handler needs.
``enforce`` turns a denied Decision into the matching domain exception,
recording the denial in logs and metrics on the way.
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

from zfounders.domain.entities.user import User
from zfounders.domain.exceptions import ConcurrencyConflictError, UnauthorizedError
from zfounders.domain.policies.decision import Decision
from zfounders.domain.policies.permissions import Actions, PermissionGate
from zfounders.domain.policies.quota import QuotaLedger
from zfounders.domain.policies.settings import PolicySettings
from zfounders.domain.ports.clock import Clock
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.user_id import UserId
from zfounders.observability.metrics import increment_policy_denial

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class PolicyEngine:
    settings: PolicySettings
    gate: PermissionGate
    quota: QuotaLedger
    clock: Clock

    @classmethod
    def build(cls, settings: PolicySettings, clock: Clock) -> "PolicyEngine":
        return cls(
            settings=settings,
            gate=PermissionGate(settings),
            quota=QuotaLedger(settings),
            clock=clock,
        )


def enforce(decision: Decision, action: Actions, settings: PolicySettings) -> None:
    if decision.allowed:
        return
    increment_policy_denial(action.value, decision.reason)
    logger.info("[Policy] %s denied: %s", action.value, decision.reason)
    raise decision.to_exception(upgrade_url=settings.upgrade_url)


async def load_actor(uow: UnitOfWork, user_id: UserId) -> User:
    user = await uow.users.get_by_id(user_id)
    if user is None or not user.is_active:
        raise UnauthorizedError("User not found or inactive")
    return user


async def run_in_unit_of_work(
    uow: UnitOfWork, work: Callable[[], Awaitable[T]], attempts: int = 2
) -> T:
    """Run ``work`` inside ``uow``; a lost uniqueness race is retried once,
    when the competing row is visible and the outcome is "already true"."""
    for attempt in range(1, attempts + 1):
        try:
            async with uow:
                return await work()
        except ConcurrencyConflictError:
            if attempt == attempts:
                raise
            logger.info("[UoW] conflict on attempt %s, retrying", attempt)
    raise RuntimeError("unreachable")
