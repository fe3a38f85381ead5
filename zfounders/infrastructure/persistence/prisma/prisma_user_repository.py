"""
Prisma User Repository Implementation.

Mapping:
- User row plus its optional one-to-one rows (subscription, verification,
  investor_profile) form the User aggregate.
- save() upserts the user row and each related row that is present.
"""

from typing import Optional

from prisma import Prisma

from zfounders.domain.entities.user import (
    AccountTypeChange,
    InvestorProfile,
    InvestorVerification,
    Subscription,
    User,
)
from zfounders.domain.ports.repositories import UserRepository
from zfounders.domain.value_objects import (
    AccountType,
    SubscriptionTier,
    UserId,
    VerificationStatus,
)

_INCLUDE = {"subscription": True, "verification": True, "investor_profile": True}


class PrismaUserRepository(UserRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record) -> User:
        """Map Prisma record to domain entity."""
        subscription = None
        if record.subscription:
            subscription = Subscription(
                tier=SubscriptionTier(record.subscription.tier),
                current_period_end=record.subscription.current_period_end,
            )
        verification = None
        if record.verification:
            verification = InvestorVerification(
                status=VerificationStatus(record.verification.status),
                reviewer_notes=record.verification.reviewer_notes,
                reviewed_at=record.verification.reviewed_at,
            )
        profile = None
        if record.investor_profile:
            p = record.investor_profile
            profile = InvestorProfile(
                is_public_mode=p.is_public_mode,
                firm=p.firm,
                stages=list(p.stages or []),
                bio=p.bio,
                check_size_min=p.check_size_min,
                check_size_max=p.check_size_max,
            )
        return User(
            id=UserId(record.id),
            email=record.email,
            account_type=AccountType(record.account_type),
            created_at=record.created_at,
            is_active=record.is_active,
            is_admin=record.is_admin,
            display_name=record.display_name,
            allow_messages_from_everyone=record.allow_messages_from_everyone,
            subscription=subscription,
            verification=verification,
            investor_profile=profile,
        )

    async def get_by_id(self, user_id: UserId) -> Optional[User]:
        record = await self._prisma.user.find_unique(
            where={"id": user_id.value}, include=_INCLUDE
        )
        return self._to_entity(record) if record else None

    async def get_many(self, user_ids: list[UserId]) -> dict[str, User]:
        if not user_ids:
            return {}
        records = await self._prisma.user.find_many(
            where={"id": {"in": list({u.value for u in user_ids})}}, include=_INCLUDE
        )
        return {record.id: self._to_entity(record) for record in records}

    async def save(self, user: User) -> None:
        fields = {
            "email": user.email,
            "display_name": user.display_name,
            "account_type": user.account_type.value,
            "is_active": user.is_active,
            "is_admin": user.is_admin,
            "allow_messages_from_everyone": user.allow_messages_from_everyone,
        }
        await self._prisma.user.upsert(
            where={"id": user.id.value},
            data={
                "create": {"id": user.id.value, "created_at": user.created_at, **fields},
                "update": fields,
            },
        )
        uid = user.id.value

        if user.subscription is not None:
            sub = {
                "tier": user.subscription.tier.value,
                "current_period_end": user.subscription.current_period_end,
            }
            await self._prisma.subscription.upsert(
                where={"user_id": uid},
                data={"create": {"user_id": uid, **sub}, "update": sub},
            )
        if user.verification is not None:
            ver = {
                "status": user.verification.status.value,
                "reviewer_notes": user.verification.reviewer_notes,
                "reviewed_at": user.verification.reviewed_at,
            }
            await self._prisma.investorverification.upsert(
                where={"user_id": uid},
                data={"create": {"user_id": uid, **ver}, "update": ver},
            )
        if user.investor_profile is not None:
            p = user.investor_profile
            prof = {
                "is_public_mode": p.is_public_mode,
                "firm": p.firm,
                "stages": list(p.stages),
                "bio": p.bio,
                "check_size_min": p.check_size_min,
                "check_size_max": p.check_size_max,
            }
            await self._prisma.investorprofile.upsert(
                where={"user_id": uid},
                data={"create": {"user_id": uid, **prof}, "update": prof},
            )

    async def add_type_change(self, change: AccountTypeChange) -> None:
        await self._prisma.accounttypechange.create(
            data={
                "user_id": change.user_id.value,
                "from_type": change.from_type.value,
                "to_type": change.to_type.value,
                "changed_at": change.changed_at,
            }
        )

    async def last_type_change(self, user_id: UserId) -> Optional[AccountTypeChange]:
        record = await self._prisma.accounttypechange.find_first(
            where={"user_id": user_id.value}, order={"changed_at": "desc"}
        )
        if record is None:
            return None
        return AccountTypeChange(
            user_id=UserId(record.user_id),
            from_type=AccountType(record.from_type),
            to_type=AccountType(record.to_type),
            changed_at=record.changed_at,
        )
