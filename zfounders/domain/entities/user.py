"""
User Entity - A platform member and the account-level records it owns.

The aggregate carries its subscription, investor verification and investor
profile so the policy layer can decide on a single loaded object.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from zfounders.domain.value_objects.enums import (
    AccountType,
    SubscriptionTier,
    VerificationStatus,
)
from zfounders.domain.value_objects.user_id import UserId


@dataclass
class Subscription:
    tier: SubscriptionTier = SubscriptionTier.FREE
    current_period_end: Optional[datetime] = None

    def is_active(self, now: datetime) -> bool:
        """A paid tier only counts while its period has not ended (unset = open-ended)."""
        if self.tier == SubscriptionTier.FREE:
            return True
        return self.current_period_end is None or self.current_period_end > now


@dataclass
class InvestorVerification:
    status: VerificationStatus = VerificationStatus.NOT_SUBMITTED
    reviewer_notes: Optional[str] = None
    reviewed_at: Optional[datetime] = None

    @property
    def is_approved(self) -> bool:
        return self.status == VerificationStatus.APPROVED

    def review(self, approve: bool, notes: Optional[str], now: datetime) -> None:
        self.status = (
            VerificationStatus.APPROVED if approve else VerificationStatus.REJECTED
        )
        self.reviewer_notes = notes
        self.reviewed_at = now


@dataclass
class InvestorProfile:
    is_public_mode: bool = False
    firm: Optional[str] = None
    stages: list[str] = field(default_factory=list)
    bio: Optional[str] = None
    check_size_min: Optional[int] = None
    check_size_max: Optional[int] = None


@dataclass
class User:
    # Required fields (no defaults) - must come first
    id: UserId
    email: str
    account_type: AccountType
    created_at: datetime
    # Optional fields (with defaults) - must come last
    is_active: bool = True
    is_admin: bool = False
    display_name: Optional[str] = None
    allow_messages_from_everyone: bool = True
    subscription: Optional[Subscription] = None
    verification: Optional[InvestorVerification] = None
    investor_profile: Optional[InvestorProfile] = None

    @classmethod
    def create(
        cls,
        email: str,
        account_type: AccountType,
        now: datetime,
        **kwargs,
    ) -> User:
        """Factory that also creates the records an investor account always has."""
        user = cls(
            id=UserId.new(),
            email=email,
            account_type=account_type,
            created_at=now,
            **kwargs,
        )
        if account_type == AccountType.INVESTOR:
            user.ensure_investor_records()
        return user

    @property
    def is_investor(self) -> bool:
        return self.account_type == AccountType.INVESTOR

    @property
    def is_founder(self) -> bool:
        return self.account_type == AccountType.FOUNDER

    @property
    def is_lurker(self) -> bool:
        return self.account_type == AccountType.LURKER

    @property
    def verification_status(self) -> VerificationStatus:
        if self.verification is None:
            return VerificationStatus.NOT_SUBMITTED
        return self.verification.status

    @property
    def is_approved_investor(self) -> bool:
        return self.is_investor and self.verification_status == VerificationStatus.APPROVED

    @property
    def is_private_investor(self) -> bool:
        # Missing profile means nothing was ever disclosed: treat as private.
        if not self.is_investor:
            return False
        return self.investor_profile is None or not self.investor_profile.is_public_mode

    @property
    def tier(self) -> SubscriptionTier:
        return self.subscription.tier if self.subscription else SubscriptionTier.FREE

    def ensure_investor_records(self, pending: bool = False) -> None:
        if self.investor_profile is None:
            self.investor_profile = InvestorProfile()
        if self.verification is None:
            self.verification = InvestorVerification()
        if pending:
            self.verification.status = VerificationStatus.PENDING

    def switch_account_type(self, new_type: AccountType) -> AccountType:
        previous = self.account_type
        self.account_type = new_type
        if new_type == AccountType.INVESTOR:
            self.ensure_investor_records(pending=True)
        return previous


@dataclass
class AccountTypeChange:
    user_id: UserId
    from_type: AccountType
    to_type: AccountType
    changed_at: datetime
