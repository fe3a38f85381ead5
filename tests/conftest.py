import time
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
import pytest
from fastapi.testclient import TestClient

from zfounders.application.common import PolicyEngine
from zfounders.application.services import NotificationEmitter
from zfounders.config.settings import TestingConfig
from zfounders.domain.entities import (
    InvestorProfile,
    InvestorVerification,
    Subscription,
    User,
    Video,
)
from zfounders.domain.policies.settings import PolicySettings
from zfounders.domain.ports import Clock, RealtimePublisher
from zfounders.domain.value_objects import (
    AccountType,
    SubscriptionTier,
    VerificationStatus,
    VideoType,
    VisibilityClass,
)
from zfounders.fastapi_app import create_fastapi_app
from zfounders.infrastructure.persistence.memory import MemoryStore, MemoryUnitOfWork
from zfounders.setup.ioc import create_container

START = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


class FrozenClock(Clock):
    def __init__(self, now: datetime = START):
        self.current = now

    def now(self) -> datetime:
        return self.current

    def advance(self, **delta) -> None:
        self.current = self.current + timedelta(**delta)

    def set(self, now: datetime) -> None:
        self.current = now


class RecordingPublisher(RealtimePublisher):
    def __init__(self):
        self.events: list[tuple[str, dict[str, Any]]] = []

    async def publish(self, user_id: str, event: dict[str, Any]) -> None:
        self.events.append((user_id, event))

    def for_user(self, user_id) -> list[dict[str, Any]]:
        return [e for uid, e in self.events if uid == str(user_id)]


def make_user(
    store: MemoryStore,
    account_type: AccountType,
    *,
    email: Optional[str] = None,
    verified: bool = True,
    public: bool = False,
    tier: SubscriptionTier = SubscriptionTier.FREE,
    firm: Optional[str] = None,
    now: datetime = START,
    **kwargs,
) -> User:
    """Seed a user straight into the store."""
    user = User.create(
        email or f"{account_type.value.lower()}-{len(store.users)}@example.com",
        account_type,
        now,
        **kwargs,
    )
    user.subscription = Subscription(tier=tier)
    if account_type == AccountType.INVESTOR:
        user.verification = InvestorVerification(
            status=VerificationStatus.APPROVED if verified else VerificationStatus.PENDING
        )
        user.investor_profile = InvestorProfile(
            is_public_mode=public, firm=firm, stages=["seed"]
        )
    store.users[user.id.value] = user
    return user


def make_video(
    store: MemoryStore,
    owner: User,
    *,
    visibility: VisibilityClass = VisibilityClass.PUBLIC,
    type: VideoType = VideoType.UPDATE,
    now: datetime = START,
) -> Video:
    video = Video.create(owner.id, "https://cdn.example.com/v.mp4", type, visibility, now)
    store.videos[video.id.value] = video
    return video


def mint_token(user_id, secret: str = TestingConfig.JWT_SECRET, expires_in: int = 300) -> str:
    now = int(time.time())
    return jwt.encode(
        {"userId": str(user_id), "iat": now, "exp": now + expires_in},
        secret,
        algorithm="HS256",
    )


def auth(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {mint_token(user.id)}"}


@pytest.fixture()
def store():
    return MemoryStore()


@pytest.fixture()
def clock():
    return FrozenClock()


@pytest.fixture()
def settings():
    return PolicySettings()


@pytest.fixture()
def engine(settings, clock):
    return PolicyEngine.build(settings, clock)


@pytest.fixture()
def realtime():
    return RecordingPublisher()


@pytest.fixture()
def notifier(realtime):
    return NotificationEmitter(realtime)


@pytest.fixture()
def uow(store):
    return MemoryUnitOfWork(store)


@pytest.fixture()
def app(store, clock):
    """FastAPI app over the in-memory store, with the clock pinned."""
    container = create_container(TestingConfig, store=store, clock=clock)
    return create_fastapi_app(TestingConfig, container=container)


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c
