import asyncio
import json

from starlette.websockets import WebSocketState

from zfounders.config.settings import TestingConfig, get_config, policy_settings
from zfounders.domain.value_objects import SubscriptionTier
from zfounders.infrastructure.realtime import ConnectionRegistry, RedisRealtimePublisher
from zfounders.infrastructure.realtime.redis_broadcaster import channel_for


class FakeSocket:
    def __init__(self, fail: bool = False):
        self.application_state = WebSocketState.CONNECTED
        self.sent = []
        self.fail = fail

    async def send_json(self, data):
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(data)


class FakePubSub:
    def __init__(self, messages=(), error=None):
        self.messages = list(messages)
        self.error = error
        self.patterns = []
        self.closed = False

    async def psubscribe(self, pattern):
        self.patterns.append(pattern)

    async def listen(self):
        if self.error is not None:
            raise self.error
        for message in self.messages:
            yield message
        await asyncio.Event().wait()

    async def aclose(self):
        self.closed = True


class FakeRedis:
    def __init__(self, pubsubs=()):
        self.published = []
        self.pubsubs = list(pubsubs)
        self.opened = []
        self.closed = False

    def pubsub(self):
        pubsub = self.pubsubs.pop(0)
        self.opened.append(pubsub)
        return pubsub

    async def aclose(self):
        self.closed = True

    async def publish(self, channel, data):
        self.published.append((channel, data))
        return 1


async def test_registry_fans_out_to_every_socket_of_user():
    registry = ConnectionRegistry()
    phone, laptop, other = FakeSocket(), FakeSocket(), FakeSocket()
    await registry.connect("u1", phone)
    await registry.connect("u1", laptop)
    await registry.connect("u2", other)

    await registry.publish("u1", {"event": "notification", "title": "New Like"})

    assert phone.sent == laptop.sent == [{"event": "notification", "title": "New Like"}]
    assert other.sent == []


async def test_registry_drops_dead_sockets():
    registry = ConnectionRegistry()
    dead, closed, live = FakeSocket(fail=True), FakeSocket(), FakeSocket()
    closed.application_state = WebSocketState.DISCONNECTED
    for socket in (dead, closed, live):
        await registry.connect("u1", socket)

    delivered = await registry.deliver_local("u1", {"event": "view_update"})

    assert delivered == 1
    assert registry.connection_count("u1") == 1


async def test_disconnect_is_idempotent():
    registry = ConnectionRegistry()
    socket = FakeSocket()
    await registry.connect("u1", socket)
    await registry.disconnect("u1", socket)
    await registry.disconnect("u1", socket)
    assert registry.connection_count("u1") == 0


async def test_redis_publisher_writes_to_user_channel():
    client = FakeRedis()
    publisher = RedisRealtimePublisher(client, ConnectionRegistry())
    await publisher.publish("u1", {"event": "notification", "id": "n1"})
    [(channel, data)] = client.published
    assert channel == channel_for("u1") == "zf:user:u1"
    assert json.loads(data) == {"event": "notification", "id": "n1"}


def test_testing_config_uses_memory_backends():
    assert get_config("testing") is TestingConfig
    assert TestingConfig.PERSISTENCE_BACKEND == "memory"
    assert TestingConfig.REALTIME_BACKEND == "memory"


def test_policy_settings_from_config():
    class Custom(TestingConfig):
        FREE_INVESTOR_DM_LIMIT = 7
        PREMIUM_TIERS = ["FOUNDER_PRO", " STEALTH_MODE "]

    settings = policy_settings(Custom)
    assert settings.founder_investor_dm_limit == 7
    assert settings.premium_tiers == frozenset(
        {SubscriptionTier.FOUNDER_PRO, SubscriptionTier.STEALTH_MODE}
    )


async def wait_until(predicate, attempts=200):
    for _ in range(attempts):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition not reached")


async def test_redis_relay_resubscribes_after_connection_error():
    registry = ConnectionRegistry()
    socket = FakeSocket()
    await registry.connect("u1", socket)
    event = {"event": "notification", "id": "n1"}
    client = FakeRedis(
        pubsubs=[
            FakePubSub(error=ConnectionError("redis went away")),
            FakePubSub(
                messages=[
                    {"type": "psubscribe", "channel": "zf:user:*", "data": 1},
                    {"type": "pmessage", "channel": "zf:user:u1", "data": json.dumps(event)},
                ]
            ),
        ]
    )
    publisher = RedisRealtimePublisher(client, registry, retry_delay=0)

    await publisher.start()
    await wait_until(lambda: socket.sent)

    assert socket.sent == [event]
    first, second = client.opened
    assert first.closed
    assert second.patterns == ["zf:user:*"]

    await publisher.close()
    assert second.closed
    assert client.closed


async def test_redis_close_releases_client_after_relay_crash():
    client = FakeRedis(pubsubs=[FakePubSub(error=ValueError("bad frame"))])
    publisher = RedisRealtimePublisher(client, ConnectionRegistry(), retry_delay=0)

    await publisher.start()
    await wait_until(lambda: publisher._relay_task.done())

    await publisher.close()
    assert client.closed
