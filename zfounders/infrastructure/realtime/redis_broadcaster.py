"""
Redis Realtime Publisher - cross-worker fan-out over pub/sub.

Each user has one channel, ``zf:user:{user_id}``. ``publish`` writes to it;
every worker runs a relay that pattern-subscribes to ``zf:user:*`` and hands
messages to its local ConnectionRegistry. A relay that loses Redis logs the
error and resubscribes with exponential backoff.
"""

import asyncio
import json
import logging
from typing import Any, Optional

import redis.asyncio as redis
from redis.asyncio import Redis
from redis.exceptions import RedisError
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    wait_exponential,
)

from zfounders.domain.ports.realtime import RealtimePublisher
from zfounders.infrastructure.realtime.connection_registry import ConnectionRegistry

logger = logging.getLogger(__name__)

CHANNEL_PREFIX = "zf:user:"


def channel_for(user_id: str) -> str:
    return f"{CHANNEL_PREFIX}{user_id}"


async def create_redis_client(url: str) -> Redis:
    """Create an async Redis client and check the connection."""
    client = redis.from_url(
        url,
        encoding="utf-8",
        decode_responses=True,
        socket_timeout=5.0,
        socket_connect_timeout=5.0,
    )
    await client.ping()
    logger.info("[Redis] Connected to %s", url)
    return client


class RedisRealtimePublisher(RealtimePublisher):
    def __init__(
        self,
        client: Redis,
        registry: ConnectionRegistry,
        retry_delay: float = 0.5,
        max_retry_delay: float = 30.0,
    ):
        self._client = client
        self._registry = registry
        self._retry_delay = retry_delay
        self._max_retry_delay = max_retry_delay
        self._relay_task: Optional[asyncio.Task] = None

    async def publish(self, user_id: str, event: dict[str, Any]) -> None:
        await self._client.publish(channel_for(user_id), json.dumps(event))

    async def start(self) -> None:
        if self._relay_task is None:
            self._relay_task = asyncio.create_task(self._relay())

    async def close(self) -> None:
        try:
            if self._relay_task is not None:
                self._relay_task.cancel()
                try:
                    await self._relay_task
                except asyncio.CancelledError:
                    pass
                except Exception as exc:
                    logger.warning("[Realtime] relay had already stopped: %r", exc)
                self._relay_task = None
        finally:
            await self._client.aclose()
            logger.info("[Redis] Connection closed")

    async def _relay(self) -> None:
        """Keep a pattern subscription alive; a lost connection retries with backoff."""
        retrying = AsyncRetrying(
            retry=retry_if_exception_type((RedisError, OSError)),
            wait=wait_exponential(multiplier=self._retry_delay, max=self._max_retry_delay),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        try:
            while True:
                async for attempt in retrying:
                    with attempt:
                        await self._listen()
                logger.warning("[Realtime] relay subscription ended, resubscribing")
                await asyncio.sleep(self._retry_delay)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("[Realtime] relay stopped")
            raise

    async def _listen(self) -> None:
        pubsub = self._client.pubsub()
        try:
            await pubsub.psubscribe(f"{CHANNEL_PREFIX}*")
            logger.info("[Realtime] relay subscribed to %s*", CHANNEL_PREFIX)
            async for message in pubsub.listen():
                if message.get("type") != "pmessage":
                    continue
                user_id = message["channel"][len(CHANNEL_PREFIX):]
                try:
                    event = json.loads(message["data"])
                except json.JSONDecodeError:
                    logger.warning("[Realtime] malformed event on %s", message["channel"])
                    continue
                await self._registry.deliver_local(user_id, event)
        finally:
            await pubsub.aclose()
