from zfounders.infrastructure.realtime.connection_registry import ConnectionRegistry
from zfounders.infrastructure.realtime.redis_broadcaster import (
    RedisRealtimePublisher,
    create_redis_client,
)

__all__ = ["ConnectionRegistry", "RedisRealtimePublisher", "create_redis_client"]
