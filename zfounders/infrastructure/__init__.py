"""
INFRASTRUCTURE LAYER - Adapters for the domain ports.

- persistence.memory: single-process store for tests and local runs
- persistence.prisma: PostgreSQL via prisma-client-py
- realtime: websocket connection registry and Redis fan-out
"""
