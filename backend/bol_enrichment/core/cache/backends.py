"""Key-value backends behind the enrichment cache tiers.

Both backends speak the same small async protocol so the TTL logic in
ExpiringStore never needs to know whether it is talking to a dict or Redis.
"""

import logging
from typing import Any, Protocol

from redis import asyncio as aioredis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """A cache tier could not read, write, or decode an entry."""


class KeyValueBackend(Protocol):
    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any) -> None: ...

    async def delete(self, key: str) -> None: ...

    async def keys(self, prefix: str = "") -> list[str]: ...


class MemoryBackend:
    """Process-local dict. Values are stored as-is, no serialization."""

    def __init__(self):
        self._data: dict[str, Any] = {}

    async def get(self, key: str) -> Any | None:
        return self._data.get(key)

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def keys(self, prefix: str = "") -> list[str]:
        return [k for k in self._data if k.startswith(prefix)]

    def __len__(self) -> int:
        return len(self._data)


class RedisBackend:
    """Redis string keys. Every RedisError surfaces as StorageError."""

    def __init__(self, client: aioredis.Redis):
        self.client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisBackend":
        return cls(aioredis.Redis.from_url(url, decode_responses=True))

    async def get(self, key: str) -> str | None:
        try:
            return await self.client.get(key)
        except RedisError as e:
            raise StorageError(f"Redis GET {key} failed: {e}") from e

    async def set(self, key: str, value: str) -> None:
        try:
            await self.client.set(key, value)
        except RedisError as e:
            raise StorageError(f"Redis SET {key} failed: {e}") from e

    async def delete(self, key: str) -> None:
        try:
            await self.client.delete(key)
        except RedisError as e:
            raise StorageError(f"Redis DEL {key} failed: {e}") from e

    async def keys(self, prefix: str = "") -> list[str]:
        try:
            return [k async for k in self.client.scan_iter(match=f"{prefix}*")]
        except RedisError as e:
            raise StorageError(f"Redis SCAN {prefix}* failed: {e}") from e

    async def close(self) -> None:
        await self.client.aclose()
