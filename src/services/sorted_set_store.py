"""
Redis sorted-set store for scored musician records.

The whole dataset lives under one key. Imports replace it in a single
MULTI/EXEC transaction; queries read it back with ZRANGEBYSCORE.
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterable, Iterator

import redis

from src.services.errors import StoreError

LOGGER = logging.getLogger(__name__)

DEFAULT_REDIS_URL = "redis://127.0.0.1:6379/0"
DEFAULT_KEY = "musicians"


@dataclass
class StoreConfig:
    """Connection settings for the sorted-set store.

    Attributes:
        url: Redis connection URL
        key: Name of the sorted set holding the dataset
    """

    url: str = DEFAULT_REDIS_URL
    key: str = DEFAULT_KEY

    @classmethod
    def from_env(cls) -> "StoreConfig":
        return cls(
            url=os.getenv("OUTLIVED_REDIS_URL", "").strip() or DEFAULT_REDIS_URL,
            key=os.getenv("OUTLIVED_REDIS_KEY", "").strip() or DEFAULT_KEY,
        )


class SortedSetStore:
    """Scored members under a single sorted-set key."""

    def __init__(self, client: Any, key: str = DEFAULT_KEY) -> None:
        self.client = client
        self.key = key

    def replace_all(self, scored_members: Iterable[tuple[int, str]]) -> int:
        """Delete the current dataset and insert every (score, member) pair atomically.

        Returns the number of distinct members stored afterwards; repeated
        members collapse into one entry.
        """
        try:
            pipe = self.client.pipeline(transaction=True)
            pipe.delete(self.key)
            for score, member in scored_members:
                pipe.zadd(self.key, {member: score})
            pipe.zcard(self.key)
            written = int(pipe.execute()[-1])
        except redis.RedisError as exc:
            raise StoreError(f"Failed to replace sorted set '{self.key}': {exc}") from exc
        LOGGER.info("Replaced sorted set %s with %s members", self.key, written)
        return written

    def range_by_score(self, low: int, high: int) -> list[str]:
        """Return members with low <= score <= high, lowest score first."""
        try:
            members = self.client.zrangebyscore(self.key, low, high)
        except redis.RedisError as exc:
            raise StoreError(f"Failed to query sorted set '{self.key}': {exc}") from exc
        LOGGER.debug("ZRANGEBYSCORE %s %s %s -> %s members", self.key, low, high, len(members))
        return [_as_text(member) for member in members]

    def count(self) -> int:
        """Return the number of members currently stored."""
        try:
            return int(self.client.zcard(self.key))
        except redis.RedisError as exc:
            raise StoreError(f"Failed to count sorted set '{self.key}': {exc}") from exc


def _as_text(member: str | bytes) -> str:
    if isinstance(member, bytes):
        return member.decode("utf-8")
    return member


@contextmanager
def open_store(config: StoreConfig) -> Iterator[SortedSetStore]:
    """Connect to Redis for the duration of one operation."""
    try:
        client = redis.Redis.from_url(config.url, decode_responses=True)
    except (redis.RedisError, ValueError) as exc:
        raise StoreError(f"Invalid Redis URL '{config.url}': {exc}") from exc
    LOGGER.debug("Opened Redis connection to %s", config.url)
    try:
        yield SortedSetStore(client, config.key)
    finally:
        client.close()
        LOGGER.debug("Closed Redis connection to %s", config.url)
