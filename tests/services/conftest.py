from __future__ import annotations

from typing import Any

import pytest
import redis


class FakePipeline:
    def __init__(self, client: "FakeRedis") -> None:
        self.client = client
        self.commands: list[tuple[str, tuple[Any, ...]]] = []

    def delete(self, key: str) -> "FakePipeline":
        self.commands.append(("delete", (key,)))
        return self

    def zadd(self, key: str, mapping: dict[str, int]) -> "FakePipeline":
        self.commands.append(("zadd", (key, mapping)))
        return self

    def zcard(self, key: str) -> "FakePipeline":
        self.commands.append(("zcard", (key,)))
        return self

    def execute(self) -> list[Any]:
        if self.client.fail_on_execute:
            raise redis.ConnectionError("connection refused")
        results = []
        for name, params in self.commands:
            results.append(getattr(self.client, name)(*params))
        self.commands = []
        return results


class FakeRedis:
    """In-memory stand-in for the sorted-set commands the store issues."""

    def __init__(self) -> None:
        self.sets: dict[str, dict[str, int]] = {}
        self.fail_on_execute = False
        self.closed = False

    def pipeline(self, transaction: bool = True) -> FakePipeline:
        assert transaction
        return FakePipeline(self)

    def delete(self, key: str) -> int:
        return 1 if self.sets.pop(key, None) is not None else 0

    def zadd(self, key: str, mapping: dict[str, int]) -> int:
        members = self.sets.setdefault(key, {})
        added = sum(1 for member in mapping if member not in members)
        members.update(mapping)
        return added

    def zrangebyscore(self, key: str, low: int, high: int) -> list[str]:
        members = self.sets.get(key, {})
        ordered = sorted(members.items(), key=lambda item: (item[1], item[0]))
        return [member for member, score in ordered if low <= score <= high]

    def zcard(self, key: str) -> int:
        return len(self.sets.get(key, {}))

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()
