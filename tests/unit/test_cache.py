"""Cache keys and CacheService over a mocked Redis client."""

import json
from unittest.mock import AsyncMock

import redis.asyncio as redis

from menuhub.core.config import get_settings
from menuhub.infrastructure.cache import CacheService, tenant_candidates_key


class TestKeys:
    def test_key_format(self) -> None:
        key = tenant_candidates_key(["The Blue Lagoon", "the-blue-lagoon"])
        prefix, kind, digest = key.split(":")
        assert (prefix, kind) == ("tenant", "names")
        assert len(digest) == 32

    def test_order_matters(self) -> None:
        assert tenant_candidates_key(["A", "B"]) != tenant_candidates_key(["B", "A"])

    def test_every_candidate_counts(self) -> None:
        base = ["The Blue Lagoon", "the-blue-lagoon"]
        assert tenant_candidates_key(base) != tenant_candidates_key([*base, "the blue lagoon"])

    def test_joining_is_unambiguous(self) -> None:
        assert tenant_candidates_key(["ab", "c"]) != tenant_candidates_key(["a", "bc"])

    def test_case_matters(self) -> None:
        assert tenant_candidates_key(["Blue"]) != tenant_candidates_key(["blue"])


def _service(client: AsyncMock) -> CacheService:
    return CacheService(redis_client=client, settings=get_settings())


class TestCacheService:
    async def test_get_hit_decodes_json(self) -> None:
        client = AsyncMock()
        client.get.return_value = json.dumps({"id": "r1"})
        assert await _service(client).get("k") == {"id": "r1"}

    async def test_get_miss(self) -> None:
        client = AsyncMock()
        client.get.return_value = None
        assert await _service(client).get("k") is None

    async def test_get_connection_error_is_a_miss(self) -> None:
        client = AsyncMock()
        client.get.side_effect = redis.ConnectionError("down")
        assert await _service(client).get("k") is None

    async def test_undecodable_value_is_a_miss(self) -> None:
        client = AsyncMock()
        client.get.return_value = "{not json"
        assert await _service(client).get("k") is None

    async def test_set_uses_ttl(self) -> None:
        client = AsyncMock()
        assert await _service(client).set("k", {"a": 1}, ttl=60) is True
        client.setex.assert_awaited_once_with("k", 60, json.dumps({"a": 1}))

    async def test_set_failure(self) -> None:
        client = AsyncMock()
        client.setex.side_effect = redis.TimeoutError("slow")
        assert await _service(client).set("k", 1) is False

    async def test_disconnect(self) -> None:
        client = AsyncMock()
        service = _service(client)
        await service.disconnect()
        client.aclose.assert_awaited_once()
        assert not service.is_available()
        assert await service.get("k") is None

    async def test_delete(self) -> None:
        client = AsyncMock()
        assert await _service(client).delete("k") is True
        client.delete.assert_awaited_once_with("k")
