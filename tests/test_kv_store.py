"""
Key-Value Store Tests - ISO 27001 Risk Assessment
tests/test_kv_store.py

Tests for the Redis-backed JSON store: encoding, key prefixing, list
operations and error mapping.
"""
import json
import pytest
import redis
from unittest.mock import patch, MagicMock
from pydantic import BaseModel

from app.core.exceptions import DatabaseConnectionException, RepositoryException
from app.models.assessment import ClusterScore
from app.services.kv_store import KVStore


class MockModel(BaseModel):
    """Mock Pydantic model for testing."""
    id: str
    name: str


class TestKVStoreWithMockClient:
    """Command-level behaviour against a mocked redis client."""

    def test_init_builds_client_from_url(self):
        with patch('app.services.kv_store.redis.Redis.from_url') as mock_from_url:
            store = KVStore()
            mock_from_url.assert_called_once()
            assert mock_from_url.call_args.kwargs["decode_responses"] is True
            assert store.client is mock_from_url.return_value

    def test_set_encodes_models_by_alias(self):
        mock_client = MagicMock()
        store = KVStore(client=mock_client, prefix="")
        cs = ClusterScore(cluster_id="c", cluster_title="C", score=1, max_score=4, percentage=25)

        store.set("k", cs)

        key, raw = mock_client.set.call_args.args
        assert key == "k"
        assert json.loads(raw)["clusterId"] == "c"

    def test_get_decodes_json(self):
        mock_client = MagicMock()
        mock_client.get.return_value = MockModel(id="123", name="Test").model_dump_json()
        store = KVStore(client=mock_client, prefix="")

        assert store.get("k") == {"id": "123", "name": "Test"}

    def test_get_miss_returns_none(self):
        mock_client = MagicMock()
        mock_client.get.return_value = None
        store = KVStore(client=mock_client, prefix="")

        assert store.get("missing") is None

    def test_prefix_applied(self):
        mock_client = MagicMock()
        store = KVStore(client=mock_client, prefix="iso:")

        store.delete("assessment:1")
        mock_client.delete.assert_called_once_with("iso:assessment:1")

    def test_mget_empty_skips_round_trip(self):
        mock_client = MagicMock()
        store = KVStore(client=mock_client, prefix="")

        assert store.mget([]) == []
        mock_client.mget.assert_not_called()

    def test_connection_error_maps_to_database_connection_exception(self):
        mock_client = MagicMock()
        mock_client.get.side_effect = redis.ConnectionError("refused")
        store = KVStore(client=mock_client, prefix="")

        with pytest.raises(DatabaseConnectionException):
            store.get("k")

    def test_other_redis_error_maps_to_repository_exception(self):
        mock_client = MagicMock()
        mock_client.set.side_effect = redis.ResponseError("WRONGTYPE")
        store = KVStore(client=mock_client, prefix="")

        with pytest.raises(RepositoryException) as exc:
            store.set("k", {"a": 1})
        assert not isinstance(exc.value, DatabaseConnectionException)

    def test_scan_errors_are_mapped(self):
        mock_client = MagicMock()
        mock_client.scan_iter.side_effect = redis.ConnectionError("gone")
        store = KVStore(client=mock_client, prefix="")

        with pytest.raises(DatabaseConnectionException):
            store.get_by_prefix("assessment:")


class TestKVStoreInMemory:
    """Round trips against the in-memory fake."""

    def test_set_get(self, kv_store):
        kv_store.set("a", {"x": [1, 2]})
        assert kv_store.get("a") == {"x": [1, 2]}

    def test_exists_and_delete(self, kv_store):
        kv_store.set("a", 1)
        assert kv_store.exists("a") is True
        kv_store.delete("a")
        assert kv_store.exists("a") is False

    def test_mset_mget_keeps_order_and_gaps(self, kv_store):
        kv_store.mset({"a": 1, "b": 2})
        assert kv_store.mget(["b", "missing", "a"]) == [2, None, 1]

    def test_mdelete(self, kv_store):
        kv_store.mset({"a": 1, "b": 2, "c": 3})
        kv_store.mdelete(["a", "b"])
        assert kv_store.mget(["a", "b", "c"]) == [None, None, 3]

    def test_get_by_prefix(self, kv_store):
        kv_store.mset({"assessment:1": {"n": 1}, "assessment:2": {"n": 2}, "other": {"n": 3}})
        values = kv_store.get_by_prefix("assessment:")
        assert sorted(v["n"] for v in values) == [1, 2]

    def test_list_append_and_read(self, kv_store):
        assert kv_store.append_to_list("ids", "a") == 1
        assert kv_store.append_to_list("ids", "b") == 2
        assert kv_store.get_list("ids") == ["a", "b"]

    def test_missing_list_is_empty(self, kv_store):
        assert kv_store.get_list("nothing") == []

    def test_ping(self, kv_store):
        assert kv_store.ping() is True
