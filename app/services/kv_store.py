"""
Key-Value Store - ISO 27001 Risk Assessment
app/services/kv_store.py

JSON key-value store on Redis. Values are any JSON-serializable object;
pydantic models are dumped in their wire (camelCase) form.
"""
import json
import logging
from functools import lru_cache
from typing import Any, Dict, Iterable, List, Optional

import redis
from pydantic import BaseModel

from app.config import settings
from app.core.exceptions import DatabaseConnectionException, RepositoryException

logger = logging.getLogger(__name__)


def _encode(value: Any) -> str:
    if isinstance(value, BaseModel):
        return value.model_dump_json(by_alias=True)
    return json.dumps(value, default=str)


def _decode(raw: Optional[str]) -> Any:
    if raw is None:
        return None
    return json.loads(raw)


class KVStore:
    def __init__(self, client: Optional[redis.Redis] = None, prefix: Optional[str] = None):
        self.client = client or redis.Redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=settings.REDIS_SOCKET_TIMEOUT,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
        )
        self.prefix = settings.REDIS_KEY_PREFIX if prefix is None else prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def _call(self, op: str, fn, *args):
        try:
            return fn(*args)
        except redis.ConnectionError as e:
            logger.error(f"Redis connection failed during {op}: {e}")
            raise DatabaseConnectionException(f"Key-value store unavailable: {e}")
        except redis.RedisError as e:
            logger.error(f"Redis error during {op}: {e}")
            raise RepositoryException(f"Key-value store error: {e}")

    def ping(self) -> bool:
        return bool(self._call("ping", self.client.ping))

    def get(self, key: str) -> Any:
        """Get a value, or None if the key is absent."""
        return _decode(self._call("get", self.client.get, self._key(key)))

    def set(self, key: str, value: Any) -> None:
        self._call("set", self.client.set, self._key(key), _encode(value))

    def delete(self, key: str) -> None:
        self._call("delete", self.client.delete, self._key(key))

    def exists(self, key: str) -> bool:
        return bool(self._call("exists", self.client.exists, self._key(key)))

    def mget(self, keys: Iterable[str]) -> List[Any]:
        """Values for keys, in order; None where a key is absent."""
        keys = [self._key(k) for k in keys]
        if not keys:
            return []
        return [_decode(raw) for raw in self._call("mget", self.client.mget, keys)]

    def mset(self, mapping: Dict[str, Any]) -> None:
        if not mapping:
            return
        encoded = {self._key(k): _encode(v) for k, v in mapping.items()}
        self._call("mset", self.client.mset, encoded)

    def mdelete(self, keys: Iterable[str]) -> None:
        keys = [self._key(k) for k in keys]
        if keys:
            self._call("mdelete", self.client.delete, *keys)

    def get_by_prefix(self, prefix: str) -> List[Any]:
        """All values whose key starts with prefix (unordered)."""
        pattern = f"{self._key(prefix)}*"
        keys = self._call("scan", lambda p: list(self.client.scan_iter(match=p)), pattern)
        if not keys:
            return []
        return [_decode(raw) for raw in self._call("mget", self.client.mget, keys) if raw is not None]

    def append_to_list(self, key: str, value: Any) -> int:
        """Append to a list key; returns the new length."""
        return self._call("rpush", self.client.rpush, self._key(key), _encode(value))

    def get_list(self, key: str) -> List[Any]:
        return [_decode(raw) for raw in self._call("lrange", self.client.lrange, self._key(key), 0, -1)]


# ---- FastAPI dependency singleton ----
@lru_cache
def get_kv_store() -> KVStore:
    return KVStore()
