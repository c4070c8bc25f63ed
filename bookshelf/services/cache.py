"""
Tag-Aware Caching Service

Read-through cache for serialized list responses.

Features:
- get(key, producer, tags): on a miss the producer runs once and its
  result is stored under the given tags
- invalidate_tags(tag): drops every entry carrying the tag
- Two backends: in-process memory (default) and Redis
- Graceful degradation when Redis is unavailable

Cache Strategy:
- List endpoints cache their JSON body under "<resource>:limit=N:page=N"
- Every entry carries the shared CATALOG_TAG
- Any write on an author or a book invalidates CATALOG_TAG, so a write
  on one resource also drops the cached lists of the other

Lifetime:
    The cache is built once at startup (create_cache) and stored on
    app.state.cache. Routes receive it through the get_cache dependency.
"""

import logging
import time
from collections.abc import Callable, Iterable
from threading import RLock
from typing import Optional, Protocol

import redis
from fastapi import Request
from redis.exceptions import RedisError

from bookshelf.config import Settings

logger = logging.getLogger(__name__)

CATALOG_TAG = "catalog"


# =============================================================================
# Cache Key Generation
# =============================================================================

def make_cache_key(prefix: str, *args, **kwargs) -> str:
    """
    Generate a consistent cache key from prefix and arguments.

    Examples:
        make_cache_key("book", 1) -> "book:1"
        make_cache_key("books", page=1, limit=3) -> "books:limit=3:page=1"

    Args:
        prefix: Cache key prefix (e.g., "authors", "books")
        *args: Positional arguments to include in key
        **kwargs: Keyword arguments to include in key (sorted for consistency)

    Returns:
        Cache key string
    """
    parts = [prefix]

    for arg in args:
        if arg is not None:
            parts.append(str(arg))

    for key in sorted(kwargs.keys()):
        value = kwargs[key]
        if value is not None:
            parts.append(f"{key}={value}")

    return ":".join(parts)


# =============================================================================
# Backends
# =============================================================================

class CacheBackend(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str, tags: Iterable[str], ttl: Optional[int]) -> None: ...

    def invalidate_tags(self, tags: Iterable[str]) -> int: ...

    def clear(self) -> None: ...


class InMemoryBackend:
    """
    Thread-safe per-process backend.

    Entries are (value, expires_at) pairs; the tag index maps a tag to
    the keys stored under it.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._store: dict[str, tuple[str, Optional[float]]] = {}
        self._tags: dict[str, set[str]] = {}
        self._lock = RLock()
        self._clock = clock

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at is not None and expires_at <= self._clock():
                del self._store[key]
                self._untag(key)
                return None
            return value

    def set(self, key: str, value: str, tags: Iterable[str], ttl: Optional[int]) -> None:
        expires_at = self._clock() + ttl if ttl else None
        with self._lock:
            self._store[key] = (value, expires_at)
            for tag in tags:
                self._tags.setdefault(tag, set()).add(key)

    def _untag(self, key: str) -> None:
        for tag in [t for t, keys in self._tags.items() if key in keys]:
            self._tags[tag].discard(key)
            if not self._tags[tag]:
                del self._tags[tag]

    def invalidate_tags(self, tags: Iterable[str]) -> int:
        removed = 0
        with self._lock:
            for tag in tags:
                for key in self._tags.pop(tag, set()):
                    if self._store.pop(key, None) is not None:
                        removed += 1
        return removed

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
            self._tags.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)


class RedisBackend:
    """
    Redis backend.

    Values are stored as strings; each tag is a Redis set named
    "tag:<tag>" holding the keys stored under it. Redis errors are logged
    and treated as a miss (get) or a no-op (set/invalidate).
    """

    def __init__(self, client: redis.Redis, namespace: str = "bookshelf") -> None:
        self._client = client
        self._namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    def _tag_key(self, tag: str) -> str:
        return f"{self._namespace}:tag:{tag}"

    def get(self, key: str) -> Optional[str]:
        try:
            return self._client.get(self._key(key))
        except RedisError as e:
            logger.warning(f"Cache get error for {key}: {e}")
            return None

    def set(self, key: str, value: str, tags: Iterable[str], ttl: Optional[int]) -> None:
        try:
            pipe = self._client.pipeline()
            pipe.set(self._key(key), value, ex=ttl or None)
            for tag in tags:
                pipe.sadd(self._tag_key(tag), self._key(key))
            pipe.execute()
        except RedisError as e:
            logger.warning(f"Cache set error for {key}: {e}")

    def invalidate_tags(self, tags: Iterable[str]) -> int:
        removed = 0
        for tag in tags:
            tag_key = self._tag_key(tag)
            try:
                # Read and drop the tag set in one MULTI/EXEC so a fill
                # racing with us lands in a fresh set
                pipe = self._client.pipeline(transaction=True)
                pipe.smembers(tag_key)
                pipe.delete(tag_key)
                keys, _ = pipe.execute()
                if keys:
                    removed += self._client.delete(*keys)
            except RedisError as e:
                logger.warning(f"Cache invalidation error for tag {tag}: {e}")
        return removed

    def clear(self) -> None:
        try:
            keys = list(self._client.scan_iter(match=f"{self._namespace}:*"))
            if keys:
                self._client.delete(*keys)
        except RedisError as e:
            logger.warning(f"Cache clear error: {e}")


# =============================================================================
# Tag-Aware Cache
# =============================================================================

class TagAwareCache:
    """
    Read-through cache with tag invalidation.

    The producer runs outside any lock: two concurrent misses on the same
    key may both compute, and the last one stored wins. A fill that started
    before an invalidation can store its (stale) value right after it.
    """

    def __init__(self, backend: CacheBackend, default_ttl: Optional[int] = None) -> None:
        self.backend = backend
        self.default_ttl = default_ttl or None

    def get(
        self,
        key: str,
        producer: Callable[[], str],
        tags: Iterable[str] = (),
        ttl: Optional[int] = None,
    ) -> str:
        """
        Return the cached value for key, computing it on a miss.

        Args:
            key: Cache key (see make_cache_key)
            producer: Called once on a miss; its result is stored
            tags: Labels attached to the stored entry
            ttl: Entry lifetime in seconds, defaults to the cache's TTL

        Returns:
            The cached or freshly produced value
        """
        cached = self.backend.get(key)
        if cached is not None:
            logger.debug(f"Cache HIT: {key}")
            return cached

        logger.debug(f"Cache MISS: {key}")
        value = producer()
        self.backend.set(key, value, tuple(tags), ttl if ttl is not None else self.default_ttl)
        return value

    def invalidate_tags(self, *tags: str) -> int:
        """Drop every entry carrying one of the tags. Returns entries removed."""
        removed = self.backend.invalidate_tags(tags)
        logger.debug(f"Cache INVALIDATE {', '.join(tags)}: {removed} entries")
        return removed

    def clear(self) -> None:
        self.backend.clear()

    def stats(self) -> dict:
        """Backend name, for the health endpoint."""
        return {"backend": type(self.backend).__name__}


def invalidate_catalog(cache: TagAwareCache) -> None:
    """
    Invalidate every cached author and book list.

    Called after each create, update, or delete on either resource.
    """
    cache.invalidate_tags(CATALOG_TAG)


# =============================================================================
# Construction & Injection
# =============================================================================

def create_cache(settings: Settings) -> TagAwareCache:
    """
    Build the process-wide cache from settings.

    Falls back to the in-memory backend when Redis is configured but
    cannot be reached at startup.
    """
    if settings.cache_backend == "redis":
        try:
            client = redis.from_url(
                settings.redis_url,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
            )
            client.ping()
            logger.info("Successfully connected to Redis")
            return TagAwareCache(RedisBackend(client), default_ttl=settings.cache_ttl)
        except RedisError as e:
            logger.warning(f"Failed to connect to Redis: {e}. Using in-memory cache.")

    return TagAwareCache(InMemoryBackend(), default_ttl=settings.cache_ttl)


def get_cache(request: Request) -> TagAwareCache:
    """FastAPI dependency returning the cache built at startup."""
    return request.app.state.cache
