"""Keyed cache stores with TTL expiry.

``FileCache`` keeps one JSON file per key at ~/.yaga/cache/ so the rule
catalog survives across processes. ``MemoryCache`` keeps entries in the
current process only. Both return ``None`` for a missing or expired key.
"""

import hashlib
import json
import logging
import re
import time
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

_DEFAULT_CACHE_DIR = Path.home() / ".yaga" / "cache"
_DEFAULT_EXPIRY_SECONDS = 86400


class CacheStore(Protocol):
    """Protocol for the cache backends used by the rule registry."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None on a miss."""
        ...

    def store(self, key: str, value: str, expiry: Optional[float] = None) -> None:
        """Store a value that expires after ``expiry`` seconds."""
        ...


class FileCache:
    """JSON file cache with TTL-based expiry."""

    def __init__(
        self,
        cache_dir: Optional[Path] = None,
        default_expiry: float = _DEFAULT_EXPIRY_SECONDS,
    ) -> None:
        self.cache_dir = cache_dir or _DEFAULT_CACHE_DIR
        self.default_expiry = default_expiry
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def _sanitize_key(key: str) -> str:
        """Convert an arbitrary key string into a filesystem-safe filename."""
        safe = re.sub(r"[^a-zA-Z0-9_\-]", "_", key)
        # Short hash keeps keys that sanitize identically apart
        key_hash = hashlib.sha256(key.encode()).hexdigest()[:12]
        return f"{safe[:80]}_{key_hash}.json"

    def _path_for(self, key: str) -> Path:
        """Return the file path for a cache key."""
        return self.cache_dir / self._sanitize_key(key)

    def store(self, key: str, value: str, expiry: Optional[float] = None) -> None:
        """Store a value in the cache.

        Args:
            key: Cache key (will be sanitized for filesystem safety).
            value: Encoded value to cache.
            expiry: Time-to-live in seconds. Defaults to the instance default.
        """
        ttl = expiry if expiry is not None else self.default_expiry
        entry = {
            "key": key,
            "value": value,
            "timestamp": time.time(),
            "ttl_seconds": ttl,
        }
        path = self._path_for(key)
        path.write_text(json.dumps(entry), encoding="utf-8")
        logger.debug("Stored %s (ttl %ss)", key, ttl)

    def get(self, key: str) -> Optional[str]:
        """Retrieve a cached value if it exists and hasn't expired."""
        path = self._path_for(key)
        if not path.exists():
            return None

        try:
            entry = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Unreadable cache entry %s: %s", path, exc)
            return None

        if not isinstance(entry, dict):
            logger.warning("Malformed cache entry %s", path)
            return None

        age = time.time() - entry.get("timestamp", 0)
        if age > entry.get("ttl_seconds", 0):
            # Expired - clean up
            try:
                path.unlink()
            except OSError:
                pass
            return None

        return entry.get("value")

    def clear(self) -> None:
        """Remove all cached files."""
        if not self.cache_dir.exists():
            return
        for path in self.cache_dir.glob("*.json"):
            try:
                path.unlink()
            except OSError:
                pass


class MemoryCache:
    """In-process cache with the same TTL semantics as FileCache."""

    def __init__(self, default_expiry: float = _DEFAULT_EXPIRY_SECONDS) -> None:
        self.default_expiry = default_expiry
        self._entries: dict[str, tuple[str, float]] = {}

    def store(self, key: str, value: str, expiry: Optional[float] = None) -> None:
        ttl = expiry if expiry is not None else self.default_expiry
        self._entries[key] = (value, time.time() + ttl)

    def get(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if time.time() > expires_at:
            del self._entries[key]
            return None
        return value

    def clear(self) -> None:
        self._entries.clear()
