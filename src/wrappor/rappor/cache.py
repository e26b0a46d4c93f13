"""
PRR memoization caches.

Responsibilities
  - Define the pluggable ``PRRCache`` capability (get / put / get_or_compute).
  - Provide the default thread-safe in-memory implementation.

Usage Context
  - An encoder derives the PRR of a value at most once and reuses it for
    every later report; durable or shared backends extend that guarantee
    across restarts or machines by implementing the same interface.

Limitations
  - Entries are never evicted or invalidated here.
  - ``get`` returns ``None`` on a miss, so a stored PRR of 0 is a hit.
"""
# 说明：PRR 记忆化缓存，保证同一编码器对同一原始值最多推导一次 PRR，实现“永久”随机响应。
# 职责：
# - PRRCache：约定 get / put / __contains__ / __len__，并提供默认的 get_or_compute（非原子，竞态下结果相同）
# - InMemoryPRRCache：基于 dict 的默认实现，按值加锁保护 miss→推导→写入 的临界区
# 约定：
# - 未命中以 None 表示，合法的全零 PRR 不会被误判为未命中
# - 同一值的并发推导互斥，不同值的推导互不阻塞

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Callable, Dict, Hashable, Iterator, Optional, Tuple

from wrappor.core.utils.logging import get_logger

logger = get_logger(__name__)


class PRRCache(ABC):
    """Mapping from raw client value to its previously computed PRR."""

    @abstractmethod
    def get(self, value: Hashable) -> Optional[int]:
        """Return the stored PRR for ``value`` or ``None`` when absent."""
        raise NotImplementedError

    @abstractmethod
    def put(self, value: Hashable, prr: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def __len__(self) -> int:
        raise NotImplementedError

    def __contains__(self, value: object) -> bool:
        return self.get(value) is not None  # type: ignore[arg-type]

    def get_or_compute(self, value: Hashable, factory: Callable[[], int]) -> Tuple[int, bool]:
        """
        Return ``(prr, hit)``; on a miss call ``factory`` and store its result.

        The default is not atomic. Two concurrent misses both derive the PRR,
        which is a pure function of its inputs, so both store the same value.
        """
        cached = self.get(value)
        if cached is not None:
            return cached, True
        prr = factory()
        self.put(value, prr)
        return prr, False


class InMemoryPRRCache(PRRCache):
    """
    Dict-backed cache scoped to the lifetime of its owner.

    ``get_or_compute`` serializes derivations per value: concurrent misses on
    one value run the factory once, while misses on different values derive
    in parallel. The table lock is never held while a factory runs.
    """

    def __init__(self) -> None:
        self._entries: Dict[Hashable, int] = {}
        self._pending: Dict[Hashable, threading.Lock] = {}
        self._lock = threading.Lock()

    def get(self, value: Hashable) -> Optional[int]:
        with self._lock:
            return self._entries.get(value)

    def put(self, value: Hashable, prr: int) -> None:
        with self._lock:
            self._entries[value] = int(prr)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[Hashable]:
        with self._lock:
            return iter(list(self._entries))

    def get_or_compute(self, value: Hashable, factory: Callable[[], int]) -> Tuple[int, bool]:
        with self._lock:
            cached = self._entries.get(value)
            if cached is not None:
                return cached, True
            key_lock = self._pending.setdefault(value, threading.Lock())

        # 持有该值的专属锁完成 miss→推导→写入，等待者拿到锁后会直接命中
        with key_lock:
            with self._lock:
                cached = self._entries.get(value)
            if cached is not None:
                return cached, True
            try:
                prr = int(factory())
                with self._lock:
                    self._entries[value] = prr
                    size = len(self._entries)
            finally:
                with self._lock:
                    if self._pending.get(value) is key_lock:
                        del self._pending[value]
        logger.debug("stored PRR", extra={"cache_size": size})
        return prr, False

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
