"""Monotonic nonce generation shared per API key."""

from __future__ import annotations

import threading
import time
from typing import Callable, Dict


class NonceGenerator:
    """Millisecond nonces that never repeat and never go backwards.

    The wall clock only seeds the sequence: when two calls land in the same
    millisecond, or the clock steps backwards, the previous value is bumped
    by one instead.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._last = 0

    def next(self) -> int:
        with self._lock:
            candidate = int(self._clock() * 1000)
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return candidate

    @property
    def last(self) -> int:
        """Most recently issued nonce, 0 before the first call."""

        with self._lock:
            return self._last


_registry: Dict[str, NonceGenerator] = {}
_registry_lock = threading.Lock()


def nonce_generator_for(api_key: str) -> NonceGenerator:
    """Return the process-wide generator for ``api_key``, creating it once."""

    with _registry_lock:
        generator = _registry.get(api_key)
        if generator is None:
            generator = NonceGenerator()
            _registry[api_key] = generator
        return generator


__all__ = ["NonceGenerator", "nonce_generator_for"]
