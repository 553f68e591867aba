# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Priority-ordered registry of HTTP skill providers."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from mhskills.providers.base import HostProvider

logger = logging.getLogger("mhskills.providers.registry")


class ReadWriteLock:
    """Many concurrent readers or one exclusive writer."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._readers:
                self._cond.wait()
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class ProviderRegistry:
    """Ordered list of providers; registration order is lookup priority.

    Registration normally happens once at start-up.  Lookups may run
    concurrently from many threads and do not block each other.
    """

    def __init__(self, providers: list[HostProvider] | None = None) -> None:
        self._providers: list[HostProvider] = []
        self._lock = ReadWriteLock()
        for provider in providers or []:
            self.register(provider)

    def register(self, provider: HostProvider) -> None:
        with self._lock.write():
            self._providers.append(provider)
        logger.debug("Registered provider %s", provider.id)

    def find_provider(self, url: str) -> HostProvider | None:
        """Return the first registered provider whose ``match`` accepts *url*."""
        with self._lock.read():
            for provider in self._providers:
                if provider.match(url).matches:
                    return provider
        return None

    def find_providers(self, url: str) -> list[HostProvider]:
        """Return every provider accepting *url*, in priority order."""
        with self._lock.read():
            return [p for p in self._providers if p.match(url).matches]

    def providers(self) -> list[HostProvider]:
        with self._lock.read():
            return list(self._providers)

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._providers)
