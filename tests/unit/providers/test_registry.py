# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Unit tests for the provider registry."""

from __future__ import annotations

import threading

from mhskills.providers import (
    DirectProvider,
    HuggingFaceProvider,
    MintlifyProvider,
    ProviderRegistry,
    build_default_registry,
)
from mhskills.providers.registry import ReadWriteLock


class TestDefaultRegistry:
    def test_priority_order(self) -> None:
        registry = build_default_registry()
        assert [p.id for p in registry.providers()] == ["mintlify", "huggingface", "direct"]
        assert len(registry) == 3

    def test_settings_passed_through(self) -> None:
        registry = build_default_registry(timeout=3.0, user_agent="ua-test")
        for provider in registry.providers():
            assert provider.timeout == 3.0
            assert provider.user_agent == "ua-test"

    def test_plain_url_matches_mintlify_first(self) -> None:
        registry = build_default_registry()
        url = "https://docs.example.com/skill.md"
        assert isinstance(registry.find_provider(url), MintlifyProvider)
        assert [p.id for p in registry.find_providers(url)] == ["mintlify", "direct"]

    def test_huggingface_url(self) -> None:
        registry = build_default_registry()
        url = "https://huggingface.co/spaces/a/b/blob/main/SKILL.md"
        assert isinstance(registry.find_provider(url), HuggingFaceProvider)
        assert len(registry.find_providers(url)) == 1

    def test_no_match(self) -> None:
        registry = build_default_registry()
        assert registry.find_provider("https://example.com/readme") is None
        assert registry.find_providers("https://example.com/readme") == []


class TestRegistration:
    def test_registration_order_is_priority(self) -> None:
        registry = ProviderRegistry()
        registry.register(DirectProvider())
        registry.register(MintlifyProvider())
        assert isinstance(registry.find_provider("https://a.example/skill.md"), DirectProvider)

    def test_providers_returns_copy(self) -> None:
        registry = build_default_registry()
        snapshot = registry.providers()
        snapshot.clear()
        assert len(registry) == 3

    def test_concurrent_lookups_and_registration(self) -> None:
        registry = ProviderRegistry([DirectProvider()])
        errors: list[BaseException] = []

        def lookup() -> None:
            try:
                for _ in range(200):
                    assert registry.find_provider("https://x.example/skill.md") is not None
            except AssertionError as exc:
                errors.append(exc)

        def register() -> None:
            for _ in range(20):
                registry.register(HuggingFaceProvider())

        threads = [threading.Thread(target=lookup) for _ in range(4)]
        threads.append(threading.Thread(target=register))
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(registry) == 21


class TestReadWriteLock:
    def test_readers_share(self) -> None:
        lock = ReadWriteLock()
        with lock.read(), lock.read():
            pass

    def test_writer_waits_for_reader(self) -> None:
        lock = ReadWriteLock()
        acquired = threading.Event()

        def writer() -> None:
            with lock.write():
                acquired.set()

        with lock.read():
            t = threading.Thread(target=writer)
            t.start()
            assert not acquired.wait(0.1)
        t.join(2)
        assert acquired.is_set()
