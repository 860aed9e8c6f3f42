"""Unit tests for the run-scoped resolution cache."""

import threading
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import Mock

import pytest

from actions_inventory.domain_model.primitives import ActionManifest, ReferenceAddress
from actions_inventory.globals.errors import TransportFailure
from actions_inventory.pipeline_stages.manifest_fetcher import ManifestFetcher
from actions_inventory.pipeline_stages.resolution_cache import ResolutionCache


def _resolve(cache, raw):
    return cache.resolve(raw, ReferenceAddress.parse(raw))


class TestResolutionCache:
    def test_second_lookup_is_served_from_cache(self, cache, fake_client):
        first = _resolve(cache, "actions/checkout@v4")
        second = _resolve(cache, "actions/checkout@v4")

        assert first == second == ActionManifest("node20")
        assert fake_client.file_requests == [("actions", "checkout", "action.yml", "v4")]
        assert cache.fetch_count == 1
        assert cache.hit_count == 1
        assert "actions/checkout@v4" in cache
        assert len(cache) == 1

    def test_keys_are_raw_references(self, fake_client):
        fake_client.add_action("actions/checkout", "v3", "node16")
        cache = ResolutionCache(ManifestFetcher(fake_client))

        assert _resolve(cache, "actions/checkout@v4").using == "node20"
        assert _resolve(cache, "actions/checkout@v3").using == "node16"
        assert cache.fetch_count == 2

    def test_not_found_is_cached(self, cache, fake_client):
        assert not _resolve(cache, "ghost/action@v1").is_found
        assert not _resolve(cache, "ghost/action@v1").is_found

        assert len(fake_client.requests_for("ghost", "action")) == 2
        assert cache.fetch_count == 1

    def test_failed_fetch_is_not_cached(self):
        fetcher = Mock(spec=ManifestFetcher)
        fetcher.fetch.side_effect = [TransportFailure("HTTP 502", 502), ActionManifest("node20")]
        cache = ResolutionCache(fetcher)

        with pytest.raises(TransportFailure):
            _resolve(cache, "actions/checkout@v4")
        assert "actions/checkout@v4" not in cache

        assert _resolve(cache, "actions/checkout@v4").using == "node20"
        assert fetcher.fetch.call_count == 2

    def test_concurrent_misses_share_one_fetch(self):
        """Callers racing on the same key block on the first caller's fetch."""
        started = threading.Event()
        release = threading.Event()

        def slow_fetch(address):
            started.set()
            release.wait(timeout=5)
            return ActionManifest("composite")

        fetcher = Mock(spec=ManifestFetcher)
        fetcher.fetch.side_effect = slow_fetch
        cache = ResolutionCache(fetcher)

        with ThreadPoolExecutor(max_workers=4) as executor:
            first = executor.submit(_resolve, cache, "my-org/shared@v1")
            assert started.wait(timeout=5)
            others = [executor.submit(_resolve, cache, "my-org/shared@v1") for _ in range(3)]
            release.set()
            results = [first.result(timeout=5)] + [f.result(timeout=5) for f in others]

        assert all(result.using == "composite" for result in results)
        assert fetcher.fetch.call_count == 1
        assert cache.fetch_count == 1

    def test_waiters_receive_the_fetch_error(self):
        started = threading.Event()
        release = threading.Event()

        def failing_fetch(address):
            started.set()
            release.wait(timeout=5)
            raise TransportFailure("HTTP 500", 500)

        fetcher = Mock(spec=ManifestFetcher)
        fetcher.fetch.side_effect = failing_fetch
        cache = ResolutionCache(fetcher)

        with ThreadPoolExecutor(max_workers=2) as executor:
            first = executor.submit(_resolve, cache, "my-org/shared@v1")
            assert started.wait(timeout=5)
            second = executor.submit(_resolve, cache, "my-org/shared@v1")
            release.set()
            with pytest.raises(TransportFailure):
                first.result(timeout=5)
            with pytest.raises(TransportFailure):
                second.result(timeout=5)

        assert "my-org/shared@v1" not in cache
