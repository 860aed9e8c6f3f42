import logging
import threading
from concurrent.futures import Future
from typing import Dict

from actions_inventory.domain_model.primitives import ActionManifest, ReferenceAddress
from actions_inventory.pipeline_stages.manifest_fetcher import ManifestFetcher

logger = logging.getLogger(__name__)


class ResolutionCache:
    """
    Run-scoped memo from raw action reference to its manifest.

    Entries are keyed by the raw reference string, so ``a/b@v1`` and
    ``a/b@v2`` resolve independently. Each key is fetched at most once per
    run. Concurrent misses on the same key share a single in-flight fetch:
    the first caller fetches, later callers block on its result. A fetch that
    raises is not stored, and every caller waiting on it receives the same
    exception.
    """

    def __init__(self, fetcher: ManifestFetcher) -> None:
        self._fetcher = fetcher
        self._entries: Dict[str, ActionManifest] = {}
        self._in_flight: Dict[str, "Future[ActionManifest]"] = {}
        self._lock = threading.Lock()
        self.fetch_count = 0
        self.hit_count = 0

    def resolve(self, raw_reference: str, address: ReferenceAddress) -> ActionManifest:
        """Return the manifest for ``raw_reference``, fetching it on first use.

        Args:
            raw_reference: The reference exactly as written in the workflow.
            address: The parsed form of ``raw_reference``.

        Returns:
            ActionManifest: The stored or freshly fetched manifest.
        """
        with self._lock:
            if raw_reference in self._entries:
                self.hit_count += 1
                return self._entries[raw_reference]
            pending = self._in_flight.get(raw_reference)
            owner = pending is None
            if pending is None:
                pending = Future()
                self._in_flight[raw_reference] = pending
                self.fetch_count += 1

        if not owner:
            logger.debug(f"Waiting for in-flight resolution of {raw_reference}")
            return pending.result()

        logger.info(f"Resolving {raw_reference}")
        try:
            manifest = self._fetcher.fetch(address)
        except BaseException as e:
            with self._lock:
                del self._in_flight[raw_reference]
            pending.set_exception(e)
            raise

        with self._lock:
            self._entries[raw_reference] = manifest
            del self._in_flight[raw_reference]
        pending.set_result(manifest)
        return manifest

    def __contains__(self, raw_reference: object) -> bool:
        with self._lock:
            return raw_reference in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
