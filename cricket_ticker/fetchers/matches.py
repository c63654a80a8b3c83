import time
import threading
import concurrent.futures
import requests

from cricket_ticker.config import (
    PRIMARY_API_URL, API_TIMEOUT, HEADERS, CACHE_TTL_MS, NO_MATCHES_ERROR, DEMO_PAYLOAD
)
from cricket_ticker.models import CacheEntry, FetchResult
from cricket_ticker.normalizer import ResponseNormalizer
from cricket_ticker.utils import build_pooled_session, append_query_param


class MatchFetcher:
    """Fetches live matches with a single-slot cache and primary -> fallback failover.

    Fetches run on a dedicated worker thread. ``fetch_live_matches`` never
    blocks: it returns a Future resolving to a FetchResult and, when given a
    callback, calls it with that result once it is ready.
    """

    def __init__(self, settings, session=None, fallback=None, normalizer=None, clock=None):
        self.settings = settings
        self.normalizer = normalizer or ResponseNormalizer()
        self.session = session or build_pooled_session(pool_size=2)
        self.fallback = fallback if fallback is not None else self.demo_matches
        self.clock = clock or time.time
        self.executor = concurrent.futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix="match-fetch")

        self.cache = None
        self._inflight = None
        self._lock = threading.Lock()
        self.generation = 0
        self.network_calls = 0

    # ================= PUBLIC =================
    def fetch_live_matches(self, callback=None):
        with self._lock:
            cached = self._cached_matches()
            if cached:
                future = concurrent.futures.Future()
                future.set_result(FetchResult.success(cached, from_cache=True))
            elif self._inflight is not None and not self._inflight.done():
                # Single-flight: piggyback on the outstanding fetch
                future = self._inflight
            else:
                future = self.executor.submit(self._fetch, self.generation)
                self._inflight = future

        if callback is not None:
            future.add_done_callback(lambda f: self._deliver(f, callback))
        return future

    def invalidate(self):
        """Drops the cache and detaches any in-flight fetch; its result is never cached."""
        with self._lock:
            self.cache = None
            self.generation += 1
            self._inflight = None

    def shutdown(self):
        self.executor.shutdown(wait=False, cancel_futures=True)
        try: self.session.close()
        except Exception as e: print(f"Session close failed: {e}")

    # ================= CACHE =================
    def _cached_matches(self):
        if self.cache is not None and self.cache.is_valid(self.clock(), CACHE_TTL_MS):
            return list(self.cache.matches)
        return None

    def _deliver(self, future, callback):
        if future.cancelled(): return
        callback(future.result())

    # ================= WORKER =================
    def _fetch(self, generation):
        try:
            config = self.settings.snapshot()
            matches = self.fetch_from_primary(config)

            if not matches:
                matches = self.fetch_from_fallback()

            if matches:
                with self._lock:
                    if generation == self.generation:
                        self.cache = CacheEntry(tuple(matches), self.clock())
                return FetchResult.success(matches)

            return FetchResult.failure(NO_MATCHES_ERROR)
        except Exception as e:
            print(f"❌ Error fetching matches: {e}")
            return FetchResult.failure(e)

    def build_url(self, config):
        url = config.custom_api_url or PRIMARY_API_URL
        if config.api_key:
            url = append_query_param(url, 'apikey', config.api_key)
        return url

    def fetch_from_primary(self, config):
        url = self.build_url(config)
        print(f"🌐 Fetching from primary API: {config.custom_api_url or PRIMARY_API_URL}")
        self.network_calls += 1
        try:
            r = self.session.get(url, headers=HEADERS, timeout=API_TIMEOUT)
            if not 200 <= r.status_code < 300:
                print(f"Primary API HTTP error code: {r.status_code}")
                return []
            body = r.text
            if not body or not body.strip():
                print("Primary API returned an empty body")
                return []
            return self.normalizer.parse(body)
        except requests.RequestException as e:
            print(f"Primary API request failed: {e}")
            return []

    def fetch_from_fallback(self):
        print("Trying fallback source")
        try:
            return list(self.fallback() or [])
        except Exception as e:
            print(f"Fallback source failed: {e}")
            return []

    def demo_matches(self):
        print("Using demonstration matches")
        return self.normalizer.parse(DEMO_PAYLOAD)
