"""
Voice cache state machine.

VoiceCache keeps the current voice catalog in memory and refreshes it
either from the local snapshot (``load``) or from the voice service
(``update``). Only one load or update runs at a time; a request that
arrives while another is in progress is rejected immediately rather
than queued.

State transitions::

    IDLE --load--> LOADING --> IDLE
    IDLE --update--> UPDATING --> IDLE
    IDLE --update--> UPDATING --(failed, no catalog)--> LOADING --> IDLE

Usage:
    cache = VoiceCache(SnapshotStore.for_project(project_dir))
    cache.load()
    ok = await cache.update(config)
    names = cache.voice_names
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Callable, Optional, Protocol

from .config import WitConfiguration, load_configuration
from .decoder import decode_voices, excerpt
from .errors import (
    DecodeError,
    SnapshotError,
    SnapshotNotFoundError,
    SnapshotWriteError,
    VoiceFetchError,
)
from .fetcher import WitVoiceFetcher
from .models import VoiceCatalog, VoiceRecord
from .store import SnapshotStore

logger = logging.getLogger("wit-voice-cache.cache")

CompletionCallback = Callable[[bool], None]


class VoiceFetcher(Protocol):
    """Protocol for the remote voice source, enabling easy mocking in tests."""

    async def request_voices(
        self,
        config: WitConfiguration,
        options: Optional[dict[str, str]] = None,
    ) -> str:
        """Return the raw voice list JSON or raise VoiceFetchError."""
        ...


class CacheState(Enum):
    """What the cache is currently doing."""

    IDLE = "idle"
    LOADING = "loading"
    UPDATING = "updating"


class VoiceCache:
    """In-memory voice catalog backed by a snapshot file and a remote fetcher.

    Attributes:
        store: Snapshot file used for warm starts and update fallback.
        fetcher: Remote voice source used by ``update``.
    """

    def __init__(
        self,
        store: SnapshotStore,
        fetcher: Optional[VoiceFetcher] = None,
    ) -> None:
        self.store = store
        self.fetcher: VoiceFetcher = fetcher or WitVoiceFetcher()
        self._catalog: Optional[VoiceCatalog] = None
        self._state = CacheState.IDLE
        self._state_lock = threading.Lock()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> CacheState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return self._state is CacheState.LOADING

    @property
    def is_updating(self) -> bool:
        return self._state is CacheState.UPDATING

    @property
    def catalog(self) -> Optional[VoiceCatalog]:
        """The current catalog, or None if nothing has been loaded yet."""
        return self._catalog

    @property
    def voices(self) -> list[VoiceRecord]:
        """All known voices. Loads the snapshot first if nothing is cached."""
        if self._catalog is None:
            self.load()
        catalog = self._catalog
        return list(catalog.voices) if catalog is not None else []

    @property
    def voice_names(self) -> list[str]:
        """Distinct voice names. Loads the snapshot first if nothing is cached."""
        if self._catalog is None:
            self.load()
        catalog = self._catalog
        return list(catalog.voice_names) if catalog is not None else []

    def _set_state(self, state: CacheState) -> None:
        with self._state_lock:
            self._state = state

    @staticmethod
    def _complete(on_complete: Optional[CompletionCallback], success: bool) -> bool:
        if on_complete is not None:
            on_complete(success)
        return success

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    def load(self, on_complete: Optional[CompletionCallback] = None) -> bool:
        """Load voices from the local snapshot.

        Args:
            on_complete: Called once with the outcome.

        Returns:
            True if the snapshot was read and decoded, False if the cache
            was busy, no snapshot exists, or the snapshot was unusable.
        """
        with self._state_lock:
            busy = self._state
            accepted = busy is CacheState.IDLE and self.store.exists()
            if accepted:
                self._state = CacheState.LOADING

        if not accepted:
            if busy is not CacheState.IDLE:
                logger.debug("Voice load rejected: cache is %s", busy.value)
            else:
                logger.debug("Voice load skipped: no snapshot at %s", self.store.path)
            return self._complete(on_complete, False)

        try:
            success = self._load_snapshot()
        finally:
            self._set_state(CacheState.IDLE)
        return self._complete(on_complete, success)

    def _load_snapshot(self) -> bool:
        """Read and decode the snapshot. Caller owns the LOADING state."""
        try:
            json_text = self.store.read()
        except SnapshotNotFoundError:
            return False
        except SnapshotError as e:
            logger.error("Voice load failed: %s", e)
            return False

        try:
            records = decode_voices(json_text)
        except DecodeError as e:
            logger.error("Voice snapshot %s could not be decoded: %s", self.store.path, e)
            return False

        self._apply(records)
        logger.info("Loaded %d voices from %s", len(records), self.store.path)
        return True

    def _apply(self, records: list[VoiceRecord]) -> None:
        self._catalog = VoiceCatalog(voices=tuple(records))

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    async def update(
        self,
        config: WitConfiguration,
        on_complete: Optional[CompletionCallback] = None,
        options: Optional[dict[str, str]] = None,
    ) -> bool:
        """Refresh the catalog from the voice service.

        On success the raw response is written to the snapshot. On failure
        with no catalog in memory, the snapshot is loaded before
        ``on_complete`` runs; the reported outcome stays False either way.

        Args:
            config: Service configuration passed to the fetcher.
            on_complete: Called once with the outcome.
            options: Extra query parameters for the fetcher.

        Returns:
            True if fresh voices were downloaded and decoded.
        """
        with self._state_lock:
            busy = self._state
            if busy is CacheState.IDLE:
                self._state = CacheState.UPDATING

        if busy is not CacheState.IDLE:
            logger.debug("Voice update rejected: cache is %s", busy.value)
            return self._complete(on_complete, False)

        try:
            success = await self._download(config, options)
            if not success and self._catalog is None:
                logger.info("Voice update failed with no cached voices, falling back to snapshot")
                self._set_state(CacheState.LOADING)
                self._load_snapshot()
        finally:
            self._set_state(CacheState.IDLE)

        return self._complete(on_complete, success)

    async def _download(
        self,
        config: WitConfiguration,
        options: Optional[dict[str, str]],
    ) -> bool:
        """Fetch, decode, apply and persist. Caller owns the UPDATING state."""
        try:
            json_text = await self.fetcher.request_voices(config, options)
        except VoiceFetchError as e:
            logger.error("Voice download failed: %s", e)
            return False
        except Exception:
            logger.exception("Voice download failed with an unexpected error")
            return False

        logger.info("Voice download complete")
        logger.debug("Voice download payload: %s", excerpt(json_text))

        try:
            records = decode_voices(json_text)
        except DecodeError as e:
            logger.error("Downloaded voice list could not be decoded: %s", e)
            return False

        self._apply(records)

        try:
            self.store.write(json_text)
        except SnapshotWriteError as e:
            logger.error("Voice snapshot save failed: %s", e)

        logger.info("Updated voice list: %d voices", len(records))
        return True


# ---------------------------------------------------------------------------
# Process-wide instance
# ---------------------------------------------------------------------------

_default_cache: Optional[VoiceCache] = None
_default_lock = threading.Lock()


def get_default_cache() -> VoiceCache:
    """Return the shared cache for the configured project, creating it once."""
    global _default_cache
    with _default_lock:
        if _default_cache is None:
            _, settings = load_configuration()
            _default_cache = VoiceCache(SnapshotStore.for_project(settings.project_dir))
        return _default_cache
