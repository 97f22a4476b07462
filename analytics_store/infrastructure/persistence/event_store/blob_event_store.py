"""Blob-directory backed Event Store implementation."""

import asyncio

import structlog

from analytics_store.domain.analytics import (
    BatchStoreResult,
    BlobDirectoryError,
    CipherError,
    EventCodecError,
    EventEncodeError,
    EventStoreError,
    EventStoreManager,
    FetchResult,
    InstrumentationEvent,
    RotationResult,
    StoreResult,
    StoreStatus,
)

from ...security import Cipher, IdentityCipher
from ..blob_directory import BlobDirectory, BlobHandle
from ..codec import EventCodec, JsonEventCodec

logger = structlog.get_logger(__name__)

DEFAULT_MAX_EVENTS = 1000


class BlobEventStore(EventStoreManager):
    """Event Store keeping one blob per instrumentation event.

    Each event is serialized, encrypted with the current key and written to
    the blob ``{event_id}{filename_suffix}``. The blob directory is shared
    and externally owned; the store keeps only its four configuration
    values (suffix, key, logging flag and capacity) and derives everything
    else from the directory contents at call time.

    Failures never propagate to the caller. Invalid input, missing events,
    refused batches, I/O errors and codec errors are logged and reported
    through the returned result objects instead.

    Multi-step sequences (writes, the batch admission check plus writes,
    delete-all and key rotation) run under a single per-store lock. The lock
    does not cover other store instances or processes sharing the directory.
    """

    def __init__(
        self,
        directory: BlobDirectory,
        filename_suffix: str,
        encryption_key: str,
        *,
        codec: EventCodec | None = None,
        cipher: Cipher | None = None,
        logging_enabled: bool = True,
        max_events: int = DEFAULT_MAX_EVENTS,
        filter_by_suffix: bool = False,
    ):
        self._directory = directory
        self._filename_suffix = filename_suffix
        self._encryption_key = encryption_key
        self._codec = codec or JsonEventCodec()
        self._cipher = cipher or IdentityCipher()
        self._logging_enabled = logging_enabled
        self._max_events = max_events
        self._filter_by_suffix = filter_by_suffix
        self._lock = asyncio.Lock()

    @property
    def filename_suffix(self) -> str:
        return self._filename_suffix

    @filename_suffix.setter
    def filename_suffix(self, value: str) -> None:
        self._filename_suffix = value

    @property
    def encryption_key(self) -> str:
        return self._encryption_key

    @encryption_key.setter
    def encryption_key(self, value: str) -> None:
        self._encryption_key = value

    @property
    def max_events(self) -> int:
        return self._max_events

    @property
    def directory(self) -> BlobDirectory:
        return self._directory

    def blob_name(self, event_id: str) -> str:
        """Get the blob name an event id is stored under."""
        return f"{event_id}{self._filename_suffix}"

    # ------------------------------------------------------------------
    # Store
    # ------------------------------------------------------------------

    async def store_event(self, event: InstrumentationEvent | None) -> StoreResult:
        """Store a single event.

        The admission check is not applied here; only batches are gated.
        """
        async with self._lock:
            return await self._write_event(event, self._encryption_key)

    async def store_events(
        self, events: list[InstrumentationEvent] | None
    ) -> BatchStoreResult:
        """Store a batch of events.

        The admission check runs once for the whole batch, so an admitted
        batch may push the directory past ``max_events``.
        """
        if not events:
            logger.error("no_events_to_store")
            return BatchStoreResult(status=StoreStatus.INVALID_INPUT, max_events=self._max_events)

        async with self._lock:
            try:
                stored_count = len(await self._list_own_blobs())
            except BlobDirectoryError as e:
                logger.error("admission_check_failed", error=str(e))
                return BatchStoreResult(status=StoreStatus.IO_FAILURE, max_events=self._max_events)

            if not self._should_store_events(stored_count):
                logger.info(
                    "events_not_admitted",
                    batch_size=len(events),
                    stored_count=stored_count,
                    max_events=self._max_events,
                    logging_enabled=self._logging_enabled,
                )
                return BatchStoreResult(
                    status=StoreStatus.ADMISSION_DENIED,
                    stored_count=stored_count,
                    max_events=self._max_events,
                )

            results = [await self._write_event(event, self._encryption_key) for event in events]

        logger.info(
            "events_stored",
            batch_size=len(events),
            written=sum(1 for r in results if r.ok),
            stored_count=stored_count,
        )
        return BatchStoreResult(
            status=StoreStatus.ADMITTED,
            stored_count=stored_count,
            max_events=self._max_events,
            results=results,
        )

    # ------------------------------------------------------------------
    # Fetch
    # ------------------------------------------------------------------

    async def read_event(self, event_id: str) -> FetchResult:
        """Look up an event and report the outcome with a typed status."""
        if not event_id:
            logger.error("invalid_event_id", event_id=event_id)
            return FetchResult(status=StoreStatus.INVALID_INPUT, event_id=event_id)

        blob_name = self.blob_name(event_id)
        try:
            handle = await self._directory.get(blob_name)
        except BlobDirectoryError as e:
            logger.error("event_lookup_failed", event_id=event_id, blob_name=blob_name, error=str(e))
            return FetchResult(status=StoreStatus.IO_FAILURE, event_id=event_id, detail=str(e))

        if handle is None:
            logger.error("event_not_found", event_id=event_id, blob_name=blob_name)
            return FetchResult(status=StoreStatus.NOT_FOUND, event_id=event_id)

        return await self._read_handle(handle, self._encryption_key, event_id=event_id)

    async def fetch_event(self, event_id: str) -> InstrumentationEvent | None:
        """Get an event by its ID, or None if it cannot be produced."""
        result = await self.read_event(event_id)
        return result.event if result.ok else None

    async def fetch_all_events(self) -> list[InstrumentationEvent]:
        """Get every readable event in the directory.

        Blobs that fail to read or decode are skipped.
        """
        try:
            handles = await self._list_own_blobs()
        except BlobDirectoryError as e:
            logger.error("event_listing_failed", error=str(e))
            return []

        events = []
        for handle in handles:
            result = await self._read_handle(handle, self._encryption_key)
            if result.ok:
                events.append(result.event)

        return events

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    async def delete_event(self, event_id: str) -> bool:
        if not event_id:
            logger.error("invalid_event_id", event_id=event_id)
            return False

        blob_name = self.blob_name(event_id)
        try:
            handle = await self._directory.get(blob_name)
            if handle is None:
                logger.debug("event_not_found", event_id=event_id, blob_name=blob_name)
                return False
            await handle.delete()
        except Exception as e:
            logger.warning("event_delete_failed", event_id=event_id, blob_name=blob_name, error=str(e))
            return False

        logger.debug("event_deleted", event_id=event_id, blob_name=blob_name)
        return True

    async def delete_events(self, event_ids: list[str] | None) -> list[str]:
        """Delete events one by one.

        Not atomic: earlier deletions stay in effect when a later one fails.

        Returns:
            The ids that could not be deleted
        """
        if not event_ids:
            logger.error("no_events_to_delete")
            return []

        failed = [event_id for event_id in event_ids if not await self.delete_event(event_id)]

        logger.info("events_deleted", requested=len(event_ids), failed=len(failed))
        return failed

    async def delete_all_events(self) -> int:
        async with self._lock:
            try:
                handles = await self._list_own_blobs()
            except BlobDirectoryError as e:
                logger.error("event_listing_failed", error=str(e))
                return 0

            deleted = 0
            for handle in handles:
                try:
                    await handle.delete()
                    deleted += 1
                except Exception as e:
                    logger.warning("event_delete_failed", blob_name=handle.name, error=str(e))

        logger.info("all_events_deleted", deleted=deleted, total=len(handles))
        return deleted

    # ------------------------------------------------------------------
    # Key rotation
    # ------------------------------------------------------------------

    async def change_encryption_key(self, old_key: str, new_key: str) -> RotationResult:
        """Re-persist every stored event under ``new_key``.

        Blobs are decrypted with ``old_key`` and overwritten in place, so no
        event is ever absent from the directory during rotation. Blobs that
        cannot be decoded under ``old_key`` are deleted once every readable
        event has been rewritten. If a rewrite fails, the blobs already
        rewritten are restored under ``old_key`` and the key is left
        unchanged. Rotation is not subject to the admission check.
        """
        async with self._lock:
            if old_key != self._encryption_key:
                logger.warning("encryption_key_mismatch")

            try:
                handles = await self._list_own_blobs()
            except BlobDirectoryError as e:
                logger.error("key_rotation_failed", stage="list", error=str(e))
                return RotationResult(status=StoreStatus.IO_FAILURE, detail=str(e))

            readable: list[tuple[BlobHandle, InstrumentationEvent]] = []
            unreadable: list[BlobHandle] = []
            for handle in handles:
                result = await self._read_handle(handle, old_key)
                if result.status == StoreStatus.IO_FAILURE:
                    logger.error("key_rotation_failed", stage="read", blob_name=handle.name)
                    return RotationResult(status=StoreStatus.IO_FAILURE, detail=result.detail)
                if result.ok:
                    readable.append((handle, result.event))
                else:
                    unreadable.append(handle)

            self._encryption_key = new_key

            rewritten: list[tuple[BlobHandle, InstrumentationEvent]] = []
            for handle, event in readable:
                try:
                    data = self._encode(event, new_key)
                    if data is None:
                        unreadable.append(handle)
                        continue
                    await handle.write_all(data)
                except Exception as e:
                    logger.error("key_rotation_failed", stage="write", blob_name=handle.name, error=str(e))
                    await self._restore(rewritten, old_key)
                    self._encryption_key = old_key
                    status = (
                        StoreStatus.CODEC_FAILURE
                        if isinstance(e, (EventCodecError, CipherError))
                        else StoreStatus.IO_FAILURE
                    )
                    return RotationResult(status=status, detail=str(e))
                rewritten.append((handle, event))

            dropped = []
            for handle in unreadable:
                try:
                    await handle.delete()
                    dropped.append(handle.name)
                except Exception as e:
                    logger.warning("unreadable_blob_delete_failed", blob_name=handle.name, error=str(e))

        logger.info(
            "encryption_key_rotated",
            rewritten=len(rewritten),
            dropped=len(dropped),
        )
        return RotationResult(
            status=StoreStatus.ROTATED,
            rewritten_count=len(rewritten),
            dropped_blobs=dropped,
        )

    async def _restore(
        self,
        rewritten: list[tuple[BlobHandle, InstrumentationEvent]],
        old_key: str,
    ) -> None:
        for handle, event in rewritten:
            try:
                data = self._encode(event, old_key)
                if data is not None:
                    await handle.write_all(data)
            except Exception as e:
                logger.error("key_rotation_restore_failed", blob_name=handle.name, error=str(e))

    # ------------------------------------------------------------------
    # Admission settings
    # ------------------------------------------------------------------

    def set_logging_enabled(self, enabled: bool) -> None:
        self._logging_enabled = enabled

    def is_logging_enabled(self) -> bool:
        return self._logging_enabled

    def set_max_events(self, max_events: int) -> None:
        self._max_events = max_events

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _should_store_events(self, stored_count: int) -> bool:
        return self._logging_enabled and stored_count < self._max_events

    async def _list_own_blobs(self) -> list[BlobHandle]:
        handles = await self._directory.list_blobs()
        if self._filter_by_suffix and self._filename_suffix:
            handles = [h for h in handles if h.name.endswith(self._filename_suffix)]
        return handles

    def _encode(self, event: InstrumentationEvent, key: str) -> bytes | None:
        """Serialize and encrypt an event. Returns None for an empty event."""
        try:
            text = self._codec.serialize(event)
        except (TypeError, ValueError) as e:
            raise EventEncodeError(f"Failed to serialize event {event.event_id}: {e}") from e

        if not text:
            return None

        try:
            return self._cipher.encrypt(text.encode("utf-8"), key)
        except CipherError:
            raise
        except Exception as e:
            raise CipherError(f"Failed to encrypt event {event.event_id}: {e}") from e

    def _decode(self, data: bytes, key: str) -> InstrumentationEvent:
        try:
            text = self._cipher.decrypt(data, key).decode("utf-8")
        except CipherError:
            raise
        except Exception as e:
            raise CipherError(f"Failed to decrypt blob: {e}") from e
        return self._codec.deserialize(text)

    async def _write_event(self, event: InstrumentationEvent | None, key: str) -> StoreResult:
        if event is None or not event.event_id:
            logger.error("invalid_event", reason="missing event or event id")
            return StoreResult(status=StoreStatus.INVALID_INPUT)

        try:
            data = self._encode(event, key)
        except EventStoreError as e:
            logger.error("event_encode_failed", event_id=event.event_id, error=str(e))
            return StoreResult(
                status=StoreStatus.CODEC_FAILURE,
                event_id=event.event_id,
                detail=str(e),
            )

        if data is None:
            logger.error("invalid_event", event_id=event.event_id, reason="empty serialized form")
            return StoreResult(status=StoreStatus.INVALID_INPUT, event_id=event.event_id)

        blob_name = self.blob_name(event.event_id)
        try:
            handle = await self._directory.create_or_open(blob_name)
            await handle.write_all(data)
        except Exception as e:
            logger.error("event_write_failed", event_id=event.event_id, blob_name=blob_name, error=str(e))
            return StoreResult(
                status=StoreStatus.IO_FAILURE,
                event_id=event.event_id,
                blob_name=blob_name,
                detail=str(e),
            )

        logger.debug("event_stored", event_id=event.event_id, blob_name=blob_name)
        return StoreResult(status=StoreStatus.STORED, event_id=event.event_id, blob_name=blob_name)

    async def _read_handle(
        self,
        handle: BlobHandle,
        key: str,
        event_id: str | None = None,
    ) -> FetchResult:
        try:
            data = await handle.read_all()
        except Exception as e:
            logger.error("event_read_failed", blob_name=handle.name, error=str(e))
            return FetchResult(status=StoreStatus.IO_FAILURE, event_id=event_id, detail=str(e))

        try:
            event = self._decode(data, key)
        except EventStoreError as e:
            logger.error("event_decode_failed", blob_name=handle.name, error=str(e))
            return FetchResult(status=StoreStatus.CODEC_FAILURE, event_id=event_id, detail=str(e))

        return FetchResult(status=StoreStatus.FOUND, event_id=event.event_id, event=event)
