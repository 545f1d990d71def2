"""
Two-key photo index over a flat key-value namespace.

Every live photo ``I`` created at ``t`` milliseconds owns exactly two keys:

    data:<CEIL - t>:<I>   -> JSON PhotoRecord   (primary key)
    lookup:<I>            -> "data:<CEIL - t>:<I>"

Ascending key order over ``data:`` is newest-first. The store has no
transactions, so the write order is fixed:

- create writes the primary key, then the lookup key
- remove deletes the primary key, then the lookup key

An interrupted create therefore leaves at worst a listable record with no
lookup (and the create is rolled back best-effort); an interrupted remove
leaves a lookup that still resolves, so retrying the delete finishes it.
"""

from aws_lambda_powertools import Logger

from core.models.errors import CorruptRecordError, NotFoundError, StoreError
from core.models.photo import PhotoRecord
from core.repositories.kv_repository import KeyValueRepository
from core.utils.constants import (
    DATA_KEY_PREFIX,
    ERROR_CODE_INDEX_WRITE_FAILED,
    ERROR_CODE_PHOTO_NOT_FOUND,
    LOOKUP_KEY_PREFIX,
    TIMESTAMP_CEILING,
    TIMESTAMP_WIDTH,
)

logger = Logger(UTC=True)


def invert_timestamp(millis: int) -> str:
    """Return ``CEIL - millis`` as a fixed-width decimal string.

    Raises:
        ValueError: If ``millis`` is negative or beyond the ceiling
    """
    if millis < 0 or millis > TIMESTAMP_CEILING:
        raise ValueError(f"Timestamp out of range: {millis}")
    return f"{TIMESTAMP_CEILING - millis:0{TIMESTAMP_WIDTH}d}"


def primary_key_for(photo_id: str, created_millis: int) -> str:
    return f"{DATA_KEY_PREFIX}{invert_timestamp(created_millis)}:{photo_id}"


def lookup_key_for(photo_id: str) -> str:
    return f"{LOOKUP_KEY_PREFIX}{photo_id}"


def photo_id_from_primary_key(primary_key: str) -> str:
    """Extract the photo id from ``data:<inverted>:<id>``.

    Raises:
        ValueError: If the key is not a primary key
    """
    if not primary_key.startswith(DATA_KEY_PREFIX):
        raise ValueError(f"Not a primary key: {primary_key}")

    _, _, photo_id = primary_key[len(DATA_KEY_PREFIX):].partition(":")
    if not photo_id:
        raise ValueError(f"Primary key has no photo id: {primary_key}")
    return photo_id


class PhotoIndex:
    """Maintains primary and lookup keys for photo records."""

    def __init__(self, store: KeyValueRepository) -> None:
        self._store = store

    def resolve_primary_key(self, photo_id: str) -> str | None:
        """Follow ``lookup:<id>`` to the current primary key, or None."""
        return self._store.get(lookup_key_for(photo_id))

    def get_record(self, primary_key: str) -> PhotoRecord | None:
        """Load the record stored under a primary key.

        Returns:
            The record, or None if the key is absent

        Raises:
            CorruptRecordError: If the stored value cannot be parsed
            StoreError: If the read fails
        """
        raw = self._store.get(primary_key)
        if raw is None:
            return None

        try:
            return PhotoRecord.from_json(raw)
        except ValueError as exc:
            logger.error("Stored photo record is unreadable", extra={"key": primary_key})
            raise CorruptRecordError(
                message="Stored photo record is unreadable",
                details={"key": primary_key, "cause": str(exc)},
            ) from exc

    def get_by_id(self, photo_id: str) -> tuple[str, PhotoRecord]:
        """Resolve a photo id to its primary key and record.

        Raises:
            NotFoundError: If the lookup key is absent, or the primary key it
                           points at is absent
            CorruptRecordError: If the stored record cannot be parsed
        """
        primary_key = self.resolve_primary_key(photo_id)
        if primary_key is None:
            raise NotFoundError(
                message=f"Photo not found: {photo_id}",
                error_code=ERROR_CODE_PHOTO_NOT_FOUND,
                details={"id": photo_id},
            )

        record = self.get_record(primary_key)
        if record is None:
            logger.warning(
                "Lookup points at a missing primary key",
                extra={"id": photo_id, "primary_key": primary_key},
            )
            raise NotFoundError(
                message=f"Photo not found: {photo_id}",
                error_code=ERROR_CODE_PHOTO_NOT_FOUND,
                details={"id": photo_id, "primary_key": primary_key},
            )

        return primary_key, record

    def create(self, record: PhotoRecord, *, created_millis: int) -> str:
        """Write a new record and its lookup key.

        Returns:
            The primary key

        Raises:
            StoreError: If either write fails; a failed lookup write removes
                        the primary key again (best-effort)
        """
        primary_key = primary_key_for(record.id, created_millis)
        lookup_key = lookup_key_for(record.id)

        self._store.put(primary_key, record.to_json())

        try:
            self._store.put(lookup_key, primary_key)
        except StoreError as exc:
            logger.error(
                "Lookup write failed after primary write",
                extra={"id": record.id, "primary_key": primary_key},
            )
            try:
                self._store.delete(primary_key)
            except StoreError:
                logger.warning(
                    "Rollback of primary key failed; record is listable but not addressable",
                    extra={"id": record.id, "primary_key": primary_key},
                )
            raise StoreError(
                message="Unable to index photo",
                error_code=ERROR_CODE_INDEX_WRITE_FAILED,
                details={"id": record.id, "primary_key": primary_key, "cause": exc.message},
            ) from exc

        logger.info("Photo indexed", extra={"id": record.id, "primary_key": primary_key})
        return primary_key

    def update(self, primary_key: str, record: PhotoRecord) -> None:
        """Rewrite a record in place; its position in listings is unchanged."""
        self._store.put(primary_key, record.to_json())
        logger.debug("Photo record rewritten", extra={"id": record.id, "primary_key": primary_key})

    def remove(self, photo_id: str, primary_key: str) -> None:
        """Delete the primary key, then the lookup key."""
        self._store.delete(primary_key)
        self._store.delete(lookup_key_for(photo_id))
        logger.info("Photo unindexed", extra={"id": photo_id, "primary_key": primary_key})

    def list_primary_keys(self, *, limit: int, start_after: str | None = None) -> list[str]:
        """Primary keys newest-first, capped by ``limit`` and the store's scan ceiling."""
        return self._store.list_by_prefix(DATA_KEY_PREFIX, limit=limit, start_after=start_after)
