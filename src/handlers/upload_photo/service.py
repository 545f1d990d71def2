"""Business logic for photo create and edit.

Create:
1. Validate every file (type, size) before any write
2. Upload the image and its size variants to blob storage
3. Write the record through the index (primary key, then lookup key)
4. Remove the uploaded blobs again if the index write fails

Edit keeps the record's primary key, so a photo never moves in the feed:
1. Resolve the id through its lookup key (absent -> NotFoundError, never create)
2. Upload any new files
3. Merge the supplied fields into the stored record and rewrite it in place
4. Remove blobs the record no longer references (best-effort)
"""

import uuid
from collections.abc import Callable
from typing import Any

from aws_lambda_powertools import Logger

from core.config import PortfolioSettings, get_settings
from core.index.photo_index import PhotoIndex
from core.infrastructure.aws.dynamodb_kv_store import DynamoDBKeyValueStore
from core.infrastructure.aws.s3_blob_storage import S3BlobStorage
from core.models.errors import BlobStorageError, StoreError, ValidationError
from core.models.photo import PhotoRecord, PhotoUrls
from core.repositories.blob_repository import BlobStorageRepository
from core.utils.constants import (
    ALLOWED_MIME_TYPES,
    BLOB_KEY_PREFIX,
    ERROR_CODE_MISSING_FILE,
    ERROR_CODE_UNSUPPORTED_MIME_TYPE,
    IMAGE_VARIANTS,
)
from core.utils.mime import detect_mime_type, extension_for
from core.utils.multipart import UploadedFile
from core.utils.time import Clock, iso_from_millis, now_millis

from .models import UploadMetadata

logger = Logger(UTC=True)


def apply_category(tags: list[str], category: str | None) -> list[str]:
    """Make ``category`` the first tag, keeping the other tags in order."""
    if not category:
        return list(tags)
    return [category, *(tag for tag in tags if tag != category)]


class UploadService:
    """Application service responsible for photo creation and edits."""

    def __init__(
        self,
        settings: PortfolioSettings | None = None,
        *,
        index: PhotoIndex | None = None,
        blobs: BlobStorageRepository | None = None,
        clock: Clock | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.index = index or PhotoIndex(DynamoDBKeyValueStore(self.settings))
        self.blobs = blobs or S3BlobStorage(self.settings)
        self.clock: Clock = clock or now_millis
        self.id_factory = id_factory or self.generate_photo_id

    @staticmethod
    def generate_photo_id() -> str:
        """Generate a unique photo identifier."""
        return str(uuid.uuid4())

    @staticmethod
    def blob_key_for(photo_id: str, mime_type: str, size: str | None = None) -> str:
        suffix = f"_{size}" if size else ""
        return f"{BLOB_KEY_PREFIX}/{photo_id}{suffix}.{extension_for(mime_type)}"

    @staticmethod
    def detect_file_type(upload: UploadedFile) -> str:
        """Return the MIME type of an uploaded image.

        Raises:
            ValidationError: If the bytes are not a supported image type
        """
        try:
            mime_type = detect_mime_type(upload.data)
        except ValueError as exc:
            logger.warning(
                "Unsupported upload type",
                extra={"field": upload.field, "declared": upload.content_type},
            )
            raise ValidationError(
                message="Unsupported image type",
                error_code=ERROR_CODE_UNSUPPORTED_MIME_TYPE,
                details={"field": upload.field, "declared": upload.content_type},
            ) from exc

        if mime_type not in ALLOWED_MIME_TYPES:
            raise ValidationError(
                message="Unsupported image type",
                error_code=ERROR_CODE_UNSUPPORTED_MIME_TYPE,
                details={"field": upload.field, "mime_type": mime_type},
            )
        return mime_type

    def save(
        self,
        meta: UploadMetadata,
        *,
        file: UploadedFile | None = None,
        variants: dict[str, UploadedFile] | None = None,
    ) -> PhotoRecord:
        """Create or edit depending on whether ``meta`` carries an id."""
        if meta.is_edit:
            return self.edit_photo(meta, file=file, variants=variants)
        return self.create_photo(meta, file=file, variants=variants)

    def create_photo(
        self,
        meta: UploadMetadata,
        *,
        file: UploadedFile | None,
        variants: dict[str, UploadedFile] | None = None,
    ) -> PhotoRecord:
        """Upload blobs and index a new photo.

        Raises:
            ValidationError: If the title or file is missing, or a file is not a supported image
            BlobStorageError: If a blob upload fails
            StoreError: If the index write fails
        """
        if not meta.title:
            raise ValidationError(message="Missing title", details={"field": "title"})

        if file is None:
            raise ValidationError(
                message="Missing file",
                error_code=ERROR_CODE_MISSING_FILE,
                details={"field": "file"},
            )

        photo_id = self.id_factory()
        created_millis = self.clock()
        timestamp = iso_from_millis(created_millis)

        logger.debug("Starting photo creation", extra={"id": photo_id})

        uploaded = self._upload_files(photo_id, file, variants or {})

        tags = apply_category(meta.tags or [], meta.category)
        record = PhotoRecord(
            id=photo_id,
            title=meta.title,
            description=meta.description or "",
            tags=tags,
            created_at=timestamp,
            updated_at=timestamp,
            exif=meta.exif if meta.exif is not None else {},
            rating=meta.rating or 0,
            width=meta.width,
            height=meta.height,
            is_public=1,
            **uploaded,
        )

        try:
            self.index.create(record, created_millis=created_millis)
        except StoreError:
            logger.exception("Failed to index photo", extra={"id": photo_id})
            self._remove_blobs(record.blob_keys())
            raise

        logger.info("Photo created successfully", extra={"id": photo_id})
        return record

    def edit_photo(
        self,
        meta: UploadMetadata,
        *,
        file: UploadedFile | None = None,
        variants: dict[str, UploadedFile] | None = None,
    ) -> PhotoRecord:
        """Merge supplied fields (and any new files) into an existing photo.

        Raises:
            NotFoundError: If the id has no lookup key or no record
            ValidationError: If a file is not a supported image
            BlobStorageError: If a blob upload fails
            StoreError: If the rewrite fails
        """
        photo_id = meta.id
        primary_key, existing = self.index.get_by_id(photo_id)

        logger.debug("Starting photo edit", extra={"id": photo_id, "primary_key": primary_key})

        changes: dict[str, Any] = {}
        for name in ("title", "description", "width", "height"):
            if meta.supplied(name):
                changes[name] = getattr(meta, name)

        if meta.supplied("rating"):
            changes["rating"] = meta.rating or 0

        if meta.supplied("tags") and meta.tags is not None:
            base_tags = meta.tags
        else:
            # A new category replaces the current first tag
            base_tags = existing.tags[1:] if meta.category else existing.tags
        if meta.supplied("category") or meta.supplied("tags"):
            changes["tags"] = apply_category(base_tags, meta.category)

        if meta.exif is not None:
            changes["exif"] = existing.exif.merged(meta.exif_changes())

        if file is not None:
            changes.update(self._upload_files(photo_id, file, variants or {}))
        elif variants:
            changes.update(self._upload_variants(photo_id, variants, fallback_url=existing.url))

        changes["updated_at"] = iso_from_millis(self.clock())

        updated = existing.model_copy(update=changes)
        # Round-trip through validation so merged values obey the record schema
        updated = PhotoRecord.model_validate(updated.model_dump(by_alias=True))

        new_keys = [key for key in updated.blob_keys() if key not in existing.blob_keys()]
        try:
            self.index.update(primary_key, updated)
        except StoreError:
            logger.exception("Failed to rewrite photo", extra={"id": photo_id})
            self._remove_blobs(new_keys)
            raise

        stale_keys = [key for key in existing.blob_keys() if key not in updated.blob_keys()]
        self._remove_blobs(stale_keys)

        logger.info("Photo updated successfully", extra={"id": photo_id})
        return updated

    def _upload_files(
        self,
        photo_id: str,
        file: UploadedFile,
        variants: dict[str, UploadedFile],
    ) -> dict[str, Any]:
        """Upload the main file and its variants; return the record fields they set.

        Every file is type-checked before the first upload. If an upload
        fails, files already uploaded by this call are removed again.
        """
        mime_type = self.detect_file_type(file)
        variant_types = {size: self.detect_file_type(upload) for size, upload in variants.items()}

        object_key = self.blob_key_for(photo_id, mime_type)
        url = self.blobs.put_blob(key=object_key, data=file.data, content_type=mime_type)

        fields: dict[str, Any] = {
            "object_key": object_key,
            "url": url,
            "mime": mime_type,
            "size_bytes": file.size,
            "urls": None,
            "variant_object_keys": None,
        }

        if variants:
            try:
                fields.update(self._put_variants(photo_id, variants, variant_types, fallback_url=url))
            except BlobStorageError:
                self._remove_blobs([object_key])
                raise

        return fields

    def _upload_variants(
        self,
        photo_id: str,
        variants: dict[str, UploadedFile],
        *,
        fallback_url: str | None,
    ) -> dict[str, Any]:
        variant_types = {size: self.detect_file_type(upload) for size, upload in variants.items()}
        return self._put_variants(photo_id, variants, variant_types, fallback_url=fallback_url)

    def _put_variants(
        self,
        photo_id: str,
        variants: dict[str, UploadedFile],
        variant_types: dict[str, str],
        *,
        fallback_url: str | None,
    ) -> dict[str, Any]:
        keys: dict[str, str] = {}
        urls: dict[str, str] = {}

        try:
            for size in IMAGE_VARIANTS:
                upload = variants.get(size)
                if upload is None:
                    continue
                key = self.blob_key_for(photo_id, variant_types[size], size)
                urls[size] = self.blobs.put_blob(
                    key=key,
                    data=upload.data,
                    content_type=variant_types[size],
                )
                keys[size] = key
        except BlobStorageError:
            logger.exception("Variant upload failed", extra={"id": photo_id})
            self._remove_blobs(list(keys.values()))
            raise

        # Sizes not uploaded fall back to the main image, or the largest uploaded variant
        default_url = fallback_url or urls.get("large") or urls.get("medium") or urls.get("small")
        resolved = {size: urls.get(size, default_url) for size in IMAGE_VARIANTS}

        return {
            "urls": PhotoUrls(**resolved),
            "variant_object_keys": keys,
        }

    def _remove_blobs(self, keys: list[str]) -> None:
        """Best-effort removal; failures are logged and left behind."""
        for key in keys:
            try:
                self.blobs.remove_blob(key=key)
            except BlobStorageError:
                logger.warning("Failed to clean up blob", extra={"key": key})
