"""Tests for S3BlobStorage."""

from typing import Any

import pytest
from botocore.exceptions import ClientError

from core.infrastructure.aws.s3_blob_storage import S3BlobStorage
from core.models.errors import BlobStorageError
from core.utils.constants import ERROR_CODE_BLOB_DELETE_FAILED, ERROR_CODE_BLOB_UPLOAD_FAILED


class DummyS3Adapter:
    """Configurable S3 adapter test double."""

    def __init__(
        self,
        *,
        put_exc: Exception | None = None,
        delete_exc: Exception | None = None,
    ) -> None:
        self._put_exc = put_exc
        self._delete_exc = delete_exc
        self.put_calls: list[dict[str, Any]] = []

    def put_object(self, **kwargs: Any) -> None:
        self.put_calls.append(kwargs)
        if self._put_exc:
            raise self._put_exc

    def delete_object(self, **_: Any) -> None:
        if self._delete_exc:
            raise self._delete_exc


def client_error(operation: str) -> ClientError:
    return ClientError({"Error": {"Code": "InternalError", "Message": "boom"}}, operation)


class TestS3BlobStorage:
    def test_put_blob_returns_public_url(self, settings) -> None:
        adapter = DummyS3Adapter()
        storage = S3BlobStorage(settings, adapter)

        url = storage.put_blob(key="photos/p1.jpg", data=b"x", content_type="image/jpeg")

        assert url == "https://images.example.com/photos/p1.jpg"
        assert adapter.put_calls[0]["content_type"] == "image/jpeg"

    def test_base_url_trailing_slash(self, settings) -> None:
        storage = S3BlobStorage(
            settings.model_copy(update={"image_base_url": "https://cdn.example.com/"}),
            DummyS3Adapter(),
        )

        assert storage.url_for("photos/a.png") == "https://cdn.example.com/photos/a.png"

    def test_put_blob_error(self, settings) -> None:
        storage = S3BlobStorage(settings, DummyS3Adapter(put_exc=client_error("PutObject")))

        with pytest.raises(BlobStorageError) as exc_info:
            storage.put_blob(key="photos/p1.jpg", data=b"x", content_type="image/jpeg")

        assert exc_info.value.error_code == ERROR_CODE_BLOB_UPLOAD_FAILED
        assert exc_info.value.details["key"] == "photos/p1.jpg"

    def test_remove_blob_error(self, settings) -> None:
        storage = S3BlobStorage(settings, DummyS3Adapter(delete_exc=client_error("DeleteObject")))

        with pytest.raises(BlobStorageError) as exc_info:
            storage.remove_blob(key="photos/p1.jpg")

        assert exc_info.value.error_code == ERROR_CODE_BLOB_DELETE_FAILED


class TestS3BlobStorageMoto:
    def test_upload_and_remove(self, blob_storage, s3_client, s3_bucket, s3_object_keys, sample_png_bytes) -> None:
        blob_storage.put_blob(key="photos/p1.png", data=sample_png_bytes, content_type="image/png")

        head = s3_client.head_object(Bucket=s3_bucket, Key="photos/p1.png")
        assert head["ContentType"] == "image/png"
        assert head["ContentLength"] == len(sample_png_bytes)
        assert s3_object_keys() == ["photos/p1.png"]

        blob_storage.remove_blob(key="photos/p1.png")

        assert s3_object_keys() == []

    def test_remove_missing_object_is_not_an_error(self, blob_storage) -> None:
        blob_storage.remove_blob(key="photos/never-uploaded.jpg")
