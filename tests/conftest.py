"""
Pytest configuration and fixtures for photo-portfolio tests.
Provides AWS mocking, the KV table and image bucket, and record factories.
"""

import base64
import os
from collections.abc import Callable, Iterator
from typing import Any

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("AWS_SECURITY_TOKEN", "testing")
os.environ.setdefault("AWS_SESSION_TOKEN", "testing")
os.environ.setdefault("ADMIN_TOKEN", "test-admin-token")
os.environ.setdefault("IMAGE_BASE_URL", "https://images.example.com")
os.environ.setdefault("PHOTO_KV_TABLE_NAME", "photo-kv-test")
os.environ.setdefault("PHOTO_BUCKET_NAME", "photo-bucket-test")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "PhotoPortfolio")

from core.config import PortfolioSettings, get_settings  # noqa: E402
from core.index.photo_index import PhotoIndex  # noqa: E402
from core.infrastructure.aws.dynamodb_kv_store import DynamoDBKeyValueStore  # noqa: E402
from core.infrastructure.aws.s3_blob_storage import S3BlobStorage  # noqa: E402
from core.models.errors import BlobStorageError, StoreError  # noqa: E402
from core.models.photo import PhotoRecord  # noqa: E402
from core.repositories.blob_repository import BlobStorageRepository  # noqa: E402
from core.repositories.kv_repository import KeyValueRepository  # noqa: E402

ADMIN_TOKEN = os.environ["ADMIN_TOKEN"]

# 2024-01-01T10:00:00.000Z
BASE_MILLIS = 1_704_103_200_000

PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
)
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9"


class FakeClock:
    """Deterministic millisecond clock; each call advances by ``step``."""

    def __init__(self, start: int = BASE_MILLIS, step: int = 1000) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> int:
        value = self.now
        self.now += self.step
        return value


class InMemoryKeyValueStore(KeyValueRepository):
    """Dict-backed store with opt-in failures, for exercising partial-write paths."""

    def __init__(self, scan_ceiling: int = 1000) -> None:
        self.data: dict[str, str] = {}
        self.scan_ceiling = scan_ceiling
        self.fail_put_prefixes: set[str] = set()
        self.fail_get_keys: set[str] = set()
        self.fail_delete_prefixes: set[str] = set()

    def put(self, key: str, value: str) -> None:
        if any(key.startswith(prefix) for prefix in self.fail_put_prefixes):
            raise StoreError(message="injected put failure", details={"key": key})
        self.data[key] = value

    def get(self, key: str) -> str | None:
        if key in self.fail_get_keys:
            raise StoreError(message="injected get failure", details={"key": key})
        return self.data.get(key)

    def delete(self, key: str) -> None:
        if any(key.startswith(prefix) for prefix in self.fail_delete_prefixes):
            raise StoreError(message="injected delete failure", details={"key": key})
        self.data.pop(key, None)

    def list_by_prefix(
        self,
        prefix: str,
        *,
        limit: int,
        start_after: str | None = None,
    ) -> list[str]:
        keys = sorted(key for key in self.data if key.startswith(prefix))
        if start_after is not None:
            keys = [key for key in keys if key > start_after]
        return keys[: min(limit, self.scan_ceiling)]


class RecordingBlobStorage(BlobStorageRepository):
    """Blob store double that records uploads and removals."""

    def __init__(self, base_url: str = "https://images.example.com") -> None:
        self.base_url = base_url
        self.objects: dict[str, bytes] = {}
        self.removed: list[str] = []
        self.fail_put_keys: set[str] = set()
        self.fail_remove = False

    def put_blob(self, *, key: str, data: bytes, content_type: str) -> str:
        if key in self.fail_put_keys:
            raise BlobStorageError(message="injected upload failure", details={"key": key})
        self.objects[key] = data
        return f"{self.base_url}/{key}"

    def remove_blob(self, *, key: str) -> None:
        if self.fail_remove:
            raise BlobStorageError(message="injected removal failure", details={"key": key})
        self.removed.append(key)
        self.objects.pop(key, None)


@pytest.fixture(autouse=True)
def fresh_settings() -> Iterator[None]:
    """Settings are cached per process; rebuild them for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> PortfolioSettings:
    return get_settings()


@pytest.fixture
def admin_token() -> str:
    return ADMIN_TOKEN


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def base_millis() -> int:
    return BASE_MILLIS


@pytest.fixture
def memory_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def make_memory_index() -> Callable[..., PhotoIndex]:
    """Index over a fresh in-memory store with its own scan ceiling."""

    def _make(scan_ceiling: int = 1000) -> PhotoIndex:
        return PhotoIndex(InMemoryKeyValueStore(scan_ceiling=scan_ceiling))

    return _make


@pytest.fixture
def memory_index(memory_store) -> PhotoIndex:
    return PhotoIndex(memory_store)


@pytest.fixture
def recording_blobs() -> RecordingBlobStorage:
    return RecordingBlobStorage()


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def dynamodb_client(aws_mock):
    return boto3.client("dynamodb", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def kv_table(dynamodb_client) -> str:
    """
    Create the KV table for testing.

    The table lives only inside the moto context of the test.
    """
    table_name = os.environ["PHOTO_KV_TABLE_NAME"]

    try:
        dynamodb_client.describe_table(TableName=table_name)
    except ClientError:
        dynamodb_client.create_table(
            TableName=table_name,
            BillingMode="PAY_PER_REQUEST",
            KeySchema=[
                {"AttributeName": "kv_partition", "KeyType": "HASH"},
                {"AttributeName": "kv_key", "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "kv_partition", "AttributeType": "S"},
                {"AttributeName": "kv_key", "AttributeType": "S"},
            ],
        )

    return table_name


@pytest.fixture
def kv_store(kv_table, settings) -> DynamoDBKeyValueStore:
    return DynamoDBKeyValueStore(settings)


@pytest.fixture
def photo_index(kv_store) -> PhotoIndex:
    return PhotoIndex(kv_store)


@pytest.fixture
def kv_raw_get(dynamodb_client, kv_table, settings) -> Callable[[str], str | None]:
    """
    Read a value straight from the table, bypassing the store.

    Usage:
        assert kv_raw_get("lookup:abc") is None
    """

    def _get(key: str) -> str | None:
        response = dynamodb_client.get_item(
            TableName=kv_table,
            Key={"kv_partition": {"S": settings.kv_partition}, "kv_key": {"S": key}},
        )
        item = response.get("Item")
        return item["kv_value"]["S"] if item else None

    return _get


@pytest.fixture
def kv_raw_put(dynamodb_client, kv_table, settings) -> Callable[[str, str], None]:
    """Write a value straight into the table, e.g. to plant a corrupt record."""

    def _put(key: str, value: str) -> None:
        dynamodb_client.put_item(
            TableName=kv_table,
            Item={
                "kv_partition": {"S": settings.kv_partition},
                "kv_key": {"S": key},
                "kv_value": {"S": value},
            },
        )

    return _put


@pytest.fixture
def kv_all_keys(dynamodb_client, kv_table) -> Callable[[], list[str]]:
    """Every key in the table, sorted."""

    def _keys() -> list[str]:
        keys: list[str] = []
        kwargs: dict[str, Any] = {"TableName": kv_table}
        while True:
            response = dynamodb_client.scan(**kwargs)
            keys.extend(item["kv_key"]["S"] for item in response.get("Items", []))
            if "LastEvaluatedKey" not in response:
                break
            kwargs["ExclusiveStartKey"] = response["LastEvaluatedKey"]
        return sorted(keys)

    return _keys


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def s3_bucket(s3_client) -> str:
    bucket_name = os.environ["PHOTO_BUCKET_NAME"]

    try:
        s3_client.head_bucket(Bucket=bucket_name)
    except ClientError:
        s3_client.create_bucket(Bucket=bucket_name)

    return bucket_name


@pytest.fixture
def s3_object_keys(s3_client, s3_bucket) -> Callable[[], list[str]]:
    def _keys() -> list[str]:
        response = s3_client.list_objects_v2(Bucket=s3_bucket)
        return sorted(obj["Key"] for obj in response.get("Contents", []))

    return _keys


@pytest.fixture
def blob_storage(s3_bucket, settings) -> S3BlobStorage:
    return S3BlobStorage(settings)


@pytest.fixture
def sample_png_bytes() -> bytes:
    """Sample binary image data (1x1 PNG)."""
    return PNG_BYTES


@pytest.fixture
def sample_jpeg_bytes() -> bytes:
    return JPEG_BYTES


@pytest.fixture
def make_record() -> Callable[..., PhotoRecord]:
    """
    Factory for photo records.

    Usage:
        record = make_record("p1", title="Dunes", tags=["Landscape"])
    """

    def _make(photo_id: str, **overrides: Any) -> PhotoRecord:
        fields: dict[str, Any] = {
            "id": photo_id,
            "title": f"Photo {photo_id}",
            "description": "",
            "tags": ["Landscape"],
            "created_at": "2024-01-01T10:00:00.000Z",
            "updated_at": "2024-01-01T10:00:00.000Z",
            "object_key": f"photos/{photo_id}.jpg",
            "mime": "image/jpeg",
            "size_bytes": 1024,
            "width": 1200,
            "height": 800,
            "exif": {"camera": "X100V", "location": "Kyoto", "latitude": 35.0, "longitude": 135.7},
            "rating": 4,
            "is_public": 1,
            "url": f"https://images.example.com/photos/{photo_id}.jpg",
        }
        fields.update(overrides)
        return PhotoRecord.model_validate(fields)

    return _make


@pytest.fixture
def seed_index() -> Callable[..., list[str]]:
    """
    Create ``count`` records in an index at one-second intervals.

    Returns the ids oldest first.
    """

    def _seed(index: PhotoIndex, count: int, *, prefix: str = "p", tags: list[str] | None = None) -> list[str]:
        ids: list[str] = []
        for n in range(count):
            photo_id = f"{prefix}{n:03d}"
            record = PhotoRecord(
                id=photo_id,
                title=f"Photo {n}",
                tags=tags if tags is not None else ["Landscape"],
                created_at="2024-01-01T10:00:00.000Z",
                updated_at="2024-01-01T10:00:00.000Z",
                url=f"https://images.example.com/photos/{photo_id}.jpg",
            )
            index.create(record, created_millis=BASE_MILLIS + n * 1000)
            ids.append(photo_id)
        return ids

    return _seed
