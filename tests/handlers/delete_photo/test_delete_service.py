import pytest

from core.models.errors import NotFoundError, StoreError
from handlers.delete_photo.service import DeleteService


@pytest.fixture
def service(settings, memory_index, recording_blobs) -> DeleteService:
    return DeleteService(settings, index=memory_index, blobs=recording_blobs)


class TestDeleteService:
    def test_delete_removes_keys_and_blobs(
        self, service, memory_index, memory_store, recording_blobs, make_record, base_millis
    ) -> None:
        record = make_record(
            "p1",
            variant_object_keys={"small": "photos/p1_small.jpg", "large": "photos/p1_large.jpg"},
        )
        memory_index.create(record, created_millis=base_millis)
        memory_index.create(make_record("p2"), created_millis=base_millis + 1)

        service.delete_photo("p1")

        assert sorted(memory_store.data) == [memory_index.resolve_primary_key("p2"), "lookup:p2"]
        assert recording_blobs.removed == [
            "photos/p1.jpg",
            "photos/p1_small.jpg",
            "photos/p1_large.jpg",
        ]

    def test_deleted_photo_is_not_found_and_not_listed(
        self, service, memory_index, make_record, base_millis
    ) -> None:
        memory_index.create(make_record("p1"), created_millis=base_millis)

        service.delete_photo("p1")

        with pytest.raises(NotFoundError):
            memory_index.get_by_id("p1")
        assert memory_index.list_primary_keys(limit=10) == []

    def test_unknown_id(self, service, recording_blobs) -> None:
        with pytest.raises(NotFoundError):
            service.delete_photo("missing")

        assert recording_blobs.removed == []

    def test_second_delete_is_not_found(self, service, memory_index, make_record, base_millis) -> None:
        memory_index.create(make_record("p1"), created_millis=base_millis)

        service.delete_photo("p1")

        with pytest.raises(NotFoundError):
            service.delete_photo("p1")

    def test_dangling_lookup_is_cleaned_up(self, service, memory_store, recording_blobs) -> None:
        memory_store.data["lookup:p1"] = "data:8295896799999:p1"

        service.delete_photo("p1")

        assert memory_store.data == {}
        assert recording_blobs.removed == []

    def test_corrupt_record_is_deleted_without_blob_removal(
        self, service, memory_store, recording_blobs
    ) -> None:
        memory_store.data["lookup:p1"] = "data:8295896799999:p1"
        memory_store.data["data:8295896799999:p1"] = "{broken"

        service.delete_photo("p1")

        assert memory_store.data == {}
        assert recording_blobs.removed == []

    def test_blob_failure_does_not_stop_deletion(
        self, service, memory_index, memory_store, recording_blobs, make_record, base_millis
    ) -> None:
        memory_index.create(make_record("p1"), created_millis=base_millis)
        recording_blobs.fail_remove = True

        service.delete_photo("p1")

        assert memory_store.data == {}

    def test_interrupted_delete_can_be_retried(
        self, service, memory_index, memory_store, make_record, base_millis
    ) -> None:
        memory_index.create(make_record("p1"), created_millis=base_millis)
        memory_store.fail_delete_prefixes = {"lookup:"}

        with pytest.raises(StoreError):
            service.delete_photo("p1")

        # Primary key is gone first, so the photo is no longer listed
        assert memory_index.list_primary_keys(limit=10) == []
        assert "lookup:p1" in memory_store.data

        memory_store.fail_delete_prefixes = set()
        service.delete_photo("p1")

        assert memory_store.data == {}
