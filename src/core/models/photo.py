"""Photo record model and its caller-facing projections.

Field names follow the JSON already persisted under ``data:`` keys
(snake_case at the top level, camelCase inside ``exif``), so records
written by earlier deployments load and re-save without loss. Unknown
keys are kept as extras for the same reason.
"""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.utils.constants import ALL_CATEGORY, MAX_RATING, MIN_RATING

ExifValue = str | int | float | None


class ExifData(BaseModel):
    """Camera and capture details extracted client-side; every field is optional."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    camera: str | None = Field(None, description="Camera model")
    lens: str | None = Field(None, description="Lens model")
    aperture: ExifValue = Field(None, description="Aperture, e.g. f/2.8")
    shutter_speed: ExifValue = Field(None, alias="shutterSpeed", description="Shutter speed, e.g. 1/250")
    iso: ExifValue = Field(None, description="ISO sensitivity")
    focal_length: ExifValue = Field(None, alias="focalLength", description="Focal length, e.g. 35mm")
    date: str | None = Field(None, description="Capture date as entered or extracted")
    location: str | None = Field(None, description="Free-text location")
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)

    def merged(self, changes: dict[str, Any]) -> "ExifData":
        """Return a copy with ``changes`` (keyed by stored/alias names) applied key by key."""
        base = self.model_dump(by_alias=True)
        base.update(changes)
        return ExifData.model_validate(base)


class PhotoUrls(BaseModel):
    """Multi-resolution image URLs."""

    small: str = Field(..., description="Map-size variant")
    medium: str = Field(..., description="Grid-size variant")
    large: str = Field(..., description="Detail-size variant")

    @classmethod
    def single(cls, url: str) -> "PhotoUrls":
        return cls(small=url, medium=url, large=url)


class PhotoRecord(BaseModel):
    """The persisted unit stored under a ``data:`` key."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., min_length=1, description="Opaque photo identifier, immutable")
    title: str | None = Field(None, description="Photo title")
    description: str | None = Field(None, description="Free-text description")
    tags: list[str] = Field(default_factory=list, description="Category labels; the first is the category")

    created_at: str = Field(..., description="Creation timestamp, set once")
    updated_at: str = Field(..., description="Last write timestamp")

    object_key: str | None = Field(None, description="Blob store key of the original image")
    mime: str | None = Field(None, description="MIME type of the original image")
    size_bytes: int | None = Field(None, ge=0, description="Size of the original image")
    width: int | None = Field(None, ge=0)
    height: int | None = Field(None, ge=0)

    exif: ExifData = Field(default_factory=ExifData)
    rating: int = Field(0, ge=MIN_RATING, le=MAX_RATING)
    is_public: int = 1

    url: str | None = Field(None, description="Canonical image URL")
    urls: PhotoUrls | None = Field(None, description="Optional size variants")
    variant_object_keys: dict[str, str] | None = Field(
        None,
        description="Blob store keys of the size variants, by size name",
    )

    @field_validator("exif", mode="before")
    @classmethod
    def default_exif(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("tags", mode="before")
    @classmethod
    def drop_empty_tags(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            return [tag for tag in value if tag]
        return value

    @field_validator("rating", mode="before")
    @classmethod
    def default_rating(cls, value: Any) -> Any:
        return 0 if value is None else value

    @property
    def category(self) -> str:
        return self.tags[0] if self.tags else ALL_CATEGORY

    def resolved_urls(self) -> PhotoUrls | None:
        """Size variants, falling back to the canonical URL for every size."""
        if self.urls is not None:
            return self.urls
        if self.url:
            return PhotoUrls.single(self.url)
        return None

    def blob_keys(self) -> list[str]:
        """Every blob store key this record references."""
        keys = [self.object_key] if self.object_key else []
        for key in (self.variant_object_keys or {}).values():
            if key and key not in keys:
                keys.append(key)
        return keys

    def to_json(self) -> str:
        return json.dumps(self.model_dump(mode="json", by_alias=True), ensure_ascii=False)

    @classmethod
    def from_json(cls, raw: str) -> "PhotoRecord":
        """Parse a stored value.

        Raises:
            ValueError: If the value is not JSON or does not match the schema
        """
        return cls.model_validate_json(raw)


class ExifSummary(BaseModel):
    """Location and date subset of EXIF used by the map and labels."""

    location: str = ""
    latitude: float | None = None
    longitude: float | None = None
    date: str | None = None


class PhotoSummary(BaseModel):
    """Light listing projection; omits full EXIF and storage details."""

    id: str
    title: str | None = None
    category: str
    url: str | None = None
    urls: PhotoUrls | None = None
    width: int | None = None
    height: int | None = None
    rating: int = 0
    exif: ExifSummary

    @classmethod
    def from_record(cls, record: PhotoRecord) -> "PhotoSummary":
        return cls(
            id=record.id,
            title=record.title,
            category=record.category,
            url=record.url,
            urls=record.resolved_urls(),
            width=record.width,
            height=record.height,
            rating=record.rating,
            exif=ExifSummary(
                location=record.exif.location or "",
                latitude=record.exif.latitude,
                longitude=record.exif.longitude,
                date=record.exif.date,
            ),
        )


def detail_projection(record: PhotoRecord) -> dict[str, Any]:
    """Full detail view: every stored field plus the derived category and URL fallback."""
    payload = record.model_dump(mode="json", by_alias=True, exclude={"variant_object_keys"})
    urls = record.resolved_urls()
    payload["category"] = record.category
    payload["urls"] = urls.model_dump() if urls else None
    return payload
