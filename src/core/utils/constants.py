"""Global constants used throughout the application.

This module centralizes the key layout of the photo namespace, error codes,
upload constraints and environment variable names. Anything persisted here
(key prefixes, the timestamp ceiling, system keys) must stay byte-compatible
with data already written to the store.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_UNSUPPORTED_MIME_TYPE = "UNSUPPORTED_MIME_TYPE"
ERROR_CODE_FILE_SIZE_EXCEEDED = "FILE_SIZE_EXCEEDED"
ERROR_CODE_MISSING_FILE = "MISSING_FILE"
ERROR_CODE_INVALID_MULTIPART = "INVALID_MULTIPART"

# Authorization Errors
ERROR_CODE_UNAUTHORIZED = "UNAUTHORIZED"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_PHOTO_NOT_FOUND = "PHOTO_NOT_FOUND"

# Blob Storage Errors
ERROR_CODE_BLOB_STORAGE = "BLOB_STORAGE_ERROR"
ERROR_CODE_BLOB_UPLOAD_FAILED = "BLOB_UPLOAD_FAILED"
ERROR_CODE_BLOB_DELETE_FAILED = "BLOB_DELETE_FAILED"

# Key-Value Store Errors
ERROR_CODE_STORE = "STORE_ERROR"
ERROR_CODE_STORE_WRITE_FAILED = "STORE_WRITE_FAILED"
ERROR_CODE_STORE_READ_FAILED = "STORE_READ_FAILED"
ERROR_CODE_STORE_DELETE_FAILED = "STORE_DELETE_FAILED"
ERROR_CODE_STORE_LIST_FAILED = "STORE_LIST_FAILED"
ERROR_CODE_CORRUPT_RECORD = "CORRUPT_RECORD"
ERROR_CODE_INDEX_WRITE_FAILED = "INDEX_WRITE_FAILED"

# ============================================================================
# Key Layout
# ============================================================================

DATA_KEY_PREFIX: Final = "data:"
LOOKUP_KEY_PREFIX: Final = "lookup:"
SYSTEM_CATEGORIES_KEY: Final = "system:categories"
SYSTEM_PRESETS_KEY: Final = "system:presets"

# CEIL - now() stays positive (and 13 digits wide) until the 23rd century.
TIMESTAMP_CEILING: Final = 9999999999999
TIMESTAMP_WIDTH: Final = 13

# Hard cap on keys returned by a single prefix listing.
DEFAULT_SCAN_CEILING = 1000

BLOB_KEY_PREFIX: Final = "photos"

# ============================================================================
# File Upload Constraints
# ============================================================================

MAX_FILE_SIZE = 6 * 1024 * 1024  # 6MB, the Lambda synchronous payload limit

MIME_TYPE_EXTENSION_MAP: Final[dict[str, str]] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}

ALLOWED_MIME_TYPES: Final[frozenset[str]] = frozenset(MIME_TYPE_EXTENSION_MAP.keys())

# Form field name -> size variant.
VARIANT_FIELDS: Final[dict[str, str]] = {
    "file_small": "small",
    "file_medium": "medium",
    "file_large": "large",
}
IMAGE_VARIANTS: Final[tuple[str, ...]] = ("small", "medium", "large")

# ============================================================================
# Photo Metadata Constraints
# ============================================================================

MIN_RATING = 0
MAX_RATING = 5
MAX_TAGS = 10
TAG_MAX_LENGTH = 50
TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 2000

# Gallery label meaning "every category"; also the category reported for
# records that carry no tags.
ALL_CATEGORY = "全部"

# ============================================================================
# Pagination Constraints
# ============================================================================

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 30
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = DEFAULT_SCAN_CEILING

# Upper bound on ids accepted by one batch update
MAX_BATCH_IDS = DEFAULT_SCAN_CEILING

# ============================================================================
# Concurrency
# ============================================================================

DEFAULT_FAN_OUT_WORKERS = 8

# ============================================================================
# Observability
# ============================================================================

METRICS_NAMESPACE = "PhotoPortfolio"
SERVICE_NAME = "photo-portfolio"

# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,DELETE,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization"
EXPOSE_HEADERS = "Content-Type,Content-Length"
DEFAULT_CONTENT_TYPE = "application/json"
AUTHORIZATION_HEADER = "Authorization"
BEARER_PREFIX = "Bearer "

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_ADMIN_TOKEN = "ADMIN_TOKEN"
ENV_IMAGE_BASE_URL = "IMAGE_BASE_URL"
ENV_PHOTO_KV_TABLE_NAME = "PHOTO_KV_TABLE_NAME"
ENV_PHOTO_KV_PARTITION = "PHOTO_KV_PARTITION"
ENV_PHOTO_BUCKET_NAME = "PHOTO_BUCKET_NAME"
ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_SCAN_CEILING = "SCAN_CEILING"
ENV_FAN_OUT_WORKERS = "FAN_OUT_WORKERS"

DEFAULT_KV_PARTITION = "photo-kv"

# ============================================================================
# Helper Functions
# ============================================================================

def get_max_file_size_mb() -> int:
    """Get maximum file size in megabytes."""
    return MAX_FILE_SIZE // (1024 * 1024)

