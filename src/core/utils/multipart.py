"""
Upload request body parsing.

``POST /upload`` accepts two body shapes:

- ``multipart/form-data`` with a ``meta`` JSON part, a ``file`` part and
  optional ``file_small`` / ``file_medium`` / ``file_large`` parts
- a JSON document ``{"meta": {...}, "file": "<base64>", "files": {"small": "<base64>"}}``

API Gateway delivers binary bodies base64-encoded (``isBase64Encoded``).
"""

import base64
import binascii
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from email import policy
from email.parser import BytesParser
from typing import Any

from aws_lambda_powertools import Logger

from core.models.errors import ValidationError
from core.utils.auth import get_header
from core.utils.constants import (
    ERROR_CODE_FILE_SIZE_EXCEEDED,
    ERROR_CODE_INVALID_MULTIPART,
    IMAGE_VARIANTS,
    MAX_FILE_SIZE,
    VARIANT_FIELDS,
    get_max_file_size_mb,
)

logger = Logger(UTC=True)

META_FIELD = "meta"
FILE_FIELD = "file"


@dataclass(frozen=True)
class UploadedFile:
    """One file taken from an upload body."""

    field: str
    data: bytes
    filename: str | None = None
    content_type: str | None = None

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class UploadPayload:
    """Parsed upload: metadata dict, optional main file and size variants."""

    meta: dict[str, Any]
    file: UploadedFile | None = None
    variants: dict[str, UploadedFile] = field(default_factory=dict)


def _check_size(upload: UploadedFile) -> UploadedFile:
    if upload.size > MAX_FILE_SIZE:
        raise ValidationError(
            message=f"File size exceeds {get_max_file_size_mb()}MB limit",
            error_code=ERROR_CODE_FILE_SIZE_EXCEEDED,
            details={"field": upload.field, "size": upload.size},
        )
    return upload


def _parse_meta(raw: Any) -> dict[str, Any]:
    if raw is None:
        return {}

    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError as exc:
            raise ValidationError(
                message="Invalid metadata: meta must be a JSON object",
                details={"field": META_FIELD},
            ) from exc

    if not isinstance(raw, dict):
        raise ValidationError(
            message="Invalid metadata: meta must be a JSON object",
            details={"field": META_FIELD},
        )

    return raw


def raw_body(event: Mapping[str, Any]) -> bytes:
    """Return the request body as bytes, undoing API Gateway's base64 wrapping."""
    body = event.get("body") or ""

    if event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValidationError(
                message="Invalid request body encoding",
                error_code=ERROR_CODE_INVALID_MULTIPART,
            ) from exc

    return body.encode("utf-8") if isinstance(body, str) else body


def parse_multipart(body: bytes, content_type: str) -> UploadPayload:
    """Parse a ``multipart/form-data`` body.

    Empty file parts (a form submitted without choosing a file) are ignored.

    Raises:
        ValidationError: If the body is not valid multipart or meta is not a JSON object
    """
    envelope = f"Content-Type: {content_type}\r\nMIME-Version: 1.0\r\n\r\n".encode("utf-8")
    message = BytesParser(policy=policy.HTTP).parsebytes(envelope + body)

    if not message.is_multipart():
        raise ValidationError(
            message="Invalid multipart body",
            error_code=ERROR_CODE_INVALID_MULTIPART,
        )

    meta_raw: str | None = None
    main_file: UploadedFile | None = None
    variants: dict[str, UploadedFile] = {}

    for part in message.iter_parts():
        name = part.get_param("name", header="content-disposition")
        if not name:
            continue

        data = part.get_payload(decode=True) or b""

        if name == META_FIELD:
            charset = part.get_content_charset() or "utf-8"
            meta_raw = data.decode(charset)
            continue

        if name != FILE_FIELD and name not in VARIANT_FIELDS:
            logger.debug("Ignoring unknown form field", extra={"field": name})
            continue

        if not data:
            continue

        upload = _check_size(
            UploadedFile(
                field=name,
                data=data,
                filename=part.get_filename(),
                content_type=part.get_content_type(),
            )
        )

        if name == FILE_FIELD:
            main_file = upload
        else:
            variants[VARIANT_FIELDS[name]] = upload

    return UploadPayload(meta=_parse_meta(meta_raw), file=main_file, variants=variants)


def _decode_b64_file(field_name: str, encoded: Any) -> UploadedFile | None:
    if encoded is None or encoded == "":
        return None

    if not isinstance(encoded, str):
        raise ValidationError(
            message=f"Invalid file: {field_name} must be a base64 string",
            details={"field": field_name},
        )

    # Accept data URLs as produced by FileReader.readAsDataURL
    content_type = None
    if encoded.startswith("data:") and "," in encoded:
        header, encoded = encoded.split(",", 1)
        content_type = header[len("data:"):].split(";", 1)[0] or None

    try:
        data = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValidationError(
            message="Invalid base64 encoded file",
            details={"field": field_name},
        ) from exc

    if not data:
        return None

    return _check_size(UploadedFile(field=field_name, data=data, content_type=content_type))


def parse_json_upload(body: bytes) -> UploadPayload:
    """Parse the JSON upload body.

    Raises:
        ValidationError: If the body is not a JSON object or a file is not valid base64
    """
    try:
        document = json.loads(body or b"{}")
    except ValueError as exc:
        raise ValidationError(message="Invalid JSON body") from exc

    if not isinstance(document, dict):
        raise ValidationError(message="Invalid JSON body: expected an object")

    main_file = _decode_b64_file(FILE_FIELD, document.get(FILE_FIELD))

    files = document.get("files") or {}
    if not isinstance(files, dict):
        raise ValidationError(
            message="Invalid files: expected an object keyed by size",
            details={"field": "files"},
        )

    variants: dict[str, UploadedFile] = {}
    for size in IMAGE_VARIANTS:
        upload = _decode_b64_file(f"files.{size}", files.get(size))
        if upload is not None:
            variants[size] = upload

    return UploadPayload(
        meta=_parse_meta(document.get(META_FIELD)),
        file=main_file,
        variants=variants,
    )


def parse_upload_body(event: Mapping[str, Any]) -> UploadPayload:
    """Parse an upload request by its Content-Type.

    Raises:
        ValidationError: If the body cannot be parsed
    """
    content_type = get_header(event, "Content-Type") or ""
    body = raw_body(event)

    if content_type.lower().startswith("multipart/form-data"):
        payload = parse_multipart(body, content_type)
    else:
        payload = parse_json_upload(body)

    logger.debug(
        "Upload body parsed",
        extra={
            "content_type": content_type.split(";", 1)[0],
            "has_file": payload.file is not None,
            "variants": sorted(payload.variants),
        },
    )
    return payload
