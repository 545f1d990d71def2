import base64
import json
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import pytest

MULTIPART_BOUNDARY = "----gallery-form-boundary"


@pytest.fixture
def lambda_context(monkeypatch):
    context = SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )

    monkeypatch.setattr(
        "aws_lambda_powertools.utilities.typing.LambdaContext",
        lambda: context,
        raising=False,
    )

    return context


@pytest.fixture
def aws_resources(kv_table, s3_bucket) -> None:
    """Moto table and bucket used by handlers that build their own services."""


@pytest.fixture
def list_photos_event() -> Callable[..., dict[str, Any]]:
    def _event(**params: str) -> dict[str, Any]:
        return {
            "httpMethod": "GET",
            "path": "/photos",
            "queryStringParameters": params or None,
            "headers": {},
        }

    return _event


@pytest.fixture
def photo_path_event() -> Callable[..., dict[str, Any]]:
    def _event(photo_id: str | None, *, method: str = "GET", headers: dict[str, str] | None = None) -> dict[str, Any]:
        return {
            "httpMethod": method,
            "path": f"/photos/{photo_id}",
            "pathParameters": {"id": photo_id} if photo_id is not None else None,
            "headers": headers or {},
        }

    return _event


@pytest.fixture
def json_event() -> Callable[..., dict[str, Any]]:
    """
    API Gateway event with a JSON body.

    Usage:
        json_event({"ids": ["p1"]}, headers=auth_headers)
    """

    def _event(
        body: Any,
        *,
        method: str = "POST",
        path: str = "/",
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        return {
            "httpMethod": method,
            "path": path,
            "headers": {"Content-Type": "application/json", **(headers or {})},
            "body": body if isinstance(body, str) else json.dumps(body),
        }

    return _event


@pytest.fixture
def multipart_event() -> Callable[..., dict[str, Any]]:
    """
    Base64-encoded multipart upload event, as API Gateway delivers it.

    Usage:
        multipart_event({"title": "Dunes"}, files={"file": png_bytes}, headers=auth_headers)
    """

    def _event(
        meta: dict[str, Any] | None,
        *,
        files: dict[str, bytes] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        chunks: list[bytes] = []
        if meta is not None:
            chunks.append(
                (
                    f"--{MULTIPART_BOUNDARY}\r\n"
                    'Content-Disposition: form-data; name="meta"\r\n'
                    "Content-Type: application/json; charset=utf-8\r\n\r\n"
                ).encode("utf-8")
                + json.dumps(meta, ensure_ascii=False).encode("utf-8")
                + b"\r\n"
            )
        for name, data in (files or {}).items():
            chunks.append(
                (
                    f"--{MULTIPART_BOUNDARY}\r\n"
                    f'Content-Disposition: form-data; name="{name}"; filename="{name}.bin"\r\n'
                    "Content-Type: application/octet-stream\r\n\r\n"
                ).encode("utf-8")
                + data
                + b"\r\n"
            )
        chunks.append(f"--{MULTIPART_BOUNDARY}--\r\n".encode("utf-8"))

        return {
            "httpMethod": "POST",
            "path": "/upload",
            "headers": {
                "Content-Type": f"multipart/form-data; boundary={MULTIPART_BOUNDARY}",
                **(headers or {}),
            },
            "body": base64.b64encode(b"".join(chunks)).decode("ascii"),
            "isBase64Encoded": True,
        }

    return _event
