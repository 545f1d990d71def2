"""Static bearer-token authorization for mutating endpoints."""

import hmac
from collections.abc import Mapping
from typing import Any

from aws_lambda_powertools import Logger

from core.models.errors import UnauthorizedError
from core.utils.constants import AUTHORIZATION_HEADER, BEARER_PREFIX

logger = Logger(UTC=True)


def get_header(event: Mapping[str, Any], name: str) -> str | None:
    """Return a request header value, matching the name case-insensitively."""
    headers = event.get("headers") or {}
    wanted = name.lower()

    for key, value in headers.items():
        if key.lower() == wanted:
            return value if isinstance(value, str) else None

    return None


def tokens_match(supplied: str | None, expected: str) -> bool:
    if not supplied or not expected:
        return False
    return hmac.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))


def require_bearer_token(event: Mapping[str, Any], expected_token: str) -> None:
    """Raise UnauthorizedError unless the request carries ``Bearer <expected_token>``.

    The whole header value is compared, so a missing prefix, extra
    whitespace or a different token are all rejected.
    """
    header = get_header(event, AUTHORIZATION_HEADER)

    if not tokens_match(header, f"{BEARER_PREFIX}{expected_token}"):
        logger.warning(
            "Rejected request with missing or invalid bearer token",
            extra={"path": event.get("path"), "has_header": header is not None},
        )
        raise UnauthorizedError()
