"""DynamoDB-backed implementation of KeyValueRepository.

The whole namespace lives under one hash key value (``kv_partition``) with
the logical key as the range key (``kv_key``), so a ``begins_with`` query
returns keys in the same ascending byte order a plain KV prefix listing
would.
"""

from typing import Any

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from core.config import PortfolioSettings
from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter, DynamoDBAdapterProtocol
from core.models.errors import StoreError
from core.repositories.kv_repository import KeyValueRepository
from core.utils.constants import (
    ERROR_CODE_STORE_DELETE_FAILED,
    ERROR_CODE_STORE_LIST_FAILED,
    ERROR_CODE_STORE_READ_FAILED,
    ERROR_CODE_STORE_WRITE_FAILED,
)

logger = Logger(UTC=True)

ATTR_PARTITION = "kv_partition"
ATTR_KEY = "kv_key"
ATTR_VALUE = "kv_value"


class DynamoDBKeyValueStore(KeyValueRepository):
    """DynamoDB-backed key-value namespace with error handling.

    All boto3 errors are caught and translated into
    StoreError with the failing operation and key attached.
    """

    def __init__(
        self,
        settings: PortfolioSettings,
        adapter: DynamoDBAdapterProtocol | None = None,
    ) -> None:
        """Initialize with DynamoDB adapter."""
        self._db: DynamoDBAdapterProtocol = adapter or DynamoDBAdapter(settings)
        self._partition = settings.kv_partition
        self._scan_ceiling = settings.scan_ceiling

    @property
    def scan_ceiling(self) -> int:
        return self._scan_ceiling

    def _item_key(self, key: str) -> dict[str, Any]:
        return {
            ATTR_PARTITION: {"S": self._partition},
            ATTR_KEY: {"S": key},
        }

    def put(self, key: str, value: str) -> None:
        logger.debug("Writing key", extra={"key": key, "size": len(value)})

        try:
            self._db.put_item(item={**self._item_key(key), ATTR_VALUE: {"S": value}})

        except (ClientError, BotoCoreError) as exc:
            logger.error("DynamoDB put_item failed", extra={"key": key})
            raise StoreError(
                message="Unable to save photo data at this time",
                error_code=ERROR_CODE_STORE_WRITE_FAILED,
                details={"operation": "put", "key": key, "cause": str(exc)},
            ) from exc

    def get(self, key: str) -> str | None:
        logger.debug("Reading key", extra={"key": key})

        try:
            response = self._db.get_item(key=self._item_key(key))

        except (ClientError, BotoCoreError) as exc:
            logger.error("DynamoDB get_item failed", extra={"key": key})
            raise StoreError(
                message="Unable to retrieve photo data",
                error_code=ERROR_CODE_STORE_READ_FAILED,
                details={"operation": "get", "key": key, "cause": str(exc)},
            ) from exc

        item = response.get("Item")
        if item is None:
            return None

        value = item.get(ATTR_VALUE, {}).get("S")
        if not isinstance(value, str):
            logger.error("Stored item has no string value", extra={"key": key})
            raise StoreError(
                message="Invalid stored value format",
                error_code=ERROR_CODE_STORE_READ_FAILED,
                details={"operation": "get", "key": key},
            )

        return value

    def delete(self, key: str) -> None:
        logger.debug("Deleting key", extra={"key": key})

        try:
            self._db.delete_item(key=self._item_key(key))

        except (ClientError, BotoCoreError) as exc:
            logger.error("DynamoDB delete_item failed", extra={"key": key})
            raise StoreError(
                message="Unable to delete photo data",
                error_code=ERROR_CODE_STORE_DELETE_FAILED,
                details={"operation": "delete", "key": key, "cause": str(exc)},
            ) from exc

    def list_by_prefix(
        self,
        prefix: str,
        *,
        limit: int,
        start_after: str | None = None,
    ) -> list[str]:
        """List keys by prefix, ascending, capped at the scan ceiling.

        NOTE:
        - DynamoDB pages at 1MB, so LastEvaluatedKey is followed until
          `limit` keys are collected or the prefix is exhausted.
        - Keys beyond the ceiling are not returned; callers that need
          them must continue with `start_after`.
        """
        effective_limit = min(limit, self._scan_ceiling)
        if effective_limit < 1:
            return []

        query_kwargs: dict[str, Any] = {
            "KeyConditionExpression": "#p = :partition AND begins_with(#k, :prefix)",
            "ExpressionAttributeNames": {"#p": ATTR_PARTITION, "#k": ATTR_KEY},
            "ExpressionAttributeValues": {
                ":partition": {"S": self._partition},
                ":prefix": {"S": prefix},
            },
            "ProjectionExpression": "#k",
            "ScanIndexForward": True,
            "ConsistentRead": True,
        }

        if start_after:
            query_kwargs["ExclusiveStartKey"] = self._item_key(start_after)

        keys: list[str] = []

        try:
            while True:
                query_kwargs["Limit"] = effective_limit - len(keys)
                response = self._db.query(**query_kwargs)

                keys.extend(item[ATTR_KEY]["S"] for item in response.get("Items", []))

                if len(keys) >= effective_limit:
                    keys = keys[:effective_limit]
                    break

                last_evaluated_key = response.get("LastEvaluatedKey")
                if not last_evaluated_key:
                    break
                query_kwargs["ExclusiveStartKey"] = last_evaluated_key

        except (ClientError, BotoCoreError) as exc:
            logger.error("DynamoDB query failed", extra={"prefix": prefix})
            raise StoreError(
                message="Unable to list photos",
                error_code=ERROR_CODE_STORE_LIST_FAILED,
                details={"operation": "list", "prefix": prefix, "cause": str(exc)},
            ) from exc

        logger.debug(
            "Keys listed",
            extra={"prefix": prefix, "count": len(keys), "limit": effective_limit},
        )
        return keys
