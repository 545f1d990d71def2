"""Thin DynamoDB adapter wrapping boto3 client operations."""

from typing import Any, Protocol, cast

import boto3

from core.config import PortfolioSettings


class _Boto3DynamoDBClient(Protocol):
    """Internal typing for the boto3 DynamoDB client (AWS-facing only)."""

    def put_item(self, *, TableName: str, Item: dict[str, Any], **kwargs: Any) -> dict[str, Any]: ...
    def get_item(self, *, TableName: str, Key: dict[str, Any], **kwargs: Any) -> dict[str, Any]: ...
    def delete_item(self, *, TableName: str, Key: dict[str, Any], **kwargs: Any) -> dict[str, Any]: ...
    def query(self, *, TableName: str, **kwargs: Any) -> dict[str, Any]: ...


class DynamoDBAdapterProtocol(Protocol):
    """Minimal DynamoDB adapter protocol (repository-facing)."""

    def put_item(self, *, item: dict[str, Any]) -> dict[str, Any]: ...
    def get_item(self, *, key: dict[str, Any]) -> dict[str, Any]: ...
    def delete_item(self, *, key: dict[str, Any]) -> dict[str, Any]: ...
    def query(self, **kwargs: Any) -> dict[str, Any]: ...


class DynamoDBAdapter:
    """Low-level DynamoDB operations (mechanical, no error handling).

    This adapter:
    - Wraps the boto3 DynamoDB client, which is safe to share across
      the threads used for per-item fan-out
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(self, settings: PortfolioSettings) -> None:
        """Create the DynamoDB client for the configured table."""
        self._table_name = settings.kv_table_name
        self._client = cast(
            _Boto3DynamoDBClient,
            boto3.client(
                "dynamodb",
                endpoint_url=settings.aws_endpoint_url,
                region_name=settings.aws_region,
            ),
        )

    def put_item(self, *, item: dict[str, Any]) -> dict[str, Any]:
        """Insert or replace an item.

        Raises boto3 exceptions - caught by domain implementation.
        """
        return self._client.put_item(TableName=self._table_name, Item=item)

    def get_item(self, *, key: dict[str, Any]) -> dict[str, Any]:
        """Retrieve item by key with a strongly consistent read.

        Raises boto3 exceptions - caught by domain implementation.
        """
        return self._client.get_item(
            TableName=self._table_name,
            Key=key,
            ConsistentRead=True,
        )

    def delete_item(self, *, key: dict[str, Any]) -> dict[str, Any]:
        """Delete item by key.

        Raises boto3 exceptions - caught by domain implementation.
        """
        return self._client.delete_item(TableName=self._table_name, Key=key)

    def query(self, **kwargs: Any) -> dict[str, Any]:
        """Execute DynamoDB query.

        Raises boto3 exceptions - caught by domain implementation.
        """
        return self._client.query(TableName=self._table_name, **kwargs)
