"""
Thin wrapper around the DynamoDB table holding channel and video records.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from uploader.core.config import AWSSettings
from uploader.core.errors import StoreError


class DynamoDBClient:
    """Point reads and targeted attribute updates keyed by ``PK``/``SK``."""

    def __init__(self, settings: AWSSettings, table: Any | None = None) -> None:
        self._settings = settings
        if table is None:
            resource = boto3.resource("dynamodb", region_name=settings.region_name)
            table = resource.Table(settings.table_name)
        self._table = table

    def get_item(self, *, partition_key: str, sort_key: str) -> Optional[Dict[str, Any]]:
        """Retrieve an item using its key, or ``None`` when it does not exist."""
        try:
            response = self._table.get_item(
                Key={"PK": partition_key, "SK": sort_key},
                ConsistentRead=True,
            )
        except (BotoCoreError, ClientError) as exc:
            raise StoreError(f"Failed to read {partition_key}/{sort_key}: {exc}") from exc
        return response.get("Item")

    def update_attributes(
        self, *, partition_key: str, sort_key: str, attributes: Mapping[str, Any]
    ) -> None:
        """Set only the named attributes, leaving the rest of the item untouched."""
        if not attributes:
            raise ValueError("At least one attribute is required for an update.")

        names: Dict[str, str] = {}
        values: Dict[str, Any] = {}
        assignments = []
        for index, (name, value) in enumerate(attributes.items()):
            names[f"#a{index}"] = name
            values[f":v{index}"] = value
            assignments.append(f"#a{index} = :v{index}")

        try:
            self._table.update_item(
                Key={"PK": partition_key, "SK": sort_key},
                UpdateExpression="SET " + ", ".join(assignments),
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
            )
        except (BotoCoreError, ClientError) as exc:
            raise StoreError(f"Failed to update {partition_key}/{sort_key}: {exc}") from exc


__all__ = ["DynamoDBClient"]
