from __future__ import annotations

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from uploader.clients.dynamodb import DynamoDBClient
from uploader.core.errors import StoreError


class RecordingTable:
    def __init__(self, item: dict | None = None, error: Exception | None = None) -> None:
        self.item = item
        self.error = error
        self.calls: list[tuple[str, dict]] = []

    def get_item(self, **kwargs) -> dict:
        self.calls.append(("get_item", kwargs))
        if self.error is not None:
            raise self.error
        return {"Item": self.item} if self.item is not None else {}

    def update_item(self, **kwargs) -> dict:
        self.calls.append(("update_item", kwargs))
        if self.error is not None:
            raise self.error
        return {}


def _client_error(code: str = "ProvisionedThroughputExceededException") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": "slow down"}}, "UpdateItem")


def test_get_item_uses_consistent_point_read(aws_settings) -> None:
    table = RecordingTable(item={"PK": "ORG#1", "SK": "CHANNEL#1"})
    client = DynamoDBClient(aws_settings, table=table)

    item = client.get_item(partition_key="ORG#1", sort_key="CHANNEL#1")

    assert item == {"PK": "ORG#1", "SK": "CHANNEL#1"}
    assert table.calls == [
        ("get_item", {"Key": {"PK": "ORG#1", "SK": "CHANNEL#1"}, "ConsistentRead": True})
    ]


def test_get_item_returns_none_when_missing(aws_settings) -> None:
    client = DynamoDBClient(aws_settings, table=RecordingTable())

    assert client.get_item(partition_key="ORG#1", sort_key="missing") is None


def test_update_attributes_sets_only_named_fields(aws_settings) -> None:
    table = RecordingTable()
    client = DynamoDBClient(aws_settings, table=table)

    client.update_attributes(
        partition_key="ORG#1#PROJECT#2",
        sort_key="VIDEO#a.mp4",
        attributes={"Status": "uploaded_to_yt", "YoutubeVideoId": "yt-1"},
    )

    _, kwargs = table.calls[0]
    assert kwargs["Key"] == {"PK": "ORG#1#PROJECT#2", "SK": "VIDEO#a.mp4"}
    assert kwargs["UpdateExpression"] == "SET #a0 = :v0, #a1 = :v1"
    assert kwargs["ExpressionAttributeNames"] == {"#a0": "Status", "#a1": "YoutubeVideoId"}
    assert kwargs["ExpressionAttributeValues"] == {":v0": "uploaded_to_yt", ":v1": "yt-1"}


def test_update_attributes_requires_attributes(aws_settings) -> None:
    client = DynamoDBClient(aws_settings, table=RecordingTable())

    with pytest.raises(ValueError):
        client.update_attributes(partition_key="p", sort_key="s", attributes={})


@pytest.mark.parametrize(
    "error",
    [_client_error(), EndpointConnectionError(endpoint_url="https://dynamodb.example")],
)
def test_store_failures_are_wrapped(aws_settings, error: Exception) -> None:
    client = DynamoDBClient(aws_settings, table=RecordingTable(error=error))

    with pytest.raises(StoreError):
        client.get_item(partition_key="p", sort_key="s")
    with pytest.raises(StoreError):
        client.update_attributes(partition_key="p", sort_key="s", attributes={"Status": "failed"})
