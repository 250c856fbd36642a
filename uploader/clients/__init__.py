"""Expose constructed client wrappers."""

from .dynamodb import DynamoDBClient
from .google_auth import GoogleOAuthClient, OAuthTokenExchangeError
from .s3 import AssetStream, S3AssetStorage
from .youtube import StreamingMediaUpload, YouTubePublisher

__all__ = [
    "AssetStream",
    "DynamoDBClient",
    "GoogleOAuthClient",
    "OAuthTokenExchangeError",
    "S3AssetStorage",
    "StreamingMediaUpload",
    "YouTubePublisher",
]
