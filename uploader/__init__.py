"""Publishes approved videos from S3 to YouTube on behalf of channel owners."""
