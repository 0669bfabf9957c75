"""S3 storage for generated NACHA files.

Each file is stored as ``text/plain`` with its generation summary (direction,
effective date, file ID modifier, entry count, total cents) as S3 user
metadata, so stored files can be audited without downloading their content.
"""

from __future__ import annotations

import logging

import boto3
from botocore.exceptions import ClientError

from achforge.core.config import S3Config
from achforge.core.exceptions import FileStoreError
from achforge.models.outputs import NACHA_CONTENT_TYPE, GeneratedFile

logger = logging.getLogger(__name__)


class S3FileStore:
    """IFileStore backed by one S3 bucket (or a LocalStack endpoint)."""

    def __init__(self, bucket: str, region: str = "us-east-1",
                 endpoint_url: str | None = None) -> None:
        self._bucket = bucket
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._client = boto3.client("s3", **kwargs)

    @classmethod
    def from_config(cls, config: S3Config) -> S3FileStore:
        return cls(bucket=config.bucket, region=config.region, endpoint_url=config.endpoint_url)

    def save(self, path: str, generated: GeneratedFile) -> str:
        try:
            self._client.put_object(
                Bucket=self._bucket,
                Key=path,
                Body=generated.encode(),
                ContentType=NACHA_CONTENT_TYPE,
                Metadata=generated.metadata,
            )
        except ClientError as exc:
            raise FileStoreError(f"Upload of {generated.filename!r} to s3://{self._bucket}/{path} failed") from exc
        logger.info(
            "NACHA file uploaded",
            extra={"bucket": self._bucket, "path": path, "sequence_number": generated.sequence_number},
        )
        return path

    def read(self, path: str) -> bytes:
        try:
            resp = self._client.get_object(Bucket=self._bucket, Key=path)
        except ClientError as exc:
            raise FileStoreError(f"No stored file at s3://{self._bucket}/{path}") from exc
        return resp["Body"].read()

    def metadata(self, path: str) -> dict[str, str]:
        try:
            resp = self._client.head_object(Bucket=self._bucket, Key=path)
        except ClientError as exc:
            raise FileStoreError(f"No stored file at s3://{self._bucket}/{path}") from exc
        return dict(resp.get("Metadata", {}))

    def list_files(self, prefix: str) -> list[str]:
        try:
            pages = self._client.get_paginator("list_objects_v2").paginate(
                Bucket=self._bucket, Prefix=prefix
            )
            return [obj["Key"] for page in pages for obj in page.get("Contents", [])]
        except ClientError as exc:
            raise FileStoreError(f"Listing s3://{self._bucket}/{prefix} failed") from exc
