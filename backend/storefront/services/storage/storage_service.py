"""Design asset storage on S3-compatible object storage (MinIO locally, R2 or AWS S3 in production).

Assets are written once per order and served straight from the bucket, so the
bucket is created with an anonymous read policy and every stored object gets
a stable public URL.
"""

import hashlib
import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import aioboto3
import structlog
from botocore.config import Config
from botocore.exceptions import ClientError

from storefront.config import settings
from storefront.models.types import S3ObjectRefData

logger = structlog.get_logger(__name__)


def public_read_policy(bucket: str) -> str:
    """Bucket policy allowing anonymous GET on every object."""
    return json.dumps(
        {
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Effect": "Allow",
                    "Principal": "*",
                    "Action": ["s3:GetObject"],
                    "Resource": [f"arn:aws:s3:::{bucket}/*"],
                }
            ],
        }
    )


class S3StorageService:
    """Uploads order assets and builds their public URLs."""

    def __init__(self) -> None:
        self.bucket = settings.s3_bucket
        self.public_url = settings.s3_public_url.rstrip("/")
        self._client_options: dict[str, Any] = {
            "endpoint_url": settings.s3_endpoint,
            "aws_access_key_id": settings.s3_access_key_id,
            "aws_secret_access_key": settings.s3_secret_access_key,
            "region_name": settings.s3_region,
            "config": Config(s3={"addressing_style": "path"}) if settings.s3_force_path_style else None,
        }
        self._session = aioboto3.Session()

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[Any]:
        async with self._session.client("s3", **self._client_options) as client:
            yield client

    async def upload(
        self,
        upload_to: str,
        data: bytes,
        content_type: str,
        original_filename: str | None = None,
    ) -> S3ObjectRefData:
        """Store one asset under `upload_to` and describe the stored object.

        Errors from the S3 client propagate; callers decide whether a failed
        upload is fatal.
        """
        async with self._client() as client:
            response = await client.put_object(
                Bucket=self.bucket,
                Key=upload_to,
                Body=data,
                ContentType=content_type,
            )

        logger.info("Stored asset", key=upload_to, size=len(data), content_type=content_type)
        return S3ObjectRefData(
            key=upload_to,
            bucket=self.bucket,
            content_type=content_type,
            size=len(data),
            etag=response.get("ETag", "").strip('"') or None,
            sha256=hashlib.sha256(data).hexdigest(),
            original_filename=original_filename,
        )

    def get_public_url(self, file_ref: S3ObjectRefData) -> str:
        """Public URL of a stored object: S3_PUBLIC_URL joined with the object key."""
        return f"{self.public_url}/{file_ref.key}"

    async def ensure_bucket_exists(self) -> None:
        """Create the asset bucket with public read access unless it already exists. Run at startup."""
        async with self._client() as client:
            try:
                await client.head_bucket(Bucket=self.bucket)
            except ClientError:
                await self._create_public_bucket(client)
            else:
                logger.info("S3 bucket exists", bucket=self.bucket)

    async def _create_public_bucket(self, client: Any) -> None:
        try:
            await client.create_bucket(Bucket=self.bucket)
            await client.put_bucket_policy(Bucket=self.bucket, Policy=public_read_policy(self.bucket))
        except ClientError as e:
            logger.error("Failed to create S3 bucket", bucket=self.bucket, error=str(e))
            raise
        logger.info("Created S3 bucket with public read policy", bucket=self.bucket)
