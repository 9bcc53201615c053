"""
S3 backed media store.

Uploaded objects are written with a public-read ACL under a
`<epoch millis>-<8 hex chars>-<original file name>` key and addressed by their public URL,
which is what gets stored on news posts and VIP content.
"""

import asyncio
import logging
import os
import uuid
from typing import Optional
from urllib.parse import quote, unquote

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from bigjohn.errors.contentErrors import MediaUploadError
from bigjohn.util.timeUtil import millis_timestamp

logger = logging.getLogger(__name__)


class S3MediaStore:
    def __init__(
        self,
        bucket_name: Optional[str],
        region: Optional[str] = None,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        public_base_url: Optional[str] = None,
        s3_client=None,
    ):
        self.bucket_name = bucket_name
        self.region = region
        self.s3_client = s3_client or boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
        )
        if public_base_url:
            self.public_base_url = public_base_url.rstrip("/")
        elif region:
            self.public_base_url = f"https://{bucket_name}.s3.{region}.amazonaws.com"
        else:
            self.public_base_url = f"https://{bucket_name}.s3.amazonaws.com"

    def object_key(self, filename: str) -> str:
        # client supplied names may carry directories
        return f"{millis_timestamp()}-{uuid.uuid4().hex[:8]}-{os.path.basename(filename or 'upload')}"

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/{quote(key)}"

    def key_from_url(self, url: str) -> Optional[str]:
        if not url.startswith(self.public_base_url + "/"):
            return None
        return unquote(url[len(self.public_base_url) + 1:])

    def _put(self, body: bytes, key: str, content_type: Optional[str]) -> None:
        extra_args = {"ACL": "public-read"}
        if content_type:
            extra_args["ContentType"] = content_type
        self.s3_client.put_object(Bucket=self.bucket_name, Key=key, Body=body, **extra_args)

    async def upload(self, body: bytes, filename: str, content_type: Optional[str] = None) -> str:
        """Upload `body` and return the public URL of the new object. No retries."""
        key = self.object_key(filename)
        try:
            # boto3 blocks, keep it off the event loop
            await asyncio.to_thread(self._put, body, key, content_type)
        except (ClientError, BotoCoreError) as e:
            logger.error("❌ Upload of %s failed: %s", key, e)
            raise MediaUploadError(filename, str(e)) from e
        logger.info("✅ Uploaded %s (%d bytes)", key, len(body))
        return self.public_url(key)

    async def delete(self, url: str) -> bool:
        key = self.key_from_url(url)
        if key is None:
            logger.warning("⚠️ %s is not an object of bucket %s", url, self.bucket_name)
            return False
        try:
            await asyncio.to_thread(self.s3_client.delete_object, Bucket=self.bucket_name, Key=key)
            return True
        except (ClientError, BotoCoreError) as e:
            logger.error("❌ Delete of %s failed: %s", key, e)
            return False
