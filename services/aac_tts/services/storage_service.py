import asyncio
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..shared.config import Settings
from ..shared.constants import AUDIO_CONTENT_TYPE
from ..shared.errors import StorageError
from .polly_service import NO_RETRY_CONFIG, aws_error_message

logger = logging.getLogger(__name__)


class S3AudioStore:
    """Uploads generated audio to an S3 bucket"""

    def __init__(self, client, bucket_name: str, region: str):
        self.client = client
        self.bucket_name = bucket_name
        self.region = region

    @classmethod
    def from_settings(cls, settings: Settings) -> "S3AudioStore":
        client = boto3.client("s3", region_name=settings.region, config=NO_RETRY_CONFIG)
        return cls(client, bucket_name=settings.bucket_name, region=settings.region)

    def object_url(self, key: str) -> str:
        """Public URL of ``key``; no request to S3 is needed to build it"""
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{key}"

    def _upload_blocking(self, key: str, path: str) -> None:
        try:
            with open(path, "rb") as body:
                self.client.put_object(
                    Bucket=self.bucket_name,
                    Key=key,
                    Body=body,
                    ContentType=AUDIO_CONTENT_TYPE,
                )
        except (ClientError, BotoCoreError) as e:
            logger.debug("S3 upload error for %s: %s", key, e)
            raise StorageError(aws_error_message(e)) from e

    async def upload(self, key: str, path: str) -> None:
        """Stream the file at ``path`` to the bucket under ``key``"""
        await asyncio.to_thread(self._upload_blocking, key, path)
