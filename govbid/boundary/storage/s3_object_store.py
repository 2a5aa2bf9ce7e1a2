"""
S3 object store for checklist files.

Downloads uploaded compliance documents for analysis and stores new uploads.
Works against AWS S3 or any S3-compatible endpoint.

Dependencies: boto3
System role: Blob storage adapter for the analysis queue
"""

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from govbid.core.exceptions import DownloadError

_NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


class S3ObjectStore:
    """Read and write checklist files in a single bucket."""

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        client=None,
    ) -> None:
        """
        Initialize S3 object store.

        Args:
            bucket: Bucket holding checklist files
            region: AWS region of the bucket
            endpoint_url: Custom endpoint for S3-compatible providers
            client: Preconfigured boto3 S3 client (built from region/endpoint if omitted)
        """
        self._bucket = bucket
        self._region = region
        self._s3_client = client or boto3.client(
            "s3",
            region_name=region,
            endpoint_url=endpoint_url,
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    def download(self, path: str) -> bytes:
        """
        Download an object into memory.

        Args:
            path: Object key (e.g., "{company_id}/{checklist_item_id}/{ts}-{name}")

        Returns:
            bytes: Object content

        Raises:
            DownloadError: When the key is empty, missing, or the read fails
        """
        if not path:
            raise DownloadError("Object path is required", path)

        try:
            response = self._s3_client.get_object(Bucket=self._bucket, Key=path)
            return response["Body"].read()

        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code in _NOT_FOUND_CODES:
                raise DownloadError(f"File not found in storage: {path}", path) from e
            raise DownloadError(f"Failed to download file: {e}", path) from e
        except BotoCoreError as e:
            raise DownloadError(f"Storage unavailable: {e}", path) from e

    def upload(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> None:
        """
        Store an object, overwriting any existing key.

        Raises:
            ClientError: If the put fails
        """
        self._s3_client.put_object(
            Bucket=self._bucket,
            Key=path,
            Body=data,
            ContentType=content_type,
        )
