"""S3 media host service for project images and the display order document"""

import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional
import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel, Field

from portfolio_api.config import Settings

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".gif", ".avif", ".heic"}
NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


class MediaStorageError(Exception):
    """Base exception for media host errors"""
    pass


class MediaNotFoundError(MediaStorageError):
    """Requested object does not exist on the media host"""
    pass


class MediaAsset(BaseModel):
    """Image object listed from the media host"""
    key: str
    url: str
    created_at: datetime
    metadata: Dict[str, str] = Field(default_factory=dict)


class UploadedAsset(BaseModel):
    """Result of a single image upload"""
    public_id: str
    url: str


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "Unknown")


class MediaStorageService:
    """Service for S3 operations backing the external media host"""

    LIST_PAGE_SIZE = 500

    def __init__(self, settings: Settings):
        """Initialize S3 client with retry configuration"""
        self.settings = settings
        self.bucket = settings.s3_bucket or ""
        self.base_folder = settings.media_base_folder

        retry_config = Config(
            retries={
                "max_attempts": 3,
                "mode": "standard",
            },
            connect_timeout=5,
            read_timeout=10,
        )

        client_kwargs = {
            "region_name": settings.aws_region,
            "config": retry_config,
        }

        if settings.aws_access_key_id and settings.aws_secret_access_key:
            client_kwargs["aws_access_key_id"] = settings.aws_access_key_id
            client_kwargs["aws_secret_access_key"] = settings.aws_secret_access_key

        # Custom endpoint for S3-compatible hosts (MinIO, R2)
        if settings.aws_endpoint_url:
            client_kwargs["endpoint_url"] = settings.aws_endpoint_url

        try:
            self.s3_client = boto3.client("s3", **client_kwargs)
            logger.info(f"S3 client initialized for bucket: {self.bucket or '<unset>'}")
        except (BotoCoreError, ValueError) as e:
            logger.error(f"Failed to initialize S3 client: {e}")
            raise MediaStorageError(f"Failed to initialize S3 client: {e}")

    @property
    def is_configured(self) -> bool:
        return self.settings.media_configured

    def public_url(self, key: str) -> str:
        """Public URL of an object key"""
        if self.settings.media_public_url:
            return f"{self.settings.media_public_url.rstrip('/')}/{key}"
        if self.settings.aws_endpoint_url:
            return f"{self.settings.aws_endpoint_url.rstrip('/')}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.{self.settings.aws_region}.amazonaws.com/{key}"

    def build_key(self, *segments: str) -> str:
        """
        Join key segments under the configured base folder.

        Empty segments are dropped, surrounding slashes are stripped.
        """
        parts = [self.base_folder] + [segment.strip("/") for segment in segments]
        return "/".join(part for part in parts if part)

    def upload_image(
        self,
        file_bytes: bytes,
        key: str,
        content_type: str = "application/octet-stream",
        metadata: Optional[Dict[str, str]] = None,
    ) -> UploadedAsset:
        """
        Upload image bytes to the media host.

        Args:
            file_bytes: Image bytes
            key: Object key
            content_type: MIME type of the image
            metadata: Custom metadata stored with the object

        Returns:
            UploadedAsset with object key and public URL

        Raises:
            MediaStorageError: If upload fails
        """
        try:
            self.s3_client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=file_bytes,
                ContentType=content_type,
                Metadata=metadata or {},
            )
        except ClientError as e:
            error_code = _error_code(e)
            logger.error(f"Error uploading image {key}: {error_code} - {e}")
            raise MediaStorageError(f"Failed to upload image: {error_code}")
        except BotoCoreError as e:
            logger.error(f"Unexpected error uploading image {key}: {e}")
            raise MediaStorageError(f"Failed to upload image: {e}")

        url = self.public_url(key)
        logger.info(f"Uploaded {len(file_bytes)} bytes to {url}")
        return UploadedAsset(public_id=key, url=url)

    def delete_image(self, key: str) -> None:
        """
        Delete an image from the media host.

        Raises:
            MediaStorageError: If deletion fails
        """
        try:
            self.s3_client.delete_object(Bucket=self.bucket, Key=key)
            logger.info(f"Deleted object: {key}")
        except ClientError as e:
            logger.error(f"Error deleting object {key}: {e}")
            raise MediaStorageError(f"Failed to delete object: {_error_code(e)}")
        except BotoCoreError as e:
            logger.error(f"Unexpected error deleting object {key}: {e}")
            raise MediaStorageError(f"Failed to delete object: {e}")

    def list_images(self, prefix: str = "") -> List[MediaAsset]:
        """
        List every image object under a prefix.

        Follows the continuation token until the listing is exhausted, then
        reads each image's custom metadata.

        Raises:
            MediaStorageError: If any page or metadata request fails
        """
        assets: List[MediaAsset] = []
        params: Dict[str, Any] = {
            "Bucket": self.bucket,
            "Prefix": prefix,
            "MaxKeys": self.LIST_PAGE_SIZE,
        }

        try:
            while True:
                response = self.s3_client.list_objects_v2(**params)
                for item in response.get("Contents", []):
                    key = item["Key"]
                    if not self._is_image_key(key):
                        continue
                    assets.append(
                        MediaAsset(
                            key=key,
                            url=self.public_url(key),
                            created_at=item["LastModified"],
                            metadata=self._head_metadata(key),
                        )
                    )

                next_token = response.get("NextContinuationToken")
                if not next_token:
                    break
                params["ContinuationToken"] = next_token
        except ClientError as e:
            error_code = _error_code(e)
            logger.error(f"Error listing images under '{prefix}': {error_code} - {e}")
            raise MediaStorageError(f"Failed to list images: {error_code}")
        except BotoCoreError as e:
            logger.error(f"Unexpected error listing images under '{prefix}': {e}")
            raise MediaStorageError(f"Failed to list images: {e}")

        logger.debug(f"Listed {len(assets)} images under '{prefix}'")
        return assets

    def _head_metadata(self, key: str) -> Dict[str, str]:
        response = self.s3_client.head_object(Bucket=self.bucket, Key=key)
        return {k.lower(): v for k, v in response.get("Metadata", {}).items()}

    @staticmethod
    def _is_image_key(key: str) -> bool:
        if key.endswith("/"):
            return False
        dot = key.rfind(".")
        return dot != -1 and key[dot:].lower() in IMAGE_EXTENSIONS

    def upload_json(self, key: str, data: Dict[str, Any]) -> None:
        """
        Upload (overwrite) a JSON document.

        Raises:
            MediaStorageError: If upload fails
        """
        json_bytes = json.dumps(data).encode("utf-8")
        try:
            self.s3_client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=json_bytes,
                ContentType="application/json",
                CacheControl="no-store",
            )
            logger.info(f"Uploaded JSON document to {key}")
        except ClientError as e:
            error_code = _error_code(e)
            logger.error(f"Error uploading JSON {key}: {error_code} - {e}")
            raise MediaStorageError(f"Failed to upload JSON: {error_code}")
        except BotoCoreError as e:
            logger.error(f"Unexpected error uploading JSON {key}: {e}")
            raise MediaStorageError(f"Failed to upload JSON: {e}")

    def download_json(self, key: str) -> Dict[str, Any]:
        """
        Download and parse a JSON document.

        Raises:
            MediaNotFoundError: If the object does not exist
            MediaStorageError: If download or parsing fails
        """
        try:
            response = self.s3_client.get_object(Bucket=self.bucket, Key=key)
            json_bytes = response["Body"].read()
        except ClientError as e:
            error_code = _error_code(e)
            if error_code in NOT_FOUND_CODES:
                raise MediaNotFoundError(f"Object {key} not found")
            logger.error(f"Error downloading JSON {key}: {error_code} - {e}")
            raise MediaStorageError(f"Failed to download JSON: {error_code}")
        except BotoCoreError as e:
            logger.error(f"Unexpected error downloading JSON {key}: {e}")
            raise MediaStorageError(f"Failed to download JSON: {e}")

        try:
            data = json.loads(json_bytes.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MediaStorageError(f"Failed to parse JSON: {e}")

        if not isinstance(data, dict):
            raise MediaStorageError(f"JSON document {key} is not an object")
        return data

    def check_connection(self) -> str:
        """Connectivity status string for health checks"""
        if not self.is_configured:
            return "not_configured"
        try:
            self.s3_client.head_bucket(Bucket=self.bucket)
            return "connected"
        except ClientError as e:
            error_code = _error_code(e)
            if error_code == "404":
                return f"bucket_not_found: {self.bucket}"
            return f"disconnected: {error_code}"
        except BotoCoreError as e:
            return f"disconnected: {e}"
