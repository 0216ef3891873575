"""
Project: Café Menu Service

Description:
Storage backends for uploaded images. The backend is chosen once at startup
from configuration: a local folder served by the app, or an S3-compatible
object store (AWS S3, Cloudflare R2, MinIO).
"""

import logging
import os
import re
import uuid

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


class StorageError(Exception):
    pass


def storage_filename(original_name):
    """Random name plus the sanitized lowercase extension of the upload."""
    ext = original_name.rsplit(".", 1)[-1] if original_name and "." in original_name else "bin"
    safe_ext = re.sub(r"[^a-z0-9]", "", (ext or "bin").lower())
    return f"{uuid.uuid4()}.{safe_ext or 'bin'}"


class ImageStorage:
    name = "base"

    def save(self, filename, data, content_type):
        """Persist the bytes and return the public URL."""
        raise NotImplementedError


class LocalImageStorage(ImageStorage):
    name = "local"

    def __init__(self, folder, url_prefix="/uploads"):
        self.folder = folder
        self.url_prefix = url_prefix.rstrip("/")

    def save(self, filename, data, content_type):
        try:
            os.makedirs(self.folder, exist_ok=True)
            with open(os.path.join(self.folder, filename), "wb") as fh:
                fh.write(data)
        except OSError as e:
            logger.exception("Filesystem error while saving %s", filename)
            raise StorageError(
                "Failed to save image locally. Please ensure the uploads directory is writable."
            ) from e
        logger.info("Saved upload %s (%d bytes) to %s", filename, len(data), self.folder)
        return f"{self.url_prefix}/{filename}"


class ObjectImageStorage(ImageStorage):
    name = "s3"
    key_prefix = "uploads"

    def __init__(self, bucket, public_url=None, endpoint_url=None, access_key_id=None,
                 secret_access_key=None, region_name=None, client=None):
        self.bucket = bucket
        self.public_url = (public_url or (f"https://{bucket}.s3.amazonaws.com" if bucket else "")).rstrip("/")
        self.endpoint_url = endpoint_url
        self.access_key_id = access_key_id
        self.secret_access_key = secret_access_key
        self.region_name = region_name
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client(
                "s3",
                endpoint_url=self.endpoint_url,
                aws_access_key_id=self.access_key_id,
                aws_secret_access_key=self.secret_access_key,
                region_name=self.region_name,
            )
        return self._client

    def save(self, filename, data, content_type):
        if not self.bucket:
            raise StorageError("Missing STORAGE_BUCKET. Configure object storage to enable uploads.")

        key = f"{self.key_prefix}/{filename}"
        try:
            self.client.put_object(Bucket=self.bucket, Key=key, Body=data, ContentType=content_type)
        except (ClientError, BotoCoreError) as e:
            logger.exception("Object store upload failed for key %s", key)
            raise StorageError("Failed to upload image to object storage") from e

        logger.info("Uploaded %s to bucket %s", key, self.bucket)
        return f"{self.public_url}/{key}"


def build_storage(config):
    backend = (config.get("STORAGE_BACKEND") or "auto").lower()
    if backend == "auto":
        backend = "s3" if config.get("STORAGE_BUCKET") else "local"

    if backend == "s3":
        return ObjectImageStorage(
            bucket=config.get("STORAGE_BUCKET"),
            public_url=config.get("STORAGE_PUBLIC_URL"),
            endpoint_url=config.get("STORAGE_ENDPOINT_URL"),
            access_key_id=config.get("STORAGE_ACCESS_KEY_ID"),
            secret_access_key=config.get("STORAGE_SECRET_ACCESS_KEY"),
            region_name=config.get("STORAGE_REGION"),
        )
    if backend == "local":
        return LocalImageStorage(config["UPLOAD_FOLDER"], config.get("UPLOAD_URL_PREFIX", "/uploads"))
    raise ValueError(f"Unknown STORAGE_BACKEND: {backend}")
