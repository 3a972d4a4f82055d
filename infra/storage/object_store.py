import json
import logging
import os
from typing import Dict, Optional
from urllib.parse import quote, unquote

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.settings import Settings
from domain.errors import StoreUnavailable

logger = logging.getLogger(__name__)

METADATA_SUFFIX = ".metadata.json"

# S3 user metadata travels as HTTP headers and must be ASCII
METADATA_SAFE_CHARS = " @:/+"


class LocalObjectStore:
    """Resume objects as plain files; metadata sits beside each file as JSON."""

    backend = "local"

    def __init__(self, root: str):
        self.root = root

    def _path(self, key: str) -> str:
        name = os.path.basename(key)
        if not name or name != key:
            raise ValueError(f"invalid object key: {key!r}")
        return os.path.join(self.root, name)

    def put_object(self, key: str, data: bytes, content_type: str, metadata: Dict[str, str]) -> None:
        os.makedirs(self.root, exist_ok=True)
        path = self._path(key)
        with open(path, "wb") as out:
            out.write(data)
        with open(path + METADATA_SUFFIX, "w", encoding="utf-8") as out:
            json.dump({"content_type": content_type, "metadata": metadata}, out, ensure_ascii=False)

    def exists(self, key: str) -> bool:
        return os.path.isfile(self._path(key))

    def get_metadata(self, key: str) -> Optional[Dict[str, str]]:
        path = self._path(key) + METADATA_SUFFIX
        if not os.path.isfile(path):
            return None
        with open(path, encoding="utf-8") as f:
            return json.load(f)["metadata"]

    def ping(self) -> None:
        try:
            os.makedirs(self.root, exist_ok=True)
        except OSError as exc:
            raise StoreUnavailable(f"Resume storage unavailable: {exc}") from exc
        if not os.access(self.root, os.W_OK):
            raise StoreUnavailable(f"Resume storage unavailable: {self.root} is not writable")


class S3ObjectStore:
    backend = "s3"

    def __init__(self, bucket: str, client=None, **client_kwargs):
        self.bucket = bucket
        self.client = client or boto3.client("s3", **client_kwargs)

    def put_object(self, key: str, data: bytes, content_type: str, metadata: Dict[str, str]) -> None:
        self.client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=data,
            ContentType=content_type,
            Metadata={k: quote(v, safe=METADATA_SAFE_CHARS) for k, v in metadata.items()},
        )

    def _head(self, key: str):
        try:
            return self.client.head_object(Bucket=self.bucket, Key=key)
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code")
            if code in ("404", "NoSuchKey", "NotFound"):
                return None
            raise

    def exists(self, key: str) -> bool:
        return self._head(key) is not None

    def get_metadata(self, key: str) -> Optional[Dict[str, str]]:
        head = self._head(key)
        if head is None:
            return None
        return {k: unquote(v) for k, v in head.get("Metadata", {}).items()}

    def ping(self) -> None:
        try:
            self.client.head_bucket(Bucket=self.bucket)
        except (ClientError, BotoCoreError) as exc:
            raise StoreUnavailable(f"Resume storage unavailable: {exc}") from exc


def get_object_store(settings: Settings):
    storage_type = settings.RESUME_STORAGE_TYPE.lower()
    if storage_type == "s3":
        if not settings.S3_BUCKET_NAME:
            raise ValueError("RESUME_STORAGE_TYPE=s3 requires S3_BUCKET_NAME")
        logger.info("Using S3 resume storage (bucket=%s)", settings.S3_BUCKET_NAME)
        return S3ObjectStore(
            settings.S3_BUCKET_NAME,
            region_name=settings.AWS_REGION,
            endpoint_url=settings.S3_ENDPOINT_URL,
            aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
            aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
        )
    if storage_type != "local":
        raise ValueError(f"Unknown RESUME_STORAGE_TYPE: {settings.RESUME_STORAGE_TYPE}")
    logger.info("Using local resume storage (%s)", settings.STORAGE_DIR)
    return LocalObjectStore(settings.STORAGE_DIR)
