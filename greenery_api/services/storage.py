# COMPONENT: STORAGE SERVICE
# REQUIREMENTS SATISFIED: object get/put, error mapping, local fallback
"""
greenery_api/services/storage.py

Defines the object storage backends used by the record service.

Two backends share one tiny interface (get_bytes / put_bytes):
    - S3Storage:    Amazon S3 (or an S3-compatible endpoint) via boto3
    - LocalStorage: a directory on disk, for development and tests

The backend is selected at runtime from Settings (LOCAL_STORAGE=1 picks the
filesystem) and built once by get_storage(). boto3 clients are thread-safe,
so the same instance serves every request.

Failure mapping:
    - object absent                  -> RecordNotFound
    - any other store failure        -> StorageError
    - handle could not be built      -> StorageConfigurationError
Upstream codes and messages are logged here and never copied into the
exception text that reaches clients.
"""
import os
import threading
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

from ..aws.s3_utils import build_s3_client
from ..config import Settings, get_settings
from ..exceptions import (
    ConfigurationError,
    RecordNotFound,
    StorageConfigurationError,
    StorageError,
)
from ..utils.logging import get_logger

logger = get_logger("storage")

_NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}


def _error_details(e: ClientError):
    err = e.response.get("Error", {})
    status = e.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    return err.get("Code", ""), err.get("Message", ""), status


def _s3_key(key: str) -> str:
    # "/general/g1.json" is stored as "general/g1.json"
    return key.lstrip("/")


class S3Storage:
    def __init__(self, client, bucket: str):
        self._client = client
        self.bucket = bucket

    def get_bytes(self, key: str) -> bytes:
        try:
            obj = self._client.get_object(Bucket=self.bucket, Key=_s3_key(key))
            return obj["Body"].read()
        except ClientError as e:
            code, message, status = _error_details(e)
            if code in _NOT_FOUND_CODES or status == 404:
                logger.info(f"Couldn't find s3 object {key}. code: {code}, message: {message!r}")
                raise RecordNotFound(key) from e
            logger.error(f"Error getting object {key} from s3. code: {code}, status: {status}, message: {message!r}")
            raise StorageError("Error getting object from s3") from e
        except BotoCoreError as e:
            logger.error(f"Error reading content from s3: {e}")
            raise StorageError("Error reading content from s3") from e

    def put_bytes(self, key: str, data: bytes, content_type: str = "application/json") -> None:
        try:
            self._client.put_object(
                Bucket=self.bucket,
                Key=_s3_key(key),
                Body=data,
                ContentType=content_type,
            )
        except ClientError as e:
            code, message, status = _error_details(e)
            logger.error(f"Error creating content {key} in s3. code: {code}, status: {status}, message: {message!r}")
            raise StorageError("Error creating content in s3") from e
        except BotoCoreError as e:
            logger.error(f"Error creating content in s3: {e}")
            raise StorageError("Error creating content in s3") from e


class LocalStorage:
    """Filesystem stand-in for S3. Keys become paths under root."""

    def __init__(self, root: str):
        self.root = os.path.abspath(root)

    def _path(self, key: str) -> str:
        path = os.path.abspath(os.path.join(self.root, key.lstrip("/")))
        if os.path.commonpath([self.root, path]) != self.root:
            raise StorageError(f"key escapes storage root: {key}")
        return path

    def get_bytes(self, key: str) -> bytes:
        path = self._path(key)
        try:
            with open(path, "rb") as f:
                return f.read()
        except FileNotFoundError as e:
            logger.info(f"Couldn't find local object {key}")
            raise RecordNotFound(key) from e
        except OSError as e:
            logger.error(f"Error reading local object {key}: {e}")
            raise StorageError("Error reading local object") from e

    def put_bytes(self, key: str, data: bytes, content_type: str = "application/json") -> None:
        path = self._path(key)
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, "wb") as f:
                f.write(data)
        except OSError as e:
            logger.error(f"Error writing local object {key}: {e}")
            raise StorageError("Error writing local object") from e


def create_storage(settings: Settings):
    if settings.local_storage:
        logger.info(f"Using local storage at {settings.local_storage_dir}")
        return LocalStorage(settings.local_storage_dir)
    return S3Storage(build_s3_client(settings), settings.bucket)


# -------- PUBLIC API --------
_storage_instance = None
_storage_lock = threading.Lock()


def get_storage():
    """
    Return the process-wide storage backend, building it on first use.

    Called directly by the general-info router once the request body has
    validated; tests swap the backend with reset_storage().
    """
    global _storage_instance
    if _storage_instance is None:
        with _storage_lock:
            if _storage_instance is None:
                try:
                    settings = get_settings()
                except ConfigurationError as e:
                    logger.error(f"Invalid storage configuration: {e}")
                    raise StorageConfigurationError(str(e)) from e
                _storage_instance = create_storage(settings)
    return _storage_instance


def reset_storage(instance: Optional[object] = None) -> None:
    """Drop (or replace) the cached backend."""
    global _storage_instance
    with _storage_lock:
        _storage_instance = instance
