# COMPONENT: S3 CLIENT UTILITIES
# REQUIREMENTS SATISFIED: storage handle acquisition (credentials, region, client)
"""
greenery_api/aws/s3_utils.py

Builds the boto3 S3 client used by the storage layer from Settings.

Credential sources:
    - default: boto3's provider chain (environment, shared config/profile,
      container or instance role). Works unchanged locally and in Lambda.
    - static:  the GREENERY_ACCESS_KEY_ID / GREENERY_SECRET_ACCESS_KEY pair.
    - env:     AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY (and optional
      AWS_SESSION_TOKEN) read straight from the environment.

Credentials are resolved eagerly so a misconfigured process fails on the
first request with StorageConfigurationError rather than on every object
call with an opaque signing error.
"""
import os
from typing import Optional

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError

from ..config import Settings
from ..exceptions import StorageConfigurationError
from ..utils.logging import get_logger

logger = get_logger("aws")


def _session(settings: Settings) -> boto3.session.Session:
    if settings.credentials_source == "static":
        return boto3.session.Session(
            aws_access_key_id=settings.access_key_id,
            aws_secret_access_key=settings.secret_access_key,
            region_name=settings.region,
        )

    if settings.credentials_source == "env":
        key_id = os.getenv("AWS_ACCESS_KEY_ID")
        secret = os.getenv("AWS_SECRET_ACCESS_KEY")
        if not key_id or not secret:
            raise StorageConfigurationError(
                "AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY not set"
            )
        return boto3.session.Session(
            aws_access_key_id=key_id,
            aws_secret_access_key=secret,
            aws_session_token=os.getenv("AWS_SESSION_TOKEN"),
            region_name=settings.region,
        )

    return boto3.session.Session(region_name=settings.region)


def build_s3_client(settings: Settings, session: Optional[boto3.session.Session] = None):
    """
    Create an S3 client bound to the configured region and credentials.

    Raises StorageConfigurationError if credentials cannot be resolved or
    botocore refuses to build the client.
    """
    try:
        session = session or _session(settings)
        if session.get_credentials() is None:
            raise StorageConfigurationError("Error getting AWS credentials")
        client = session.client(
            "s3",
            region_name=settings.region,
            endpoint_url=settings.endpoint_url,
            config=Config(signature_version="s3v4"),
        )
    except StorageConfigurationError as e:
        logger.error(f"Error getting AWS credentials: {e}")
        raise
    except (BotoCoreError, ValueError) as e:
        logger.error(f"Error creating AWS S3 client: {e}")
        raise StorageConfigurationError("Error creating AWS S3 client") from e

    logger.info(
        f"S3 client ready (region={settings.region}, credentials={settings.credentials_source})"
    )
    return client
