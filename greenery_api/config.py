# COMPONENT: SERVICE CONFIGURATION
# REQUIREMENTS SATISFIED: bucket/region/credential source injected at startup
"""
greenery_api/config.py

Reads the service configuration from environment variables once and
freezes it into a Settings object. A .env file in the working directory is
loaded by greenery_api.main before the first call.

Recognized variables:
    S3_BUCKET            target bucket (default: greenery-datastore)
    AWS_REGION           storage region (default: us-west-2)
    CREDENTIALS_SOURCE   default | static | env
    GREENERY_ACCESS_KEY_ID / GREENERY_SECRET_ACCESS_KEY
                         key pair used when CREDENTIALS_SOURCE=static
    S3_ENDPOINT_URL      optional S3-compatible endpoint
    LOCAL_STORAGE        "1" selects the filesystem backend
    LOCAL_STORAGE_DIR    filesystem backend root
    HOST / PORT          bind address for the uvicorn entry point
    LOG_LEVEL / LOG_FILE see greenery_api.utils.logging
"""
from __future__ import annotations

import os
import re
from functools import lru_cache
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from .exceptions import ConfigurationError

DEFAULT_BUCKET = "greenery-datastore"
DEFAULT_REGION = "us-west-2"
DEFAULT_LOCAL_DIR = "/tmp/greenery-datastore"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5000

CredentialsSource = Literal["default", "static", "env"]
_CREDENTIAL_SOURCES = ("default", "static", "env")

# us-west-2, eu-central-1, us-gov-west-1, ...
_REGION_RE = re.compile(r"^[a-z]{2}(-[a-z]+)+-\d+$")


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    bucket: str = DEFAULT_BUCKET
    region: str = DEFAULT_REGION
    credentials_source: CredentialsSource = "default"
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    endpoint_url: Optional[str] = None

    local_storage: bool = False
    local_storage_dir: str = DEFAULT_LOCAL_DIR

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    log_level: int = 1
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        bucket = env.get("S3_BUCKET", DEFAULT_BUCKET).strip()
        if not bucket:
            raise ConfigurationError("S3_BUCKET is set but empty")

        region = env.get("AWS_REGION", DEFAULT_REGION).strip()
        if not _REGION_RE.match(region):
            raise ConfigurationError(f"AWS_REGION is not a valid region: {region!r}")

        source = env.get("CREDENTIALS_SOURCE", "default").strip().lower()
        if source not in _CREDENTIAL_SOURCES:
            raise ConfigurationError(
                f"CREDENTIALS_SOURCE must be one of {', '.join(_CREDENTIAL_SOURCES)}; got {source!r}"
            )

        access_key_id = env.get("GREENERY_ACCESS_KEY_ID") or None
        secret_access_key = env.get("GREENERY_SECRET_ACCESS_KEY") or None
        if source == "static" and not (access_key_id and secret_access_key):
            raise ConfigurationError(
                "CREDENTIALS_SOURCE=static requires GREENERY_ACCESS_KEY_ID and GREENERY_SECRET_ACCESS_KEY"
            )

        try:
            port = int(env.get("PORT", str(DEFAULT_PORT)))
        except ValueError:
            raise ConfigurationError(f"PORT is not an integer: {env.get('PORT')!r}")
        if not 0 < port < 65536:
            raise ConfigurationError(f"PORT out of range: {port}")

        try:
            log_level = int(env.get("LOG_LEVEL", "1"))
        except ValueError:
            log_level = 1

        return cls(
            bucket=bucket,
            region=region,
            credentials_source=source,
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            endpoint_url=env.get("S3_ENDPOINT_URL") or None,
            local_storage=env.get("LOCAL_STORAGE", "0") == "1",
            local_storage_dir=env.get("LOCAL_STORAGE_DIR") or DEFAULT_LOCAL_DIR,
            host=env.get("HOST") or DEFAULT_HOST,
            port=port,
            log_level=log_level,
            log_file=env.get("LOG_FILE") or None,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
