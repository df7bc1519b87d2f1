# COMPONENT: GENERAL INFO RECORD SERVICE
# REQUIREMENTS SATISFIED: read and create pipelines for GeneralInfo records
"""
greenery_api/services/general_info.py

Reads and writes GeneralInfo documents in the object store.

read():   greenery_id -> key -> bytes -> UTF-8 text
create(): GeneralInfo -> key -> canonical JSON -> overwrite object

Nothing is cached, merged or retried. A create is a full overwrite, so
concurrent writers to the same identifier resolve as last-write-wins in
the store itself.
"""
from __future__ import annotations

import time

from ..exceptions import StorageError
from ..schemas.general import GeneralInfo, general_key
from ..utils.logging import get_logger

logger = get_logger("general_info")


class GeneralInfoService:
    def __init__(self, storage):
        self._storage = storage

    def read(self, greenery_id: str) -> str:
        start = time.perf_counter()
        logger.info("/readGeneral starting")

        key = general_key(greenery_id)
        content = self._storage.get_bytes(key)
        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.error(f"Error parsing s3 content to string for {key}: {e}")
            raise StorageError("Error parsing s3 content to string") from e

        logger.info(f"/readGeneral finished, took: {round((time.perf_counter() - start) * 1000)}ms")
        return text

    def create(self, record: GeneralInfo) -> None:
        start = time.perf_counter()
        logger.info("/createGeneral starting")

        key = general_key(record.greenery_id)
        self._storage.put_bytes(key, record.to_json().encode("utf-8"), "application/json")

        logger.info(f"/createGeneral finished, took: {round((time.perf_counter() - start) * 1000)}ms")
