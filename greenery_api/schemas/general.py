# COMPONENT: API SCHEMAS AND DATA MODELS
# REQUIREMENTS SATISFIED: request shapes, identifier validation, key derivation
"""
greenery_api/schemas/general.py

Pydantic models for the general-info endpoints.

GreeneryID is the body of /readGeneral; GeneralInfo is both the body of
/createGeneral and the persisted document. Both validate greenery_id
against a conservative allow-list because the identifier becomes part of
the object key: no path separators, no empty string, no "." or "..".
"""
from __future__ import annotations

import json
import re

from pydantic import BaseModel, Field, field_validator

GENERAL_PREFIX = "/general/"
GENERAL_SUFFIX = ".json"

ID_MAX_LENGTH = 128
_ID_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


def validate_greenery_id(value: str) -> str:
    if not value:
        raise ValueError("greenery_id must not be empty")
    if len(value) > ID_MAX_LENGTH:
        raise ValueError(f"greenery_id must be at most {ID_MAX_LENGTH} characters")
    if not _ID_RE.match(value) or value in (".", ".."):
        raise ValueError("greenery_id may only contain letters, digits, '_', '-' and '.'")
    return value


def general_key(greenery_id: str) -> str:
    """Object key for a record: /general/<greenery_id>.json"""
    return f"{GENERAL_PREFIX}{greenery_id}{GENERAL_SUFFIX}"


class GreeneryID(BaseModel):
    greenery_id: str = Field(..., examples=["g1"])

    @field_validator("greenery_id")
    @classmethod
    def _check_id(cls, v: str) -> str:
        return validate_greenery_id(v)


class GeneralInfo(BaseModel):
    greenery_id: str = Field(..., examples=["g1"])
    name: str = Field(..., examples=["Oak"])
    phone: str = Field(..., examples=["555-1"])
    email: str = Field(..., examples=["a@b.com"])
    address: str = Field(..., examples=["1 Main St"])

    @field_validator("greenery_id")
    @classmethod
    def _check_id(cls, v: str) -> str:
        return validate_greenery_id(v)

    def to_json(self) -> str:
        """Canonical serialization: declaration order, compact separators."""
        return json.dumps(self.model_dump(), separators=(",", ":"), ensure_ascii=False)


GreeneryID.model_rebuild()
GeneralInfo.model_rebuild()
