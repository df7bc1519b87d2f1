# COMPONENT: GENERAL INFO API ROUTES
# REQUIREMENTS SATISFIED: POST /readGeneral, POST /createGeneral
"""
greenery_api/api/routers/general.py

HTTP surface for GeneralInfo records.

Endpoints:
    - POST /readGeneral   : body {"greenery_id": ...}, returns the stored JSON
    - POST /createGeneral : body is a full GeneralInfo, stores it

Handlers are plain (sync) functions so the blocking boto3 calls run in
FastAPI's threadpool instead of on the event loop. Malformed bodies are
rejected by pydantic with 422 before the handler runs, so the storage
handle is only acquired for well-formed requests.
"""
from fastapi import APIRouter, HTTPException, Response

from ...exceptions import RecordNotFound, StorageConfigurationError, StorageError
from ...schemas.general import GeneralInfo, GreeneryID
from ...services.general_info import GeneralInfoService
from ...services.storage import get_storage
from ...utils.logging import get_logger

logger = get_logger("api.general")

router = APIRouter(tags=["General"])


def _service() -> GeneralInfoService:
    try:
        return GeneralInfoService(get_storage())
    except StorageConfigurationError as e:
        logger.error(f"Storage unavailable: {e}")
        raise HTTPException(status_code=500, detail="Storage is not configured")


@router.post("/readGeneral")
def read_general(body: GreeneryID):
    service = _service()
    try:
        text = service.read(body.greenery_id)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Couldn't find s3 object")
    except StorageError:
        raise HTTPException(status_code=500, detail="Error getting object from s3")

    return Response(
        content=text,
        media_type="application/json",
        headers={"Access-Control-Allow-Origin": "*"},
    )


@router.post("/createGeneral")
def create_general(body: GeneralInfo):
    service = _service()
    try:
        service.create(body)
    except StorageError:
        raise HTTPException(status_code=500, detail="Error creating content in s3")

    # Empty body, no content type
    return Response(status_code=200)
