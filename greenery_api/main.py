# COMPONENT: FASTAPI APPLICATION ENTRY POINT
# REQUIREMENTS SATISFIED:
#   - API initialization and routing
#   - Middleware configuration (logging + CORS)
#   - Local server entry point (uvicorn) and AWS Lambda handler (Mangum)
"""
greenery_api/main.py

Assembles the FastAPI application for the greenery general-info service.

Execution Order:
    1. Environment variables are loaded from .env
    2. Settings are resolved and the package logger is configured from them
    3. FastAPI app is created
    4. Request logging middleware and permissive CORS are attached
    5. The general-info router is mounted at the root
    6. A global OPTIONS handler answers CORS preflights
    7. The Mangum handler is created for AWS Lambda deployment

The storage handle is not built here; the first request that needs it
builds it once through services.storage.get_storage().
"""
from dotenv import load_dotenv

load_dotenv()

import uvicorn
from fastapi import FastAPI, Response
from starlette.middleware.cors import CORSMiddleware
from mangum import Mangum

from .api.middleware.log_requests import RequestLogger
from .api.routers.general import router as general_router
from .config import get_settings
from .utils.logging import setup_logger

settings = get_settings()
logger = setup_logger(settings.log_level, settings.log_file)

# -------------------------------------------------------------
# App
# -------------------------------------------------------------
app = FastAPI(title="Greenery General Info API")

# -------------------------------------------------------------
# Middleware
# -------------------------------------------------------------
app.add_middleware(RequestLogger)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -------------------------------------------------------------
# Routers
# -------------------------------------------------------------
app.include_router(general_router)


@app.options("/{path:path}")
async def preflight_handler(path: str):
    return Response(
        status_code=204,
        headers={
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
            "Access-Control-Allow-Headers": "content-type",
        },
    )


@app.get("/health")
def health():
    return {"status": "ok"}


# -------------------------------------------------------------
# Lambda handler
# -------------------------------------------------------------
handler = Mangum(app)


def run() -> None:
    """Serve the app with uvicorn on HOST:PORT until the process is stopped."""
    settings = get_settings()
    logger.info(f"Listening on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level="info")


if __name__ == "__main__":
    run()
