import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

import uvicorn

from showcase.config import settings
from showcase.routers import files, projects

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(files.router)
app.include_router(projects.router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors in the response envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"code": exc.status_code, "message": exc.detail, "data": None},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as validation failures."""
    logger.warning(f"Invalid request to {request.method} {request.url.path}: {exc.errors()}")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"code": status.HTTP_400_BAD_REQUEST, "message": "Invalid request body", "data": None},
    )


@app.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy", "service": "showcase_backend"}


if __name__ == "__main__":
    uvicorn.run(
        "showcase.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        loop="asyncio",  # Explicitly use asyncio instead of auto (which tries uvloop)
    )
