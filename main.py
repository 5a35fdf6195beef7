import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from shared import config
from shared.errors import SchoolRecordsError
from services.class_management.api.class_router import router as class_router
from create_db import init_models

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Tables are normally created by running create_db.py once at deploy time
    if config.AUTO_MIGRATE:
        await init_models()
    yield


app = FastAPI(title="SchoolRecords Backend", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SchoolRecordsError)
async def school_records_error_handler(request: Request, exc: SchoolRecordsError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "msg": exc.msg},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first["loc"] if part != "body")
        msg = f"Invalid value for {location}: {first['msg']}" if location else first["msg"]
    else:
        msg = "Invalid request"

    logger.warning("Rejected malformed request to %s: %s", request.url.path, msg)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "msg": msg},
    )


@app.get("/")
def health_check():
    return {"status": "SchoolRecords Backend is running ✅"}


app.include_router(class_router)
