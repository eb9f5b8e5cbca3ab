import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from auth import router as auth_router
from core import db, errors, schema
from core.config import cors_origins, get_settings
from core.request_log import RequestLogMiddleware
from notes import router as notes_router
from pinning import router as pinning_router
from todos import router as todos_router

load_dotenv()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Missing JWT_SECRET fails here, before any request is served.
    get_settings()
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        await schema.ensure_schema()
        yield
    finally:
        await db.close_pool()


app = FastAPI(lifespan=lifespan)

app.add_middleware(RequestLogMiddleware)

# Allow local frontend dev server to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(cors_origins()),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(errors.ApiError)
async def api_error_handler(request: Request, exc: errors.ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request_failed path=%s error=%s", request.url.path, exc.code)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error": exc.code},
    )


app.include_router(auth_router.router, tags=["auth"])
app.include_router(notes_router.router, tags=["notes"])
app.include_router(todos_router.router, tags=["todo-lists"])
app.include_router(pinning_router.router, tags=["pinning"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "flexnotes api"}
