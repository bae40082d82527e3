"""FastAPI application entry point."""
import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.config import settings
from app.database import build_store
from app.errors import EventStoreError

# Import routers
from app.routers import events, legacy

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Event Records",
    description="CRUD and filtering for event records with duplicate-submission protection",
    version="0.1.0",
)

# CORS — any origin unless CORS_ORIGINS narrows it
app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.CORS_ORIGINS.split(",")],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(events.router, prefix="/events", tags=["Events"])
app.include_router(legacy.router, tags=["Events (legacy paths)"])


@app.exception_handler(EventStoreError)
def handle_event_error(request: Request, exc: EventStoreError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
def handle_bad_request(request: Request, exc: RequestValidationError):
    """Malformed bodies are a 400 like every other validation failure."""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": f"Invalid request: {problems}"},
    )


@app.on_event("startup")
def on_startup():
    """Open the document store once and share it across requests."""
    app.state.store = build_store(settings.DATABASE_URL, collection=settings.EVENTS_COLLECTION)
    app.state.store.open()


@app.on_event("shutdown")
def on_shutdown():
    store = getattr(app.state, "store", None)
    if store is not None:
        store.close()


@app.get("/health")
def health_check():
    return {"status": "ok"}
