import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .config import CORS_ORIGINS, DATABASE_URL
from .database import open_store
from .errors import NotFoundError, StoreError, ValidationError
from .routers import tasks
from .services.task_service import TaskService

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="TaskFlow API",
    description="Task tracking API: create, list, edit, complete and delete tasks",
    version="1.0.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.state.task_service = None

# Include routers
app.include_router(tasks.router, tags=["tasks"])


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return PlainTextResponse(exc.message, status_code=status.HTTP_400_BAD_REQUEST)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    logger.debug("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    return PlainTextResponse("Malformed request.", status_code=status.HTTP_400_BAD_REQUEST)


@app.exception_handler(NotFoundError)
async def not_found_error_handler(request: Request, exc: NotFoundError):
    return PlainTextResponse(exc.message, status_code=status.HTTP_404_NOT_FOUND)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    return PlainTextResponse(exc.message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


# Open the store once on startup; keep serving (with 500s) if it is unreachable
@app.on_event("startup")
def on_startup():
    engine = open_store(DATABASE_URL)
    app.state.task_service = TaskService(engine) if engine is not None else None
    if engine is None:
        logger.error("Starting without a task store; task endpoints will fail")


@app.on_event("shutdown")
def on_shutdown():
    service = app.state.task_service
    if service is not None:
        service.engine.dispose()
    app.state.task_service = None


@app.get("/")
def read_root():
    return {"message": "TaskFlow API"}


@app.get("/health")
def health_check():
    return {"status": "healthy", "store": app.state.task_service is not None}
