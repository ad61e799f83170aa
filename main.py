import logging
from contextlib import asynccontextmanager

import firebase_admin
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from firebase_admin import credentials
from starlette.middleware.cors import CORSMiddleware

from config import CORS_ORIGINS, FIREBASE_CREDENTIALS, LOG_LEVEL
from context import RequestContextMiddleware
from routes.auth import router as auth_router
from routes.posts import router as posts_router
from routes.users import router as users_router
from services.errors import PostServiceError
from services.firestore import FirestoreDB
from utils.log import configure_logging

configure_logging(LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize Firebase Admin SDK
    cred = credentials.Certificate(FIREBASE_CREDENTIALS)
    firebase_app = firebase_admin.initialize_app(cred)

    app.state.firestore = FirestoreDB(firebase_app)
    logger.info("Firestore client ready for project %s", firebase_app.project_id)

    yield
    # Cleanup resources
    firebase_admin.delete_app(firebase_app)


app = FastAPI(lifespan=lifespan)

# middleware to set request context
app.add_middleware(RequestContextMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["set-cookie"]
)


@app.exception_handler(PostServiceError)
async def post_service_error_handler(request: Request, exc: PostServiceError):
    if exc.status_code >= 500:
        # detail was logged where the fault happened
        return JSONResponse(status_code=exc.status_code, content={"detail": "Server Error"})
    logger.info("Rejected with %s: %s", exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(part) for part in error["loc"][1:]), "msg": error["msg"]}
        for error in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"detail": errors})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    # runs outside RequestContextMiddleware, so the log filter cannot see the request
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Server Error"})


# Include routers
app.include_router(posts_router, prefix="/posts", tags=["posts"])
app.include_router(users_router, prefix="/users", tags=["users"])
app.include_router(auth_router, prefix="/auth", tags=["auth"])
