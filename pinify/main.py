import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from pinify.core.config import CORS_ORIGINS, LOG_LEVEL
from pinify.core.logging_config import setup_logging
from pinify.db.base import Base, engine
from pinify.db.models import added_place, friend_request, place, review, user  # noqa: F401 (register tables)
from pinify.api.routes import auth
from pinify.api.routes import places as places_router
from pinify.api.routes import reviews as reviews_router
from pinify.api.routes import users as users_router
from pinify.api.routes import friends as friends_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(LOG_LEVEL)
    Base.metadata.create_all(bind=engine)
    logger.info("Pinify API started")
    yield


app = FastAPI(title="Pinify", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Store failures never reach the client as a raw 500; the user is asked to retry
@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Store error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=503, content={"detail": "Something went wrong. Please try again."})


@app.get("/")
def root():
    return {"message": "Pinify API running"}


app.include_router(auth.router, prefix="/api/auth")
app.include_router(places_router.router)
app.include_router(reviews_router.router)
app.include_router(users_router.router)
app.include_router(friends_router.router)

# Serve locally:
# uvicorn pinify.main:app --reload --port 8000
