import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.auth_routes import router as auth_router
from api.emissions_routes import router as emissions_router
from api.routes_api import router as routes_router
from api.status import router as status_router
from api.trips_routes import router as trips_router
from api._resp import error
from config import settings
from core.exceptions import AppError
from core.logging import configure_logging
from core.observability import ObservabilityMiddleware
from db.session import init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    await init_db()
    logger.info("GreenRoute backend ready")
    yield


app = FastAPI(title="GreenRoute Backend", lifespan=lifespan)

app.add_middleware(ObservabilityMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=error(exc.message),
        headers=headers,
    )


# Register API routes
app.include_router(status_router)
app.include_router(routes_router)
app.include_router(emissions_router)
app.include_router(auth_router)
app.include_router(trips_router)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=True)
