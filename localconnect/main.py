import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from localconnect.config import settings
from localconnect.database import close_mongo_connection, connect_to_mongo, ensure_indexes, get_database
from localconnect.errors import AppError
from localconnect.routers.admin import router as admin_router
from localconnect.routers.business import router as business_router
from localconnect.routers.category import router as category_router
from localconnect.routers.follow import router as follow_router
from localconnect.routers.health import router as health_router
from localconnect.routers.offer import router as offer_router
from localconnect.routers.review import router as review_router
from localconnect.routers.trending import router as trending_router
from localconnect.routers.user import router as user_router

LOGGER = logging.getLogger("localconnect")


@asynccontextmanager
async def lifespan(_: FastAPI):
    await connect_to_mongo()
    await ensure_indexes(get_database())
    try:
        yield
    finally:
        await close_mongo_connection()


async def handle_app_error(_: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def handle_http_exception(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        message = str(error.get("msg", "Invalid value"))
        messages.append(f"{location}: {message}" if location else message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "; ".join(messages) or "Invalid request"},
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"message": "Server error"})


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    application = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        description="Local business discovery API: directory, reviews, follows, trending and admin analytics.",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.add_exception_handler(AppError, handle_app_error)
    application.add_exception_handler(StarletteHTTPException, handle_http_exception)
    application.add_exception_handler(RequestValidationError, handle_validation_error)
    application.add_exception_handler(Exception, handle_unexpected_error)

    application.include_router(health_router)
    for router in (
        business_router,
        review_router,
        follow_router,
        trending_router,
        offer_router,
        category_router,
        user_router,
        admin_router,
    ):
        application.include_router(router, prefix=settings.api_prefix)
    return application


app = create_app()
