import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from reservations.api.deps import ERROR_STATUS
from reservations.api.router import api_router
from reservations.core.config import settings
from reservations.core.errors import BackendUnavailable, ServiceError
from reservations.db import init_db

logger = logging.getLogger("reservations")


def create_application() -> FastAPI:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app = FastAPI(title=settings.PROJECT_NAME, version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} -> {response.status_code}")
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'][1:]) or 'body'}: {err['msg']}"
            for err in exc.errors()
        )
        logger.warning(f"Rejected {request.method} {request.url.path}: {problems}")
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"ok": False, "message": f"Invalid request: {problems}", "error": "validation_error"},
        )

    @app.exception_handler(BackendUnavailable)
    async def backend_exception_handler(request: Request, exc: BackendUnavailable):
        message = exc.message if settings.ENVIRONMENT != "production" else "Storage backend unavailable"
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"ok": False, "message": message, "error": exc.code},
        )

    @app.exception_handler(ServiceError)
    async def service_exception_handler(request: Request, exc: ServiceError):
        logger.warning(f"{request.method} {request.url.path} failed [{exc.code}]: {exc.message}")
        return JSONResponse(
            status_code=ERROR_STATUS.get(exc.code, status.HTTP_400_BAD_REQUEST),
            content={"ok": False, "message": exc.message, "error": exc.code},
        )

    app.include_router(api_router, prefix=settings.API_V1_STR)

    @app.on_event("startup")
    def _startup() -> None:
        init_db()

    return app


app = create_application()
