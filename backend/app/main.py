import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, load_settings
from .engines.submissions.store import SubmissionStore
from .routers import health, products, questions

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, store: SubmissionStore | None = None) -> FastAPI:
    settings = settings or load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Product Submission API", version="0.1.0")
    app.state.settings = settings
    app.state.store = store or SubmissionStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(_request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"success": False, "message": str(exc.detail)})

    @app.exception_handler(RequestValidationError)
    async def invalid_body(_request: Request, exc: RequestValidationError):
        logger.info("Rejected malformed request body: %s", exc.errors())
        return JSONResponse(
            status_code=400,
            content={"success": False, "message": "Invalid request body", "errors": jsonable_errors(exc)},
        )

    @app.exception_handler(Exception)
    async def unhandled(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"success": False, "message": "Internal server error"})

    app.include_router(health.router)
    app.include_router(questions.router)
    app.include_router(products.router)

    @app.get("/")
    def root():
        return {"message": "Product Submission API", "docs": "/docs"}

    return app


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    return [
        {"field": ".".join(str(part) for part in error.get("loc", ())), "message": str(error.get("msg", ""))}
        for error in exc.errors()
    ]


app = create_app()
