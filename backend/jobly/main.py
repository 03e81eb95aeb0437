import argparse
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import cors_origins, log_level
from .database import Database
from .errors import BadRequestError, JoblyError
from .routes import companies, jobs

logger = logging.getLogger("uvicorn.error")


def _validation_messages(exc: RequestValidationError) -> list[str]:
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path"))
        messages.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return messages


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(JoblyError)
    async def handle_jobly_error(request: Request, exc: JoblyError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        error = BadRequestError(_validation_messages(exc))
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        error = JoblyError(str(exc) or None)
        return JSONResponse(status_code=error.status_code, content=error.to_dict())


def create_app(database: Database | None = None) -> FastAPI:
    db = database or Database()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db.open()
        db.create_all()
        logger.info("Database connection URL: %s", db.url_for_log())
        try:
            yield
        finally:
            db.close()

    app = FastAPI(title="Jobly API", version="1.0.0", lifespan=lifespan)
    app.state.db = db

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    app.include_router(companies.router)
    app.include_router(jobs.router)
    return app


def run() -> None:
    import uvicorn

    parser = argparse.ArgumentParser(prog="jobly", description="Serve the Jobly API")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=3001, help="Port to listen on (default: 3001)")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    logging.basicConfig(level=log_level())
    uvicorn.run(
        "jobly.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=log_level().lower(),
    )


if __name__ == "__main__":
    run()
