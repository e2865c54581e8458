"""Zoom Registration FastAPI Application.

Registers participants for Zoom meetings and webinars across one or more
Zoom accounts.
"""

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

import httpx
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..config import build_account_table, load_server_config
from ..core.base_client import ProviderHttpClient
from ..registration.service import RegistrationService, create_registration_service
from .config import Settings, get_settings
from .routes import registration

logger = logging.getLogger(__name__)


def load_vault_file() -> Optional[str]:
    """
    Load VAULT_SECRET_FILE (dotenv format) into the environment.

    Must run before settings and account config are read. Variables that are
    already set are left alone.
    """
    location = os.environ.get("VAULT_SECRET_FILE")
    if not location:
        return None
    if not os.path.exists(location):
        logger.warning(f"Vault secret file not found: {location}")
        return None
    load_dotenv(location, override=False)
    logger.info(f"Loaded vault secret file: {location}")
    return location


def _print_banner(settings: Settings, service: RegistrationService, config_file: Optional[str]) -> None:
    accounts = service.accounts()
    print(f"""
╔════════════════════════════════════════════════════════════╗
║                Zoom Registration Service                   ║
╠════════════════════════════════════════════════════════════╣
║  Server running at: http://{settings.HOST}:{settings.PORT:<25}║
║                                                            ║
║  Static Config:                                            ║
║    APP_ENV: {settings.APP_ENV:<47}║
║    File: {str(config_file or 'environment only'):<50}║
║                                                            ║
║  Zoom Accounts:                                            ║
║    Configured: {', '.join(accounts['accounts']):<44}║
║    Default: {accounts['default']:<47}║
║                                                            ║
║  API Endpoints:                                            ║
║    GET  /health                                  - Health  ║
║    GET  /api/zoom/accounts                       - Accounts║
║    POST /api/zoom/meetings/:id/register                    ║
║    POST /api/zoom/meetings/:id/batch-register              ║
║    POST /api/zoom/webinars/:id/register                    ║
║    POST /api/zoom/webinars/:id/batch-register              ║
╚════════════════════════════════════════════════════════════╝
    """)


def create_app(
    settings: Optional[Settings] = None,
    service: Optional[RegistrationService] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    When service is given it is used as is (tests); otherwise the lifespan
    loads the account table, opens the shared httpx client and builds the
    service, closing the client on shutdown.
    """
    if settings is None:
        load_vault_file()
        settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if service is not None:
            app.state.registration_service = service
            yield
            return

        load_result = load_server_config(settings.CONFIG_DIR, settings.APP_ENV)
        table = build_account_table(load_result.config)

        async with httpx.AsyncClient(timeout=httpx.Timeout(settings.HTTP_TIMEOUT_SECONDS)) as client:
            http_client = ProviderHttpClient(settings.ZOOM_API_BASE_URL, httpx_client=client)
            app.state.registration_service = create_registration_service(
                table, http_client, oauth_url=settings.ZOOM_OAUTH_URL
            )
            _print_banner(settings, app.state.registration_service, load_result.config_file)
            yield
            await http_client.close()
            logger.info("create_app.lifespan: Shared HTTP client closed")

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    if service is not None:
        app.state.registration_service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.debug(f"validation_exception_handler: {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=400,
            content={"success": False, "data": None, "error": "Invalid request body"},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        error = "Endpoint not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "data": None, "error": error},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"unhandled_exception_handler: Unhandled error on {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"success": False, "data": None, "error": "Internal server error"},
        )

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "OK",
            "message": "Zoom registration service is running",
            "timestamp": datetime.now().isoformat(),
        }

    app.include_router(registration.router, prefix="/api/zoom", tags=["zoom"])

    return app


def main() -> None:
    """Run the server with uvicorn."""
    import uvicorn

    load_vault_file()
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
