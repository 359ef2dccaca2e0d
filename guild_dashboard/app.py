from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from guild_dashboard.core.config import Settings, get_settings
from guild_dashboard.core.database import Database
from guild_dashboard.core.exceptions import DashboardError
from guild_dashboard.core.logging import get_logger, setup_logging
from guild_dashboard.core.rate_limiter import limiter, rate_limit_exceeded_handler
from guild_dashboard.routes import api_router
from guild_dashboard.services.discord_client import DiscordClient


class Application:
    """Encapsulates the FastAPI app with its routes, middleware and collaborators.

    The database and Discord client are constructed here and handed to request
    handlers through ``app.state``; tests pass their own instances.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        database: Optional[Database] = None,
        discord_client: Optional[DiscordClient] = None,
        create_tables: bool = True,
    ) -> None:
        self.settings = settings or get_settings()
        self.logger = get_logger("app")
        self.create_tables = create_tables
        self._configure_logging()

        self.database = database or Database.from_settings(self.settings)
        self.discord_client = discord_client or DiscordClient.from_settings(self.settings)

        self.app = FastAPI(
            title=self.settings.app_name,
            version=self.settings.app_version,
            description="Discord Bot Guild Dashboard API",
            docs_url="/docs" if self.settings.debug else None,
            redoc_url="/redoc" if self.settings.debug else None,
            openapi_url="/openapi.json" if self.settings.debug else None,
            lifespan=self.lifespan,
        )
        self.app.state.settings = self.settings
        self.app.state.database = self.database
        self.app.state.discord_client = self.discord_client

        self._setup_middlewares()
        self._setup_exception_handlers()
        self._register_routes()

    def _configure_logging(self) -> None:
        setup_logging(self.settings.log_level, self.settings.log_format)

    @asynccontextmanager
    async def lifespan(self, app: FastAPI) -> AsyncGenerator:
        """Handles startup and shutdown."""
        self.logger.info(
            "Starting application",
            environment=self.settings.environment,
            debug=self.settings.debug,
            enable_policy=self.settings.command_sync_enable_policy.value,
        )
        if self.create_tables:
            await self.database.create_all()
            self.logger.info("Database initialized")

        yield

        self.logger.info("Shutting down application")
        await self.database.dispose()
        self.logger.info("Shutdown complete")

    def _setup_middlewares(self) -> None:
        # CORS
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=self.settings.cors_origins_list,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
        # Rate limiter
        limiter.enabled = self.settings.rate_limit_enabled
        self.app.state.limiter = limiter
        self.app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    def _setup_exception_handlers(self) -> None:
        @self.app.exception_handler(DashboardError)
        async def dashboard_error_handler(request: Request, exc: DashboardError) -> JSONResponse:
            log = self.logger.error if exc.status_code >= 500 else self.logger.warning
            log(
                "Request failed",
                path=request.url.path,
                kind=exc.kind,
                status=exc.status_code,
                detail=exc.detail,
            )
            return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

        @self.app.exception_handler(Exception)
        async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
            self.logger.error("Unhandled exception", path=request.url.path, error=str(exc), exc_info=True)
            if self.settings.debug:
                return JSONResponse(
                    status_code=500,
                    content={
                        "error": "Internal server error",
                        "detail": str(exc),
                        "type": type(exc).__name__,
                    },
                )
            return JSONResponse(status_code=500, content={"error": "Internal server error"})

    def _register_routes(self) -> None:
        self.app.include_router(api_router, prefix=self.settings.api_prefix)

        # Health check
        @self.app.get("/health")
        async def health() -> dict:
            return {"status": "healthy"}

    def run(self) -> None:
        """Run the app via uvicorn."""
        import uvicorn

        uvicorn.run(
            self.app,
            host=self.settings.api_host,
            port=self.settings.api_port,
            log_level=self.settings.log_level.lower(),
        )
