"""HTTP trigger for the daily brief.

An external scheduler POSTs to /api/daily-brief once per cadence. Any other
method is rejected before work begins.
"""
import hmac
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from daily_brief.config.settings import Settings
from daily_brief.logging_cfg.logger import configure_logging, setup_logger
from daily_brief.pipeline import run_daily_brief

logger = setup_logger()

BRIEF_PATH = "/api/daily-brief"


def _authorized(request: Request, secret: str) -> bool:
    scheme, _, token = request.headers.get("authorization", "").partition(" ")
    if scheme != "Bearer":
        return False
    return hmac.compare_digest(token.encode(), secret.encode())


def create_app(settings: Settings = None) -> FastAPI:
    """Build the FastAPI app. Settings are read from the environment on first use when omitted."""
    app = FastAPI(title="Daily Brief")
    app.state.settings = settings
    if settings is not None:
        configure_logging(settings.log_level, settings.log_dir)

    def current_settings() -> Settings:
        if app.state.settings is None:
            app.state.settings = Settings.from_env()
            configure_logging(app.state.settings.log_level, app.state.settings.log_dir)
        return app.state.settings

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405:
            return JSONResponse({"error": "Method not allowed"}, status_code=405,
                                headers=getattr(exc, "headers", None))
        return JSONResponse({"error": exc.detail}, status_code=exc.status_code)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.post(BRIEF_PATH)
    def trigger_brief(request: Request):
        settings = current_settings()
        if settings.cron_secret and not _authorized(request, settings.cron_secret):
            logger.warning("Rejected brief trigger with missing or invalid token")
            return JSONResponse({"error": "Unauthorized"}, status_code=401)

        logger.info("Starting daily brief generation...")
        run = run_daily_brief(settings)

        if not run.succeeded:
            return JSONResponse(
                {"error": "Failed to send daily brief", "details": str(run.error) or "Unknown error"},
                status_code=500,
            )

        finished_at = run.finished_at or datetime.now(timezone.utc)
        return {
            "success": True,
            "message": "Daily brief sent successfully",
            "timestamp": finished_at.isoformat(),
        }

    return app


# for uvicorn: uvicorn daily_brief.web.app:app
app = create_app()
