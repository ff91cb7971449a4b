import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from app.core.config import accepts_json, settings
from app.database import check_database_connection
from app.dependencies.auth import AuthenticationRequired, sign_in_url
from app.routes.directory import router as directory_router


logging.basicConfig(
    level=(settings.LOG_LEVEL or "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET_KEY,
    same_site="lax",
    https_only=settings.is_production,
    domain=(settings.SESSION_COOKIE_DOMAIN or None),
)
app.include_router(directory_router)


@app.exception_handler(AuthenticationRequired)
async def authentication_required_handler(request: Request, exc: AuthenticationRequired):
    if accepts_json(request):
        return JSONResponse(
            content={"status": "error", "message": "auth_required"},
            status_code=401,
        )
    return RedirectResponse(
        url=sign_in_url(settings.SIGN_IN_PATH, exc.redirect_to),
        status_code=302,
    )


@app.get("/health")
def health() -> dict[str, str]:
    database = "connected"
    status_value = "healthy"
    try:
        check_database_connection()
    except Exception as exc:
        logger.warning("health: database check failed: %s", exc)
        database = "disconnected"
        status_value = "degraded"

    return {
        "status": status_value,
        "database": database,
        "environment": settings.ENV,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
    }
