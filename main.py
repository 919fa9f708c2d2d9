# src/main.py
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from admin.routes import router as admin_router
from auth.routes import router as auth_router
from auth.tokens import TokenService
from config import Settings, settings
from core.errors import ConfigurationError, register_exception_handlers
from database import Database
from institution.routes import router as institution_router
from license.routes import router as license_router
from scheduler.tasks import expire_subscriptions, start_scheduler
from subscription.routes import router as subscription_router

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Build the API with its data store and token service wired in."""
    app_settings = app_settings or settings
    app = FastAPI(
        title="License Subscription Backend",
        description="Institutions, licenses and user subscriptions",
        version="0.1.0",
    )
    app.state.settings = app_settings
    app.state.scheduler = None
    app.state.config_errors = app_settings.missing()
    for name in app.state.config_errors:
        logger.error(f"Missing required setting {name}; the API will report unhealthy")

    app.state.database = database
    if app.state.database is None and app_settings.DATABASE_URL:
        app.state.database = Database(app_settings.DATABASE_URL)

    app.state.token_service = None
    try:
        app.state.token_service = TokenService(
            app_settings.SECRET_KEY,
            algorithm=app_settings.ALGORITHM,
            expires_minutes=app_settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        )
    except ConfigurationError as e:
        logger.error(f"Token service disabled: {str(e)}")

    @app.middleware("http")
    async def answer_options(request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=200)
        return await call_next(request)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials="*" not in app_settings.CORS_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(auth_router)
    app.include_router(institution_router)
    app.include_router(license_router)
    app.include_router(subscription_router)
    app.include_router(admin_router)

    @app.on_event("startup")
    def startup_event():
        """Run initial tasks on startup."""
        db = app.state.database
        if db is None:
            return
        if app_settings.AUTO_CREATE_SCHEMA:
            db.create_all()
        if app_settings.ENABLE_SCHEDULER:
            expire_subscriptions(db)
            app.state.scheduler = start_scheduler(db, app_settings.SUBSCRIPTION_SWEEP_MINUTES)

    @app.on_event("shutdown")
    def shutdown_event():
        if app.state.scheduler is not None:
            app.state.scheduler.shutdown(wait=False)
            app.state.scheduler = None

    @app.get("/health")
    def health():
        """Report whether the service is fully configured."""
        if app.state.config_errors:
            return JSONResponse(
                status_code=503,
                content={"status": "misconfigured", "missing": app.state.config_errors},
            )
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
