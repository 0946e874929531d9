from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from flashscope.core.logging import configure_logging, get_logger
from flashscope.core.settings import Settings, settings as default_settings
from flashscope.middlewares.flash import FlashMiddleware
from flashscope.middlewares.telemetry import RequestContextMiddleware
from flashscope.version import version_info
from flashscope.web.routes import messages


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(json=settings.LOG_JSON, level=settings.LOG_LEVEL)

    app = FastAPI(debug=settings.DEBUG)
    app.state.settings = settings

    # add_middleware empilha: o último adicionado é o mais externo.
    # FlashMiddleware precisa rodar dentro da sessão.
    app.add_middleware(FlashMiddleware, session_key=settings.FLASH_SESSION_KEY)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SESSION_SECRET,
        session_cookie=settings.SESSION_COOKIE,
        max_age=settings.SESSION_MAX_AGE,
        same_site="lax",
        https_only=settings.SECURE_COOKIES,
    )
    app.add_middleware(RequestContextMiddleware)

    app.include_router(messages.router)

    @app.get("/healthz", tags=["ops"])
    def healthz():
        get_logger().info("health.check")
        return {"status": "ok", "env": settings.APP_ENV}

    @app.get("/version", tags=["ops"])
    def version():
        return {**version_info(), "env": settings.APP_ENV, "debug": settings.DEBUG}

    @app.get("/")
    def home_redirect():
        return RedirectResponse("/messages", status_code=303)

    return app


app = create_app()
