from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from grc_portal.db import filters as _filters  # noqa: F401  (register SQLAlchemy filters)
from grc_portal.db.init_db import init_db
from grc_portal.logging_config import configure_app_logging
from grc_portal.routers import controls, health, me, pages, risks, users
from grc_portal.security.config import load_security_config
from grc_portal.security.dependencies import enforce_security
from grc_portal.settings import get_settings

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        settings = get_settings()
        configure_app_logging(settings.log_level)
        logger.info("App startup beginning")

        app.state.security_config = load_security_config(settings.security_config_path)
        logger.info("Loaded security config: %s", settings.security_config_path)
        init_db(seed=settings.seed_demo_data)
        logger.info("Database initialized (tables ensured, roles synced)")

        yield

    # Global dependency: every route is authenticated and authorized here.
    app = FastAPI(title="GRC Portal", dependencies=[Depends(enforce_security)], lifespan=lifespan)

    app.include_router(health.router)
    app.include_router(me.router)
    app.include_router(users.router)
    app.include_router(risks.router)
    app.include_router(controls.router)
    # Catch-all page shells; keep last.
    app.include_router(pages.router)

    return app


app = create_app()
