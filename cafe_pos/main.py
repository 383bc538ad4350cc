from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncEngine

from cafe_pos.api.v1.routes_cart import router as cart_router
from cafe_pos.api.v1.routes_products import router as products_router
from cafe_pos.api.v1.routes_settings import router as settings_router
from cafe_pos.api.v1.routes_stats import router as stats_router
from cafe_pos.api.v1.routes_transactions import router as transactions_router
from cafe_pos.core.config import Settings, settings as default_settings
from cafe_pos.core.exceptions import BusinessError, NotFoundError
from cafe_pos.core.logging import configure_logging
from cafe_pos.db.base import engine as default_engine, init_models, make_session_factory
from cafe_pos.domain.catalog.service import CatalogStore
from cafe_pos.domain.insight.service import InsightService
from cafe_pos.domain.ledger.service import LedgerStore
from cafe_pos.domain.session.service import PosSession
from cafe_pos.domain.settings.service import SettingsStore
from cafe_pos.domain.sync.service import SyncPolicy
from cafe_pos.remote.gemini import GeminiClient


def create_app(
    config: Optional[Settings] = None,
    bind: Optional[AsyncEngine] = None,
    remote_transport: Optional[httpx.AsyncBaseTransport] = None,
    insight_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    config = config or default_settings
    bind = bind or default_engine

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(config.LOG_LEVEL, config.LOG_JSON)
        await init_models(bind)
        session_factory = make_session_factory(bind)

        policy = SyncPolicy(remote_timeout=config.REMOTE_TIMEOUT, transport=remote_transport)
        client = None
        if config.GEMINI_API_KEY:
            client = GeminiClient(
                config.GEMINI_API_KEY,
                model=config.GEMINI_MODEL,
                base_url=config.GEMINI_BASE_URL,
                timeout=config.INSIGHT_TIMEOUT,
                transport=insight_transport,
            )

        pos = PosSession(
            policy=policy,
            settings_store=SettingsStore(session_factory),
            catalog=CatalogStore(policy, session_factory, config.SEED_DEFAULT_CATALOG),
            ledger=LedgerStore(policy, session_factory),
            insight=InsightService(client, config.INSIGHT_LANGUAGE),
        )
        await pos.start()
        app.state.pos = pos
        try:
            yield
        finally:
            await pos.close()
            await bind.dispose()

    app = FastAPI(title="Cafe POS", lifespan=lifespan)

    app.include_router(products_router)
    app.include_router(cart_router)
    app.include_router(transactions_router)
    app.include_router(stats_router)
    app.include_router(settings_router)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(BusinessError)
    async def business_error_handler(request: Request, exc: BusinessError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.get("/health")
    async def health():
        return {"status": "ok", "cloud": app.state.pos.policy.cloud_active}

    return app


app = create_app()
