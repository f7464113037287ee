from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from sqlalchemy import create_engine

from contract_api.app.api.deps import create_opensearch
from contract_api.app.api.routers import (
    health,
    search,
    summary,
    contracts,
    provinces,
    correction,
    storage,
)
from contract_api.app.platform.config import settings
from contract_api.app.platform.logging import setup_logging
from contract_api.app.platform.errors import (
    http_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
    domain_exception_handler
)
from contract_api.app.platform import exceptions as domainex
from contract_api.app.middlewares.request_context import RequestContextMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 로깅 등 공통 준비
    setup_logging(
        log_to_file=settings.LOG_TO_FILE,
        log_dir=settings.LOG_DIR,
        as_json=settings.LOG_AS_JSON,
        level=settings.LOG_LEVEL,
    )

    # OpenSearch 클라이언트와 RDB 엔진을 한 번만 생성해서 공유
    app.state.opensearch = create_opensearch(settings.OPENSEARCH_HOST)
    app.state.engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True)
    logger.info("%s started", settings.APP_NAME)
    try:
        yield
    finally:
        app.state.engine.dispose()
        app.state.opensearch.close()


app = FastAPI(title="Contract Catalog API", debug=settings.DEBUG, lifespan=lifespan)
app.include_router(health.router)
app.include_router(storage.router)
app.include_router(search.router, prefix="/api")
app.include_router(summary.router, prefix="/api")
app.include_router(contracts.router, prefix="/api")
app.include_router(provinces.router, prefix="/api")
app.include_router(correction.router, prefix="/api")

# Global Exception Filter
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(domainex.DomainError, domain_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# 요청 컨텍스트/액세스 로그 미들웨어
app.add_middleware(RequestContextMiddleware)
