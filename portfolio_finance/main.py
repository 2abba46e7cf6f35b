import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from portfolio_finance import __version__
from portfolio_finance.core.config import Settings, get_settings
from portfolio_finance.core.container import get_container
from portfolio_finance.infrastructure.database.session import dispose_engine, init_db
from portfolio_finance.interfaces.http import create_api_router
from portfolio_finance.interfaces.http.responses import error_json
from portfolio_finance.modules.common.exceptions import FinanceError

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.logging.level.upper(), format=settings.logging.format)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    yield
    await get_container().close()
    await dispose_engine()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.project_name,
        description="Personal finance ledger with offline sync",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(FinanceError)
    async def finance_error_handler(request: Request, exc: FinanceError):
        return error_json(exc)

    @app.exception_handler(OperationalError)
    async def store_unavailable_handler(request: Request, exc: OperationalError):
        logger.error("Store unavailable on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"success": False, "message": "Database is unavailable", "offline": True},
        )

    app.include_router(create_api_router(settings.finance_prefix))
    return app


app = create_app()
