from contextlib import asynccontextmanager

from fastapi import FastAPI

from deposito.db import init_db
from deposito.settings import configure_logging

from deposito.api.errors import register_error_handlers
from deposito.api.routes.health import router as health_router
from deposito.api.routes.customers import router as customers_router
from deposito.api.routes.deposito_types import router as deposito_types_router
from deposito.api.routes.accounts import router as accounts_router
from deposito.api.routes.transactions import router as transactions_router


configure_logging()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    # Fail fast if DB unreachable + ensure tables exist
    init_db()
    yield


app = FastAPI(title="Deposito API", version="0.1.0", lifespan=lifespan)
register_error_handlers(app)

app.include_router(health_router)
app.include_router(customers_router)
app.include_router(deposito_types_router)
app.include_router(accounts_router)
app.include_router(transactions_router)
