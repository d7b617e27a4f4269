import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from . import __version__
from .core.config import settings
from .core.errors import LedgerError
from .core.logging_setup import configure_logging
from .db.database import create_db_and_tables
from .routers.inventory import router as inventory_router
from .routers.items import router as items_router
from .routers.locations import router as locations_router
from .routers.reports import router as reports_router
from .routers.warehouses import router as warehouses_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    await create_db_and_tables()
    logger.info("Rack Ledger API ready on port %s", settings.app_port)
    yield


app = FastAPI(
    title="Rack Ledger API",
    description="Warehouse racking inventory: placements, retrievals and transfers",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "Validation error", "details": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("%s %s failed: %r", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"error": "Storage error"})


@app.get("/api/health", tags=["health"])
async def health():
    return {"ok": True}


# Masters
app.include_router(warehouses_router, prefix="/api", tags=["warehouses"])
app.include_router(locations_router, prefix="/api", tags=["locations"])
app.include_router(items_router, prefix="/api", tags=["items"])

# Ledger
app.include_router(inventory_router, prefix="/api", tags=["inventory"])
app.include_router(reports_router, prefix="/api", tags=["reports"])

if __name__ == "__main__":
    uvicorn.run("rackledger.main:app", host=settings.app_host, port=settings.app_port, reload=True)
