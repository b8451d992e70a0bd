import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from minpaku.config import settings
from minpaku.db.connection import db_pool
from minpaku.db.schema import ensure_schema
from minpaku.errors import MalformedInputError, StorageError
from minpaku.api.routes import health, reference, simulations

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: initialize DB pool and make sure the table exists
    db_pool.initialize()
    if db_pool.is_configured and settings.DB_CREATE_SCHEMA:
        try:
            conn = db_pool.get_connection()
            try:
                ensure_schema(conn, settings.DB_DIALECT)
            finally:
                conn.close()
        except Exception:
            logger.exception("Database initialization failed")
    yield
    # Shutdown: close DB pool
    db_pool.close()


app = FastAPI(title="Minpaku Simulator", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    return JSONResponse(status_code=500, content={"success": False, "message": str(exc)})


@app.exception_handler(MalformedInputError)
async def malformed_input_handler(request: Request, exc: MalformedInputError):
    return JSONResponse(status_code=400, content={"success": False, "message": str(exc)})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Invalid simulation request", "errors": errors},
    )


app.include_router(health.router, prefix="/api")
app.include_router(reference.router, prefix="/api")
app.include_router(simulations.router, prefix="/api")
