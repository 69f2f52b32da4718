import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import config
from app.core.db.engine import engine, init_models
from app.core.error_handler import global_exception_handler
from app.core.middleware.request_id_middleware import RequestIDMiddleware

from app.modules.expenses.controller import router as expenses_router
from app.modules.categories.controller import router as categories_router

logging.basicConfig(
    level=config.log_level.upper(),
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if config.create_tables_on_startup:
        logger.info("Creating database tables if missing")
        await init_models()
    yield
    await engine.dispose()


app = FastAPI(
    title="Expense Tracker API",
    description="Record management for expenses and their categories",
    version="1.0.0",
    lifespan=lifespan,
)

# Exception handlers
app.add_exception_handler(StarletteHTTPException, global_exception_handler)
app.add_exception_handler(RequestValidationError, global_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# Middlewares
app.add_middleware(RequestIDMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(expenses_router)
app.include_router(categories_router)


@app.get("/health")
async def health(request: Request) -> dict[str, str]:
    return {"status": "ok", "request_id": str(request.state.request_id)}
