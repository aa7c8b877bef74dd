from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import uvicorn
from .catalog import CatalogStore
from .config import settings
from .database import Database
from .errors import register_exception_handlers
from .ledger import ReviewLedger
from .logger import setup_logger
from .middleware import RequestLoggingMiddleware
from .routers import movies, reviews

logger = setup_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Nothing is served until the schema exists; InitializationError aborts startup
    database = Database.from_settings(settings)
    try:
        session = database.bootstrap()
        app.state.database = database
        app.state.catalog = CatalogStore(session)
        app.state.ledger = ReviewLedger(session)
        yield
    finally:
        database.shutdown()

app = FastAPI(title="Film Reviews", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)
app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)

app.include_router(movies.router)
app.include_router(reviews.router)


def run():
    logger.info("Starting server", extra={"url": f"http://localhost:{settings.PORT}"})
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
