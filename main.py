from contextlib import asynccontextmanager
from fastapi import FastAPI
from cashlens.config import settings
from cashlens.database.core import engine, Base
from cashlens.entities.category import Category  # Import models to register them
from cashlens.entities.cash_flow import CashFlow  # Import models to register them
from cashlens.api import register_routes

from cashlens.logging import configure_logging

configure_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(title="cashlens", lifespan=lifespan)

register_routes(app)
