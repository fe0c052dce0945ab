from fastapi import FastAPI
from cashlens.categories.controller import router as categories_router
from cashlens.cash_flows.controller import router as cash_flows_router
from cashlens.cache.controller import router as cache_router


def register_routes(app: FastAPI):
    app.include_router(categories_router)
    app.include_router(cash_flows_router)
    app.include_router(cache_router)
