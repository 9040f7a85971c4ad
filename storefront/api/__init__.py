# storefront/api/__init__.py
from fastapi import FastAPI

from storefront.api.graphql import create_graphql_router
from storefront.api.routers.health import router as health_router
from storefront.api.routers.webhook import router as webhook_router


def register_routers(app: FastAPI) -> None:
    app.include_router(health_router)
    # webhook przed graphql, oba pod /api
    app.include_router(webhook_router)
    app.include_router(create_graphql_router(), prefix="/api")
