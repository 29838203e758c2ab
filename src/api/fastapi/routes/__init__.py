from fastapi import APIRouter
from . import health, route, docs, sdks, deployments

def register_routes(app: APIRouter):
    app.include_router(health.router)
    app.include_router(route.router)
    app.include_router(docs.router)
    app.include_router(sdks.router)
    app.include_router(deployments.router)
