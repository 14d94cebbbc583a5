"""Master API router mounted at /api."""

from fastapi import APIRouter

from toolsmith.api.routes import app, data_queries, editor, organizations

api_router = APIRouter(prefix="/api")
api_router.include_router(app.router)
api_router.include_router(organizations.router)
api_router.include_router(data_queries.router)
api_router.include_router(editor.router)
