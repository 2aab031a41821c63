"""
API Routes module - Endpoint definitions.

Each file in this module defines routes for a specific domain:
- ai.py       : Code operations, chat and session memory
- projects.py : Project and file CRUD
- health.py   : Health check endpoints
"""
from devstudio.api.routes.ai import router as ai_router
from devstudio.api.routes.health import router as health_router
from devstudio.api.routes.projects import router as projects_router

__all__ = [
    "ai_router",
    "health_router",
    "projects_router",
]
