"""
Services module - Business logic and orchestration.

Services contain the core application logic:
- No HTTP concerns (those belong in api/)
- Orchestrate between prompts, providers and stores
"""
from devstudio.services.assistant_service import AssistantService
from devstudio.services.project_store import ProjectStore

__all__ = [
    "AssistantService",
    "ProjectStore",
]
