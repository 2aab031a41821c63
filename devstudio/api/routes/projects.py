"""
Project Routes - CRUD for projects and their files.

Endpoints:
- POST/GET /api/projects
- GET/PUT/DELETE /api/projects/{project_id}
- POST/GET /api/projects/{project_id}/files
- GET/PUT/DELETE /api/projects/{project_id}/files/{file_id}
"""
from typing import Any, List

from fastapi import APIRouter, Body, Depends, Response, status

from devstudio.api.dependencies import enforce_rate_limit, get_project_store
from devstudio.core.exceptions import NotFoundError
from devstudio.core.logging_config import get_logger
from devstudio.core.validators import validate_payload
from devstudio.models.project import (
    FileCreate,
    FileUpdate,
    Project,
    ProjectCreate,
    ProjectFile,
    ProjectUpdate,
)
from devstudio.models.responses import ErrorResponse
from devstudio.services.project_store import ProjectStore

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/projects",
    tags=["Projects"],
    dependencies=[Depends(enforce_rate_limit)],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request data"},
        404: {"model": ErrorResponse, "description": "Project or file not found"},
    }
)


def _require_project(store: ProjectStore, project_id: str) -> Project:
    project = store.get(project_id)
    if project is None:
        raise NotFoundError("Project", project_id)
    return project


@router.post("", response_model=Project, status_code=status.HTTP_201_CREATED)
async def create_project(
    payload: Any = Body(...),
    store: ProjectStore = Depends(get_project_store)
) -> Project:
    data = validate_payload(ProjectCreate, payload)
    project = store.create(data)
    logger.info(f"Created project {project.id} ({project.name})")
    return project


@router.get("", response_model=List[Project])
async def list_projects(store: ProjectStore = Depends(get_project_store)) -> List[Project]:
    return store.list_all()


@router.get("/{project_id}", response_model=Project)
async def get_project(
    project_id: str,
    store: ProjectStore = Depends(get_project_store)
) -> Project:
    return _require_project(store, project_id)


@router.put("/{project_id}", response_model=Project)
async def update_project(
    project_id: str,
    payload: Any = Body(...),
    store: ProjectStore = Depends(get_project_store)
) -> Project:
    data = validate_payload(ProjectUpdate, payload)
    project = store.update(project_id, data)
    if project is None:
        raise NotFoundError("Project", project_id)
    return project


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: str,
    store: ProjectStore = Depends(get_project_store)
) -> Response:
    if not store.delete(project_id):
        raise NotFoundError("Project", project_id)
    logger.info(f"Deleted project {project_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{project_id}/files",
    response_model=ProjectFile,
    status_code=status.HTTP_201_CREATED
)
async def add_file(
    project_id: str,
    payload: Any = Body(...),
    store: ProjectStore = Depends(get_project_store)
) -> ProjectFile:
    data = validate_payload(FileCreate, payload)
    project_file = store.add_file(project_id, data)
    if project_file is None:
        raise NotFoundError("Project", project_id)
    return project_file


@router.get("/{project_id}/files", response_model=List[ProjectFile])
async def list_files(
    project_id: str,
    store: ProjectStore = Depends(get_project_store)
) -> List[ProjectFile]:
    return _require_project(store, project_id).files


@router.get("/{project_id}/files/{file_id}", response_model=ProjectFile)
async def get_file(
    project_id: str,
    file_id: str,
    store: ProjectStore = Depends(get_project_store)
) -> ProjectFile:
    project_file = store.get_file(project_id, file_id)
    if project_file is None:
        raise NotFoundError("File", file_id)
    return project_file


@router.put("/{project_id}/files/{file_id}", response_model=ProjectFile)
async def update_file(
    project_id: str,
    file_id: str,
    payload: Any = Body(...),
    store: ProjectStore = Depends(get_project_store)
) -> ProjectFile:
    data = validate_payload(FileUpdate, payload)
    project_file = store.update_file(project_id, file_id, data)
    if project_file is None:
        raise NotFoundError("File", file_id)
    return project_file


@router.delete("/{project_id}/files/{file_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_file(
    project_id: str,
    file_id: str,
    store: ProjectStore = Depends(get_project_store)
) -> Response:
    if not store.delete_file(project_id, file_id):
        raise NotFoundError("File", file_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
