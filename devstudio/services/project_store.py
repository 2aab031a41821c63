"""
Project Store - CRUD for projects and their nested files.

This module provides:
- Project create/get/list/update/delete
- File add/get/update/delete inside a project
- Cascading updatedAt on every mutation

Lookups by unknown id return None/False, never raise, so the routing
layer decides how to report them. Stored records are never handed out
directly; callers always receive deep copies.
"""
import threading
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

from devstudio.core.logging_config import get_logger
from devstudio.models.project import (
    FileCreate,
    FileUpdate,
    Project,
    ProjectCreate,
    ProjectFile,
    ProjectUpdate,
)

logger = get_logger(__name__)

# Fields that may be cleared by sending null; every other field ignores null
_NULLABLE_PROJECT_FIELDS = {"framework"}

LOCK_STRIPES = 64


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _changes(update, nullable=frozenset()) -> dict:
    """Fields explicitly supplied in a partial update."""
    return {
        key: value
        for key, value in update.model_dump(exclude_unset=True).items()
        if value is not None or key in nullable
    }


class ProjectStore:
    """
    Store of Project records keyed by id.

    Mutations on one project are serialized by one of a fixed pool of
    locks picked by project id hash; the map itself is guarded by a
    store-wide lock.

    Example:
        >>> store = ProjectStore()
        >>> project = store.create(ProjectCreate(name="demo", description="x", language="go"))
        >>> store.get(project.id).name
        'demo'
    """

    def __init__(self, backing: Optional[Dict[str, Project]] = None):
        """
        Args:
            backing: Mapping used for storage (a fresh dict when omitted)
        """
        self._projects: Dict[str, Project] = backing if backing is not None else {}
        self._guard = threading.RLock()
        self._locks: List[threading.RLock] = [threading.RLock() for _ in range(LOCK_STRIPES)]

    # ==================== PROJECTS ====================

    def create(self, data: ProjectCreate) -> Project:
        now = _now()
        project = Project(
            id=str(uuid.uuid4()),
            name=data.name,
            description=data.description,
            language=data.language,
            framework=data.framework,
            created_at=now,
            updated_at=now,
            files=[],
        )
        with self._guard:
            self._projects[project.id] = project

        logger.info(f"Created project: {project.id} ({project.name})")
        return project.model_copy(deep=True)

    def get(self, project_id: str) -> Optional[Project]:
        with self._guard:
            project = self._projects.get(project_id)
        return project.model_copy(deep=True) if project else None

    def list_all(self) -> List[Project]:
        with self._guard:
            projects = list(self._projects.values())
        return [project.model_copy(deep=True) for project in projects]

    def update(self, project_id: str, data: ProjectUpdate) -> Optional[Project]:
        """Apply supplied fields; id, createdAt and files are preserved."""
        with self._lock_for(project_id):
            project = self._load(project_id)
            if project is None:
                return None

            changes = _changes(data, _NULLABLE_PROJECT_FIELDS)
            updated = project.model_copy(update={**changes, "updated_at": _now()}, deep=True)
            self._store(updated)

        logger.info(f"Updated project: {project_id} fields={sorted(changes)}")
        return updated.model_copy(deep=True)

    def delete(self, project_id: str) -> bool:
        with self._lock_for(project_id):
            with self._guard:
                removed = self._projects.pop(project_id, None)

        if removed is None:
            return False
        logger.info(f"Deleted project: {project_id} ({len(removed.files)} files)")
        return True

    # ==================== FILES ====================

    def add_file(self, project_id: str, data: FileCreate) -> Optional[ProjectFile]:
        with self._lock_for(project_id):
            project = self._load(project_id)
            if project is None:
                return None

            now = _now()
            file = ProjectFile(
                id=str(uuid.uuid4()),
                name=data.name,
                path=data.path,
                content=data.content,
                language=data.language,
                created_at=now,
                updated_at=now,
            )
            files = [*project.files, file]
            self._store(project.model_copy(update={"files": files, "updated_at": now}, deep=True))

        logger.info(f"Added file {file.id} ({file.path}) to project {project_id}")
        return file.model_copy(deep=True)

    def get_file(self, project_id: str, file_id: str) -> Optional[ProjectFile]:
        project = self.get(project_id)
        if project is None:
            return None
        return next((file for file in project.files if file.id == file_id), None)

    def update_file(self, project_id: str, file_id: str, data: FileUpdate) -> Optional[ProjectFile]:
        """Apply supplied fields; the file's id and createdAt are preserved."""
        with self._lock_for(project_id):
            project = self._load(project_id)
            if project is None:
                return None

            index = next((i for i, file in enumerate(project.files) if file.id == file_id), None)
            if index is None:
                return None

            now = _now()
            updated_file = project.files[index].model_copy(
                update={**_changes(data), "updated_at": now}, deep=True
            )
            files = list(project.files)
            files[index] = updated_file
            self._store(project.model_copy(update={"files": files, "updated_at": now}, deep=True))

        logger.info(f"Updated file {file_id} in project {project_id}")
        return updated_file.model_copy(deep=True)

    def delete_file(self, project_id: str, file_id: str) -> bool:
        with self._lock_for(project_id):
            project = self._load(project_id)
            if project is None:
                return False

            files = [file for file in project.files if file.id != file_id]
            if len(files) == len(project.files):
                return False

            self._store(project.model_copy(update={"files": files, "updated_at": _now()}, deep=True))

        logger.info(f"Deleted file {file_id} from project {project_id}")
        return True

    # ==================== HELPERS ====================

    def _load(self, project_id: str) -> Optional[Project]:
        with self._guard:
            return self._projects.get(project_id)

    def _store(self, project: Project) -> None:
        with self._guard:
            self._projects[project.id] = project

    def _lock_for(self, project_id: str) -> threading.RLock:
        return self._locks[hash(project_id) % len(self._locks)]
