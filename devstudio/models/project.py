"""
Project and ProjectFile models.

Project records own their files; the store hands out copies so callers
can never mutate stored state directly.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from devstudio.models.requests import ApiModel, reject_blank


class ProjectFile(ApiModel):
    id: str
    name: str
    path: str
    content: str
    language: str
    created_at: datetime
    updated_at: datetime


class Project(ApiModel):
    id: str
    name: str
    description: str
    language: str
    framework: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    files: List[ProjectFile] = Field(default_factory=list)


class ProjectCreate(ApiModel):
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    language: str = Field(..., min_length=1)
    framework: Optional[str] = None

    @field_validator("name", "description", "language")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return reject_blank(value)


class ProjectUpdate(ApiModel):
    """Partial update; only supplied fields change."""
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    language: Optional[str] = Field(default=None, min_length=1)
    framework: Optional[str] = None

    @field_validator("name", "description", "language")
    @classmethod
    def not_blank(cls, value: Optional[str]) -> Optional[str]:
        return value if value is None else reject_blank(value)


class FileCreate(ApiModel):
    name: str = Field(..., min_length=1)
    path: str = Field(..., min_length=1)
    content: str
    language: str = Field(..., min_length=1)

    @field_validator("name", "path", "language")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return reject_blank(value)


class FileUpdate(ApiModel):
    """Partial update; only supplied fields change."""
    name: Optional[str] = Field(default=None, min_length=1)
    path: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = None
    language: Optional[str] = Field(default=None, min_length=1)

    @field_validator("name", "path", "language")
    @classmethod
    def not_blank(cls, value: Optional[str]) -> Optional[str]:
        return value if value is None else reject_blank(value)
