from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from ..dependencies import get_app_settings, get_service, json_body
from ..entities import add_project, find_project_by_slug, make_project
from ..errors import ConflictError
from ..models import Project
from ..schemas import ProjectCreate, parse_payload
from ..service import DocumentService
from ..settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/projects",
    tags=["projects"],
)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[Project],
    summary="List Projects",
    responses={200: {"description": "List retrieved successfully"}},
)
def get_projects(service: DocumentService = Depends(get_service)) -> List[Project]:
    """
    Return every project in the document.
    """
    return list(service.read().projects.values())


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=Project,
    status_code=status.HTTP_201_CREATED,
    summary="Create Project",
    description="Create an empty project with the default color.",
    responses={
        201: {"description": "Project created"},
        400: {"description": "name or slug missing or empty"},
        409: {"description": "Another project already uses the slug"},
    },
)
def create_project(
    body: Dict[str, Any] = Depends(json_body),
    service: DocumentService = Depends(get_service),
    settings: Settings = Depends(get_app_settings),
) -> Project:
    payload: ProjectCreate = parse_payload(ProjectCreate, body)
    with service.transaction() as doc:
        if settings.unique_slugs and find_project_by_slug(doc, payload.slug) is not None:
            raise ConflictError("slug already exists")
        project = add_project(doc, make_project(payload.name, payload.slug))
    logger.info("Created project %s (%s)", project.id, project.slug)
    return project
