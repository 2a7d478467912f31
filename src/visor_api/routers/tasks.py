from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status

from ..dependencies import get_service, json_body
from ..entities import add_task, archive_task, complete_task, make_task, resolve_project_id
from ..errors import NotFoundError
from ..models import Document, Task
from ..queries import TaskQuery, list_tasks
from ..schemas import TaskCreate, parse_payload
from ..service import DocumentService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/tasks",
    tags=["tasks"],
)


def _get_task(doc: Document, task_id: str) -> Task:
    task = doc.tasks.get(task_id)
    if task is None:
        raise NotFoundError("task not found")
    return task


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[Task],
    summary="List Tasks",
    description=(
        "List tasks with optional filters.\n\n"
        "Query parameters:\n"
        "- project: exact project slug; tasks filed under an unknown project never match\n"
        "- status: 'pending' (not archived and not completed) or a status name, "
        "compared after upper-casing (e.g. 'done')"
    ),
    responses={200: {"description": "List retrieved successfully"}},
)
def get_tasks(
    project: Optional[str] = Query(None, description="Filter by project slug"),
    status_filter: Optional[str] = Query(None, alias="status", description="'pending' or a task status"),
    service: DocumentService = Depends(get_service),
) -> List[Task]:
    """
    List tasks in document order.
    """
    return list_tasks(service.read(), TaskQuery(project=project or None, status=status_filter or None))


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=Task,
    status_code=status.HTTP_201_CREATED,
    summary="Create Task",
    description="Create a TODO task in the project with the given slug (default 'inbox').",
    responses={
        201: {"description": "Task created"},
        400: {"description": "content missing or empty"},
    },
)
def create_task(
    body: Dict[str, Any] = Depends(json_body),
    service: DocumentService = Depends(get_service),
) -> Task:
    """
    Create a task and append it to its project's task order.
    """
    payload: TaskCreate = parse_payload(TaskCreate, body)
    with service.transaction() as doc:
        project_id = resolve_project_id(doc, payload.project)
        task = add_task(doc, make_task(payload.content, project_id))
    logger.info("Created task %s in project %s", task.id, task.project_id)
    return task


# PUBLIC_INTERFACE
@router.get(
    "/{task_id}",
    response_model=Task,
    summary="Get Task",
    description="Get a single task by id.",
    responses={
        200: {"description": "Task found"},
        404: {"description": "Task not found"},
    },
)
def get_task(task_id: str, service: DocumentService = Depends(get_service)) -> Task:
    return _get_task(service.read(), task_id)


# PUBLIC_INTERFACE
@router.put(
    "/{task_id}/complete",
    response_model=Task,
    summary="Complete Task",
    description="Mark a task DONE. Repeating the call rewrites the same fields.",
    responses={
        200: {"description": "Task completed"},
        404: {"description": "Task not found"},
    },
)
def put_complete(task_id: str, service: DocumentService = Depends(get_service)) -> Task:
    with service.transaction() as doc:
        task = complete_task(_get_task(doc, task_id))
    logger.info("Completed task %s", task_id)
    return task


# PUBLIC_INTERFACE
@router.put(
    "/{task_id}/archive",
    response_model=Task,
    summary="Archive Task",
    description="Set the archived flag on a task. There is no way back through the API.",
    responses={
        200: {"description": "Task archived"},
        404: {"description": "Task not found"},
    },
)
def put_archive(task_id: str, service: DocumentService = Depends(get_service)) -> Task:
    with service.transaction() as doc:
        task = archive_task(_get_task(doc, task_id))
    logger.info("Archived task %s", task_id)
    return task
