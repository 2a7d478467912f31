from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .entities import is_pending
from .models import Document, Task

PENDING = "pending"


@dataclass(frozen=True)
class TaskQuery:
    """
    Query parameters for listing tasks.

    - project: exact (case-sensitive) project slug
    - status: 'pending', or a status name matched after upper-casing
    """
    project: Optional[str] = None
    status: Optional[str] = None


def _project_matches(doc: Document, task: Task, slug: str) -> bool:
    project = doc.projects.get(task.project_id)
    return project is not None and project.slug == slug


def _status_matches(task: Task, status: str) -> bool:
    if status == PENDING:
        return is_pending(task)
    return task.effective_status == status.upper()


# PUBLIC_INTERFACE
def list_tasks(doc: Document, query: Optional[TaskQuery] = None) -> List[Task]:
    """
    Return the tasks passing every filter in ``query``, in the order they
    appear in the document. Tasks whose project id matches no project are
    excluded whenever a project filter is set.
    """
    q = query or TaskQuery()
    items: List[Task] = list(doc.tasks.values())

    if q.project:
        items = [t for t in items if _project_matches(doc, t, q.project)]

    if q.status:
        items = [t for t in items if _status_matches(t, q.status)]

    return items


# PUBLIC_INTERFACE
def status_summary(doc: Document) -> dict:
    """Counts of tasks, projects and pending tasks."""
    return {
        "tasks": len(doc.tasks),
        "projects": len(doc.projects),
        "pending": sum(1 for t in doc.tasks.values() if is_pending(t)),
    }
