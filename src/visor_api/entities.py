"""
Helpers for building and changing records inside a Document.

All ids and timestamps are generated here, server-side.
"""
from __future__ import annotations

import time
import uuid
from typing import Optional, Tuple

from .models import (
    DEFAULT_PROJECT_COLOR,
    INBOX_PROJECT_ID,
    Document,
    LogEntry,
    Project,
    Task,
    TaskStatus,
)


def new_id() -> str:
    return str(uuid.uuid4())


def now_ms() -> int:
    """Current time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def _find_project_entry(doc: Document, slug: str) -> Optional[Tuple[str, Project]]:
    for project_id, project in doc.projects.items():
        if project.slug == slug:
            return project_id, project
    return None


def find_project_by_slug(doc: Document, slug: str) -> Optional[Project]:
    """First project whose slug equals ``slug`` exactly, in mapping order."""
    entry = _find_project_entry(doc, slug)
    return None if entry is None else entry[1]


def resolve_project_id(doc: Document, slug: Optional[str]) -> str:
    """
    Map a project slug to the key of its project, falling back to the inbox
    sentinel when no project carries that slug.
    """
    entry = _find_project_entry(doc, INBOX_PROJECT_ID if slug is None else slug)
    if entry is None:
        return INBOX_PROJECT_ID
    return entry[0]


def make_project(name: str, slug: str) -> Project:
    return Project(
        id=new_id(),
        name=name,
        slug=slug,
        color=DEFAULT_PROJECT_COLOR,
        task_order=[],
        created_at=now_ms(),
        is_inbox=False,
    )


def make_task(content: str, project_id: str) -> Task:
    return Task(
        id=new_id(),
        content=content,
        completed=False,
        status=TaskStatus.TODO.value,
        archived=False,
        project_id=project_id,
        parent_id=None,
        indent=0,
        created_at=now_ms(),
        completed_at=None,
        due_at=None,
        scheduled=None,
        notes=None,
        recurrence=None,
    )


def make_log_entry(content: str, project_id: str) -> LogEntry:
    return LogEntry(
        id=new_id(),
        content=content,
        created_at=now_ms(),
        project_id=project_id,
    )


def is_completed(task: Task) -> bool:
    return task.completed


def is_pending(task: Task) -> bool:
    """Neither archived nor completed; the status field is not consulted."""
    return not task.archived and not task.completed


def add_project(doc: Document, project: Project) -> Project:
    doc.projects[project.id] = project
    return project


def add_task(doc: Document, task: Task) -> Task:
    """
    Store a task and append its id to the owning project's task order.

    Tasks filed under the inbox sentinel with no matching project are stored
    without any task order entry.
    """
    doc.tasks[task.id] = task
    project = doc.projects.get(task.project_id)
    if project is not None and task.id not in project.task_order:
        # Reassign rather than append so the field counts as set when saved.
        project.task_order = [*project.task_order, task.id]
    return task


def add_log_entry(doc: Document, entry: LogEntry) -> LogEntry:
    doc.log_entries.append(entry)
    return entry


def complete_task(task: Task, completed_at: Optional[int] = None) -> Task:
    task.completed = True
    task.status = TaskStatus.DONE.value
    task.completed_at = completed_at if completed_at is not None else now_ms()
    return task


def archive_task(task: Task) -> Task:
    task.archived = True
    return task
