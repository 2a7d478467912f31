from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar, Union

import pydantic
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

# Reserved project id for tasks and log entries whose project slug matched nothing.
INBOX_PROJECT_ID = "inbox"
DEFAULT_PROJECT_COLOR = "#83a598"

# JSON numbers keep their exact type (int or float) through a load/save cycle.
Number = Union[int, float]


class TaskStatus(str, Enum):
    """Task statuses written by the desktop UI. This API only sets TODO and DONE."""

    TODO = "TODO"
    DOING = "DOING"
    DONE = "DONE"
    CANCELLED = "CANCELLED"
    WAITING = "WAITING"


class _Entity(BaseModel):
    """
    Shared configuration for persisted records.

    Attributes are snake_case in Python and camelCase on disk and on the wire.
    Unknown keys are kept in ``model_extra`` so they survive a load/save cycle.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_storage(self) -> Dict[str, Any]:
        """Dump only the keys that were loaded or assigned, so saving adds nothing."""
        data = self.model_dump(by_alias=True, exclude_unset=True)
        data.update(self.model_extra or {})
        return data


# PUBLIC_INTERFACE
class Project(_Entity):
    """
    A named bucket of tasks.

    Fields:
    - id: opaque identifier, equal to its key in Document.projects
    - name: display name
    - slug: human-facing identifier used by filters and task creation
    - color: CSS color string
    - task_order: ordered task ids shown in this project
    - created_at: creation time in epoch milliseconds
    - is_inbox: whether the UI treats this project as the inbox
    """

    id: str = ""
    name: str = ""
    slug: str = ""
    color: Optional[str] = DEFAULT_PROJECT_COLOR
    task_order: List[str] = Field(default_factory=list)
    created_at: Number = 0
    is_inbox: bool = False


# PUBLIC_INTERFACE
class Task(_Entity):
    """
    A single task. ``parent_id``/``indent`` are kept for the UI's outline view and
    ``due_at``/``scheduled``/``notes``/``recurrence`` are passed through untouched.

    Older documents may carry no status, or a null or empty one; filters go
    through ``effective_status``.
    """

    id: str = ""
    content: str = ""
    completed: bool = False
    status: Optional[str] = None
    archived: bool = False
    project_id: str = INBOX_PROJECT_ID
    parent_id: Optional[str] = None
    indent: Number = 0
    created_at: Number = 0
    completed_at: Optional[Number] = None
    due_at: Optional[Number] = None
    scheduled: Optional[Number] = None
    notes: Optional[str] = None
    recurrence: Any = None

    @property
    def effective_status(self) -> str:
        """The stored status, or DONE/TODO from ``completed`` when it is empty."""
        if self.status:
            return self.status
        return TaskStatus.DONE.value if self.completed else TaskStatus.TODO.value


# PUBLIC_INTERFACE
class LogEntry(_Entity):
    """A timestamped journal line attached to a project."""

    id: str = ""
    content: str = ""
    created_at: Number = 0
    project_id: str = INBOX_PROJECT_ID


E = TypeVar("E", bound=_Entity)


def _validate_mapping(model: Type[E], name: str, raw: Any) -> Tuple[Dict[str, E], Dict[str, Any]]:
    """Split a stored id -> record mapping into typed records and records kept as raw JSON."""
    typed: Dict[str, E] = {}
    unparsed: Dict[str, Any] = {}
    for key, value in raw.items():
        try:
            typed[key] = model.model_validate(value)
        except pydantic.ValidationError as exc:
            logger.warning("Keeping %s %r as stored, it does not fit the schema: %s", name, key, exc)
            unparsed[key] = value
    return typed, unparsed


# PUBLIC_INTERFACE
class Document(BaseModel):
    """
    The root JSON object persisted to disk.

    Only projects, tasks and log entries are typed. Every other top-level key
    (settings, templates, view state written by the desktop shell) is kept
    verbatim in ``model_extra``. Records that do not fit their model are not
    visible through the API but are written back unchanged on save.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        extra="allow",
    )

    projects: Dict[str, Project] = Field(default_factory=dict)
    tasks: Dict[str, Task] = Field(default_factory=dict)
    log_entries: List[LogEntry] = Field(default_factory=list)

    _unparsed_projects: Dict[str, Any] = PrivateAttr(default_factory=dict)
    _unparsed_tasks: Dict[str, Any] = PrivateAttr(default_factory=dict)
    # (position in the stored list, raw entry)
    _unparsed_log_entries: List[Tuple[int, Any]] = PrivateAttr(default_factory=list)
    # Collections stored with a shape other than object/array, keyed by alias.
    _unparsed_collections: Dict[str, Any] = PrivateAttr(default_factory=dict)

    @classmethod
    def from_storage(cls, data: Dict[str, Any]) -> "Document":
        """
        Build a document from a decoded JSON object, one record at a time.

        A null collection reads as empty. A record or collection that does not
        fit the schema is kept as raw JSON instead of failing the whole load.
        """
        rest = dict(data)
        raw_projects = rest.pop("projects", None)
        raw_tasks = rest.pop("tasks", None)
        raw_log = rest.pop("logEntries", None)

        doc = cls.model_validate(rest)

        if isinstance(raw_projects, dict):
            doc.projects, doc._unparsed_projects = _validate_mapping(Project, "project", raw_projects)
        elif raw_projects is not None:
            doc._unparsed_collections["projects"] = raw_projects

        if isinstance(raw_tasks, dict):
            doc.tasks, doc._unparsed_tasks = _validate_mapping(Task, "task", raw_tasks)
        elif raw_tasks is not None:
            doc._unparsed_collections["tasks"] = raw_tasks

        if isinstance(raw_log, list):
            for position, value in enumerate(raw_log):
                try:
                    doc.log_entries.append(LogEntry.model_validate(value))
                except pydantic.ValidationError as exc:
                    logger.warning("Keeping log entry #%d as stored, it does not fit the schema: %s", position, exc)
                    doc._unparsed_log_entries.append((position, value))
        elif raw_log is not None:
            doc._unparsed_collections["logEntries"] = raw_log

        for key in doc._unparsed_collections:
            logger.warning("Keeping %r as stored, it has an unexpected shape", key)
        return doc

    def to_storage(self) -> Dict[str, Any]:
        data: Dict[str, Any] = dict(self.model_extra or {})

        projects = {pid: p.to_storage() for pid, p in self.projects.items()}
        projects.update(self._unparsed_projects)
        tasks = {tid: t.to_storage() for tid, t in self.tasks.items()}
        tasks.update(self._unparsed_tasks)

        log_entries: List[Any] = [e.to_storage() for e in self.log_entries]
        for position, value in self._unparsed_log_entries:
            log_entries.insert(position, value)

        data["projects"] = projects
        data["tasks"] = tasks
        data["logEntries"] = log_entries

        # A collection of unexpected shape is written back as long as nothing was added in its place.
        for key, value in self._unparsed_collections.items():
            if not data[key]:
                data[key] = value
            else:
                logger.warning("Replacing stored %r of unexpected shape with new records", key)
        return data
