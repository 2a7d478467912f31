from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from ..dependencies import get_service, json_body
from ..entities import add_log_entry, make_log_entry, resolve_project_id
from ..models import LogEntry
from ..schemas import LogEntryCreate, parse_payload
from ..service import DocumentService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/log",
    tags=["log"],
)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[LogEntry],
    summary="List Log Entries",
    description="Return the log in the order entries were written.",
)
def get_log(service: DocumentService = Depends(get_service)) -> List[LogEntry]:
    return service.read().log_entries


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=LogEntry,
    status_code=status.HTTP_201_CREATED,
    summary="Create Log Entry",
    responses={
        201: {"description": "Entry appended"},
        400: {"description": "content missing or empty"},
    },
)
def create_log_entry(
    body: Dict[str, Any] = Depends(json_body),
    service: DocumentService = Depends(get_service),
) -> LogEntry:
    """
    Append an entry to the log, attached to the project with the given slug
    (or the inbox).
    """
    payload: LogEntryCreate = parse_payload(LogEntryCreate, body)
    with service.transaction() as doc:
        entry = add_log_entry(doc, make_log_entry(payload.content, resolve_project_id(doc, payload.project)))
    logger.info("Appended log entry %s", entry.id)
    return entry
