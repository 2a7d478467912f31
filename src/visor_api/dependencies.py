from __future__ import annotations

import json
from typing import Any, Dict

from fastapi import Request

from .service import DocumentService
from .settings import Settings


def get_service(request: Request) -> DocumentService:
    """
    Dependency returning the DocumentService bound to this application.
    """
    return request.app.state.service


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def json_body(request: Request) -> Dict[str, Any]:
    """
    Decode the request body as a JSON object.

    Empty, malformed or non-object bodies decode to ``{}`` so that the
    handlers' required-field checks report them.
    """
    raw = await request.body()
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
