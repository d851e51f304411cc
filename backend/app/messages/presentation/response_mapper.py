from typing import Any, Callable, Dict, Optional

from fastapi import Response, status
from fastapi.responses import JSONResponse, PlainTextResponse

from app.messages.domain.models import Message
from app.messages.domain.results import (
    Conflict,
    Created,
    Deleted,
    NotFound,
    Result,
    Updated,
    ValidationError,
)


def message_to_response(message: Message) -> Dict[str, Any]:
    return {
        "id": message.id,
        "organization_id": message.organization_id,
        "title": message.title,
        "content": message.content,
        "is_active": message.is_active,
        "created_at": message.created_at.isoformat() if message.created_at else None,
    }


def result_to_response(
    result: Result,
    location_for: Optional[Callable[[Message], str]] = None,
) -> Response:
    """Translate a logic outcome into its single HTTP response."""
    match result:
        case Created(value=message):
            return JSONResponse(
                status_code=status.HTTP_201_CREATED,
                content=message_to_response(message),
                headers={"Location": location_for(message)} if location_for else None,
            )
        case Updated() | Deleted():
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        case NotFound(message=text):
            return PlainTextResponse(text, status_code=status.HTTP_404_NOT_FOUND)
        case Conflict(message=text):
            return PlainTextResponse(text, status_code=status.HTTP_409_CONFLICT)
        case ValidationError(errors=errors):
            return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=errors)
    raise TypeError(f"Unhandled result: {result!r}")
