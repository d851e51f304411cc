"""
PostgreSQL Organization Messages Routes
"""
from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel, ConfigDict
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from database import get_postgres_session
from app.messages.application.ports import MessageRepository
from app.messages.application.use_cases import (
    CreateMessageCommand,
    MessageLogic,
    UpdateMessageCommand,
)
from app.messages.domain.models import Message
from app.messages.infrastructure.sqlalchemy_repository import SqlAlchemyMessageRepository
from app.messages.presentation.response_mapper import (
    message_to_response,
    result_to_response,
)

# Create router
pg_messages_router = APIRouter(
    prefix="/api/v1/organizations/{organization_id}/messages",
    tags=["Organization Messages"],
)


# ==================== PYDANTIC MODELS ====================

class CreateMessageRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str
    content: str


class UpdateMessageRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str
    content: str
    is_active: bool


# ==================== DEPENDENCIES ====================

async def get_message_repository(
    session: AsyncSession = Depends(get_postgres_session),
) -> MessageRepository:
    return SqlAlchemyMessageRepository(session)


async def get_message_logic(
    repository: MessageRepository = Depends(get_message_repository),
) -> MessageLogic:
    return MessageLogic(repository)


# ==================== MESSAGES ROUTES ====================

@pg_messages_router.get("")
async def get_messages(
    organization_id: uuid.UUID,
    logic: MessageLogic = Depends(get_message_logic),
) -> List[dict]:
    """List all messages of an organization"""
    messages = await logic.get_all_messages(str(organization_id))
    return [message_to_response(message) for message in messages]


@pg_messages_router.get("/{message_id}", name="get_message")
async def get_message(
    organization_id: uuid.UUID,
    message_id: uuid.UUID,
    logic: MessageLogic = Depends(get_message_logic),
):
    """Get a single message"""
    message = await logic.get_message(str(organization_id), str(message_id))
    if message is None:
        return Response(status_code=404)
    return message_to_response(message)


@pg_messages_router.post("", status_code=201)
async def create_message(
    organization_id: uuid.UUID,
    request_data: CreateMessageRequest,
    request: Request,
    logic: MessageLogic = Depends(get_message_logic),
):
    """Create a new message"""
    command = CreateMessageCommand(
        title=request_data.title,
        content=request_data.content,
    )
    result = await logic.create_message(str(organization_id), command)

    def location_for(message: Message) -> str:
        return str(
            request.url_for(
                "get_message",
                organization_id=message.organization_id,
                message_id=message.id,
            )
        )

    return result_to_response(result, location_for)


@pg_messages_router.put("/{message_id}", status_code=204)
async def update_message(
    organization_id: uuid.UUID,
    message_id: uuid.UUID,
    request_data: UpdateMessageRequest,
    logic: MessageLogic = Depends(get_message_logic),
):
    """Update title, content and active flag of an active message"""
    command = UpdateMessageCommand(
        title=request_data.title,
        content=request_data.content,
        is_active=request_data.is_active,
    )
    result = await logic.update_message(str(organization_id), str(message_id), command)
    return result_to_response(result)


@pg_messages_router.delete("/{message_id}", status_code=204)
async def delete_message(
    organization_id: uuid.UUID,
    message_id: uuid.UUID,
    logic: MessageLogic = Depends(get_message_logic),
):
    """Delete an active message"""
    result = await logic.delete_message(str(organization_id), str(message_id))
    return result_to_response(result)

