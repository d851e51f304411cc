import logging
from dataclasses import dataclass, replace
from typing import Optional, Sequence

from app.messages.application.ports import MessageRepository
from app.messages.domain.errors import DuplicateTitleError
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
from app.messages.domain.validation import validate_message

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateMessageCommand:
    title: str
    content: str


@dataclass(frozen=True)
class UpdateMessageCommand:
    title: str
    content: str
    is_active: bool


def _duplicate_title(title: str) -> Conflict:
    return Conflict(f"A message with title '{title}' already exists in this organization.")


def _not_found(message_id: str) -> NotFound:
    return NotFound(f"Message with id '{message_id}' was not found.")


def _inactive(action: str) -> ValidationError:
    return ValidationError({"IsActive": [f"Cannot {action} an inactive message."]})


class MessageLogic:
    """Decides the outcome of message operations for one organization.

    Holds no state besides the repository, so a single instance can serve
    concurrent requests. The duplicate-title lookup and the write are not
    atomic; storage is expected to enforce uniqueness and raise
    DuplicateTitleError, which is reported as a Conflict.
    """

    def __init__(self, repository: MessageRepository) -> None:
        self._repository = repository

    async def get_message(self, organization_id: str, message_id: str) -> Optional[Message]:
        return await self._repository.get_by_id(organization_id, message_id)

    async def get_all_messages(self, organization_id: str) -> Sequence[Message]:
        return await self._repository.get_all_by_organization(organization_id)

    async def create_message(
        self,
        organization_id: str,
        command: CreateMessageCommand,
    ) -> Result:
        errors = validate_message(command.title, command.content)
        if errors:
            return ValidationError(errors)

        existing = await self._repository.get_by_title(organization_id, command.title)
        if existing is not None:
            logger.info("Rejected duplicate title in organization %s", organization_id)
            return _duplicate_title(command.title)

        message = Message(
            organization_id=organization_id,
            title=command.title,
            content=command.content,
            is_active=True,
        )

        try:
            created = await self._repository.create(message)
        except DuplicateTitleError:
            logger.info("Storage rejected duplicate title in organization %s", organization_id)
            return _duplicate_title(command.title)

        logger.info("Created message %s in organization %s", created.id, organization_id)
        return Created(created)

    async def update_message(
        self,
        organization_id: str,
        message_id: str,
        command: UpdateMessageCommand,
    ) -> Result:
        errors = validate_message(command.title, command.content)
        if errors:
            return ValidationError(errors)

        existing = await self._repository.get_by_id(organization_id, message_id)
        if existing is None:
            logger.info("Rejected update of missing message %s", message_id)
            return _not_found(message_id)

        if not existing.is_active:
            logger.info("Rejected update of inactive message %s", message_id)
            return _inactive("update")

        duplicate = await self._repository.get_by_title(organization_id, command.title)
        if duplicate is not None and duplicate.id != message_id:
            logger.info("Rejected duplicate title in organization %s", organization_id)
            return _duplicate_title(command.title)

        updated = replace(
            existing,
            title=command.title,
            content=command.content,
            is_active=command.is_active,
        )

        try:
            await self._repository.update(updated)
        except DuplicateTitleError:
            logger.info("Storage rejected duplicate title in organization %s", organization_id)
            return _duplicate_title(command.title)

        logger.info("Updated message %s in organization %s", message_id, organization_id)
        return Updated()

    async def delete_message(self, organization_id: str, message_id: str) -> Result:
        existing = await self._repository.get_by_id(organization_id, message_id)
        if existing is None:
            logger.info("Rejected delete of missing message %s", message_id)
            return _not_found(message_id)

        if not existing.is_active:
            logger.info("Rejected delete of inactive message %s", message_id)
            return _inactive("delete")

        await self._repository.delete(organization_id, message_id)
        logger.info("Deleted message %s in organization %s", message_id, organization_id)
        return Deleted()
