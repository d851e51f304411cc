import uuid
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.messages.application.ports import MessageRepository
from app.messages.domain.errors import DuplicateTitleError
from app.messages.domain.models import Message
from database import Message as MessageModel

TITLE_CONSTRAINT = "uq_messages_organization_title"

IdGenerator = Callable[[], str]
Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _to_domain(row: MessageModel) -> Message:
    return Message(
        id=row.id,
        organization_id=row.organization_id,
        title=row.title,
        content=row.content,
        is_active=row.is_active,
        created_at=row.created_at,
    )


class SqlAlchemyMessageRepository(MessageRepository):
    def __init__(
        self,
        session: AsyncSession,
        id_generator: IdGenerator = lambda: str(uuid.uuid4()),
        clock: Clock = _utcnow,
    ) -> None:
        self._session = session
        self._id_generator = id_generator
        self._clock = clock

    async def _get_row(self, organization_id: str, message_id: str) -> Optional[MessageModel]:
        result = await self._session.execute(
            select(MessageModel).where(
                MessageModel.organization_id == organization_id,
                MessageModel.id == message_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, organization_id: str, message_id: str) -> Optional[Message]:
        row = await self._get_row(organization_id, message_id)
        if row is None:
            return None
        return _to_domain(row)

    async def get_by_title(self, organization_id: str, title: str) -> Optional[Message]:
        result = await self._session.execute(
            select(MessageModel).where(
                MessageModel.organization_id == organization_id,
                MessageModel.title == title,
            )
        )
        row = result.scalar_one_or_none()
        if row is None:
            return None
        return _to_domain(row)

    async def get_all_by_organization(self, organization_id: str) -> Sequence[Message]:
        result = await self._session.execute(
            select(MessageModel)
            .where(MessageModel.organization_id == organization_id)
            .order_by(MessageModel.created_at, MessageModel.id)
        )
        return [_to_domain(row) for row in result.scalars().all()]

    async def create(self, message: Message) -> Message:
        row = MessageModel(
            id=self._id_generator(),
            organization_id=message.organization_id,
            title=message.title,
            content=message.content,
            is_active=message.is_active,
            created_at=self._clock(),
        )
        self._session.add(row)
        await self._commit(message)
        return _to_domain(row)

    async def update(self, message: Message) -> None:
        row = await self._get_row(message.organization_id, message.id)
        if row is None:
            return
        row.title = message.title
        row.content = message.content
        row.is_active = message.is_active
        await self._commit(message)

    async def delete(self, organization_id: str, message_id: str) -> bool:
        result = await self._session.execute(
            delete(MessageModel).where(
                MessageModel.organization_id == organization_id,
                MessageModel.id == message_id,
            )
        )
        await self._session.commit()
        return result.rowcount > 0

    async def _commit(self, message: Message) -> None:
        try:
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            if TITLE_CONSTRAINT in str(exc.orig):
                raise DuplicateTitleError(message.organization_id, message.title) from exc
            raise
