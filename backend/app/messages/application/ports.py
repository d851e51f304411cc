from typing import Optional, Protocol, Sequence

from app.messages.domain.models import Message


class MessageRepository(Protocol):
    async def get_by_id(self, organization_id: str, message_id: str) -> Optional[Message]:
        ...

    async def get_by_title(self, organization_id: str, title: str) -> Optional[Message]:
        ...

    async def get_all_by_organization(self, organization_id: str) -> Sequence[Message]:
        ...

    async def create(self, message: Message) -> Message:
        ...

    async def update(self, message: Message) -> None:
        ...

    async def delete(self, organization_id: str, message_id: str) -> bool:
        ...
