from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Message:
    organization_id: str
    title: str
    content: str
    is_active: bool = True
    id: Optional[str] = None
    created_at: Optional[datetime] = None
