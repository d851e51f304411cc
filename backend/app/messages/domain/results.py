"""Outcomes of message operations.

Every logic operation returns exactly one of these variants; the HTTP layer
matches on them to pick a status code.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Union

from app.messages.domain.models import Message


@dataclass(frozen=True)
class Created:
    value: Message


@dataclass(frozen=True)
class Updated:
    pass


@dataclass(frozen=True)
class Deleted:
    pass


@dataclass(frozen=True)
class NotFound:
    message: str


@dataclass(frozen=True)
class Conflict:
    message: str


@dataclass(frozen=True)
class ValidationError:
    errors: Dict[str, List[str]] = field(default_factory=dict)


Result = Union[Created, Updated, Deleted, NotFound, Conflict, ValidationError]
