import asyncio
from datetime import datetime

import pytest
from sqlalchemy.exc import IntegrityError

from app.messages.domain.errors import DuplicateTitleError
from app.messages.domain.models import Message
from app.messages.infrastructure.sqlalchemy_repository import SqlAlchemyMessageRepository
from database import Message as MessageModel

VALID_CONTENT = "This is valid content with enough characters."


class FakeScalars:
    def __init__(self, rows):
        self._rows = rows

    def all(self):
        return list(self._rows)


class FakeResult:
    def __init__(self, rowcount=0, row=None, rows=()):
        self.rowcount = rowcount
        self._row = row
        self._rows = rows

    def scalar_one_or_none(self):
        return self._row

    def scalars(self):
        return FakeScalars(self._rows)


class FakeSession:
    def __init__(self, commit_error=None, rowcount=0, row=None, rows=()):
        self.added = []
        self.commits = 0
        self.rollbacks = 0
        self.commit_error = commit_error
        self.rowcount = rowcount
        self.row = row
        self.rows = rows
        self.statements = []

    def add(self, row):
        self.added.append(row)

    async def commit(self):
        if self.commit_error is not None:
            raise self.commit_error
        self.commits += 1

    async def rollback(self):
        self.rollbacks += 1

    async def execute(self, statement):
        self.statements.append(statement)
        return FakeResult(self.rowcount, self.row, self.rows)


def run(coro):
    return asyncio.run(coro)


def make_repository(session):
    return SqlAlchemyMessageRepository(
        session,
        id_generator=lambda: "message-1",
        clock=lambda: datetime(2026, 1, 17, 10, 0, 0),
    )


def test_create_assigns_id_and_created_at():
    session = FakeSession()
    repository = make_repository(session)

    created = run(
        repository.create(
            Message(organization_id="org-1", title="Valid Title", content=VALID_CONTENT)
        )
    )

    assert created.id == "message-1"
    assert created.created_at == datetime(2026, 1, 17, 10, 0, 0)
    assert created.is_active is True
    assert session.commits == 1
    assert len(session.added) == 1


def test_create_translates_title_constraint_violation():
    orig = Exception(
        'duplicate key value violates unique constraint "uq_messages_organization_title"'
    )
    session = FakeSession(commit_error=IntegrityError("INSERT", {}, orig))
    repository = make_repository(session)

    with pytest.raises(DuplicateTitleError) as exc_info:
        run(
            repository.create(
                Message(organization_id="org-1", title="Taken", content=VALID_CONTENT)
            )
        )

    assert exc_info.value.title == "Taken"
    assert session.rollbacks == 1


def test_create_reraises_other_integrity_errors():
    orig = Exception('null value in column "content" violates not-null constraint')
    session = FakeSession(commit_error=IntegrityError("INSERT", {}, orig))
    repository = make_repository(session)

    with pytest.raises(IntegrityError):
        run(
            repository.create(
                Message(organization_id="org-1", title="Valid Title", content=VALID_CONTENT)
            )
        )

    assert session.rollbacks == 1


def test_delete_reports_whether_a_row_was_removed():
    assert run(make_repository(FakeSession(rowcount=1)).delete("org-1", "message-1")) is True
    assert run(make_repository(FakeSession(rowcount=0)).delete("org-1", "message-1")) is False


def make_row(**overrides):
    fields = {
        "id": "message-1",
        "organization_id": "org-1",
        "title": "Old Title",
        "content": VALID_CONTENT,
        "is_active": True,
        "created_at": datetime(2026, 1, 17, 10, 0, 0),
    }
    fields.update(overrides)
    return MessageModel(**fields)


def updated_message(**overrides):
    fields = {
        "id": "message-1",
        "organization_id": "org-1",
        "title": "New Title",
        "content": "Fresh content for the message.",
        "is_active": False,
    }
    fields.update(overrides)
    return Message(**fields)


def test_update_copies_fields_onto_row_and_commits():
    row = make_row()
    session = FakeSession(row=row)

    run(make_repository(session).update(updated_message()))

    assert row.title == "New Title"
    assert row.content == "Fresh content for the message."
    assert row.is_active is False
    assert row.created_at == datetime(2026, 1, 17, 10, 0, 0)
    assert session.commits == 1


def test_update_translates_title_constraint_violation():
    orig = Exception(
        'duplicate key value violates unique constraint "uq_messages_organization_title"'
    )
    session = FakeSession(commit_error=IntegrityError("UPDATE", {}, orig), row=make_row())

    with pytest.raises(DuplicateTitleError) as exc_info:
        run(make_repository(session).update(updated_message(title="Taken")))

    assert exc_info.value.title == "Taken"
    assert session.rollbacks == 1


def test_update_skips_commit_when_row_is_missing():
    session = FakeSession(row=None)

    run(make_repository(session).update(updated_message()))

    assert session.commits == 0
    assert session.rollbacks == 0


def test_listing_orders_by_created_at_then_id():
    rows = [make_row(id="message-1", title="First"), make_row(id="message-2", title="Second")]
    session = FakeSession(rows=rows)

    messages = run(make_repository(session).get_all_by_organization("org-1"))

    assert [message.title for message in messages] == ["First", "Second"]
    statement = session.statements[0]
    assert [str(clause) for clause in statement._order_by_clauses] == [
        "messages.created_at",
        "messages.id",
    ]
