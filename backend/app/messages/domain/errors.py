class DomainError(Exception):
    """Base domain error with a user-facing message."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DuplicateTitleError(DomainError):
    """Raised by storage when a title is already taken in the organization."""

    def __init__(self, organization_id: str, title: str) -> None:
        self.organization_id = organization_id
        self.title = title
        super().__init__(
            f"A message with title '{title}' already exists in this organization."
        )
