from typing import Dict, List, Optional

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 200
CONTENT_MIN_LENGTH = 10
CONTENT_MAX_LENGTH = 1000

TITLE_ERROR = "Title is required and must be between 3 and 200 characters."
CONTENT_ERROR = "Content must be between 10 and 1000 characters."


def _within(value: Optional[str], min_length: int, max_length: int) -> bool:
    if value is None or not value.strip():
        return False
    return min_length <= len(value) <= max_length


def validate_message(title: Optional[str], content: Optional[str]) -> Dict[str, List[str]]:
    """Check title and content lengths; an empty mapping means the input is valid."""
    errors: Dict[str, List[str]] = {}

    if not _within(title, TITLE_MIN_LENGTH, TITLE_MAX_LENGTH):
        errors["Title"] = [TITLE_ERROR]

    if not _within(content, CONTENT_MIN_LENGTH, CONTENT_MAX_LENGTH):
        errors["Content"] = [CONTENT_ERROR]

    return errors
