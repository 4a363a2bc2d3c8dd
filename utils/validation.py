"""Input checks shared by the services."""
from typing import Optional

from utils.exceptions import InvalidInputError


def required_text(value: Optional[str], field: str) -> str:
    """Return the stripped value; blank or whitespace-only input is a missing field."""
    text = (value or "").strip()
    if not text:
        raise InvalidInputError(f"Missing required fields: {field}")
    return text
