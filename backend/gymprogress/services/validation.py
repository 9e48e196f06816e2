from __future__ import annotations
from typing import Optional
from gymprogress.errors import ValidationFailed

def require_text(value: Optional[str], message: str) -> str:
    """Return the trimmed value, or raise ValidationFailed with a user-facing message."""
    if value is None or not value.strip():
        raise ValidationFailed(message)
    return value.strip()
