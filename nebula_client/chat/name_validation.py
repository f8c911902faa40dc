"""
Display name validation.

The login form calls validate_display_name on every submit and keeps the
form open until the result is valid.
"""

from dataclasses import dataclass
from typing import Optional

from nebula_common.constants import MAX_NAME_LENGTH, FALLBACK_NAME


@dataclass(frozen=True)
class NameValidation:
    """Outcome of validating a display name: a name or an error."""
    name: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.error is None


def validate_display_name(raw: Optional[str]) -> NameValidation:
    """
    Validate a display name entered by the user.

    None means the user cancelled and yields the fallback name.
    """
    if raw is None:
        return NameValidation(name=FALLBACK_NAME)

    name = raw.strip()
    if not name:
        return NameValidation(error="Name cannot be empty")
    if len(name) > MAX_NAME_LENGTH:
        return NameValidation(error=f"Name must be at most {MAX_NAME_LENGTH} characters")
    return NameValidation(name=name)
