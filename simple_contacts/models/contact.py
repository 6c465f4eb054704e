"""
Contact record models.

File: models/contact.py
Created: 2026-10-16
Last Modified: 2026-10-16
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _clean_optional(value: Any) -> Optional[str]:
    """Trim a form value; empty strings become None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class Contact(BaseModel):
    """A row of the contacts table."""
    model_config = ConfigDict(extra='ignore')

    id: int = Field(..., description="Row id assigned by SQLite, never reused")
    name: str = Field(..., description="Display name")
    phone: Optional[str] = Field(None, description="Phone number as entered or imported")
    email: Optional[str] = Field(None, description="Email address")
    favorite: bool = Field(False, description="Stored as 0/1")
    created_at: Optional[int] = Field(None, description="Creation time in ms since epoch")

    @classmethod
    def from_db_dict(cls, data: Dict[str, Any]) -> "Contact":
        """Create a Contact from a row dict keyed by column name"""
        return cls(
            id=data["id"],
            name=data["name"],
            phone=data.get("phone"),
            email=data.get("email"),
            favorite=bool(data.get("favorite")),
            created_at=data.get("created_at"),
        )


class ContactDraft(BaseModel):
    """
    The user-editable fields of a contact, normalized for writing.

    All three fields are trimmed. Empty phone/email become None and an empty
    name is rejected.
    """

    name: str
    phone: Optional[str] = None
    email: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def _require_name(cls, value: Any) -> str:
        name = _clean_optional(value)
        if name is None:
            raise ValueError("Name is required.")
        return name

    @field_validator("phone", "email", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> Optional[str]:
        return _clean_optional(value)


def validate_contact_form(
    name: Optional[str],
    phone: Optional[str] = None,
    email: Optional[str] = None,
) -> Dict[str, str]:
    """
    Check form input before it is written.

    Returns:
        Dict mapping field name to error message (empty when the input is valid)
    """
    errors = {}
    if _clean_optional(name) is None:
        errors["name"] = "Name is required."
    trimmed_email = _clean_optional(email)
    if trimmed_email and "@" not in trimmed_email:
        errors["email"] = "Email is not valid."
    return errors
