"""
Remote contact record model.

The import endpoint returns loosely-typed objects: any of name/phone/email may
be missing, a string, or a number. This model accepts all of that and applies
the default-substitution rules in `to_draft`.

File: models/remote_record.py
Created: 2026-10-16
Last Modified: 2026-10-16
"""

import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .contact import ContactDraft

NO_NAME = "(No name)"

_WHITESPACE = re.compile(r"\s+")


def _as_text(value: Any) -> Optional[str]:
    """Render a JSON scalar as text, or None for absent/falsy values."""
    if not value:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


class RemoteContactRecord(BaseModel):
    """One item of the import source's JSON array"""
    model_config = ConfigDict(extra='ignore')

    name: Any = Field(None, description="Display name (any JSON scalar)")
    phone: Any = Field(None, description="Phone number, may contain whitespace or be numeric")
    email: Any = Field(None, description="Email address")

    @classmethod
    def from_json(cls, item: Any) -> "RemoteContactRecord":
        """Non-object items become an empty record (which is later skipped)."""
        if not isinstance(item, dict):
            return cls()
        return cls.model_validate(item)

    @property
    def normalized_phone(self) -> Optional[str]:
        """Phone with all whitespace removed, or None if absent or blank."""
        text = _as_text(self.phone)
        if text is None:
            return None
        return _WHITESPACE.sub("", text) or None

    def to_draft(self) -> ContactDraft:
        name = _as_text(self.name)
        if name is None or not name.strip():
            name = NO_NAME
        return ContactDraft(
            name=name,
            phone=self.normalized_phone,
            email=_as_text(self.email),
        )
