"""
Result records returned by repository operations.

Each mutation reports its own outcome (`ok`/`error`) separately from the
refresh that follows it (`refreshed`/`refresh_error`).

File: models/results.py
Created: 2026-10-16
Last Modified: 2026-10-16
"""

from typing import Dict, Optional

from pydantic import BaseModel, Field


class MutationResult(BaseModel):
    """Outcome of add/update/delete/toggle-favorite."""

    ok: bool = Field(..., description="True if the write was committed (or was a no-op)")
    error: Optional[str] = Field(None, description="Why the write failed")
    field_errors: Dict[str, str] = Field(default_factory=dict, description="Form validation messages by field")
    contact_id: Optional[int] = Field(None, description="Row id of the affected contact")
    rows_affected: int = Field(0, description="Rows changed by the statement", ge=0)
    refreshed: bool = Field(False, description="True if the snapshot was reloaded afterwards")
    refresh_error: Optional[str] = Field(None, description="Why the reload failed")


class ImportResult(BaseModel):
    """Outcome of a remote import."""

    ok: bool = Field(..., description="True if the fetch and all attempted inserts succeeded")
    skipped: bool = Field(False, description="True if another import was already running")
    error: Optional[str] = Field(None, description="Fetch, parse or write failure")
    fetched_count: int = Field(0, description="Records returned by the source", ge=0)
    imported_count: int = Field(0, description="Rows actually inserted", ge=0)
    refreshed: bool = Field(False, description="True if the snapshot was reloaded afterwards")
    refresh_error: Optional[str] = Field(None, description="Why the reload failed")
