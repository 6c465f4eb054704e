"""
Search and favorites-only filtering over a loaded contact snapshot.

File: repository/filtering.py
Created: 2026-10-16
Last Modified: 2026-10-16
"""

from typing import List, Optional

from ..models import Contact


def filter_contacts(
    contacts: List[Contact],
    query: Optional[str] = "",
    favorites_only: bool = False,
) -> List[Contact]:
    """
    Return the contacts visible for a search query and favorites flag.

    A contact is kept when (favorites_only is off or it is a favorite) and
    (the query is empty or a case-insensitive substring of its name or phone).
    Order of the input is preserved.
    """
    needle = (query or "").strip().lower()
    visible = []
    for contact in contacts:
        if favorites_only and not contact.favorite:
            continue
        if needle:
            name_match = needle in contact.name.lower()
            phone_match = needle in (contact.phone or "").lower()
            if not (name_match or phone_match):
                continue
        visible.append(contact)
    return visible
