"""
Contact repository and snapshot filtering.
"""

from .contacts import ContactRepository
from .filtering import filter_contacts

__all__ = [
    "ContactRepository",
    "filter_contacts",
]
