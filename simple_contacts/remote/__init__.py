"""
Remote import source for contacts.
"""

from .client import RemoteContactSource

__all__ = [
    "RemoteContactSource",
]
