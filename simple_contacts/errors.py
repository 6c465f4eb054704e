"""
Error types raised by the store and the import source.

The repository catches all of these at its operation boundary and turns them
into error state; nothing here escapes to the presentation layer.

File: errors.py
Created: 2026-10-16
Last Modified: 2026-10-16
"""


class ContactStoreError(Exception):
    """Base class for failures of the local contact database."""


class StoreOpenError(ContactStoreError):
    """The database file could not be opened or created."""


class SchemaError(ContactStoreError):
    """Creating or seeding the contacts table failed."""


class StoreWriteError(ContactStoreError):
    """A read or write statement against the contacts table failed."""


class ImportSourceError(Exception):
    """Base class for failures while fetching remote contacts."""


class RemoteFetchError(ImportSourceError):
    """Network error or non-2xx response from the import source."""


class MalformedResponseError(ImportSourceError):
    """The import source did not return a JSON array."""


__all__ = [
    "ContactStoreError",
    "StoreOpenError",
    "SchemaError",
    "StoreWriteError",
    "ImportSourceError",
    "RemoteFetchError",
    "MalformedResponseError",
]
