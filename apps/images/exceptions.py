"""
Exceptions raised by image storage.
"""


class StorageError(Exception):
    """A blob store could not complete a save, read or delete."""
