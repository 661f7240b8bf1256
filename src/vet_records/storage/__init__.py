"""
Attachment file storage.
"""

from .file_storage import FileStorage, LocalFileStorage, sanitize_filename

__all__ = [
    "FileStorage",
    "LocalFileStorage",
    "sanitize_filename",
]
