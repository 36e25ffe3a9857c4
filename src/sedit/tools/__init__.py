"""Filesystem-facing collaborators around the edit engine."""

from .edit_files import coerce_batch, edit_file, edit_files, group_requests
from .files import EditFileNotFoundError, FileAccessError, FileStore, LocalFileStore
from .paths import PathResolutionError, PathResolver

__all__ = [
    "EditFileNotFoundError",
    "FileAccessError",
    "FileStore",
    "LocalFileStore",
    "PathResolutionError",
    "PathResolver",
    "coerce_batch",
    "edit_file",
    "edit_files",
    "group_requests",
]
