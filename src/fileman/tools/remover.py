"""
Delete operations for fileman.

Removes a single named file, or a directory together with everything beneath
it. Deletion is immediate: there is no confirmation step and no trash.
"""

import os
import shutil
import logging

from ..errors import NotFoundError
from ..models.requests import DeleteRequest
from .tree_walker import join_entry


logger = logging.getLogger(__name__)

FILE_DELETED = "File deleted successfully"
DIRECTORY_DELETED = "Directory deleted successfully"
FILE_NOT_PRESENT = "file is not present in the given directory"
DIRECTORY_NOT_FOUND = "directory not found"


class FileRemover:
    """Deletes files and directory trees."""

    def delete(self, request: DeleteRequest) -> str:
        """
        Run a delete request.

        Args:
            request: What to delete

        Returns:
            Success message
        """
        if request.targets_directory():
            return self.delete_directory(request.path)
        return self.delete_file(request.path, request.file_name)

    def delete_file(self, directory: str, file_name: str) -> str:
        """
        Delete one named entry from a directory.

        The entry is opened first to confirm it is there. Any failure to open
        it, whatever the reason, is reported as the file not being present.
        A name that refers to a subdirectory removes it only when it is empty.

        Args:
            directory: Directory holding the file
            file_name: Name of the file

        Returns:
            Success message

        Raises:
            NotFoundError: If the entry cannot be opened
            OSError: If removal fails, including a non-empty subdirectory
        """
        file_path = join_entry(directory, file_name)
        try:
            self._open_for_reading(file_path)
        except OSError as e:
            logger.debug(f"Cannot open {file_path}: {e}")
            raise NotFoundError(FILE_NOT_PRESENT) from e

        if os.path.isdir(file_path) and not os.path.islink(file_path):
            os.rmdir(file_path)
        else:
            os.remove(file_path)
        logger.info(f"Deleted file {file_path}")
        return FILE_DELETED

    def delete_directory(self, path: str) -> str:
        """
        Delete a directory and everything beneath it.

        A plain file at the given path is removed as well.

        Args:
            path: Directory to delete

        Returns:
            Success message

        Raises:
            NotFoundError: If the path cannot be opened
            OSError: If removal fails
        """
        try:
            self._open_for_reading(path)
        except OSError as e:
            logger.debug(f"Cannot open {path}: {e}")
            raise NotFoundError(DIRECTORY_NOT_FOUND) from e

        # A link to a directory is removed itself, never its target's contents
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.remove(path)

        logger.info(f"Deleted directory {path}")
        return DIRECTORY_DELETED

    def _open_for_reading(self, path: str) -> None:
        """Open a file or directory for reading and close it again."""
        if os.path.isdir(path):
            with os.scandir(path):
                pass
        else:
            with open(path, 'rb'):
                pass


def delete_path(path: str, file_name: str = "") -> str:
    """
    Convenience function to delete a file or directory.

    Args:
        path: Directory path
        file_name: File to delete, empty for the whole directory

    Returns:
        Success message
    """
    return FileRemover().delete(DeleteRequest(path=path, file_name=file_name))
