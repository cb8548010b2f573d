"""
Copy and move operations for fileman.

This module transfers a single named file or a whole directory tree from a
source directory to a destination directory. Transfers are not atomic: a
failure part way leaves whatever was already written in place, and a move only
removes its source after the copy has completed.
"""

import errno
import os
import shutil
import logging
from typing import Optional, Union

from ..errors import InvalidOperationError, OpenFailureError
from ..models.config import TransferConfig
from ..models.requests import TransferKind, TransferRequest
from .tree_walker import TreeWalker, join_entry


logger = logging.getLogger(__name__)

FILE_COPIED = "File copied successfully!"
FILE_MOVED = "File moved successfully!"
DIRECTORY_COPIED = "Directory copied successfully"
DIRECTORY_MOVED = "Directory moved successfully"


class FileTransfer:
    """
    Copies and moves files and directory trees.

    Every OSError raised by the filesystem propagates unchanged; the only
    translated failure is an unreadable transfer source, reported as
    OpenFailureError.
    """

    def __init__(self, config: Optional[TransferConfig] = None, walker: Optional[TreeWalker] = None):
        """
        Initialize the transfer helper.

        Args:
            config: Transfer settings, defaults if omitted
            walker: Tree walker used for directory transfers
        """
        self.config = config or TransferConfig()
        self.walker = walker or TreeWalker()

    def transfer(self, request: TransferRequest) -> str:
        """
        Run a transfer request.

        Args:
            request: The copy or move to perform

        Returns:
            Success message for the completed transfer

        Raises:
            OpenFailureError: If a single-file source cannot be opened
            InvalidOperationError: If the request kind is not copy or move
            OSError: For any other filesystem failure
        """
        if request.kind is TransferKind.COPY:
            if request.targets_directory():
                return self.copy_directory(request.source, request.destination, TransferKind.COPY)
            return self.copy_file(request.source, request.destination, request.file_name)

        if request.kind is TransferKind.MOVE:
            if request.targets_directory():
                return self.copy_directory(request.source, request.destination, TransferKind.MOVE)
            return self.move_file(request.source, request.destination, request.file_name)

        raise InvalidOperationError(str(request.kind))

    def copy_file(self, source_dir: str, destination_dir: str, file_name: str) -> str:
        """
        Copy one file into a destination directory, creating the directory if needed.

        An existing destination file is truncated and overwritten.

        Args:
            source_dir: Directory holding the file
            destination_dir: Directory to copy into
            file_name: Name of the file

        Returns:
            Success message

        Raises:
            OpenFailureError: If the source file cannot be opened for reading
            OSError: If the destination cannot be created or written
        """
        source_path = join_entry(source_dir, file_name)
        try:
            source_file = open(source_path, 'rb')
        except OSError as e:
            logger.debug(f"Cannot open {source_path}: {e}")
            raise OpenFailureError(file_name, source_dir) from e

        with source_file:
            self.ensure_directory(destination_dir)
            destination_path = join_entry(destination_dir, file_name)
            self._check_distinct(source_path, destination_path)
            with open(destination_path, 'wb') as destination_file:
                shutil.copyfileobj(source_file, destination_file, self.config.chunk_size)

        logger.info(f"Copied {source_path} to {destination_path}")
        return FILE_COPIED

    def move_file(self, source_dir: str, destination_dir: str, file_name: str) -> str:
        """
        Move one file: copy it, then remove the source.

        If the copy fails nothing is removed. If removal fails after a
        successful copy, both files are left in place and the removal error
        propagates.

        Args:
            source_dir: Directory holding the file
            destination_dir: Directory to move into
            file_name: Name of the file

        Returns:
            Success message
        """
        source_path = join_entry(source_dir, file_name)
        destination_path = join_entry(destination_dir, file_name)

        if self.config.prefer_rename and self._try_rename_file(source_path, destination_dir, destination_path):
            return FILE_MOVED

        self.copy_file(source_dir, destination_dir, file_name)
        os.remove(source_path)

        logger.info(f"Removed {source_path} after copy")
        return FILE_MOVED

    def copy_directory(self, source: str, destination: str, kind: Union[TransferKind, str] = TransferKind.COPY) -> str:
        """
        Mirror a directory tree under a destination root.

        Directories are recreated with the source permission bits before any
        of their files are written. The first error aborts the walk without
        removing what was already copied. For a move, the source tree is
        removed only after every entry was copied.

        Args:
            source: Directory to copy
            destination: Destination root
            kind: Copy or move

        Returns:
            Success message for the given kind

        Raises:
            InvalidOperationError: If kind is not copy or move
            OSError: For any filesystem failure
        """
        kind = TransferKind.parse(kind)
        self._check_not_nested(source, destination)

        if kind is TransferKind.MOVE and self.config.prefer_rename and self._try_rename_directory(source, destination):
            return DIRECTORY_MOVED

        copied = 0
        for entry in self.walker.walk(source):
            relative_path = os.path.relpath(entry.path, source)
            destination_path = os.path.normpath(os.path.join(destination, relative_path))
            if entry.is_dir:
                os.makedirs(destination_path, mode=entry.mode, exist_ok=True)
            else:
                self.copy_stream(entry.path, destination_path)
                copied += 1

        logger.info(f"Copied {copied} files from {source} to {destination}")

        if kind is TransferKind.MOVE:
            shutil.rmtree(source)
            logger.info(f"Removed source tree {source}")
            return DIRECTORY_MOVED

        return DIRECTORY_COPIED

    def copy_stream(self, source_path: str, destination_path: str) -> None:
        """
        Stream the bytes of one file into a new destination file.

        The parent directory of the destination must already exist.

        Args:
            source_path: File to read
            destination_path: File to create or truncate
        """
        with open(source_path, 'rb') as source_file:
            with open(destination_path, 'wb') as destination_file:
                shutil.copyfileobj(source_file, destination_file, self.config.chunk_size)
        logger.debug(f"Streamed {source_path} to {destination_path}")

    def ensure_directory(self, path: str) -> None:
        """
        Create a directory and its missing ancestors if it does not exist.

        Args:
            path: Directory to create

        Raises:
            OSError: If the directory cannot be created
        """
        if not os.path.exists(path):
            os.makedirs(path, mode=self.config.directory_mode)
            logger.debug(f"Created directory {path}")

    def _check_distinct(self, source_path: str, destination_path: str) -> None:
        """Refuse to truncate a file onto itself."""
        if os.path.exists(destination_path) and os.path.samefile(source_path, destination_path):
            raise shutil.SameFileError(f"{source_path!r} and {destination_path!r} are the same file")

    def _check_not_nested(self, source: str, destination: str) -> None:
        """Refuse to mirror a directory into itself or one of its descendants."""
        if not os.path.isdir(source):
            return

        source_real = os.path.realpath(source)
        destination_real = os.path.realpath(destination)
        try:
            nested = os.path.commonpath([source_real, destination_real]) == source_real
        except ValueError:
            # Paths on different drives
            nested = False

        if nested:
            raise OSError(errno.EINVAL, "cannot copy a directory into itself", destination)

    def _try_rename_file(self, source_path: str, destination_dir: str, destination_path: str) -> bool:
        """
        Move a file with a single rename when source and destination share a filesystem.

        Returns:
            True if the rename succeeded, False if the caller should copy instead
        """
        if not os.path.isfile(source_path):
            return False

        self.ensure_directory(destination_dir)
        self._check_distinct(source_path, destination_path)
        try:
            os.replace(source_path, destination_path)
        except OSError as e:
            logger.debug(f"Rename of {source_path} failed, falling back to copy: {e}")
            return False

        logger.info(f"Renamed {source_path} to {destination_path}")
        return True

    def _try_rename_directory(self, source: str, destination: str) -> bool:
        """
        Move a directory with a single rename when the destination does not exist yet.

        Returns:
            True if the rename succeeded, False if the caller should copy instead
        """
        if not os.path.isdir(source) or os.path.lexists(destination):
            return False

        parent = os.path.dirname(os.path.abspath(destination))
        self.ensure_directory(parent)
        try:
            os.rename(source, destination)
        except OSError as e:
            logger.debug(f"Rename of {source} failed, falling back to copy: {e}")
            return False

        logger.info(f"Renamed {source} to {destination}")
        return True


def transfer_files(source: str, destination: str, file_name: str, operation: str,
                   config: Optional[TransferConfig] = None) -> str:
    """
    Convenience function to copy or move a file or directory.

    Args:
        source: Source directory
        destination: Destination directory
        file_name: File to transfer, empty for the whole directory
        operation: "copy" or "move"
        config: Transfer settings (optional)

    Returns:
        Success message

    Raises:
        InvalidOperationError: If operation is not copy or move
    """
    request = TransferRequest(
        source=source,
        destination=destination,
        file_name=file_name,
        kind=operation
    )
    return FileTransfer(config).transfer(request)
