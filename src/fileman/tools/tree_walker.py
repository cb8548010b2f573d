"""
Directory tree walker for fileman.

This module provides depth-first traversal of a directory tree. The walker
yields every entry lazily, a directory always before its descendants, and is
shared by recursive listing, filename search and directory transfers.
"""

import errno
import os
import stat
import logging
from typing import Dict, List, Iterator

from ..errors import NotFoundError
from ..models.requests import DirectoryEntry


logger = logging.getLogger(__name__)

FILE_PRESENT = "file is present in the given directory"
FILE_NOT_PRESENT = "file is not present in the given directory"
DIRECTORY_DOES_NOT_EXIST = "directory does not exist"


def join_entry(directory: str, name: str) -> str:
    """
    Join a name onto a directory as a slash-joined path.

    Leading separators in ``name`` do not discard ``directory``:
    ``join_entry("files", "/etc/hosts")`` is ``files/etc/hosts``.
    """
    return os.path.join(directory, name.lstrip("/" + os.sep))


class TreeWalker:
    """
    Depth-first walker over a local directory tree.

    The walk visits the root first, then each directory's entries in lexical
    name order. Symbolic links are reported as non-directory entries and are
    never descended into.
    """

    def __init__(self):
        self._stats = {
            'directories_traversed': 0,
            'files_seen': 0,
            'files_matched': 0
        }

    def walk(self, root: str) -> Iterator[DirectoryEntry]:
        """
        Walk a directory tree and yield every entry.

        Entries of one directory come out in lexical name order, files and
        subdirectories interleaved, and each subdirectory is descended into
        as soon as it is reached.

        Args:
            root: Directory to walk

        Yields:
            DirectoryEntry objects, the root directory first

        Raises:
            OSError: On the first entry that cannot be read, including a
                missing or non-directory root
        """
        root_stat = os.stat(root)
        if not stat.S_ISDIR(root_stat.st_mode):
            raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), root)

        logger.debug(f"Walking directory tree: {root}")
        self._stats['directories_traversed'] += 1
        yield DirectoryEntry(path=root, is_dir=True, mode=stat.S_IMODE(root_stat.st_mode))
        yield from self._walk_children(root)

    def _walk_children(self, directory: str) -> Iterator[DirectoryEntry]:
        with os.scandir(directory) as it:
            children = sorted(it, key=lambda child: child.name)

        for child in children:
            # Links are reported as they are, never followed
            child_stat = child.stat(follow_symlinks=False)
            if child.is_dir(follow_symlinks=False):
                self._stats['directories_traversed'] += 1
                yield DirectoryEntry(path=child.path, is_dir=True, mode=stat.S_IMODE(child_stat.st_mode))
                yield from self._walk_children(child.path)
            else:
                self._stats['files_seen'] += 1
                yield DirectoryEntry(path=child.path, is_dir=False, mode=stat.S_IMODE(child_stat.st_mode))

    def list_files(self, root: str) -> List[str]:
        """
        List every file reachable from a directory.

        Args:
            root: Directory to list

        Returns:
            Paths of all non-directory entries, in walk order

        Raises:
            NotFoundError: If the walk fails anywhere; no partial results are returned
        """
        try:
            files = [entry.path for entry in self.walk(root) if not entry.is_dir]
        except OSError as e:
            logger.debug(f"Listing {root} failed: {e}")
            raise NotFoundError(DIRECTORY_DOES_NOT_EXIST) from e

        logger.info(f"Listed {len(files)} files under {root}")
        return files

    def search(self, root: str, file_name: str) -> str:
        """
        Search a directory tree for a file with an exact base name.

        The whole tree is walked even after a match so that an unreadable
        subdirectory is always reported.

        Args:
            root: Directory to search
            file_name: Base name to look for (case-sensitive, no globbing)

        Returns:
            The presence message for the search outcome

        Raises:
            NotFoundError: If the walk fails anywhere
        """
        found = False
        try:
            for entry in self.walk(root):
                if not entry.is_dir and os.path.basename(entry.path) == file_name:
                    self._stats['files_matched'] += 1
                    found = True
        except OSError as e:
            logger.debug(f"Searching {root} failed: {e}")
            raise NotFoundError(DIRECTORY_DOES_NOT_EXIST) from e

        return FILE_PRESENT if found else FILE_NOT_PRESENT

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the walks performed so far.

        Returns:
            Dictionary containing walk statistics
        """
        return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset the statistics counters."""
        self._stats = {
            'directories_traversed': 0,
            'files_seen': 0,
            'files_matched': 0
        }
