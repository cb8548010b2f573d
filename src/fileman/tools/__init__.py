"""
Filesystem tools for fileman.

This module contains the tree walker and the transfer and delete operations
built on top of it.
"""

from .tree_walker import TreeWalker, join_entry
from .transfer import FileTransfer, transfer_files
from .remover import FileRemover, delete_path

__all__ = [
    'TreeWalker',
    'join_entry',
    'FileTransfer',
    'FileRemover',
    'transfer_files',
    'delete_path'
]
