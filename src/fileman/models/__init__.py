"""
Data models for fileman.

This module contains the request, result and configuration structures used
throughout the system.
"""

from .requests import (
    CommandRequest,
    CommandResult,
    DeleteRequest,
    DirectoryEntry,
    Operation,
    TransferKind,
    TransferRequest
)

__all__ = [
    'CommandRequest',
    'CommandResult',
    'DeleteRequest',
    'DirectoryEntry',
    'Operation',
    'TransferKind',
    'TransferRequest'
]
