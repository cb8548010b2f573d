"""
Request and result data models for fileman.

This module defines the values passed into the core operations: directory
entries produced by the tree walker, transfer and delete requests, and the
command request/result pair used at the service boundary.
"""

from typing import Dict, List, Optional, Any
from enum import Enum
from pydantic import BaseModel, Field, field_validator

from ..errors import InvalidOperationError


class TransferKind(Enum):
    """Kind of transfer: copy keeps the source, move removes it afterwards."""
    COPY = "copy"
    MOVE = "move"

    @classmethod
    def parse(cls, value: Any) -> 'TransferKind':
        """
        Convert a user-supplied keyword into a TransferKind.

        Args:
            value: Keyword such as "copy" or "Move", or a TransferKind

        Returns:
            The matching TransferKind

        Raises:
            InvalidOperationError: If the keyword is not copy or move
        """
        if isinstance(value, cls):
            return value
        keyword = str(value).strip().lower()
        try:
            return cls(keyword)
        except ValueError:
            raise InvalidOperationError(str(value)) from None


class Operation(Enum):
    """Operations offered by the command service."""
    LIST = "list"
    SEARCH = "search"
    COPY = "copy"
    MOVE = "move"
    DELETE = "delete"

    @classmethod
    def parse(cls, value: Any) -> 'Operation':
        """Convert a keyword into an Operation, rejecting unknown keywords."""
        if isinstance(value, cls):
            return value
        keyword = str(value).strip().lower()
        try:
            return cls(keyword)
        except ValueError:
            raise InvalidOperationError(str(value)) from None


class DirectoryEntry(BaseModel):
    """
    A single entry visited while walking a directory tree.

    Attributes:
        path: Path of the entry, joined onto the walk root
        is_dir: Whether the entry is a directory
        mode: Permission bits of the entry
    """

    path: str = Field(..., min_length=1, description="Path of the entry")
    is_dir: bool = Field(..., description="Whether the entry is a directory")
    mode: int = Field(0o777, ge=0, description="Permission bits of the entry")


class TransferRequest(BaseModel):
    """
    A copy or move of one file or of a whole directory.

    An empty file name targets the entire source directory; otherwise exactly
    one file inside the source directory is transferred.

    Attributes:
        source: Source directory path
        destination: Destination directory path
        file_name: Name of the file to transfer, empty for the whole directory
        kind: Copy or move
    """

    source: str = Field(..., description="Source directory path")
    destination: str = Field(..., description="Destination directory path")
    file_name: str = Field("", description="File to transfer, empty for the whole directory")
    kind: TransferKind = Field(..., description="Copy or move")

    @field_validator('kind', mode='before')
    @classmethod
    def validate_kind(cls, v) -> TransferKind:
        """Convert keywords to TransferKind."""
        return TransferKind.parse(v)

    def targets_directory(self) -> bool:
        """Check if this request transfers the whole source directory."""
        return self.file_name == ""


class DeleteRequest(BaseModel):
    """
    Removal of one file, or of a directory and everything beneath it.

    Attributes:
        path: Directory holding the file, or the directory to delete
        file_name: Name of the file to delete, empty for the whole directory
    """

    path: str = Field(..., description="Directory path")
    file_name: str = Field("", description="File to delete, empty for the whole directory")

    def targets_directory(self) -> bool:
        """Check if this request deletes the whole directory."""
        return self.file_name == ""


class CommandRequest(BaseModel):
    """
    Everything the command service needs for one call.

    Attributes:
        operation: Operation to run
        source: Source directory (or the directory to list, search or delete from)
        destination: Destination directory for copy and move
        file_name: Target file name, empty for whole-directory transfers and deletes
    """

    operation: Operation = Field(..., description="Operation to run")
    source: str = Field(..., description="Source path")
    destination: str = Field("", description="Destination path for copy and move")
    file_name: str = Field("", description="Target file name")

    @field_validator('operation', mode='before')
    @classmethod
    def validate_operation(cls, v) -> Operation:
        """Convert keywords to Operation."""
        return Operation.parse(v)

    def to_transfer_request(self) -> TransferRequest:
        """Build the transfer request for a copy or move command."""
        if self.operation is Operation.COPY:
            kind = TransferKind.COPY
        elif self.operation is Operation.MOVE:
            kind = TransferKind.MOVE
        else:
            raise InvalidOperationError(self.operation.value)
        return TransferRequest(
            source=self.source,
            destination=self.destination,
            file_name=self.file_name,
            kind=kind
        )

    def to_delete_request(self) -> DeleteRequest:
        """Build the delete request for a delete command."""
        if self.operation is not Operation.DELETE:
            raise InvalidOperationError(self.operation.value)
        return DeleteRequest(path=self.source, file_name=self.file_name)


class CommandResult(BaseModel):
    """
    Outcome of one command.

    Exactly one of message and error is set. Listing fills files; a failed
    listing or search always carries an empty file list. The operation is
    None only when the requested keyword itself was not recognised.
    """

    operation: Optional[Operation] = None
    message: Optional[str] = None
    files: List[str] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def render(self) -> str:
        """Plain text shown to the user."""
        if self.error is not None:
            return self.error
        if self.operation is Operation.LIST:
            return "\n".join(self.files)
        return self.message or ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to a dictionary representation."""
        data = self.model_dump()
        data['operation'] = self.operation.value if self.operation else None
        data['ok'] = self.ok
        return data
