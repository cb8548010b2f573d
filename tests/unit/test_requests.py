"""
Unit tests for request and result data models.
"""

import pytest
from pydantic import ValidationError

from fileman.errors import InvalidOperationError
from fileman.models.requests import (
    CommandRequest,
    CommandResult,
    DeleteRequest,
    DirectoryEntry,
    Operation,
    TransferKind,
    TransferRequest
)


class TestTransferKind:
    """Test cases for TransferKind parsing."""

    def test_parse_keywords(self):
        """Keywords are matched case-insensitively with surrounding spaces ignored."""
        assert TransferKind.parse("copy") is TransferKind.COPY
        assert TransferKind.parse(" MOVE ") is TransferKind.MOVE
        assert TransferKind.parse(TransferKind.MOVE) is TransferKind.MOVE

    def test_parse_unknown_keyword(self):
        """Anything else is an invalid operation."""
        with pytest.raises(InvalidOperationError) as exc_info:
            TransferKind.parse("d")

        assert str(exc_info.value) == "invalid operation d"
        assert exc_info.value.operation == "d"

    def test_parse_empty_keyword(self):
        """An empty keyword is rejected too."""
        with pytest.raises(InvalidOperationError, match="invalid operation"):
            TransferKind.parse("")


class TestOperation:
    """Test cases for Operation parsing."""

    def test_parse_all_operations(self):
        """Every operation keyword parses."""
        for keyword in ("list", "search", "copy", "move", "delete"):
            assert Operation.parse(keyword).value == keyword

    def test_parse_unknown_operation(self):
        """Unknown keywords raise InvalidOperationError."""
        with pytest.raises(InvalidOperationError, match="invalid operation rename"):
            Operation.parse("rename")


class TestTransferRequest:
    """Test cases for TransferRequest."""

    def test_file_request(self):
        """A named file targets exactly that file."""
        request = TransferRequest(source="files", destination="Dummy3", file_name="test_gc.pdf", kind="copy")

        assert request.kind is TransferKind.COPY
        assert request.targets_directory() is False

    def test_directory_request(self):
        """An empty file name targets the whole directory."""
        request = TransferRequest(source="files", destination="Dummy3", kind=TransferKind.MOVE)

        assert request.file_name == ""
        assert request.targets_directory() is True

    def test_invalid_kind(self):
        """An unknown kind surfaces as InvalidOperationError, not a validation error."""
        with pytest.raises(InvalidOperationError, match="invalid operation d"):
            TransferRequest(source="files", destination="Dummy2", file_name="test_gc.pdf", kind="d")

    def test_missing_destination(self):
        """Source and destination are required."""
        with pytest.raises(ValidationError):
            TransferRequest(source="files", kind="copy")


class TestDeleteRequest:
    """Test cases for DeleteRequest."""

    def test_targets(self):
        """The file name decides between file and directory deletion."""
        assert DeleteRequest(path="Dummy3").targets_directory() is True
        assert DeleteRequest(path="Dummy3", file_name="a.txt").targets_directory() is False


class TestDirectoryEntry:
    """Test cases for DirectoryEntry."""

    def test_defaults(self):
        """Mode defaults to full permissions."""
        entry = DirectoryEntry(path="files", is_dir=True)
        assert entry.mode == 0o777

    def test_empty_path_rejected(self):
        """An entry always has a path."""
        with pytest.raises(ValidationError):
            DirectoryEntry(path="", is_dir=False)


class TestCommandRequest:
    """Test cases for CommandRequest."""

    def test_operation_keyword(self):
        """Operation keywords are converted to the enum."""
        request = CommandRequest(operation="Delete", source="Dummy3")
        assert request.operation is Operation.DELETE

    def test_unknown_operation(self):
        """Unknown operations raise InvalidOperationError."""
        with pytest.raises(InvalidOperationError):
            CommandRequest(operation="zip", source="files")

    def test_to_transfer_request(self):
        """Copy and move commands fix the transfer kind."""
        request = CommandRequest(operation="move", source="files", destination="out", file_name="a.txt")
        transfer = request.to_transfer_request()

        assert transfer.kind is TransferKind.MOVE
        assert transfer.source == "files"
        assert transfer.destination == "out"
        assert transfer.file_name == "a.txt"

    def test_to_transfer_request_wrong_operation(self):
        """Only copy and move convert to a transfer."""
        with pytest.raises(InvalidOperationError, match="invalid operation list"):
            CommandRequest(operation="list", source="files").to_transfer_request()

    def test_to_delete_request(self):
        """Delete commands convert to a delete request."""
        request = CommandRequest(operation="delete", source="Dummy3").to_delete_request()
        assert request.path == "Dummy3"
        assert request.targets_directory() is True

    def test_to_delete_request_wrong_operation(self):
        """Only delete converts to a delete request."""
        with pytest.raises(InvalidOperationError):
            CommandRequest(operation="copy", source="files").to_delete_request()


class TestCommandResult:
    """Test cases for CommandResult."""

    def test_success_render(self):
        """A success renders its message."""
        result = CommandResult(operation=Operation.DELETE, message="Directory deleted successfully")

        assert result.ok is True
        assert result.render() == "Directory deleted successfully"

    def test_list_render(self):
        """A listing renders one path per line."""
        result = CommandResult(operation=Operation.LIST, files=["a/x", "a/y"], message="2 files")
        assert result.render() == "a/x\na/y"

    def test_error_render(self):
        """An error renders the error text."""
        result = CommandResult(operation=Operation.LIST, error="directory does not exist")

        assert result.ok is False
        assert result.files == []
        assert result.render() == "directory does not exist"

    def test_to_dict(self):
        """Dictionary form carries the operation keyword and status."""
        data = CommandResult(operation=Operation.SEARCH, message="found").to_dict()

        assert data['operation'] == "search"
        assert data['ok'] is True

        data = CommandResult(error="invalid operation d").to_dict()
        assert data['operation'] is None
        assert data['ok'] is False
