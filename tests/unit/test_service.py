"""
Unit tests for the command service.

Walks through the end-to-end scenarios of the file manager: search, copy,
move and delete against a temporary tree, with every failure returned as a
result value.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from unittest.mock import patch

from fileman.models.config import FileManConfig
from fileman.models.requests import CommandRequest, Operation
from fileman.service import FileManager


class TestFileManager:
    """Test cases for the FileManager class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.test_root = Path(self.temp_dir)
        self.files = self.test_root / "files"
        self.files.mkdir()
        (self.files / "Data.jpg").write_bytes(b"\xff\xd8\xff\xe0jpeg")
        (self.files / "test_gc.pdf").write_bytes(b"%PDF-1.4")
        (self.test_root / "Dummy").mkdir()
        self.manager = FileManager(FileManConfig())

    def teardown_method(self):
        """Clean up test fixtures."""
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def _path(self, name: str) -> str:
        return str(self.test_root / name)

    def test_list(self):
        """Listing returns every file path."""
        result = self.manager.run("list", self._path("files"))

        assert result.ok
        assert result.operation is Operation.LIST
        assert sorted(result.files) == sorted([
            str(self.files / "Data.jpg"),
            str(self.files / "test_gc.pdf"),
        ])

    def test_list_missing_directory(self):
        """A failed listing carries the error and no files."""
        result = self.manager.run("list", self._path("Duuumy"))

        assert not result.ok
        assert result.error == "directory does not exist"
        assert result.files == []

    def test_search_scenario(self):
        """Search reports presence and absence by exact name."""
        present = self.manager.run("search", self._path("files"), file_name="Data.jpg")
        absent = self.manager.run("search", self._path("files"), file_name="doc.pdf")

        assert present.message == "file is present in the given directory"
        assert absent.message == "file is not present in the given directory"

    def test_search_missing_directory(self):
        """Search on a missing directory is an error result, not an exception."""
        result = self.manager.run("search", self._path("Duuumy"), file_name="Data.jpg")

        assert result.error == "directory does not exist"

    def test_copy_then_delete_scenario(self):
        """Copy a file into a new directory, then delete that directory twice."""
        copied = self.manager.run("copy", self._path("files"), self._path("Dummy3"), "test_gc.pdf")

        assert copied.message == "File copied successfully!"
        assert (self.test_root / "Dummy3" / "test_gc.pdf").read_bytes() == b"%PDF-1.4"
        assert (self.files / "test_gc.pdf").exists()

        deleted = self.manager.run("delete", self._path("Dummy3"))
        assert deleted.message == "Directory deleted successfully"
        assert not (self.test_root / "Dummy3").exists()

        again = self.manager.run("delete", self._path("Dummy3"))
        assert again.error == "directory not found"

    def test_move_file(self):
        """Moving a file leaves only the destination copy."""
        result = self.manager.run("move", self._path("files"), self._path("Dummy2"), "test_gc.pdf")

        assert result.message == "File moved successfully!"
        assert (self.test_root / "Dummy2" / "test_gc.pdf").exists()
        assert not (self.files / "test_gc.pdf").exists()

    def test_copy_and_move_directory(self):
        """Whole-directory copy and move report their own messages."""
        copied = self.manager.run("copy", self._path("files"), self._path("NewFiles"))
        moved = self.manager.run("move", self._path("NewFiles"), self._path("NewFiles2"))

        assert copied.message == "Directory copied successfully"
        assert moved.message == "Directory moved successfully"
        assert not (self.test_root / "NewFiles").exists()
        assert (self.test_root / "NewFiles2" / "Data.jpg").exists()

    def test_copy_open_failure(self):
        """An unreadable source is reported with the open-failure message."""
        source = self._path("D")
        result = self.manager.run("copy", source, "", "doc.pdf")

        assert result.error == f"failed to open doc.pdf file in given directory {source}"

    def test_delete_missing_file(self):
        """Deleting a missing file reports it as not present."""
        result = self.manager.run("delete", self._path("Dummy"), file_name="doc.pdf")

        assert result.error == "file is not present in the given directory"

    def test_os_errors_are_returned_verbatim(self):
        """Filesystem errors become the result's error text unchanged."""
        denied = PermissionError(13, "Access is denied", self._path("files/test_gc.pdf"))

        with patch('fileman.tools.transfer.os.remove', side_effect=denied):
            result = self.manager.run("move", self._path("files"), self._path("Dummy2"), "test_gc.pdf")

        assert result.error == str(denied)

    def test_invalid_operation(self):
        """An unknown operation keyword is an error result."""
        result = self.manager.run("d", self._path("files"))

        assert result.error == "invalid operation d"
        assert result.operation is None

    def test_execute_with_request(self):
        """execute accepts a prepared request."""
        request = CommandRequest(operation=Operation.SEARCH, source=self._path("files"), file_name="test_gc.pdf")
        result = self.manager.execute(request)

        assert result.ok
        assert result.message == "file is present in the given directory"

    def test_calls_are_independent(self):
        """Nothing from one call leaks into the next."""
        self.manager.run("search", self._path("files"), file_name="Data.jpg")
        result = self.manager.run("search", self._path("Dummy"), file_name="Data.jpg")

        assert result.message == "file is not present in the given directory"

    def test_failures_are_logged_as_warnings(self, caplog):
        """A failed operation is logged at warning level by the service."""
        with caplog.at_level(logging.WARNING, logger="fileman.service"):
            self.manager.run("list", self._path("Duuumy"))

        records = [r for r in caplog.records if r.name == "fileman.service"]
        assert len(records) == 1
        assert records[0].levelno == logging.WARNING
        assert "directory does not exist" in records[0].getMessage()
