"""
Command service for fileman.

Dispatches one command at a time to the tree walker, the transfer helper or
the remover, and turns every failure into a CommandResult so that callers
never have to handle exceptions from the core.
"""

import logging
from typing import Optional

from .errors import FileManError
from .models.config import FileManConfig
from .models.requests import CommandRequest, CommandResult, Operation
from .tools.remover import FileRemover
from .tools.transfer import FileTransfer
from .tools.tree_walker import TreeWalker


logger = logging.getLogger(__name__)


class FileManager:
    """
    Entry point for running fileman commands.

    Holds no state between commands beyond its collaborators; every call is
    described completely by its CommandRequest.
    """

    def __init__(self, config: Optional[FileManConfig] = None):
        self.config = config or FileManConfig()
        self.walker = TreeWalker()
        self.transfer = FileTransfer(self.config.transfer, self.walker)
        self.remover = FileRemover()

    def execute(self, request: CommandRequest) -> CommandResult:
        """
        Run one command and report its outcome.

        Args:
            request: The command to run

        Returns:
            CommandResult carrying either the success message (and file list
            for listings) or the error text
        """
        operation = request.operation
        try:
            if operation is Operation.LIST:
                files = self.walker.list_files(request.source)
                return CommandResult(operation=operation, files=files, message=f"{len(files)} files")

            if operation is Operation.SEARCH:
                message = self.walker.search(request.source, request.file_name)
                return CommandResult(operation=operation, message=message)

            if operation in (Operation.COPY, Operation.MOVE):
                message = self.transfer.transfer(request.to_transfer_request())
                return CommandResult(operation=operation, message=message)

            if operation is Operation.DELETE:
                message = self.remover.delete(request.to_delete_request())
                return CommandResult(operation=operation, message=message)

        except (FileManError, OSError) as e:
            logger.warning(f"{operation.value} failed for {request.source}: {e}")
            return CommandResult(operation=operation, error=str(e))

        raise AssertionError(f"Unhandled operation: {operation}")

    def run(self, operation: str, source: str, destination: str = "", file_name: str = "") -> CommandResult:
        """
        Build a fresh request from plain arguments and execute it.

        An unknown operation keyword is reported as an error result.
        """
        try:
            request = CommandRequest(
                operation=operation,
                source=source,
                destination=destination,
                file_name=file_name
            )
        except FileManError as e:
            return CommandResult(operation=None, error=str(e))

        return self.execute(request)
