"""
Error types raised by the fileman core.

Every error carries the exact text shown to the user. Failures coming from the
operating system are not wrapped: they propagate as the original OSError.
"""


class FileManError(Exception):
    """Base class for errors raised by fileman operations."""
    pass


class NotFoundError(FileManError):
    """Raised when a target directory or file does not exist or cannot be read."""
    pass


class OpenFailureError(FileManError):
    """Raised when a transfer source cannot be opened for reading."""
    
    def __init__(self, file_name: str, directory: str):
        self.file_name = file_name
        self.directory = directory
        super().__init__(f"failed to open {file_name} file in given directory {directory}")


class InvalidOperationError(FileManError):
    """Raised for an operation keyword outside the supported set."""
    
    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"invalid operation {operation}")
