"""Exception classes for texmark.

The math pipeline itself is total over text input and raises nothing.
These exceptions belong to the outer surfaces: asset loading, PDF export
and the command line.
"""

from __future__ import annotations


class TexmarkError(Exception):
    """Base exception for all texmark errors."""

    pass


class AssetError(TexmarkError):
    """A required asset directory or file could not be used."""

    def __init__(self, path: str, message: str) -> None:
        """Initialize asset error.

        Args:
            path: Path of the offending asset
            message: Description of the problem
        """
        self.path = path
        super().__init__(f"{path}: {message}")


class ExportError(TexmarkError):
    """Printing the HTML document to PDF failed.

    Raised when no browser is available, the browser exits with an error,
    times out, or produces no output file.
    """

    def __init__(self, message: str, returncode: int | None = None) -> None:
        """Initialize export error.

        Args:
            message: Description of the failure
            returncode: Browser process exit status, when one was observed
        """
        self.returncode = returncode
        suffix = f" (exit status {returncode})" if returncode is not None else ""
        super().__init__(f"{message}{suffix}")
