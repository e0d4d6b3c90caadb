"""
Error types for clselect.
"""


class ClSelectError(RuntimeError):
    """Base class for all clselect errors."""


class EnumerationError(ClSelectError):
    """Unable to get OpenCL platform or device info."""


class DisplayError(ClSelectError):
    """The terminal display failed."""


class StorageError(ClSelectError):
    """Saved priorities could not be read or written."""
