"""
Application Errors

Exception taxonomy shared by the persistence gateway and the controller.
"""


class QuickNotesError(Exception):
    """Base exception for Quick Notes errors."""


class StorageUnavailable(QuickNotesError):
    """
    The note store could not be opened, read or written.

    Raised by the gateway for disk errors, corruption and permission
    failures. The original driver exception is chained as ``__cause__``.
    """
