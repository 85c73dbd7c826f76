"""Boot order error taxonomy.

Every error here is terminal for the current invocation. Commands catch
``BootOrderError``, log it with its context and exit with status 1.
"""

from typing import Any


class BootOrderError(Exception):
    """Base class for boot order failures."""

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.context = context


class NoBootOrderFound(BootOrderError):
    """The report has no BootOrder line, or it could not be parsed."""

    pass


class NoPxeEntryFound(BootOrderError):
    """No boot entry advertises PXE network boot."""

    pass


class ApplyFailed(BootOrderError):
    """Setting the new boot order failed on every attempt."""

    pass


class VerificationFailed(BootOrderError):
    """After applying, the first entry in BootOrder is not a PXE entry."""

    pass


class EfiNotReady(BootOrderError):
    """EFI variables never became accessible."""

    pass
