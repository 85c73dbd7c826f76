"""Keep PXE network boot entries first in the UEFI boot order."""

__version__ = "0.1.0"
