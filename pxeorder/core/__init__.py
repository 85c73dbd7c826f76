"""Core pxeorder functionality."""

from pxeorder.core.bootmgr import BootManager
from pxeorder.core.config import ConfigError, Settings, load_settings
from pxeorder.core.context import Context
from pxeorder.core.errors import (
    ApplyFailed,
    BootOrderError,
    EfiNotReady,
    NoBootOrderFound,
    NoPxeEntryFound,
    VerificationFailed,
)
from pxeorder.core.fixer import BootOrderFixer, FixResult
from pxeorder.core.logging import EventLogger
from pxeorder.core.output import Output
from pxeorder.core.planner import (
    BootEntry,
    Category,
    Plan,
    Snapshot,
    classify,
    compute_plan,
    is_already_optimal,
)
from pxeorder.core.report import parse_report

__all__ = [
    "ApplyFailed",
    "BootEntry",
    "BootManager",
    "BootOrderError",
    "BootOrderFixer",
    "Category",
    "ConfigError",
    "Context",
    "EfiNotReady",
    "EventLogger",
    "FixResult",
    "NoBootOrderFound",
    "NoPxeEntryFound",
    "Output",
    "Plan",
    "Settings",
    "Snapshot",
    "VerificationFailed",
    "classify",
    "compute_plan",
    "is_already_optimal",
    "load_settings",
    "parse_report",
]
