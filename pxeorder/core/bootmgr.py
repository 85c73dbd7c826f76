"""efibootmgr boundary: read the boot report, write BootOrder/BootNext."""

from typing import TYPE_CHECKING

from pxeorder.core.planner import Snapshot
from pxeorder.core.report import parse_report
from pxeorder.lib.process import CommandError, check_tool, run_command

if TYPE_CHECKING:
    from pxeorder.core.context import Context


EFI_DIR = "/sys/firmware/efi"
EFIVARS_DIR = "/sys/firmware/efi/efivars"


class BootManager:
    """Thin wrapper around the efibootmgr command."""

    def __init__(self, context: "Context", binary: str = "efibootmgr"):
        self.context = context
        self.binary = binary

    def available(self) -> bool:
        """True when efibootmgr is installed."""
        return check_tool(self.binary, context=self.context)

    def is_efi_system(self) -> bool:
        """True when the system booted in UEFI mode."""
        return self.context.file_exists(EFI_DIR)

    def is_ready(self) -> bool:
        """True once efivarfs is mounted and efibootmgr can read it."""
        if not self.context.file_exists(EFIVARS_DIR):
            return False
        try:
            run_command([self.binary], context=self.context, check=True)
        except CommandError:
            return False
        return True

    def read_report(self) -> str:
        """
        Return the raw efibootmgr report.

        Raises:
            CommandError: If efibootmgr fails or prints nothing
        """
        text = run_command([self.binary], context=self.context, check=True)
        if not text.strip():
            raise CommandError("Could not retrieve EFI boot data: empty efibootmgr output")
        return text

    def snapshot(self) -> Snapshot:
        """Read and parse the current boot configuration."""
        return parse_report(self.read_report())

    def set_order(self, order: tuple[str, ...] | list[str]) -> str:
        """
        Write BootOrder.

        Raises:
            CommandError: If efibootmgr exits non-zero
        """
        return run_command([self.binary, "-o", ",".join(order)], context=self.context, check=True)

    def set_next(self, boot_id: str) -> str:
        """
        Write a one-time BootNext.

        Raises:
            CommandError: If efibootmgr exits non-zero
        """
        return run_command([self.binary, "-n", boot_id], context=self.context, check=True)
