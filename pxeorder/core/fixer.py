"""Boot-time pipeline: read, plan, apply, verify."""

import time
from dataclasses import dataclass
from typing import Any, Callable

from pxeorder.core.bootmgr import BootManager
from pxeorder.core.config import Settings
from pxeorder.core.errors import (
    ApplyFailed,
    BootOrderError,
    EfiNotReady,
    NoPxeEntryFound,
    VerificationFailed,
)
from pxeorder.core.logging import EventLogger
from pxeorder.core.planner import (
    Plan,
    Snapshot,
    compute_plan,
    hard_drive_ids,
    is_already_optimal,
    pxe_ids,
)
from pxeorder.core.retry import RetryExhausted, retry
from pxeorder.lib.process import CommandError


@dataclass
class FixResult:
    """Outcome of one run of the fixer."""

    status: str
    before: Snapshot
    plan: Plan | None = None
    verified_order: tuple[str, ...] | None = None
    attempts: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "boot_current": self.before.current,
            "boot_order": list(self.before.order),
            "pxe_entries": pxe_ids(self.before),
            "new_order": list(self.plan.order) if self.plan else None,
            "verified_order": list(self.verified_order) if self.verified_order else None,
            "attempts": self.attempts,
        }


class BootOrderFixer:
    """
    Put PXE entries first in BootOrder, followed by the running OS.

    One instance handles one invocation: wait for EFI variables, read a
    snapshot, skip if the order is already optimal, otherwise apply the
    computed plan (retrying only the apply step) and verify it.
    """

    def __init__(
        self,
        manager: BootManager,
        logger: EventLogger,
        settings: Settings | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.manager = manager
        self.logger = logger
        self.settings = settings or Settings()
        self.sleep = sleep

    def wait_until_ready(self) -> None:
        """
        Poll until efibootmgr can read EFI variables.

        Raises:
            EfiNotReady: If they are still unavailable after every attempt
        """
        attempts = self.settings.ready_attempts
        for _ in range(attempts):
            if self.manager.is_ready():
                return
            self.sleep(self.settings.ready_delay)

        waited = attempts * self.settings.ready_delay
        raise EfiNotReady(
            f"EFI variables not accessible after {waited:g} seconds",
            attempts=attempts,
        )

    def read_snapshot(self) -> Snapshot:
        """Read the boot report and log what the decision is based on."""
        snapshot = self.manager.snapshot()

        self.logger.block("Full efibootmgr output:", snapshot.raw)
        self.logger.info(f"BootCurrent (current OS): {snapshot.current or ''}")
        self.logger.info(f"Current BootOrder: {','.join(snapshot.order)}")
        self.logger.info(f"Found PXE entries: {' '.join(pxe_ids(snapshot))}")
        return snapshot

    def plan(self, snapshot: Snapshot) -> Plan:
        """Compute the new order, logging the choices made."""
        plan = compute_plan(snapshot)

        pxe = [boot_id for boot_id in plan.order if snapshot.is_pxe(boot_id)]
        self.logger.info(f"PXE entries in new order: {','.join(pxe)}")

        if snapshot.current and not snapshot.is_pxe(snapshot.current):
            self.logger.info(f"Added current OS ({snapshot.current}) after PXE entries")

        for boot_id in hard_drive_ids(snapshot):
            if boot_id not in plan.order:
                self.logger.info(f"Skipping 'Hard Drive' entry: {boot_id}")

        self.logger.info(f"Final new boot order: {plan.as_argument()}")
        return plan

    def apply(self, plan: Plan) -> int:
        """
        Write the planned order, retrying on failure.

        Returns:
            Number of attempts used

        Raises:
            ApplyFailed: If every attempt failed
        """
        max_retries = self.settings.max_retries
        delay = self.settings.retry_delay
        attempt_no = 0

        def _apply() -> None:
            nonlocal attempt_no
            attempt_no += 1
            self.logger.info(
                f"Attempt {attempt_no}/{max_retries}: Setting boot order to: {plan.as_argument()}"
            )
            stdout = self.manager.set_order(plan.order)
            if stdout.strip():
                self.logger.block("efibootmgr output:", stdout)
            self.logger.info("Boot order command executed successfully")

        def _failed(attempt: int, error: BaseException) -> None:
            self.logger.warning(f"efibootmgr command failed: {error}")
            if attempt < max_retries:
                self.logger.info(f"Failed, retrying in {delay:g}s...")

        try:
            result = retry(
                _apply,
                attempts=max_retries,
                delay=delay,
                retry_on=(CommandError,),
                sleep=self.sleep,
                on_failure=_failed,
            )
        except RetryExhausted as e:
            raise ApplyFailed(
                f"Failed to set boot order after {max_retries} attempts",
                order=plan.as_argument(),
                last_error=str(e.last_error),
            ) from e

        return result.attempts

    def verify(self, before: Snapshot) -> tuple[str, ...]:
        """
        Re-read BootOrder and check that a PXE entry is first.

        Raises:
            VerificationFailed: If the first entry is not one of the PXE
                entries seen before applying, or the report is unreadable
        """
        try:
            after = self.manager.snapshot()
        except CommandError as e:
            raise VerificationFailed(f"Could not re-read boot order: {e}") from e

        self.logger.info(f"Verification - New boot order: {','.join(after.order)}")

        first = after.order[0] if after.order else None
        if first is not None and first in pxe_ids(before):
            self.logger.info(f"VERIFIED: PXE entry {first} is now first")
            return after.order

        raise VerificationFailed(
            f"Could not verify PXE is first (got: {first or 'nothing'})",
            got=",".join(after.order),
        )

    def run(self, dry_run: bool = False) -> FixResult:
        """
        Run the whole pipeline once.

        Args:
            dry_run: Compute and log the plan without writing it

        Returns:
            FixResult describing what happened

        Raises:
            BootOrderError: On any terminal failure, after logging it
            CommandError: If the boot report cannot be read
        """
        self.logger.info("=== Starting boot order fix ===")
        try:
            return self._run(dry_run)
        except NoPxeEntryFound as e:
            self.logger.error(str(e))
            entries = e.context.get("entries") or []
            self.logger.block("Available boot entries:", "\n".join(entries) or "(none)")
            raise
        except BootOrderError as e:
            self.logger.error(str(e), **e.context)
            raise
        except CommandError as e:
            self.logger.error(f"Could not retrieve EFI boot data: {e}")
            raise

    def _run(self, dry_run: bool) -> FixResult:
        self.wait_until_ready()
        snapshot = self.read_snapshot()

        if is_already_optimal(snapshot):
            self.logger.info("SUCCESS: Boot order already optimal (PXE first, OS second)")
            return FixResult(status="already-optimal", before=snapshot)

        self.logger.info("Boot order needs adjustment")
        plan = self.plan(snapshot)

        if not plan.changed:
            # e.g. booted over PXE, so BootCurrent is itself a PXE entry
            self.logger.info("SUCCESS: Computed order matches current BootOrder, nothing to apply")
            return FixResult(status="unchanged", before=snapshot, plan=plan)

        if dry_run:
            self.logger.info("Dry run, not applying new boot order")
            return FixResult(status="planned", before=snapshot, plan=plan)

        attempts = self.apply(plan)

        self.sleep(self.settings.verify_delay)
        verified = self.verify(snapshot)

        self.logger.info("SUCCESS: Boot order has been corrected")
        return FixResult(
            status="applied",
            before=snapshot,
            plan=plan,
            verified_order=verified,
            attempts=attempts,
        )
