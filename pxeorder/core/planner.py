"""Boot order planning.

Decides whether the firmware boot order already puts PXE network boot
first, and if not, computes the order that does:

    PXE IPv4 entries, PXE IPv6 entries, other PXE entries,
    the entry the running OS booted from,
    every remaining entry except generic "Hard Drive" entries.

Everything here is pure. Reading and writing the firmware lives in
``pxeorder.core.bootmgr``.
"""

from dataclasses import dataclass, field
from enum import Enum

from pxeorder.core.errors import NoBootOrderFound, NoPxeEntryFound


class Category(str, Enum):
    """Boot entry category derived from its description."""

    PXE_IPV4 = "PxeIPv4"
    PXE_IPV6 = "PxeIPv6"
    PXE_OTHER = "PxeOther"
    HARD_DRIVE = "HardDrive"
    OTHER = "Other"

    @property
    def is_pxe(self) -> bool:
        return self in PXE_CATEGORIES


PXE_CATEGORIES = frozenset({Category.PXE_IPV4, Category.PXE_IPV6, Category.PXE_OTHER})


def classify(description: str) -> Category:
    """
    Map a boot entry description to its category.

    Matching is case-insensitive substring matching. HTTP boot entries
    often mention PXE too, they are never treated as PXE.
    """
    text = description.lower()

    if "pxe" in text and "http" not in text:
        if "ipv4" in text or "ip4" in text:
            return Category.PXE_IPV4
        if "ipv6" in text or "ip6" in text:
            return Category.PXE_IPV6
        return Category.PXE_OTHER

    if "hard drive" in text:
        return Category.HARD_DRIVE

    return Category.OTHER


@dataclass(frozen=True)
class BootEntry:
    """A firmware boot record as listed by the boot manager."""

    id: str
    description: str
    active: bool = True
    device_path: str | None = None

    @property
    def category(self) -> Category:
        return classify(self.description)

    @property
    def is_pxe(self) -> bool:
        return self.category.is_pxe


@dataclass(frozen=True)
class Snapshot:
    """Boot entries, BootOrder and BootCurrent read in one go."""

    entries: tuple[BootEntry, ...] = ()
    order: tuple[str, ...] = ()
    current: str | None = None
    boot_next: str | None = None
    timeout: int | None = None
    raw: str = field(default="", compare=False, repr=False)

    def entry(self, boot_id: str) -> BootEntry | None:
        """Return the entry with this id, or None for a foreign id."""
        for entry in self.entries:
            if entry.id == boot_id:
                return entry
        return None

    def category_of(self, boot_id: str) -> Category:
        """Category of an id; ids without an entry count as Other."""
        entry = self.entry(boot_id)
        return entry.category if entry is not None else Category.OTHER

    def is_pxe(self, boot_id: str | None) -> bool:
        if not boot_id:
            return False
        return self.category_of(boot_id).is_pxe

    def with_order(self, order: tuple[str, ...] | list[str]) -> "Snapshot":
        """Copy of this snapshot with a different BootOrder."""
        return Snapshot(
            entries=self.entries,
            order=tuple(order),
            current=self.current,
            boot_next=self.boot_next,
            timeout=self.timeout,
        )


@dataclass(frozen=True)
class Plan:
    """Target boot order and whether it differs from the current one."""

    order: tuple[str, ...]
    changed: bool

    def as_argument(self) -> str:
        """Comma-separated ids as taken by ``efibootmgr -o``."""
        return ",".join(self.order)


def pxe_ids(snapshot: Snapshot) -> list[str]:
    """Ids of all PXE entries, in report order."""
    return [entry.id for entry in snapshot.entries if entry.is_pxe]


def first_is_pxe(snapshot: Snapshot) -> bool:
    """True when the first id in BootOrder is a PXE entry."""
    return bool(snapshot.order) and snapshot.is_pxe(snapshot.order[0])


def _require_order(snapshot: Snapshot) -> None:
    if not snapshot.order:
        raise NoBootOrderFound("Could not determine current boot order")


def _require_pxe(snapshot: Snapshot) -> None:
    if not pxe_ids(snapshot):
        raise NoPxeEntryFound(
            "No PXE boot entries found",
            entries=[f"Boot{e.id} {e.description}" for e in snapshot.entries],
        )


def is_already_optimal(snapshot: Snapshot) -> bool:
    """
    Check whether BootOrder already satisfies the PXE-first policy.

    The order is optimal when its first id is a PXE entry and BootCurrent
    follows it, either directly or after one more PXE entry (firmware that
    lists both an IPv4 and an IPv6 PXE entry ahead of the OS).

    When BootCurrent is unknown a PXE-first order is accepted as is. Right
    after installation BootCurrent may not be resolvable yet, and an empty
    value parses as unknown too, so this check is deliberately loose.

    Raises:
        NoBootOrderFound: BootOrder is empty or unparsable
        NoPxeEntryFound: no entry is a PXE entry
    """
    _require_order(snapshot)
    _require_pxe(snapshot)

    order = snapshot.order
    if not snapshot.is_pxe(order[0]):
        return False

    current = snapshot.current
    if not current:
        return True

    second = order[1] if len(order) > 1 else None
    third = order[2] if len(order) > 2 else None

    if second == current:
        return True
    return snapshot.is_pxe(second) and third == current


def compute_plan(snapshot: Snapshot) -> Plan:
    """
    Compute the PXE-first boot order for a snapshot.

    PXE entries keep their report order within each of the IPv4, IPv6
    and other groups. Generic "Hard Drive" entries are dropped, they are
    a local-disk fallback that races with network and OS boot. Ids in
    BootOrder with no matching entry are kept at the end in their
    original relative order.

    Raises:
        NoPxeEntryFound: no entry is a PXE entry
    """
    _require_pxe(snapshot)

    groups: dict[Category, list[str]] = {
        Category.PXE_IPV4: [],
        Category.PXE_IPV6: [],
        Category.PXE_OTHER: [],
    }
    for entry in snapshot.entries:
        if entry.category in groups and entry.id not in groups[entry.category]:
            groups[entry.category].append(entry.id)

    order: list[str] = [
        *groups[Category.PXE_IPV4],
        *groups[Category.PXE_IPV6],
        *groups[Category.PXE_OTHER],
    ]

    current = snapshot.current
    if current and not snapshot.is_pxe(current) and current not in order:
        order.append(current)

    for entry in snapshot.entries:
        if entry.id in order:
            continue
        if entry.category == Category.HARD_DRIVE:
            continue
        order.append(entry.id)

    known = {entry.id for entry in snapshot.entries}
    for boot_id in snapshot.order:
        if boot_id not in known and boot_id not in order:
            order.append(boot_id)

    result = tuple(order)
    return Plan(order=result, changed=result != snapshot.order)


def hard_drive_ids(snapshot: Snapshot) -> list[str]:
    """Ids of generic "Hard Drive" entries, which plans leave out."""
    return [entry.id for entry in snapshot.entries if entry.category == Category.HARD_DRIVE]


def preferred_pxe(snapshot: Snapshot) -> str | None:
    """The PXE entry a plan would put first, or None without PXE entries."""
    for category in (Category.PXE_IPV4, Category.PXE_IPV6, Category.PXE_OTHER):
        for entry in snapshot.entries:
            if entry.category == category:
                return entry.id
    return None
