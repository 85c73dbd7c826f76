"""Parse the efibootmgr boot report."""

import re

from pxeorder.core.planner import BootEntry, Snapshot


# Exactly four hex digits right after "Boot", so BootCurrent/BootOrder never match
ENTRY_PATTERN = re.compile(r"^Boot([0-9A-Fa-f]{4})(\*)?\s+(.*)$")
BOOT_ID_PATTERN = re.compile(r"^[0-9A-Fa-f]{4}$")


def _field_value(line: str) -> str | None:
    """Second whitespace-separated token of a ``Key: value`` line."""
    parts = line.split()
    if len(parts) < 2:
        return None
    return parts[1].strip()


def parse_boot_id(value: str | None) -> str | None:
    """Normalize a boot id to upper case, or None if it is not 4 hex digits."""
    if not value or not BOOT_ID_PATTERN.match(value):
        return None
    return value.upper()


def parse_order(value: str) -> tuple[str, ...]:
    """
    Parse the part of a BootOrder line after the colon.

    Empty elements (a trailing or doubled comma) are skipped. Returns an
    empty tuple when any other element is not a 4-hex-digit id, so a
    garbled line is treated like a missing one.
    """
    cleaned = "".join(value.split())
    if not cleaned:
        return ()

    order = []
    for token in cleaned.split(","):
        if not token:
            continue
        boot_id = parse_boot_id(token)
        if boot_id is None:
            return ()
        order.append(boot_id)
    return tuple(order)


def parse_entry(line: str) -> BootEntry | None:
    """Parse a ``Boot####[*] description`` line."""
    match = ENTRY_PATTERN.match(line)
    if not match:
        return None

    boot_id = match.group(1).upper()
    active = match.group(2) == "*"
    text = match.group(3)

    device_path = None
    if "\t" in text:
        label, device_path = text.split("\t", 1)
        device_path = device_path.strip() or None
    else:
        label = text

    return BootEntry(
        id=boot_id,
        description=label.strip(),
        active=active,
        device_path=device_path,
    )


def parse_report(text: str) -> Snapshot:
    """
    Parse efibootmgr output into a Snapshot.

    Args:
        text: Output of ``efibootmgr`` (with or without ``-v``)

    Returns:
        Snapshot with entries in report order
    """
    entries: list[BootEntry] = []
    order: tuple[str, ...] = ()
    current = None
    boot_next = None
    timeout = None

    for raw_line in text.splitlines():
        line = raw_line.rstrip("\r\n")

        if line.startswith("BootCurrent:"):
            current = parse_boot_id(_field_value(line))
        elif line.startswith("BootNext:"):
            boot_next = parse_boot_id(_field_value(line))
        elif line.startswith("BootOrder:"):
            order = parse_order(line.split(":", 1)[1])
        elif line.startswith("Timeout:"):
            value = _field_value(line)
            if value is not None and value.isdigit():
                timeout = int(value)
        else:
            entry = parse_entry(line)
            if entry is not None:
                entries.append(entry)

    return Snapshot(
        entries=tuple(entries),
        order=order,
        current=current,
        boot_next=boot_next,
        timeout=timeout,
        raw=text,
    )
