"""Tests for pxeorder.core.report module."""

from pxeorder.core.planner import Category
from pxeorder.core.report import parse_boot_id, parse_entry, parse_order, parse_report
from tests.conftest import load_report


class TestParseBootId:
    """Tests for parse_boot_id."""

    def test_normalizes_case(self):
        """Hex ids are upper-cased."""
        assert parse_boot_id("000a") == "000A"

    def test_rejects_invalid(self):
        """Anything but four hex digits is rejected."""
        assert parse_boot_id("001") is None
        assert parse_boot_id("00001") is None
        assert parse_boot_id("00G1") is None
        assert parse_boot_id("") is None
        assert parse_boot_id(None) is None


class TestParseOrder:
    """Tests for parse_order."""

    def test_comma_separated(self):
        """Ids are split on commas."""
        assert parse_order(" 0003,0001,0002") == ("0003", "0001", "0002")

    def test_whitespace_ignored(self):
        """Stray whitespace around ids is ignored."""
        assert parse_order(" 0003, 0001 ,0002 ") == ("0003", "0001", "0002")

    def test_empty(self):
        """An empty value gives an empty order."""
        assert parse_order("") == ()
        assert parse_order("   ") == ()

    def test_garbled_is_empty(self):
        """One bad element makes the whole order unusable."""
        assert parse_order(" 0003,xyz,0002") == ()
        assert parse_order(" 0003,,00x2") == ()

    def test_empty_elements_skipped(self):
        """Trailing and doubled commas do not discard the order."""
        assert parse_order(" 0003,0001,") == ("0003", "0001")
        assert parse_order(" 0003,,0002") == ("0003", "0002")
        assert parse_order(",") == ()


class TestParseEntry:
    """Tests for parse_entry."""

    def test_active_entry(self):
        """An asterisk marks the entry active."""
        entry = parse_entry("Boot0002* PXE IPv4 NIC")
        assert entry.id == "0002"
        assert entry.description == "PXE IPv4 NIC"
        assert entry.active is True
        assert entry.device_path is None

    def test_inactive_entry(self):
        """No asterisk means inactive."""
        entry = parse_entry("Boot0004  UEFI: PXE over HTTP IPv4")
        assert entry.active is False
        assert entry.description == "UEFI: PXE over HTTP IPv4"

    def test_verbose_device_path(self):
        """The tab-separated device path is kept apart from the label."""
        entry = parse_entry("Boot0003* Hard Drive\tBBS(HD,,0x0)")
        assert entry.description == "Hard Drive"
        assert entry.device_path == "BBS(HD,,0x0)"
        assert entry.category == Category.HARD_DRIVE

    def test_not_an_entry(self):
        """Header lines are not entries."""
        assert parse_entry("BootCurrent: 0001") is None
        assert parse_entry("BootOrder: 0001,0002") is None
        assert parse_entry("Timeout: 1 seconds") is None
        assert parse_entry("Boot001* short id") is None


class TestParseReport:
    """Tests for parse_report."""

    def test_windows_report(self):
        """Header fields and entries are parsed from a plain report."""
        snapshot = parse_report(load_report("windows_needs_fix.txt"))

        assert snapshot.current == "0003"
        assert snapshot.order == ("0003", "0001", "0002", "0004")
        assert snapshot.timeout == 1
        assert snapshot.boot_next is None
        assert [e.id for e in snapshot.entries] == ["0001", "0002", "0003", "0004"]
        assert snapshot.entry("0003").description == "Windows Boot Manager"

    def test_verbose_report(self):
        """Verbose reports keep the label for classification."""
        snapshot = parse_report(load_report("rhel_server.txt"))

        categories = {e.id: e.category for e in snapshot.entries}
        assert categories["0000"] == Category.PXE_IPV4
        assert categories["0001"] == Category.PXE_IPV6
        assert categories["0003"] == Category.HARD_DRIVE
        assert categories["0004"] == Category.OTHER
        assert snapshot.entry("0004").active is False
        assert snapshot.entry("0005").device_path.startswith("HD(1,GPT")

    def test_raw_text_kept(self):
        """The raw report is kept for logging."""
        text = load_report("windows_optimal.txt")
        assert parse_report(text).raw == text

    def test_missing_boot_order(self):
        """A report without BootOrder parses with an empty order."""
        snapshot = parse_report(load_report("no_boot_order.txt"))
        assert snapshot.order == ()
        assert snapshot.current == "0001"

    def test_missing_boot_current(self):
        """A report without BootCurrent parses with current None."""
        snapshot = parse_report(load_report("no_boot_current.txt"))
        assert snapshot.current is None
        assert snapshot.order == ("0000", "0001")

    def test_empty_boot_current(self):
        """An empty or garbled BootCurrent is treated as unknown."""
        assert parse_report("BootCurrent:\nBootOrder: 0001\n").current is None
        assert parse_report("BootCurrent: zz\nBootOrder: 0001\n").current is None

    def test_boot_next(self):
        """BootNext is parsed when set."""
        snapshot = parse_report("BootNext: 0002\nBootCurrent: 0001\nBootOrder: 0001,0002\n")
        assert snapshot.boot_next == "0002"

    def test_crlf_line_endings(self):
        """Carriage returns do not end up in values."""
        snapshot = parse_report("BootCurrent: 0001\r\nBootOrder: 0001,0002\r\nBoot0001* ubuntu\r\n")
        assert snapshot.current == "0001"
        assert snapshot.order == ("0001", "0002")
        assert snapshot.entry("0001").description == "ubuntu"

    def test_lowercase_ids(self):
        """Lower-case hex ids are normalized everywhere."""
        snapshot = parse_report("BootCurrent: 000a\nBootOrder: 000a,000b\nBoot000a* ubuntu\nBoot000b* PXE IPv4\n")
        assert snapshot.current == "000A"
        assert snapshot.order == ("000A", "000B")
        assert snapshot.entry("000B").is_pxe

    def test_empty_text(self):
        """Empty input gives an empty snapshot."""
        snapshot = parse_report("")
        assert snapshot.entries == ()
        assert snapshot.order == ()
        assert snapshot.current is None

    def test_trailing_comma_in_boot_order(self):
        """A trailing comma on BootOrder keeps the listed ids."""
        snapshot = parse_report(
            "BootCurrent: 0001\nBootOrder: 0001,0002,\nBoot0001* ubuntu\nBoot0002* UEFI PXE IPv4\n"
        )
        assert snapshot.order == ("0001", "0002")
