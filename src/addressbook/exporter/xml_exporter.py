"""
XML address-book exporter.

Produces the `DeviceAddressBook_v5_2` document that multifunction printers import as
their address book: one Contact item per entry, followed by one email One Touch Key per
contact pointing back at it.
"""
import logging
import xml.etree.ElementTree as ET
from datetime import date
from pathlib import Path
from typing import Sequence

from addressbook.models.entry import Entry
from addressbook.repositories.entry_repository import EntryRepository

logger = logging.getLogger(__name__)

ROOT_TAG = "DeviceAddressBook_v5_2"
CONTACT_COMMENT = "Contact List"
ONE_TOUCH_KEY_COMMENT = "Email One Touch Keys"

# Attribute order and fixed values of a Contact item, as the device writes them.
# `None` marks the per-entry fields filled in by _contact_attributes().
CONTACT_TEMPLATE: tuple[tuple[str, str | None], ...] = (
    ("Id", None),
    ("Type", "Contact"),
    ("DisplayName", None),
    ("SendKeisyou", ""),
    ("MailAddress", None),
    ("SendCorpName", ""),
    ("SendPostName", ""),
    ("SmbHostName", ""),
    ("SmbPath", ""),
    ("SmbLoginName", ""),
    ("SmbLoginPasswd", ""),
    ("SmbPort", ""),
    ("FtpPath", ""),
    ("FtpHostName", ""),
    ("FtpLoginName", ""),
    ("FtpLoginPasswd", ""),
    ("FtpPort", "21"),
    ("FaxNumber", ""),
    ("FaxSubaddress", ""),
    ("FaxPassword", ""),
    ("FaxCommSpeed", "BPS_33600"),
    ("FaxECM", "On"),
    ("FaxEncryptKeyNumber", "0"),
    ("FaxEncryption", "Off"),
    ("FaxEncryptBoxEnabled", "Off"),
    ("FaxEncryptBoxID", "0000"),
    ("InetFAXAddr", ""),
    ("InetFAXMode", "Simple"),
    ("InetFAXResolution", "3"),
    ("InetFAXFileType", "TIFF_MH"),
    ("IFaxSendModeType", "IFAX"),
    ("InetFAXDataSize", "1"),
    ("InetFAXPaperSize", "1"),
    ("InetFAXResolutionEnum", "Default"),
    ("InetFAXPaperSizeEnum", "Default"),
)

# Month abbreviations are fixed English so file names don't depend on the locale.
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _contact_attributes(position: int, entry: Entry) -> dict[str, str]:
    per_entry = {"Id": str(position), "DisplayName": entry.name, "MailAddress": entry.email}
    return {key: (per_entry[key] if value is None else value) for key, value in CONTACT_TEMPLATE}


def _one_touch_key_attributes(position: int, contact_id: str, display_name: str) -> dict[str, str]:
    return {
        "Id": str(position),
        "AddressId": contact_id,
        "Type": "OneTouchKey",
        "AddressType": "Email",
        "DisplayName": display_name,
    }


def build_address_book(entries: Sequence[Entry]) -> ET.Element:
    """
    Build the address-book element tree for `entries`.

    Contact and One Touch Key ids are 1-based positions in `entries`, not storage ids,
    so the device sees a dense sequence regardless of deletions.
    """
    root = ET.Element(ROOT_TAG)

    root.append(ET.Comment(CONTACT_COMMENT))
    contacts = []
    for position, entry in enumerate(entries, start=1):
        contacts.append(ET.SubElement(root, "Item", _contact_attributes(position, entry)))

    root.append(ET.Comment(ONE_TOUCH_KEY_COMMENT))
    for position, contact in enumerate(contacts, start=1):
        ET.SubElement(
            root,
            "Item",
            _one_touch_key_attributes(position, contact.get("Id"), contact.get("DisplayName")),
        )

    return root


def render_address_book(entries: Sequence[Entry]) -> str:
    """Serialize the address book with 4-space indentation and self-closing items."""
    root = build_address_book(entries)
    ET.indent(root, space="    ")
    return ET.tostring(root, encoding="unicode", short_empty_elements=True)


def export_filename(table: str, today: date) -> str:
    return f"{table} {today.year:04d}-{_MONTHS[today.month - 1]}-{today.day:02d}.xml"


def export_xml(repo: EntryRepository, export_dir: str | Path, today: date | None = None) -> Path:
    """
    Write the current table as an address-book file.

    The file is named "<table> <YYYY-Mon-DD>.xml" inside `export_dir` (created if missing)
    and overwritten if it already exists.

    Returns:
        Path: the written file.
    """
    today = today or date.today()
    table = repo.current_table
    entries = repo.all()

    export_dir = Path(export_dir)
    export_dir.mkdir(parents=True, exist_ok=True)
    path = export_dir / export_filename(table, today)

    path.write_text(render_address_book(entries), encoding="utf-8")

    logger.info("exporter.success", extra={"table": table, "path": str(path), "count": len(entries)})
    return path
